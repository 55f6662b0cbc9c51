"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from dominion_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from dominion_gateway.api.v1 import analytics, dashboard, insights, keywords
from dominion_gateway.infrastructure.observability.logging import setup_logging
from dominion_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Dominion Finance Gateway",
        description="Household finance analytics: cash flow, debt payoff, payment cycles and spending insights",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(keywords.router, prefix="/v1", tags=["categories"])

    return app


app = create_app()
