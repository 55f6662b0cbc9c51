"""POST /v1/insights/summary - Dashboard figures with an AI-written narrative"""

from datetime import date
from fastapi import APIRouter, Depends, Request

from dominion_gateway.api.v1.schemas import (
    DashboardResponse,
    InsightSummaryResponse,
    LedgerRequest,
    SpendingSummaryOut,
)
from dominion_gateway.api.dependencies import get_insight_client, get_request_id, get_today
from dominion_gateway.config import settings
from dominion_gateway.infrastructure.clients.insights import InsightClient
from dominion_gateway.infrastructure.observability.metrics import analytics_request_counter
from dominion_gateway.services.summary import resolve_summary, start_enrichment

router = APIRouter()


@router.post("/insights/summary", response_model=InsightSummaryResponse)
async def get_insight_summary(
    request_body: LedgerRequest,
    request: Request,
    server_today: date = Depends(get_today),
    insight_client: InsightClient = Depends(get_insight_client),
):
    """
    Rule-based dashboard plus narrative summary.

    The narrative is bounded by `summary_timeout_seconds`; any failure of the
    insight service returns the locally computed summary with source="fallback".
    """
    request_id = get_request_id(request)
    report = start_enrichment(
        request_body.to_ledger(),
        request_body.today or server_today,
        insight_client,
        settings.budget_warning_percent,
    )
    summary, source = await resolve_summary(report, settings.summary_timeout_seconds, request_id)
    analytics_request_counter.labels(endpoint="insights_summary").inc()

    return InsightSummaryResponse(
        dashboard=DashboardResponse.model_validate(report.dashboard),
        summary=SpendingSummaryOut.model_validate(summary),
        source=source,
    )
