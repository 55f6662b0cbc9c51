"""POST /v1/analytics/spending - Month-over-month spending analytics"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from dominion_gateway.api.v1.schemas import SpendingAnalyticsRequest, SpendingAnalyticsResponse
from dominion_gateway.api.dependencies import get_request_id, get_today
from dominion_gateway.domain.analytics import build_spending_analytics
from dominion_gateway.domain.exceptions import InvalidMonthKeyError
from dominion_gateway.infrastructure.observability.logging import log_analytics
from dominion_gateway.infrastructure.observability.metrics import analytics_request_counter, record_insights

router = APIRouter()


@router.post("/analytics/spending", response_model=SpendingAnalyticsResponse)
def spending_analytics(
    request_body: SpendingAnalyticsRequest,
    request: Request,
    server_today: date = Depends(get_today),
):
    """
    Spending analytics for a target month.

    Flow:
    1. Bucket expenses into the target month, the month before and the lookback window
    2. Compare totals and categories month over month
    3. Derive rule-based insights
    """
    start_time = time.time()
    request_id = get_request_id(request)
    today = request_body.today or server_today

    try:
        analytics = build_spending_analytics(
            [e.to_domain() for e in request_body.expenses],
            today=today,
            target_month=request_body.target_month,
            lookback_months=request_body.lookback_months,
        )
    except InvalidMonthKeyError as e:
        logging.warning(f"Invalid target month: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    analytics_request_counter.labels(endpoint="spending").inc()
    record_insights(analytics.insights)
    log_analytics(
        request_id,
        analytics.target_month,
        analytics.current_month.transaction_count,
        len(analytics.insights),
        (time.time() - start_time) * 1000,
    )

    return SpendingAnalyticsResponse.model_validate(analytics)
