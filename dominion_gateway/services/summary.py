"""Two-phase spending report: rule-based metrics now, AI narrative when (and if) it arrives"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple
from dominion_gateway.domain.dashboard import build_dashboard
from dominion_gateway.domain.exceptions import InsightServiceError
from dominion_gateway.domain.models import DashboardMetrics, FinancialSnapshot, LedgerSnapshot, SpendingSummary
from dominion_gateway.domain.summary import build_financial_snapshot, fallback_summary
from dominion_gateway.infrastructure.clients.insights import InsightClient
from dominion_gateway.infrastructure.observability.logging import log_summary_fallback
from dominion_gateway.infrastructure.observability.metrics import record_summary

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


@dataclass
class EnrichedReport:
    """Dashboard figures plus the pending narrative (None when there is nothing to narrate)"""

    dashboard: DashboardMetrics
    snapshot: FinancialSnapshot
    summary_task: Optional["asyncio.Task[SpendingSummary]"]


def start_enrichment(
    ledger: LedgerSnapshot,
    today: date,
    client: InsightClient,
    budget_warning_percent: float,
) -> EnrichedReport:
    """
    Compute the rule-based dashboard and kick off the narrative request.

    Must be called from a running event loop. The dashboard is complete when
    this returns; only the summary is still in flight.
    """
    dashboard = build_dashboard(ledger, today, budget_warning_percent)
    snapshot = build_financial_snapshot(ledger, today)
    task = None
    if not snapshot.is_empty:
        task = asyncio.create_task(client.generate_summary(snapshot))
    return EnrichedReport(dashboard=dashboard, snapshot=snapshot, summary_task=task)


async def resolve_summary(
    report: EnrichedReport,
    timeout: float,
    request_id: str = "unknown",
) -> Tuple[SpendingSummary, str]:
    """
    Wait up to `timeout` seconds for the narrative.

    Returns (summary, source) where source is "ai" or "fallback". Service errors
    and timeouts degrade to the local summary; the pending request is cancelled
    on timeout and when the caller itself is cancelled.
    """
    if report.summary_task is None:
        record_summary(SOURCE_FALLBACK, "no_data")
        return fallback_summary(report.snapshot), SOURCE_FALLBACK

    try:
        summary = await asyncio.wait_for(report.summary_task, timeout=timeout)
    except asyncio.TimeoutError:
        reason, detail = "timeout", f"no reply within {timeout}s"
    except InsightServiceError as e:
        reason, detail = e.reason, str(e)
    except Exception as e:
        logging.exception("Unexpected insight service failure", extra={"request_id": request_id})
        reason, detail = "unexpected", str(e)
    else:
        record_summary(SOURCE_AI)
        return summary, SOURCE_AI

    log_summary_fallback(request_id, reason, detail)
    record_summary(SOURCE_FALLBACK, reason)
    return fallback_summary(report.snapshot), SOURCE_FALLBACK
