"""Unit tests for the summarizer snapshot, local fallback and two-phase enrichment"""

import asyncio
import pytest
from decimal import Decimal
from dominion_gateway.domain.exceptions import InsightRateLimitError, InsightResponseError
from dominion_gateway.domain.models import LedgerSnapshot, SpendingSummary, Trend
from dominion_gateway.domain.summary import build_financial_snapshot, fallback_summary
from dominion_gateway.services.summary import SOURCE_AI, SOURCE_FALLBACK, resolve_summary, start_enrichment

AI_SUMMARY = SpendingSummary(
    summary="Solid month.",
    highlights=["Positive cash flow"],
    recommendations=["Keep it up"],
    trend=Trend.IMPROVING,
)


class StubClient:
    """Stands in for InsightClient"""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0

    async def generate_summary(self, snapshot):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


def test_snapshot_matches_cash_flow(sample_ledger, today):
    snapshot = build_financial_snapshot(sample_ledger, today)

    assert snapshot.total_income == Decimal("20000")
    assert snapshot.total_obligations == Decimal("10500")
    assert snapshot.total_expenses == Decimal("1200")  # September expense excluded
    assert snapshot.free_cash_flow == Decimal("8300")
    assert snapshot.savings_rate == 41.5
    assert snapshot.global_budget is None
    assert snapshot.over_global_budget is False
    assert len(snapshot.expenses) == 1


def test_fallback_on_track(sample_ledger, today):
    summary = fallback_summary(build_financial_snapshot(sample_ledger, today))

    assert summary.trend == Trend.STABLE
    assert summary.summary == "Your finances appear to be on track this month."
    assert "Free cash flow: R 8,300.00" in summary.highlights
    assert summary.recommendations[0] == "Continue tracking expenses"


def test_fallback_negative_cash_flow(sample_ledger, today):
    sample_ledger.monthly_income = Decimal("9000")
    summary = fallback_summary(build_financial_snapshot(sample_ledger, today))

    assert summary.trend == Trend.CONCERNING
    assert summary.summary.startswith("Your expenses exceed your income")
    assert summary.recommendations[0] == "Review non-essential expenses"


def test_fallback_over_budget(sample_ledger, today):
    sample_ledger.monthly_budget = Decimal("1000")
    snapshot = build_financial_snapshot(sample_ledger, today)
    summary = fallback_summary(snapshot)

    assert snapshot.over_global_budget is True
    assert summary.trend == Trend.CONCERNING
    assert "exceeded your monthly budget" in summary.summary


def test_fallback_for_empty_ledger(today):
    summary = fallback_summary(build_financial_snapshot(LedgerSnapshot(), today))
    assert summary.summary.startswith("Welcome!")
    assert summary.trend == Trend.STABLE


async def test_ai_summary_used_when_available(sample_ledger, today):
    client = StubClient(result=AI_SUMMARY)
    report = start_enrichment(sample_ledger, today, client, 80.0)

    summary, source = await resolve_summary(report, timeout=1.0)

    assert source == SOURCE_AI
    assert summary is AI_SUMMARY
    assert report.dashboard.cash_flow.free_cash_flow == Decimal("8300")


@pytest.mark.parametrize("error", [InsightRateLimitError("slow down"), InsightResponseError("not json")])
async def test_service_errors_fall_back(sample_ledger, today, error):
    report = start_enrichment(sample_ledger, today, StubClient(error=error), 80.0)

    summary, source = await resolve_summary(report, timeout=1.0)

    assert source == SOURCE_FALLBACK
    assert summary.summary == "Your finances appear to be on track this month."


async def test_timeout_cancels_pending_request(sample_ledger, today):
    report = start_enrichment(sample_ledger, today, StubClient(result=AI_SUMMARY, delay=5.0), 80.0)

    summary, source = await resolve_summary(report, timeout=0.01)

    assert source == SOURCE_FALLBACK
    assert summary.trend == Trend.STABLE
    assert report.summary_task.cancelled()


async def test_empty_ledger_skips_the_service(today):
    client = StubClient(result=AI_SUMMARY)
    report = start_enrichment(LedgerSnapshot(), today, client, 80.0)

    summary, source = await resolve_summary(report, timeout=1.0)

    assert report.summary_task is None
    assert client.calls == 0
    assert source == SOURCE_FALLBACK
    assert summary.summary.startswith("Welcome!")
