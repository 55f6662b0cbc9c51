"""Prometheus metrics for analytics traffic, generated insights and summary fallbacks"""

from typing import Iterable
from prometheus_client import Counter, Histogram
from dominion_gateway.domain.models import Insight

analytics_request_counter = Counter(
    "dominion_analytics_requests_total",
    "Analytics computations served",
    ["endpoint"],
)

insight_counter = Counter(
    "dominion_insights_generated_total",
    "Rule-based insights emitted",
    ["type"],  # increase | decrease | info | warning
)

# Summary enrichment
summary_outcome_counter = Counter(
    "dominion_summary_outcome_total",
    "Spending summaries returned by source",
    ["outcome"],  # ai | fallback
)

summary_fallback_counter = Counter(
    "dominion_summary_fallback_total",
    "Local summary fallbacks by reason",
    ["reason"],
)

insights_latency_histogram = Histogram(
    "insights_api_latency_seconds",
    "External insight service response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_insights(insights: Iterable[Insight]) -> None:
    for insight in insights:
        insight_counter.labels(type=insight.type.value).inc()


def record_summary(source: str, reason: str | None = None) -> None:
    summary_outcome_counter.labels(outcome=source).inc()
    if reason:
        summary_fallback_counter.labels(reason=reason).inc()
