"""Prometheus metrics for monitoring score distribution, group scoring and store health"""

from prometheus_client import Counter, Histogram

# Scoring metrics
score_counter = Counter(
    "credit_engine_score_total",
    "Total individual credit scores calculated",
    ["risk_level"],  # LOW | MEDIUM | HIGH
)

score_histogram = Histogram(
    "credit_engine_composite_score",
    "Distribution of composite credit scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

group_score_counter = Counter(
    "credit_engine_group_score_total",
    "Total group credit scores calculated",
)

group_unresolved_members_counter = Counter(
    "credit_engine_group_unresolved_members_total",
    "Group members dropped because no financial profile could be resolved",
)

# Profile store metrics
store_failures_counter = Counter(
    "credit_engine_store_failures_total",
    "Failed profile store reads or writes",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(risk_level: str, score: int) -> None:
    """Record individual score metrics for monitoring risk distribution"""
    score_counter.labels(risk_level=risk_level).inc()
    score_histogram.observe(score)


def record_group_score(unresolved_members: int) -> None:
    group_score_counter.inc()
    if unresolved_members:
        group_unresolved_members_counter.inc(unresolved_members)
