"""Prometheus metrics for monitoring saves, store failures and insight fallbacks"""

from prometheus_client import Counter, Histogram

# Record store metrics
records_saved_counter = Counter(
    "appraisal_records_saved_total",
    "Successful bank/loan saves",
    ["entity", "action"],  # bank | loan, insert | update
)

store_failures_counter = Counter(
    "appraisal_store_failures_total",
    "Failed record store operations",
    ["entity", "operation"],  # list | upsert | delete
)

records_deleted_counter = Counter(
    "appraisal_records_deleted_total",
    "Successful bank/loan deletes",
    ["entity"],
)

# Insight API metrics
insight_latency_histogram = Histogram(
    "insight_latency_seconds",
    "Insight text API response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

insight_fallback_counter = Counter(
    "insight_fallbacks_total",
    "Insight requests answered with a fixed fallback text",
    ["reason"],  # no_data | api_error | empty
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_save(entity: str, action: str) -> None:
    """Record a successful insert or update"""
    records_saved_counter.labels(entity=entity, action=action).inc()


def record_store_failure(entity: str, operation: str) -> None:
    store_failures_counter.labels(entity=entity, operation=operation).inc()
