"""Prometheus metrics for Stockroom."""

from prometheus_client import Counter, Histogram

# Request metrics
REQUEST_COUNT = Counter(
    "stockroom_request_count_total",
    "Total number of HTTP requests processed",
    labelnames=["method", "endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "stockroom_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Catalog mutation metrics
MUTATIONS = Counter(
    "stockroom_mutations_total",
    "Catalog mutations by operation and outcome",
    labelnames=["operation", "outcome"],
)

# Audit entries lost to the non-transactional dual write
AUDIT_APPEND_FAILURES = Counter(
    "stockroom_audit_append_failures_total",
    "Audit appends that failed after a successful product write",
    labelnames=["action_type"],
)

RECONCILED_RECORDS = Counter(
    "stockroom_reconciled_records_total",
    "Audit records backfilled by the reconciliation job",
    labelnames=["action_type"],
)
