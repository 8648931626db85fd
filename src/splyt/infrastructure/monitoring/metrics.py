"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "splyt_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "splyt_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "splyt_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Business Metrics
# ============================================================

auth_attempts_total = Counter(
    "splyt_auth_attempts_total",
    "Wallet authentication attempts",
    ["result"],
)

splits_created_total = Counter(
    "splyt_splits_created_total",
    "Split creation outcomes",
    ["outcome"],
)

split_payments_total = Counter(
    "splyt_split_payments_total",
    "Participant payments recorded",
)
