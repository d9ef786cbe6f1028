"""Prometheus metrics for monitoring subscription outcomes and processor performance"""

from prometheus_client import Counter, Histogram

# Subscription metrics
subscription_counter = Counter(
    "gpay_subscription_total",
    "Total subscription requests handled",
    ["outcome"],  # created | failed
)

# Processor API metrics
processor_latency_histogram = Histogram(
    "processor_call_latency_seconds",
    "Payment processor response time",
    ["step"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

processor_failures_counter = Counter(
    "processor_failures_total",
    "Failed payment processor calls",
    ["step"],  # payment_method | customer | subscription
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_subscription(success: bool) -> None:
    """Record subscription outcome for monitoring conversion and failure rates"""
    outcome = "created" if success else "failed"
    subscription_counter.labels(outcome=outcome).inc()
