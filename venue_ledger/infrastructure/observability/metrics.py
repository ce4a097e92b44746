"""Prometheus metrics for monitoring ledger outcomes, money flow, and webhook performance"""

from prometheus_client import Counter, Histogram

from venue_ledger.domain.models import OperationResult

# Operation metrics
operation_counter = Counter(
    "venue_ledger_operation_total",
    "Total ledger operations by outcome",
    ["operation", "outcome"],  # deposit | withdraw | payment | promotion
)

amount_counter = Counter(
    "venue_ledger_amount_minor_units_total",
    "Minor units moved by successful operations",
    ["operation"],
)

multiplied_payment_counter = Counter(
    "venue_ledger_multiplied_payment_total",
    "Successful payments drawn with the multiplier applied",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "payout_webhook_latency_seconds",
    "Payout webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "payout_webhook_failures_total",
    "Failed payout webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_operation(operation: str, amount: int, result: OperationResult) -> None:
    """Record outcome counts and, on success, the money moved"""
    operation_counter.labels(operation=operation, outcome=result.outcome.value).inc()
    if not result.ok:
        return

    amount_counter.labels(operation=operation).inc(amount)
    if result.draw is not None and result.draw.multiplied and result.draw.from_deposited > 0:
        multiplied_payment_counter.inc()
