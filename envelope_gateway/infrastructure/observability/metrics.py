"""Prometheus metrics for monitoring funding status, debt payments and webhook performance"""

from typing import Sequence

from prometheus_client import Counter, Histogram

from envelope_gateway.domain.models import EnvelopePrediction, PaymentResult

# Prediction metrics
prediction_status_counter = Counter(
    "envelope_prediction_total",
    "Envelope predictions by funding status",
    ["status"],  # on_track | behind | critical | overfunded
)

# Debt metrics
debt_payment_counter = Counter(
    "debt_payment_total",
    "Debt payments applied",
    ["outcome"],  # applied | partial_failure | overflow
)

debt_paid_off_counter = Counter(
    "debt_paid_off_total",
    "Debt items paid off",
)

debt_update_failure_counter = Counter(
    "debt_item_update_failures_total",
    "Debt item balance updates that failed during distribution",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Payoff webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_predictions(predictions: Sequence[EnvelopePrediction]) -> None:
    """Count predictions per status for monitoring funding health"""
    for prediction in predictions:
        prediction_status_counter.labels(status=prediction.status.value).inc()


def record_payment(result: PaymentResult) -> None:
    """Record payment outcome, payoffs and failed item updates"""
    if result.failed_items:
        outcome = "partial_failure"
    elif result.remaining_payment_cents > 0:
        outcome = "overflow"
    else:
        outcome = "applied"

    debt_payment_counter.labels(outcome=outcome).inc()
    debt_paid_off_counter.inc(len(result.paid_off_items))
    debt_update_failure_counter.inc(len(result.failed_items))
