"""Monitoring and metrics instrumentation for Sentiment Relay.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from sentiment_relay.monitoring.metrics import (
    rate_limited_requests_total,
    relay_requests_total,
    sentiment_labels_total,
    upstream_latency_seconds,
)

__all__ = [
    "relay_requests_total",
    "rate_limited_requests_total",
    "upstream_latency_seconds",
    "sentiment_labels_total",
]
