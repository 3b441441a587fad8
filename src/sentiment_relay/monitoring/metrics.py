"""Custom Prometheus metrics for Sentiment Relay.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- relay_requests_total (high error rate, especially status="timeout")
- upstream_latency_seconds (p95 approaching HF_TIMEOUT)
- rate_limited_requests_total (clients hitting the per-minute cap)
"""

from prometheus_client import Counter, Histogram

# === Relay Metrics ===

relay_requests_total = Counter(
    "relay_requests_total",
    "Total relay requests by endpoint and outcome",
    ["endpoint", "status"],
)
"""
Relay requests counter.

Labels:
- endpoint: analyze, sentiment
- status: success, invalid_input, upstream_error, timeout, network_error, misconfigured
"""

rate_limited_requests_total = Counter(
    "rate_limited_requests_total",
    "Total requests rejected by the per-client rate limit",
)

# === Upstream Metrics ===

upstream_latency_seconds = Histogram(
    "upstream_latency_seconds",
    "Inference endpoint latency in seconds",
    ["model", "success"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 25.0],
)
"""
Inference endpoint latency histogram.

Labels:
- model: Model id (e.g., cardiffnlp/twitter-roberta-base-sentiment-latest)
- success: true (2xx), false (error status, timeout or transport failure)

Buckets end at the default 25s deadline; cold model loads land in the top bucket.
"""

# === Output Metrics ===

sentiment_labels_total = Counter(
    "sentiment_labels_total",
    "Total interpreted sentiments served by label",
    ["label"],
)
"""
Interpreted sentiment distribution.

Labels:
- label: canonical label (Positive, Negative, Neutral, Unknown) or "other"
  for capitalized fallbacks, to keep cardinality bounded.

A rising "other" share means the configured model uses a label convention
the interpreter does not recognize.
"""
