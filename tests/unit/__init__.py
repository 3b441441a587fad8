"""
Unit tests for Sentiment Relay.

Test individual components in isolation:
- Normalizer (payload shapes, item sanitizing, score coercion)
- Interpreter (top selection, label classification)
- Hugging Face client (status passthrough, deadline, transport errors)
- Middleware (rate limit, security headers, tracing)
- Session client (history, rendering, relay client, transcripts)
"""
