"""
FastAPI API routes and endpoints.

- routes.py: Relay endpoints (POST /api/analyze, POST /api/sentiment, GET /health)
- dependencies.py: Dependency injection for settings and the inference client
- middleware.py: Request tracing, security headers, rate limiting
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
"""

from sentiment_relay.api import dependencies, error_handlers, models
from sentiment_relay.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
