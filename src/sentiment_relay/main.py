"""
FastAPI application entry point for Sentiment Relay.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from sentiment_relay.api.dependencies import get_settings
from sentiment_relay.api.error_handlers import EXCEPTION_HANDLERS
from sentiment_relay.api.middleware import (
    RateLimitMiddleware,
    RequestTracingMiddleware,
    SecurityHeadersMiddleware,
)
from sentiment_relay.api.routes import router
from sentiment_relay.config import Settings, settings
from sentiment_relay.logging_config import configure_logging
from sentiment_relay.relay.base_client import BaseInferenceClient
from sentiment_relay.relay.hf_client import HuggingFaceClient

# Configure structured logging before the app is built
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


def build_inference_client(app_settings: Settings) -> BaseInferenceClient:
    """Create the Hugging Face client described by settings."""
    return HuggingFaceClient(
        model_id=app_settings.MODEL_ID,
        token=app_settings.HF_TOKEN,
        base_url=app_settings.HF_BASE_URL,
        timeout=app_settings.HF_TIMEOUT,
        preview_chars=app_settings.LOG_PREVIEW_CHARS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown."""
    app_settings: Settings = app.state.settings
    logger.info(
        "Application startup",
        version=app_settings.APP_VERSION,
        environment=app_settings.ENVIRONMENT,
        model=app_settings.MODEL_ID,
        inference_url=app_settings.inference_url,
        token_configured=bool(app_settings.HF_TOKEN),
    )
    if not app_settings.HF_TOKEN:
        logger.error("HF_TOKEN missing, analyze requests will answer 500")
    
    yield
    
    logger.info("Application shutdown")
    await app.state.inference_client.close()
    logger.info("Application shutdown complete")


def create_app(
    app_settings: Optional[Settings] = None,
    inference_client: Optional[BaseInferenceClient] = None,
) -> FastAPI:
    """
    Build the relay application.
    
    Args:
        app_settings: Settings to use (defaults to the global settings)
        inference_client: Client to forward text with (defaults to a
            HuggingFaceClient built from settings)
    
    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or settings
    
    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Relay between a sentiment UI and the Hugging Face inference router",
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.inference_client = inference_client or build_inference_client(app_settings)
    
    # Last added runs first: CORS, tracing, security headers, then rate limit
    if app_settings.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            limit=app_settings.RATE_LIMIT_REQUESTS,
            window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestTracingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOWED_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)
    
    app.include_router(router, tags=["relay"])
    
    @app.get("/")
    async def root(current: Settings = Depends(get_settings)):
        """Root endpoint with API documentation links."""
        return {
            "service": current.APP_NAME,
            "version": current.APP_VERSION,
            "model": current.MODEL_ID,
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics" if current.PROMETHEUS_ENABLED else None,
        }
    
    if app_settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)
    
    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "sentiment_relay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
