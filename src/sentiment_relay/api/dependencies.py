"""
FastAPI dependency injection for Sentiment Relay.

Resources live on `app.state` (set by create_app) so each application
instance, including the ones built by tests, owns its own settings and
inference client.
"""

from fastapi import Request

from sentiment_relay.config import Settings
from sentiment_relay.relay.base_client import BaseInferenceClient


def get_settings(request: Request) -> Settings:
    """
    Get the settings the running app was built with.
    
    Returns:
        Settings instance
    """
    return request.app.state.settings


def get_inference_client(request: Request) -> BaseInferenceClient:
    """
    Get the app's inference client.
    
    The client keeps a pooled httpx connection, so one instance is shared
    by every request of an app and closed on shutdown.
    
    Returns:
        BaseInferenceClient instance
    """
    return request.app.state.inference_client
