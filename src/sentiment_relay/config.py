"""
Configuration settings for Sentiment Relay.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Sentiment Relay"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    
    # === Inference endpoint ===
    HF_TOKEN: Optional[str] = None  # Required at request time, never logged
    MODEL_ID: str = "cardiffnlp/twitter-roberta-base-sentiment-latest"
    HF_BASE_URL: str = "https://router.huggingface.co/hf-inference/models"
    HF_TIMEOUT: float = 25.0  # seconds, overall deadline per upstream call
    LOG_PREVIEW_CHARS: int = 300  # Upstream body preview length in logs
    
    # === HTTP policy ===
    CORS_ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 30
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True
    
    # === Session client ===
    RELAY_URL: str = "http://127.0.0.1:8080"
    CLIENT_TIMEOUT: float = 30.0  # Slightly above HF_TIMEOUT so the relay answers first
    HISTORY_PREVIEW_CHARS: int = 50

    @property
    def inference_url(self) -> str:
        """Full URL of the configured model on the inference router."""
        return f"{self.HF_BASE_URL.rstrip('/')}/{self.MODEL_ID}"


# Global settings instance
settings = Settings()
