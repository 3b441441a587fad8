"""Structured logging for the relay.

structlog renders every event, including those emitted through stdlib
logging by uvicorn and httpx, as JSON in production and as colored console
lines in development. Credentials never reach the output: the Hugging Face
token and Authorization headers are masked before rendering.
"""

import logging
import re
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


REDACTED = "[REDACTED]"

# Event keys whose values are always masked (compared case-insensitively)
SECRET_KEYS = frozenset({"authorization", "hf_token", "token", "api_key"})

BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s\"',]+", re.IGNORECASE)
HF_TOKEN_PATTERN = re.compile(r"\bhf_[A-Za-z0-9]{8,}\b")

# uvicorn installs its own handlers; these are re-routed to the root handler
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _mask(value: Any) -> Any:
    if isinstance(value, str):
        value = BEARER_PATTERN.sub(rf"\1{REDACTED}", value)
        return HF_TOKEN_PATTERN.sub(REDACTED, value)
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SECRET_KEYS else _mask(item)
            for key, item in value.items()
        }
    if type(value) in (list, tuple):
        return type(value)(_mask(item) for item in value)
    return value


def redact_secrets(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Mask credentials in a log event.
    
    Values stored under a secret key are replaced outright; bearer tokens
    and `hf_...` tokens embedded in strings (error messages, header dumps,
    upstream previews) are replaced in place.
    
    Examples:
        >>> redact_secrets(None, "info", {"event": "x", "Authorization": "Bearer abc"})
        {'event': 'x', 'Authorization': '[REDACTED]'}
    """
    return _mask(event_dict)


def service_context(app_name: str, environment: str) -> Processor:
    """Processor stamping the service name and environment on every event."""
    def add_service_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        event_dict.setdefault("environment", environment)
        return event_dict
    
    return add_service_context


def _route_uvicorn_loggers() -> None:
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
    # Requests are already logged with their request_id by RequestTracingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    app_name: str = "sentiment-relay",
    stream: Optional[Any] = None,
) -> None:
    """Configure structlog and route stdlib logging through it.
    
    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        environment: "production" selects the JSON renderer
        app_name: Value of the `app` key on every event
        stream: Output stream (defaults to stdout)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"
    
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        service_context(app_name, environment),
        redact_secrets,
    ]
    if is_production:
        shared.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )
    
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    
    _route_uvicorn_loggers()
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    
    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        renderer="json" if is_production else "console",
    )
