"""
Custom exceptions for the relay layer.

Each exception maps to one failure mode of a relay request so the API
layer can answer with the matching HTTP status, and the session client can
log the distinction even though the user only sees "Analysis failed".
"""

from typing import Any


class RelayError(Exception):
    """
    Base exception for all relay errors.
    
    All relay-specific exceptions inherit from this to allow catching
    any relay failure with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(RelayError):
    """
    Raised when the submitted text is missing, empty or not a string.
    
    User-correctable; surfaced as 400.
    """
    pass


class MisconfigurationError(RelayError):
    """
    Raised when the relay cannot call the inference endpoint because its
    configuration is incomplete (e.g. HF_TOKEN is not set).
    
    Not user-actionable; surfaced as 500 and logged at error level.
    """
    pass


class UpstreamError(RelayError):
    """
    Raised when the inference endpoint answers with a non-success status.
    
    The upstream status and decoded body are forwarded to the caller.
    """
    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class NetworkFailureError(RelayError):
    """
    Raised on transport-level failures other than a timeout
    (DNS, connection refused, TLS, reset).
    
    Surfaced as 500 with the failure message.
    """
    pass


class UpstreamTimeoutError(NetworkFailureError):
    """
    Raised when the inference call does not complete before its deadline.
    
    Separate from generic network failures so it can be surfaced as 504.
    """
    pass
