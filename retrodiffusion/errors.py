"""Typed exception hierarchy for the Retro Diffusion client.

Error handling strategy:
    - `ValidationError` is raised locally before any request is dispatched.
    - HTTP failures are classified once in `transport` and re-raised unchanged.
    - Every error carries a stable `code` so callers never need to match on
      message text.
"""

from __future__ import annotations


class RetroDiffusionError(Exception):
    """Base exception for every error raised by this package."""

    default_message = "Retro Diffusion request failed."
    default_code: str | None = None

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


class ValidationError(RetroDiffusionError):
    """Raised when a request fails local validation."""

    default_message = "Validation failed."
    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthenticationError(RetroDiffusionError):
    """Raised for HTTP 401/403 responses."""

    default_message = "Authentication failed. Please check your API key."
    default_code = "AUTHENTICATION_ERROR"


class InsufficientCreditsError(RetroDiffusionError):
    """Raised for HTTP 402 responses."""

    default_message = "Insufficient credits. Please add more credits to your account."
    default_code = "INSUFFICIENT_CREDITS"


class RateLimitError(RetroDiffusionError):
    """Raised for HTTP 429 responses."""

    default_message = "Rate limit exceeded. Please try again later."
    default_code = "RATE_LIMIT_ERROR"


class NetworkError(RetroDiffusionError):
    """Raised for other non-2xx statuses and transport-level failures."""

    default_message = "Network error occurred."
    default_code = "NETWORK_ERROR"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(RetroDiffusionError):
    """Raised when the client cannot be configured (e.g. no API key)."""

    default_message = "Client configuration is invalid."
    default_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str | None = None, key: str | None = None):
        super().__init__(message)
        self.key = key


__all__ = [
    "RetroDiffusionError",
    "ValidationError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "NetworkError",
    "ConfigurationError",
]
