"""Client configuration and credential resolution.

Architectural role:
    Produces the immutable `ClientConfig` snapshot shared read-only by the
    transport and namespaces of one `RetroDiffusionClient`.

Resolution order for the API key:
    1. Explicit `api_key` argument / config field.
    2. `RD_TOKEN` environment variable.
    3. `RD_API_KEY` environment variable.

    A `.env` file found from the current working directory upward is loaded
    via `python-dotenv` at resolution time; values already present in the
    process environment win.

Failure behavior:
    - Invalid field values raise `ValidationError` naming the field.
    - No key from any source raises `ConfigurationError`.

Determinism:
    Deterministic for a fixed environment. Resolution runs once per client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from numbers import Real
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from retrodiffusion.constants import API_BASE_URL, API_KEY_ENV_VARS, MAX_RETRIES
from retrodiffusion.errors import ConfigurationError, ValidationError


def load_env_file() -> bool:
    """Load the nearest `.env` above the working directory without overriding set variables."""
    return load_dotenv(find_dotenv(usecwd=True))


@dataclass(frozen=True)
class ClientConfig:
    """Client settings.

    Attributes:
        api_key: Retro Diffusion API key.
        base_url: API root; defaults to the production endpoint.
        timeout: Per-request timeout in seconds, or None for no client timeout.
        retries: Accepted for forward compatibility (0-5); no retry loop reads it.
    """

    api_key: str | None = None
    base_url: str | None = None
    timeout: float | None = None
    retries: int | None = None

    @property
    def resolved_base_url(self) -> str:
        return (self.base_url or API_BASE_URL).rstrip("/")


def resolve_api_key(explicit: str | None = None) -> str | None:
    """Return the first non-empty key from config, then environment variables."""
    if explicit:
        return explicit
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def _validate_fields(config: ClientConfig) -> None:
    if config.api_key is not None and (not isinstance(config.api_key, str) or not config.api_key):
        raise ValidationError("API key is required", field="api_key")

    if config.base_url is not None:
        parsed = urlparse(str(config.base_url))
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(
                f"base_url must be an absolute http(s) URL: {config.base_url!r}",
                field="base_url",
            )

    if config.timeout is not None:
        if isinstance(config.timeout, bool) or not isinstance(config.timeout, Real) or config.timeout <= 0:
            raise ValidationError("timeout must be a positive number of seconds", field="timeout")

    if config.retries is not None:
        if (
            isinstance(config.retries, bool)
            or not isinstance(config.retries, int)
            or not 0 <= config.retries <= MAX_RETRIES
        ):
            raise ValidationError(
                f"retries must be an integer between 0 and {MAX_RETRIES}",
                field="retries",
            )


def resolve_client_config(config: ClientConfig | None = None, **overrides) -> ClientConfig:
    """Validate settings and bind the API key.

    Args:
        config: Optional base configuration.
        **overrides: Field values applied on top of `config`
            (`api_key`, `base_url`, `timeout`, `retries`).

    Returns:
        New frozen `ClientConfig` whose `api_key` is always set.

    Raises:
        ValidationError: For malformed field values.
        ConfigurationError: When no API key can be found.
    """
    base = config or ClientConfig()
    try:
        merged = replace(base, **overrides)
    except TypeError as exc:
        raise ConfigurationError(f"Unknown client option: {exc}") from exc

    _validate_fields(merged)

    load_env_file()
    api_key = resolve_api_key(merged.api_key)
    if not api_key:
        raise ConfigurationError(
            "API key is required. Provide it via api_key or set "
            "RD_TOKEN/RD_API_KEY environment variable.",
            key="api_key",
        )

    return replace(merged, api_key=api_key)
