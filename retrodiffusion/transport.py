"""HTTP transport for the Retro Diffusion API.

Processing flow:
    1. Join the configured base URL with the endpoint path.
    2. Attach JSON content type and the `X-RD-Token` auth header; caller headers
       are merged on top.
    3. Issue one `requests` call using the configured timeout.
    4. Map non-2xx statuses to typed errors, otherwise decode the JSON body.
    5. Optionally validate the body against a pydantic response model.

Status mapping:
    - 401, 403 -> `AuthenticationError`
    - 402 -> `InsufficientCreditsError`
    - 429 -> `RateLimitError`
    - any other non-2xx -> `NetworkError` carrying the status code

Error handling strategy:
    - `requests` transport failures (DNS, refused connection, timeout) and
      undecodable 2xx bodies become `NetworkError`, with the cause chained.
    - A 2xx body that does not match the response model becomes
      `NetworkError` carrying the response status code.
    - Errors already raised by this package propagate unchanged.
    - No retry loop; `ClientConfig.retries` is not consulted here.

Security considerations:
    - The API key is never written to logs.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Type, TypeVar

import pydantic
import requests

from retrodiffusion.config import ClientConfig
from retrodiffusion.constants import AUTH_HEADER
from retrodiffusion.errors import (
    AuthenticationError,
    InsufficientCreditsError,
    NetworkError,
    RateLimitError,
    RetroDiffusionError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def error_message(response: requests.Response) -> str:
    """Prefer the JSON body's `message`, else `HTTP <status>: <reason>`."""
    message = f"HTTP {response.status_code}: {response.reason or ''}".rstrip()
    try:
        body = response.json()
    except ValueError:
        return message
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return message


def error_for_response(response: requests.Response) -> RetroDiffusionError:
    """Classify a non-2xx response into the matching SDK error."""
    message = error_message(response)
    status = response.status_code

    if status in (401, 403):
        return AuthenticationError(message)
    if status == 402:
        return InsufficientCreditsError(message)
    if status == 429:
        return RateLimitError(message)
    return NetworkError(message, status_code=status)


def parse_response(model: Type[ModelT], data: Any, status_code: int | None = None) -> ModelT:
    """Validate a decoded JSON body against a response model."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise NetworkError(
            f"Malformed response: {exc.error_count()} invalid field(s)",
            status_code=status_code,
        ) from exc


class HttpTransport:
    """Single-call JSON transport bound to one resolved `ClientConfig`."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config

    def build_url(self, path: str) -> str:
        return f"{self.config.resolved_base_url}{path}"

    def build_headers(self, headers: Mapping[str, str] | None = None) -> dict[str, str]:
        merged = {
            "Content-Type": "application/json",
            AUTH_HEADER: self.config.api_key,
        }
        if headers:
            merged.update(headers)
        return merged

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        response_model: Type[pydantic.BaseModel] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            path: Endpoint path such as `/inferences`.
            method: HTTP method.
            body: JSON-serializable payload, or None for no body.
            headers: Extra headers; they override the defaults.
            response_model: When given, the body is validated into this
                pydantic model and the model instance is returned.

        Raises:
            AuthenticationError, InsufficientCreditsError, RateLimitError,
            NetworkError: See module docstring for the mapping.
        """
        url = self.build_url(path)
        kwargs: dict[str, Any] = {
            "headers": self.build_headers(headers),
            "timeout": self.config.timeout,
        }
        if body is not None:
            kwargs["json"] = body

        try:
            response = requests.request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed before a response: %s", method, url, exc)
            raise NetworkError(f"Network request failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not 200 <= response.status_code < 300:
            error = error_for_response(response)
            logger.warning(
                "%s %s returned %s (%s)", method, url, response.status_code, error.code
            )
            raise error

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Malformed response from {path}: body is not valid JSON",
                status_code=response.status_code,
            ) from exc

        if response_model is None:
            return data
        return parse_response(response_model, data, response.status_code)
