"""Typed client for the Retro Diffusion image-generation API.

Scope:
    Builds and validates text-to-image, image-to-image and walking-animation
    requests, sends them over HTTPS with the account token, and maps responses
    to typed results or typed exceptions. Also exposes the credit balance.

Package split:
    - `client`: `RetroDiffusionClient` facade.
    - `config`: `ClientConfig` and API-key resolution.
    - `inference`: request types, payload builders and the inference namespace.
    - `credits`: credit balance namespace.
    - `validation`: base64 guard and ordered request rules.
    - `transport`: `requests`-based HTTP adapter and status mapping.
    - `images`: base64/file helpers for inputs and generated outputs.
    - `cli`: `retrodiffusion` command-line entry point.
"""

from retrodiffusion.client import RetroDiffusionClient
from retrodiffusion.config import ClientConfig
from retrodiffusion.errors import (
    AuthenticationError,
    ConfigurationError,
    InsufficientCreditsError,
    NetworkError,
    RateLimitError,
    RetroDiffusionError,
    ValidationError,
)
from retrodiffusion.inference.types import (
    AnimationRequest,
    CreditsResponse,
    ImageToImageRequest,
    InferenceRequest,
    InferenceResponse,
    TextToImageRequest,
)

__version__ = "0.1.0"

__all__ = [
    "RetroDiffusionClient",
    "ClientConfig",
    "TextToImageRequest",
    "ImageToImageRequest",
    "AnimationRequest",
    "InferenceRequest",
    "InferenceResponse",
    "CreditsResponse",
    "RetroDiffusionError",
    "ValidationError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "NetworkError",
    "ConfigurationError",
]
