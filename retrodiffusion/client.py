"""Client facade for the Retro Diffusion API.

Architectural role:
    Owns the resolved `ClientConfig` and wires one `HttpTransport` into the
    `inference` and `credits` namespaces.

Request lifecycle:
    caller -> namespace method -> payload builder (merge, base64 guard,
    validation) -> `HttpTransport.request` -> typed response or typed error.

Failure behavior:
    Construction raises `ConfigurationError` synchronously when no API key is
    available, before any namespace exists.

Concurrency:
    The client holds no mutable state after construction; methods can be called
    from several threads at once.
"""

from __future__ import annotations

import logging

from retrodiffusion.config import ClientConfig, resolve_client_config
from retrodiffusion.credits import CreditsNamespace
from retrodiffusion.inference.namespace import InferencesNamespace
from retrodiffusion.transport import HttpTransport

logger = logging.getLogger(__name__)


class RetroDiffusionClient:
    """Entry point for image generation and credit lookups.

    Example:
        client = RetroDiffusionClient(api_key="rd_...")
        result = client.inference.text_to_image(
            {"prompt": "pixel art sword with blue flames", "prompt_style": "rd_fast__game_asset"}
        )
        balance = client.credits.get().credits
    """

    def __init__(self, config: ClientConfig | None = None, **options) -> None:
        """Resolve configuration and bind namespaces.

        Args:
            config: Optional `ClientConfig`.
            **options: `api_key`, `base_url`, `timeout` (seconds), `retries`;
                applied on top of `config`.

        Raises:
            ConfigurationError: No API key in config, `RD_TOKEN` or `RD_API_KEY`.
            ValidationError: A configuration value is out of range.
        """
        self._config = resolve_client_config(config, **options)
        self._transport = HttpTransport(self._config)

        self.inference = InferencesNamespace(self._transport)
        self.credits = CreditsNamespace(self._transport)

        logger.debug("RetroDiffusionClient ready: base_url=%s", self._config.resolved_base_url)

    @property
    def config(self) -> ClientConfig:
        return self._config
