"""Credit balance lookup exposed as `client.credits`."""

from __future__ import annotations

from retrodiffusion.constants import ENDPOINTS
from retrodiffusion.inference.types import CreditsResponse
from retrodiffusion.transport import HttpTransport


class CreditsNamespace:
    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    def get(self) -> CreditsResponse:
        """Return the current credit balance for the configured API key.

        Issues exactly one `GET /inferences/credits`.
        """
        return self._transport.request(ENDPOINTS.CREDITS, method="GET", response_model=CreditsResponse)
