"""Inference operations exposed as `client.inference`.

Interaction with client:
    `RetroDiffusionClient` constructs one `InferencesNamespace` bound to its
    `HttpTransport`. Each method builds a finalized payload, posts it to
    `/inferences` and wraps the decoded body in `InferenceResponse`.

Error handling:
    - Builder `ValidationError`s are raised before any network call.
    - Transport errors propagate unchanged.
    - A 2xx body that does not match `InferenceResponse` raises `NetworkError`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from retrodiffusion.constants import ENDPOINTS
from retrodiffusion.inference.builders import (
    build_animation_payload,
    build_image_to_image_payload,
    build_payload,
    build_text_to_image_payload,
)
from retrodiffusion.inference.types import InferenceResponse, RequestLike
from retrodiffusion.transport import HttpTransport

logger = logging.getLogger(__name__)


class InferencesNamespace:
    """Text-to-image, image-to-image, animation and generic inference calls."""

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    def _submit(self, build: Callable[[RequestLike], Dict[str, Any]], request: RequestLike) -> InferenceResponse:
        payload = build(request)
        logger.info(
            "Submitting inference style=%s size=%sx%s images=%s",
            payload.get("prompt_style", "default"),
            payload.get("width"),
            payload.get("height"),
            payload.get("num_images"),
        )
        return self._transport.request(
            ENDPOINTS.INFERENCES, method="POST", body=payload, response_model=InferenceResponse
        )

    def text_to_image(self, request: RequestLike) -> InferenceResponse:
        """Generate images from a text prompt.

        Defaults `width=256, height=256, num_images=1, strength=0.8` are merged
        under the caller's fields. An `input_palette` is normalized through the
        base64 guard.
        """
        return self._submit(build_text_to_image_payload, request)

    def image_to_image(self, request: RequestLike) -> InferenceResponse:
        """Transform `input_image` guided by the prompt; `strength` defaults to 0.8."""
        return self._submit(build_image_to_image_payload, request)

    def animation(self, request: RequestLike) -> InferenceResponse:
        """Generate a 48x48 four-angle walking animation.

        Width, height, image count and prompt style are always overridden to
        48, 48, 1 and `animation__four_angle_walking`.
        """
        return self._submit(build_animation_payload, request)

    def create(self, request: RequestLike) -> InferenceResponse:
        """Dispatch any request variant, resolving it from its shape when needed."""
        return self._submit(build_payload, request)
