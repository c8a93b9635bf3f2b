"""Payload builders for inference operations.

Pipeline (shared by every operation):
    1. Merge: operation defaults under caller fields (caller wins). Animation
       instead forces width/height/num_images/prompt_style after the merge.
    2. Prompt: a missing or blank prompt fails before anything else.
    3. Normalize: run the base64 guard over `input_image` / `input_palette`.
    4. Validate: run the ordered rule chain; its first failure propagates.

All builders return a new dict and leave the caller's request untouched.
"""

from __future__ import annotations

from typing import Any, Dict

from retrodiffusion.constants import ANIMATION_SIZE, ANIMATION_STYLE, DEFAULT_CONFIG
from retrodiffusion.errors import ValidationError
from retrodiffusion.inference.types import (
    ANIMATION,
    IMAGE_TO_IMAGE,
    RequestLike,
    as_payload,
    request_kind,
)
from retrodiffusion.validation.base64_guard import ensure_valid_base64_image
from retrodiffusion.validation.rules import check_prompt, validate_request

ANIMATION_OVERRIDES = {
    "width": ANIMATION_SIZE,
    "height": ANIMATION_SIZE,
    "num_images": 1,
    "prompt_style": ANIMATION_STYLE,
}


def _require_prompt(payload: Dict[str, Any]) -> None:
    failure = check_prompt(payload)
    if failure is not None:
        raise failure.to_error()


def _normalize_images(payload: Dict[str, Any]) -> Dict[str, Any]:
    for field in ("input_image", "input_palette"):
        if payload.get(field) is not None:
            payload[field] = ensure_valid_base64_image(payload[field], field)
    return payload


def build_text_to_image_payload(request: RequestLike) -> Dict[str, Any]:
    payload = {**DEFAULT_CONFIG, **as_payload(request)}
    _require_prompt(payload)
    _normalize_images(payload)
    validate_request(payload)
    return payload


def build_image_to_image_payload(request: RequestLike) -> Dict[str, Any]:
    payload = {**DEFAULT_CONFIG, **as_payload(request)}
    _require_prompt(payload)
    if payload.get("input_image") is None:
        raise ValidationError(
            "input_image is required for image-to-image requests",
            field="input_image",
        )
    _normalize_images(payload)
    validate_request(payload)
    return payload


def build_animation_payload(request: RequestLike) -> Dict[str, Any]:
    """Build an animation payload; size, count and style are not caller-overridable."""
    payload = {**as_payload(request), **ANIMATION_OVERRIDES}
    _require_prompt(payload)
    _normalize_images(payload)
    validate_request(payload)
    return payload


def build_payload(request: RequestLike) -> Dict[str, Any]:
    """Resolve the request variant at runtime and run its pipeline."""
    kind = request_kind(request)
    if kind == ANIMATION:
        return build_animation_payload(request)
    if kind == IMAGE_TO_IMAGE:
        return build_image_to_image_payload(request)
    return build_text_to_image_payload(request)
