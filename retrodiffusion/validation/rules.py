"""Ordered validation rules for inference payloads.

Architectural role:
    Final gate between request builders and the transport. Builders merge
    defaults and normalize base64 fields, then call `validate_request`.

Rule chain:
    Each rule is a pure function `rule(payload) -> ValidationFailure | None`.
    `check_request` walks `RULES` in order and returns the first failure, so
    callers always see a single, field-scoped problem.

Order:
    prompt -> dimension types -> dimension set -> prompt_style -> num_images
    -> strength -> seed -> boolean flags -> upscale factor -> base64 fields.

Edge cases:
    - `bool`, NaN and infinities are rejected wherever a number is expected.
    - The dimension-set check only runs when both width and height are present.
    - Unknown payload keys are ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Mapping

from retrodiffusion.constants import (
    ALL_STYLES,
    ANIMATION_STYLE,
    MAX_NUM_IMAGES,
    MIN_NUM_IMAGES,
    SUPPORTED_RESOLUTIONS,
)
from retrodiffusion.errors import ValidationError
from retrodiffusion.validation.base64_guard import is_valid_base64


@dataclass(frozen=True)
class ValidationFailure:
    """First failing rule's outcome."""

    field: str | None
    message: str

    def to_error(self) -> ValidationError:
        return ValidationError(self.message, field=self.field)


Rule = Callable[[Mapping[str, Any]], "ValidationFailure | None"]


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_integer(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_animation(payload: Mapping[str, Any]) -> bool:
    return payload.get("prompt_style") == ANIMATION_STYLE


def dimension_failure(width, height, is_animation: bool = False) -> ValidationFailure | None:
    """Check a width/height pair against the size set for the request kind."""
    key = "animation" if is_animation else "standard"
    allowed = SUPPORTED_RESOLUTIONS[key]

    if width in allowed and height in allowed:
        return None

    context = "animations" if is_animation else "standard images"
    sizes = ", ".join(str(size) for size in allowed)
    field = "width" if width not in allowed else "height"
    return ValidationFailure(
        field,
        f"Invalid dimensions for {context}. Supported sizes: {sizes}",
    )


def check_prompt(payload):
    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt:
        return ValidationFailure("prompt", "Prompt is required and cannot be empty")
    return None


def check_dimension_types(payload):
    for field in ("width", "height"):
        value = payload.get(field)
        if value is None:
            continue
        if not _is_integer(value) or value <= 0:
            return ValidationFailure(field, f"{field} must be a positive integer")
    return None


def check_dimensions(payload):
    width = payload.get("width")
    height = payload.get("height")
    if width is None or height is None:
        return None
    return dimension_failure(width, height, _is_animation(payload))


def check_prompt_style(payload):
    style = payload.get("prompt_style")
    if style is None:
        return None
    if style not in ALL_STYLES:
        return ValidationFailure("prompt_style", f"Invalid prompt style: {style!r}")
    return None


def check_num_images(payload):
    num_images = payload.get("num_images")
    if num_images is None:
        return None
    if not _is_integer(num_images):
        return ValidationFailure("num_images", "Number of images must be an integer")
    if _is_animation(payload) and num_images != 1:
        return ValidationFailure(
            "num_images", "Animations only support generating 1 image at a time"
        )
    if num_images < MIN_NUM_IMAGES or num_images > MAX_NUM_IMAGES:
        return ValidationFailure(
            "num_images",
            f"Number of images must be between {MIN_NUM_IMAGES} and {MAX_NUM_IMAGES}",
        )
    return None


def check_strength(payload):
    strength = payload.get("strength")
    if strength is None:
        return None
    if not _is_number(strength) or strength < 0 or strength > 1:
        return ValidationFailure("strength", "Strength must be between 0 and 1")
    return None


def check_seed(payload):
    seed = payload.get("seed")
    if seed is None:
        return None
    if not _is_integer(seed):
        return ValidationFailure("seed", "Seed must be an integer")
    return None


def check_flags(payload):
    for field in ("remove_bg", "tile_x", "tile_y", "return_spritesheet"):
        value = payload.get(field)
        if value is not None and not isinstance(value, bool):
            return ValidationFailure(field, f"{field} must be a boolean")
    return None


def check_upscale_factor(payload):
    factor = payload.get("upscale_output_factor")
    if factor is None:
        return None
    if not _is_number(factor) or factor <= 0:
        return ValidationFailure(
            "upscale_output_factor",
            "upscale_output_factor must be a positive number or null",
        )
    return None


def check_base64_fields(payload):
    for field in ("input_image", "input_palette"):
        if field in payload and payload[field] is not None:
            if not is_valid_base64(payload[field]):
                return ValidationFailure(
                    field,
                    f"Invalid base64 image format for {field}. "
                    "Must be a valid base64 string without data URL prefix.",
                )
    return None


RULES: tuple[Rule, ...] = (
    check_prompt,
    check_dimension_types,
    check_dimensions,
    check_prompt_style,
    check_num_images,
    check_strength,
    check_seed,
    check_flags,
    check_upscale_factor,
    check_base64_fields,
)


def check_request(payload: Mapping[str, Any], rules=RULES) -> ValidationFailure | None:
    """Return the first failing rule's outcome, or None when the payload is valid."""
    for rule in rules:
        failure = rule(payload)
        if failure is not None:
            return failure
    return None


def validate_request(payload: Mapping[str, Any]) -> None:
    """Raise `ValidationError` for the first rule the payload violates."""
    failure = check_request(payload)
    if failure is not None:
        raise failure.to_error()


def validate_dimensions(width, height, is_animation: bool = False) -> None:
    failure = dimension_failure(width, height, is_animation)
    if failure is not None:
        raise ValidationError(failure.message, field="dimensions")


def validate_prompt_style(style: str) -> str:
    """Return `style` unchanged when it names a known preset."""
    if style not in ALL_STYLES:
        raise ValidationError(f"Invalid prompt style: {style!r}", field="prompt_style")
    return style


def validate_strength(strength) -> None:
    failure = check_strength({"strength": strength})
    if failure is not None:
        raise failure.to_error()


def validate_num_images(num_images, is_animation: bool = False) -> None:
    payload = {"num_images": num_images}
    if is_animation:
        payload["prompt_style"] = ANIMATION_STYLE
    failure = check_num_images(payload)
    if failure is not None:
        raise failure.to_error()
