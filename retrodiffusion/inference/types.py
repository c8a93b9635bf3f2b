"""Request and response contracts for inference operations.

Request model:
    Three frozen dataclasses form the request union. Each exposes
    `to_payload()`, which emits only the fields that are set.

    - `TextToImageRequest`: prompt plus optional size/style/flags/palette.
    - `ImageToImageRequest`: the shared fields plus required `input_image` and
      optional `strength`.
    - `AnimationRequest`: prompt plus optional `return_spritesheet` /
      `input_image`; size, count and style are fixed by the builder.

Dynamic boundary:
    `request_kind` resolves a plain mapping to one of the three variants by
    looking at `prompt_style` first and then `input_image`.

Response model:
    pydantic models. `InferenceResponse` keeps provider-added fields instead of
    dropping them; they are available through `extra_fields`.
"""

from __future__ import annotations

import base64
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from retrodiffusion.constants import ANIMATION_STYLE, MODELS

TEXT_TO_IMAGE = "text_to_image"
IMAGE_TO_IMAGE = "image_to_image"
ANIMATION = "animation"

ModelName = Literal[MODELS.RD_FAST, MODELS.RD_PLUS]


def _drop_unset(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class TextToImageRequest:
    prompt: str
    width: Optional[int] = None
    height: Optional[int] = None
    num_images: Optional[int] = None
    seed: Optional[int] = None
    prompt_style: Optional[str] = None
    remove_bg: Optional[bool] = None
    tile_x: Optional[bool] = None
    tile_y: Optional[bool] = None
    input_palette: Optional[str] = None
    upscale_output_factor: Optional[float] = None

    kind = TEXT_TO_IMAGE

    def to_payload(self) -> Dict[str, Any]:
        return _drop_unset(asdict(self))


@dataclass(frozen=True)
class ImageToImageRequest:
    prompt: str
    input_image: str
    strength: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    num_images: Optional[int] = None
    seed: Optional[int] = None
    prompt_style: Optional[str] = None

    kind = IMAGE_TO_IMAGE

    def to_payload(self) -> Dict[str, Any]:
        return _drop_unset(asdict(self))


@dataclass(frozen=True)
class AnimationRequest:
    """Four-angle walking sprite request.

    Width, height, image count and style are not fields here: the provider
    only accepts 48x48, one image, `animation__four_angle_walking`.
    """

    prompt: str
    return_spritesheet: Optional[bool] = None
    input_image: Optional[str] = None
    seed: Optional[int] = None

    kind = ANIMATION

    def to_payload(self) -> Dict[str, Any]:
        return _drop_unset(asdict(self))


InferenceRequest = Union[TextToImageRequest, ImageToImageRequest, AnimationRequest]
RequestLike = Union[InferenceRequest, Mapping[str, Any]]


def request_kind(request: RequestLike) -> str:
    """Resolve which request variant `request` represents."""
    kind = getattr(request, "kind", None)
    if kind is not None:
        return kind

    if request.get("prompt_style") == ANIMATION_STYLE:
        return ANIMATION
    if request.get("input_image"):
        return IMAGE_TO_IMAGE
    return TEXT_TO_IMAGE


def as_payload(request: RequestLike) -> Dict[str, Any]:
    """Return a fresh dict for a dataclass request or a plain mapping."""
    if hasattr(request, "to_payload"):
        return request.to_payload()
    return dict(request)


class CreditsResponse(BaseModel):
    credits: float


class InferenceResponse(BaseModel):
    """Generation result returned by `POST /inferences`."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    created_at: float
    credit_cost: float
    remaining_credits: float
    base64_images: List[str]
    model: ModelName

    @property
    def extra_fields(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def decoded_images(self) -> List[bytes]:
        return [base64.b64decode(image) for image in self.base64_images]
