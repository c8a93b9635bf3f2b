"""Static API catalogue for the Retro Diffusion client.

Architectural role:
    Centralizes endpoint paths, credential lookup names, prompt-style presets and
    size constraints consumed by `validation`, `inference.builders`, `transport`
    and `config`.

Determinism:
    Pure constants. Nothing here reads the environment or touches the network.
"""

# Production endpoint; overridable through `ClientConfig.base_url`.
API_BASE_URL = "https://api.retrodiffusion.ai/v1"


class ENDPOINTS:
    """Endpoint paths relative to the configured base URL."""

    INFERENCES = "/inferences"
    CREDITS = "/inferences/credits"


class MODELS:
    """Model identifiers reported in `InferenceResponse.model`."""

    RD_FAST = "rd_fast"
    RD_PLUS = "rd_plus"


# Every request carries the resolved key in this header.
AUTH_HEADER = "X-RD-Token"

# Fallback credential sources, consulted in this order.
API_KEY_ENV_VARS = ("RD_TOKEN", "RD_API_KEY")

RD_FAST_STYLES = (
    "rd_fast__default",
    "rd_fast__retro",
    "rd_fast__simple",
    "rd_fast__detailed",
    "rd_fast__anime",
    "rd_fast__game_asset",
    "rd_fast__portrait",
    "rd_fast__texture",
    "rd_fast__ui",
    "rd_fast__item_sheet",
    "rd_fast__mc_texture",
    "rd_fast__mc_item",
    "rd_fast__character_turnaround",
    "rd_fast__1_bit",
    "rd_fast__no_style",
)

RD_PLUS_STYLES = (
    "rd_plus__default",
    "rd_plus__retro",
    "rd_plus__watercolor",
    "rd_plus__textured",
    "rd_plus__cartoon",
    "rd_plus__ui_element",
    "rd_plus__item_sheet",
    "rd_plus__character_turnaround",
    "rd_plus__topdown_map",
    "rd_plus__topdown_asset",
    "rd_plus__isometric",
    "rd_plus__isometric_asset",
)

ANIMATION_STYLE = "animation__four_angle_walking"
ANIMATION_STYLES = (ANIMATION_STYLE,)

IMAGE_STYLES = RD_FAST_STYLES + RD_PLUS_STYLES
ALL_STYLES = IMAGE_STYLES + ANIMATION_STYLES

SUPPORTED_RESOLUTIONS = {
    "standard": (64, 128, 256, 512),
    "animation": (48,),
}

ANIMATION_SIZE = 48

# Merged under caller fields for every non-animation operation.
DEFAULT_CONFIG = {
    "width": 256,
    "height": 256,
    "num_images": 1,
    "strength": 0.8,
}

MIN_NUM_IMAGES = 1
MAX_NUM_IMAGES = 10
MAX_RETRIES = 5
