"""Base64 guard for image and palette payloads.

Processing flow:
    1. Strip a leading `data:<mime>;base64,` prefix when present.
    2. Reject empty or non-string input.
    3. Decode strictly and re-encode; accept only byte-exact round trips.

Base64 handling:
    - Whitespace, missing padding and non-alphabet characters are rejected
      because they do not survive the decode/encode round trip unchanged.
    - The caller's value is never mutated; the normalized string is returned.
"""

import base64
import binascii

from retrodiffusion.errors import ValidationError

DATA_URL_SCHEME = "data:"


def strip_data_url_prefix(value: str) -> str:
    """Return the substring after the first comma of a data URL.

    Values without a `data:` prefix, or data URLs without a comma, are
    returned unchanged.
    """
    if value.startswith(DATA_URL_SCHEME):
        comma_index = value.find(",")
        if comma_index != -1:
            return value[comma_index + 1:]
    return value


def is_valid_base64(value) -> bool:
    """Return True when `value` is non-empty, unprefixed, round-trippable base64."""
    if not value or not isinstance(value, str):
        return False

    if value.startswith(DATA_URL_SCHEME):
        return False

    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False

    return base64.b64encode(raw).decode("ascii") == value


def ensure_valid_base64_image(value, field_name: str = "image") -> str:
    """Normalize and validate a base64 image payload.

    Args:
        value: Raw base64 string, optionally carrying a data-URL prefix.
        field_name: Request field reported on failure.

    Returns:
        The prefix-stripped base64 string.

    Raises:
        ValidationError: If the normalized value is not valid base64.
    """
    cleaned = strip_data_url_prefix(value) if isinstance(value, str) else value

    if not is_valid_base64(cleaned):
        raise ValidationError(
            f"Invalid base64 image format for {field_name}. "
            "Must be a valid base64 string without data URL prefix.",
            field=field_name,
        )

    return cleaned
