"""Base64 and file helpers for request inputs and generated outputs.

Input side:
    `bytes_to_base64` / `file_to_base64` produce unprefixed base64 suitable for
    `input_image` and `input_palette`.

Output side:
    `save_images` decodes `InferenceResponse.base64_images` and writes one file
    per image, creating the target directory when needed.

Side effects:
    Only `file_to_base64` (read) and `save_images` (write) touch the filesystem.
"""

import base64
import os

from retrodiffusion.validation.base64_guard import strip_data_url_prefix


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def file_to_base64(path: str) -> str:
    """Read `path` and return its contents as unprefixed base64.

    Files holding a data URL (text starting with `data:`) are unwrapped.
    """
    with open(path, "rb") as f:
        raw = f.read()

    if raw.startswith(b"data:"):
        return strip_data_url_prefix(raw.decode("ascii").strip())

    return bytes_to_base64(raw)


def save_images(response, directory: str, prefix: str = "image", extension: str = "png") -> list[str]:
    """Write every generated image of `response` into `directory`.

    Args:
        response: `InferenceResponse` whose images should be written.
        directory: Output directory (created if missing).
        prefix: File-name prefix; files are named `<prefix>_<n>.<extension>`.
        extension: `png` for images and spritesheets, `gif` for animations.

    Returns:
        Written file paths in response order.
    """
    os.makedirs(directory, exist_ok=True)

    paths = []
    for index, data in enumerate(response.decoded_images(), start=1):
        path = os.path.join(directory, f"{prefix}_{index}.{extension.lstrip('.')}")
        with open(path, "wb") as f:
            f.write(data)
        paths.append(path)

    return paths
