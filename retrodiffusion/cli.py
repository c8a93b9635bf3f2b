"""
Command-line adapter for the Retro Diffusion client.

Commands:
- `credits`: print the remaining credit balance.
- `text2img`: generate images from a prompt.
- `img2img`: transform an input image file guided by a prompt.
- `animate`: generate a 48x48 four-angle walking animation (GIF or spritesheet).

Request lifecycle:
1. Parse arguments.
2. Build `RetroDiffusionClient` from `--api-key` or `RD_TOKEN`/`RD_API_KEY`.
3. Run the operation and write returned images under `--out`.
4. Print a short cost/balance summary.

Error handling strategy:
- `RetroDiffusionError` subclasses print `<code>: <message>` to stderr and exit 1.
- Argument errors, including missing `--input` / `--palette` files, are
  reported by `argparse` (exit 2).
"""

import argparse
import logging
import os
import sys

from retrodiffusion.client import RetroDiffusionClient
from retrodiffusion.constants import ALL_STYLES
from retrodiffusion.errors import RetroDiffusionError
from retrodiffusion.images import file_to_base64, save_images


def build_parser():
    parser = argparse.ArgumentParser(prog="retrodiffusion", description="Retro Diffusion API client")
    parser.add_argument("--api-key", default=None, help="Overrides RD_TOKEN / RD_API_KEY")
    parser.add_argument("--base-url", default=None)
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("credits", help="Show remaining credits")

    def add_generation_options(sub, with_size=True):
        sub.add_argument("prompt")
        sub.add_argument("--seed", type=int, default=None)
        sub.add_argument("--out", default="outputs", help="Output directory")
        sub.add_argument("--prefix", default="image")
        if with_size:
            sub.add_argument("--style", choices=ALL_STYLES, default=None)
            sub.add_argument("--width", type=int, default=None)
            sub.add_argument("--height", type=int, default=None)
            sub.add_argument("--num-images", type=int, default=None)

    text2img = commands.add_parser("text2img", help="Generate images from a prompt")
    add_generation_options(text2img)
    text2img.add_argument("--remove-bg", action="store_true", default=None)
    text2img.add_argument("--tile-x", action="store_true", default=None)
    text2img.add_argument("--tile-y", action="store_true", default=None)
    text2img.add_argument("--palette", default=None, help="Path to a palette reference image")

    img2img = commands.add_parser("img2img", help="Transform an input image")
    add_generation_options(img2img)
    img2img.add_argument("--input", required=True, help="Path to the input image")
    img2img.add_argument("--strength", type=float, default=None)

    animate = commands.add_parser("animate", help="Generate a walking animation")
    add_generation_options(animate, with_size=False)
    animate.add_argument("--spritesheet", action="store_true", default=None)
    animate.add_argument("--input", default=None, help="Optional reference image path")

    return parser


def _request_fields(args, names):
    """Collect set CLI options into a request mapping."""
    fields = {"prompt": args.prompt}
    for name, field in names:
        value = getattr(args, name, None)
        if value is not None:
            fields[field] = value
    return fields


def run(args, client=None):
    """Execute one parsed command; returns the process exit code."""
    if client is None:
        client = RetroDiffusionClient(api_key=args.api_key, base_url=args.base_url, timeout=args.timeout)

    if args.command == "credits":
        print(f"{client.credits.get().credits:g} credits remaining")
        return 0

    shared = [("seed", "seed"), ("style", "prompt_style"), ("width", "width"),
              ("height", "height"), ("num_images", "num_images")]
    extension = "png"

    if args.command == "text2img":
        request = _request_fields(
            args,
            shared + [("remove_bg", "remove_bg"), ("tile_x", "tile_x"), ("tile_y", "tile_y")],
        )
        if args.palette:
            request["input_palette"] = file_to_base64(args.palette)
        result = client.inference.text_to_image(request)

    elif args.command == "img2img":
        request = _request_fields(args, shared + [("strength", "strength")])
        request["input_image"] = file_to_base64(args.input)
        result = client.inference.image_to_image(request)

    else:
        request = _request_fields(args, [("seed", "seed"), ("spritesheet", "return_spritesheet")])
        if args.input:
            request["input_image"] = file_to_base64(args.input)
        result = client.inference.animation(request)
        if not args.spritesheet:
            extension = "gif"

    paths = save_images(result, args.out, prefix=args.prefix, extension=extension)

    print(f"Model: {result.model}")
    print(f"Cost: {result.credit_cost:g} credits ({result.remaining_credits:g} remaining)")
    for path in paths:
        print(f"Saved {path}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    for path in (getattr(args, "input", None), getattr(args, "palette", None)):
        if path and not os.path.isfile(path):
            parser.error(f"file not found: {path}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] - %(message)s",
    )

    try:
        return run(args)
    except RetroDiffusionError as err:
        print(f"{err.code}: {err.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
