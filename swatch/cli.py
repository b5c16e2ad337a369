"""
Swatch command line.

Quantizes an image to 2^max-depth dominant colors with the median-cut
algorithm and prints them as an HTML page or JSON, or writes the page to a file.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from swatch import __version__
from swatch.config import config
from swatch.services.colors.pipeline import build_swatch
from swatch.services.colors.swatches import render_html, render_json, write_output
from swatch.services.imaging import load_image, save_image
from swatch.utils.logging import LOG_LEVELS, get_logger


def parse_output_type(value: str) -> str:
    output = value.lower()
    if not config.validate_output(output):
        raise argparse.ArgumentTypeError(
            f"Invalid value provided for output {value}. value can be html | json | file"
        )
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swatch",
        description="utility to quantize image to N dominant color using median cut algorithm."
    )
    parser.add_argument("-i", "--image", dest="image_path", default="",
                        help="Image file path")
    parser.add_argument("-d", "--max-depth", type=int, default=config.DEFAULT_MAX_DEPTH,
                        help="Max depth; the palette has 2^max-depth colors")
    parser.add_argument("-o", "--output", type=parse_output_type,
                        default=config.DEFAULT_OUTPUT,
                        help="Output type: html | json | file")
    parser.add_argument("--repaint", type=Path, default=None,
                        help="Also save the image repainted with its palette colors")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        default=config.LOG_LEVEL.upper(),
                        help="Log level for messages written to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = get_logger(args.log_level)
    log.debug("Parsed arguments", extra={
        "image": args.image_path, "max_depth": args.max_depth, "output": args.output
    })

    if args.image_path == "":
        print("error: please provide absolute path of an image!", file=sys.stderr)
        return 1

    if not config.validate_max_depth(args.max_depth):
        print(f"error: max-depth must be between 0 and {config.MAX_DEPTH_LIMIT}", file=sys.stderr)
        return 1

    image_path = Path(args.image_path)
    try:
        rgb = load_image(image_path)
    except (OSError, ValueError) as e:
        log.warning("Image could not be loaded", extra={"path": args.image_path})
        print(f"{e} {args.image_path}", file=sys.stderr)
        return 1

    try:
        result = build_swatch(rgb, max_depth=args.max_depth,
                              include_repaint=args.repaint is not None)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.repaint is not None:
        save_image(result.repainted, args.repaint)
        log.info("Saved repainted image", extra={"path": str(args.repaint)})

    if args.output == "json":
        write_output(render_json(result.palette))
    elif args.output == "file":
        write_output(render_html(result.palette, image_path.name), config.OUTPUT_FILE)
    else:
        write_output(render_html(result.palette, image_path.name))

    return 0


if __name__ == "__main__":
    sys.exit(main())
