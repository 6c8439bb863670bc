"""
Pack Images - command-line front end

Combines a "black" and a "white" image into one PNG that shows one image over a
black background and the other over a white background.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from PIL import Image

from dualpng.config import configure_logging, load_settings
from dualpng.services.errors import PackError
from dualpng.services.image_utils import SUPPORTED_IMAGE_EXTS
from dualpng.services.packer import pack_files
from dualpng.services.previews import write_previews
from dualpng.services.rasterizer import OPENCV_FILTERS, RASTERIZERS, get_rasterizer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Pack a black and a white image into one alpha-encoded PNG",
        epilog="Supported inputs: " + ", ".join(sorted(SUPPORTED_IMAGE_EXTS)),
    )
    parser.add_argument("--black", required=True, help="Image revealed over a white background")
    parser.add_argument("--white", required=True, help="Image revealed over a black background")
    parser.add_argument("--output", required=True, help="Output PNG path")
    parser.add_argument("--black-brightness", type=float, default=settings.black_brightness, help="Brightness multiplier for the black image (default: %(default)s)")
    parser.add_argument("--white-brightness", type=float, default=settings.white_brightness, help="Brightness multiplier for the white image (default: %(default)s)")
    parser.add_argument("--rasterizer", choices=sorted(RASTERIZERS), default=settings.rasterizer, help="Resampling backend (default: %(default)s)")
    parser.add_argument("--resample", choices=sorted(OPENCV_FILTERS), default=settings.resample, help="Resample filter (default: %(default)s)")
    parser.add_argument("--preview-dir", help="Also write previews over black and white backgrounds here")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        rasterizer = get_rasterizer(args.rasterizer, args.resample)
        out_path = pack_files(
            Path(args.black),
            Path(args.white),
            Path(args.output),
            black_brightness=args.black_brightness,
            white_brightness=args.white_brightness,
            rasterizer=rasterizer,
        )
        print(f"Saved: {out_path}")

        if args.preview_dir:
            with Image.open(out_path) as packed:
                previews = write_previews(packed, Path(args.preview_dir), out_path.stem)
            for path in previews.values():
                print(f"Saved: {path}")
    except (PackError, ValueError) as e:
        raise SystemExit(f"pack failed: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
