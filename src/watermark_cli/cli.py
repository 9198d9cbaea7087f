from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any

from watermark_cli.exceptions import RequestValidationError, WatermarkError
from watermark_cli.job_loader import build_request, load_job_file
from watermark_cli.pipeline import run_watermark

REQUIRED_PATHS = ("main_image_path", "watermark_image_path", "out_path")

# argparse dest -> request field
_FLAG_FIELDS = {
    "main": "main_image_path",
    "watermark": "watermark_image_path",
    "out": "out_path",
    "x": "x",
    "y": "y",
    "height": "bound_height",
    "width": "bound_width",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="watermark-cli",
        description="Overlay a watermark image onto a main image and write the result.",
    )
    parser.add_argument("-m", "--main", default=None, help="main image (.jpg/.jpeg/.png/.gif)")
    parser.add_argument("-w", "--watermark", default=None, help="watermark image (.jpg/.jpeg/.png/.gif)")
    parser.add_argument("-o", "--out", default=None, help="out path; its extension selects the encoder")
    parser.add_argument("-x", type=int, default=None, help="x position on the main image (default 0)")
    parser.add_argument("-y", type=int, default=None, help="y position on the main image (default 0)")
    parser.add_argument("--height", type=int, default=None, help="height of watermark (default 0)")
    parser.add_argument("--width", type=int, default=None, help="width of watermark (default 0)")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional job file (.yaml/.yml/.json) with the same settings. Flags override its values.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("WATERMARK_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level for stderr output (env: WATERMARK_LOG_LEVEL)",
    )
    return parser


def merge_settings(args: argparse.Namespace) -> dict[str, Any]:
    settings: dict[str, Any] = load_job_file(Path(args.config)) if args.config else {}
    for dest, field_name in _FLAG_FIELDS.items():
        value = getattr(args, dest)
        if value is not None:
            settings[field_name] = value
    return settings


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s | %(levelname)s | %(message)s")

    try:
        settings = merge_settings(args)
    except RequestValidationError as exc:
        raise SystemExit(f"error: {exc}") from exc

    if any(not settings.get(name) for name in REQUIRED_PATHS):
        parser.error("invalid usage: -m, -w and -o are required")

    try:
        run_watermark(build_request(settings))
    except WatermarkError as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
