from __future__ import annotations

import logging
from pathlib import Path

from watermark_cli.imaging.codec import read_image, write_image
from watermark_cli.imaging.compositor import composite, validate_placement
from watermark_cli.imaging.pixel_buffer import PixelBuffer
from watermark_cli.imaging.resampler import resize_nearest
from watermark_cli.job_loader import build_request
from watermark_cli.models.request import WatermarkRequest
from watermark_cli.output.metrics import Stopwatch, WatermarkResult

logger = logging.getLogger(__name__)


def _fit_watermark(watermark: PixelBuffer, bound_height: int, bound_width: int) -> tuple[PixelBuffer, bool]:
    # Each axis is stretched to the bound independently, aspect ratio is not kept.
    if watermark.width > bound_width or watermark.height > bound_height:
        logger.info(
            "Watermark %sx%s exceeds bounds %sx%s, resizing",
            watermark.width,
            watermark.height,
            bound_width,
            bound_height,
        )
        return resize_nearest(watermark, bound_height, bound_width), True
    return watermark, False


def run_watermark(request: WatermarkRequest) -> WatermarkResult:
    """Decode both images, fit and place the watermark, then encode the result.

    Any stage failure raises and skips the remaining stages, so the output file
    is only written after a successful composite.
    """
    stopwatch = Stopwatch()

    main_image = read_image(request.main_image_path)
    watermark = read_image(request.watermark_image_path)
    original_watermark_size = watermark.size

    watermark, resized = _fit_watermark(watermark, request.bound_height, request.bound_width)
    validate_placement(main_image, request.x, request.y)

    # Never mutate the decoded main image in place.
    merged = main_image.copy()
    composite(merged, watermark, request.x, request.y)
    logger.info("Placed %sx%s watermark at (%s, %s)", watermark.width, watermark.height, request.x, request.y)

    write_image(merged, request.out_path)

    result = WatermarkResult(
        output_path=str(request.out_path),
        base_size=main_image.size,
        watermark_size=original_watermark_size,
        placed_size=watermark.size,
        resized=resized,
        execution_time_seconds=stopwatch.seconds(),
    )
    logger.info("Watermark applied in %ss", result.execution_time_seconds)
    return result


def apply_watermark(
    main_image_path: Path | str,
    watermark_image_path: Path | str,
    out_path: Path | str,
    x: int = 0,
    y: int = 0,
    bound_height: int = 0,
    bound_width: int = 0,
) -> WatermarkResult:
    request = build_request(
        {
            "main_image_path": main_image_path,
            "watermark_image_path": watermark_image_path,
            "out_path": out_path,
            "x": x,
            "y": y,
            "bound_height": bound_height,
            "bound_width": bound_width,
        }
    )
    return run_watermark(request)
