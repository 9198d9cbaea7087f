from __future__ import annotations

import logging

from watermark_cli.exceptions import NullImageError
from watermark_cli.imaging.pixel_buffer import CHANNELS, PixelBuffer

logger = logging.getLogger(__name__)


def resize_nearest(source: PixelBuffer | None, target_height: int, target_width: int) -> PixelBuffer:
    """Nearest-neighbour resize of ``source`` to ``target_width`` x ``target_height``.

    Both axes are scaled independently, so the aspect ratio is not preserved.
    Pixels (alpha included) are copied verbatim. A non-positive target dimension
    yields an empty buffer. The result is always a new buffer.
    """
    if source is None:
        raise NullImageError("image is nil")

    if target_width <= 0 or target_height <= 0:
        return PixelBuffer.empty(target_width, target_height)

    if source.is_empty:
        raise NullImageError(f"Cannot resize a {source.width}x{source.height} image to {target_width}x{target_height}")

    logger.debug(
        "Resizing %sx%s -> %sx%s (nearest neighbour)", source.width, source.height, target_width, target_height
    )
    # Column lookup is the same for every row.
    src_columns = [int(i * source.width / target_width) * CHANNELS for i in range(target_width)]
    row_bytes = source.width * CHANNELS
    samples = bytearray()
    for j in range(target_height):
        row_start = int(j * source.height / target_height) * row_bytes
        row = source.samples[row_start : row_start + row_bytes]
        for column in src_columns:
            samples += row[column : column + CHANNELS]

    return PixelBuffer(target_width, target_height, samples)
