"""
Straight-alpha compositing of a watermark buffer onto a main image buffer.

Blending is done at 16 bits per channel: 8-bit samples are widened
(``c * 0x101``), mixed in floating point and truncated back with ``>> 8``.
Blending the 8-bit values directly rounds differently.
"""

from __future__ import annotations

import logging

from watermark_cli.exceptions import OutOfBoundsError
from watermark_cli.imaging.pixel_buffer import CHANNELS, RGBA, PixelBuffer

logger = logging.getLogger(__name__)

MAX_ALPHA = 0xFF
MAX_ALPHA_16 = 0xFFFF


def _widen(channel: int) -> int:
    return channel * 0x101


def _narrow(channel: int) -> int:
    return channel >> 8


def blend_pixel(overlay: RGBA, base: RGBA) -> RGBA:
    """Blend one watermark pixel over one main-image pixel.

    The colour channels are linearly interpolated by the overlay's alpha. The
    resulting alpha is the larger of the two inputs, not a Porter-Duff "over".
    """
    overlay_alpha = overlay[3]
    if overlay_alpha == 0:
        return base
    if overlay_alpha == MAX_ALPHA:
        return overlay

    alpha = _widen(overlay_alpha) / MAX_ALPHA_16
    red, green, blue = (
        _narrow(int(_widen(o) * alpha + _widen(b) * (1 - alpha))) for o, b in zip(overlay[:3], base[:3])
    )
    return red, green, blue, max(overlay_alpha, base[3])


def validate_placement(base: PixelBuffer, x: int, y: int) -> None:
    # Only the origin is checked; the far edge may hang past the base image.
    if x < 0 or y < 0 or x > base.width or y > base.height:
        raise OutOfBoundsError(
            f"dimensions out of bounds: ({x}, {y}) not within {base.width}x{base.height}",
            position=(x, y),
            bounds=base.size,
        )


def composite(base: PixelBuffer, overlay: PixelBuffer, x: int, y: int) -> None:
    """Blend ``overlay`` into ``base`` in place with its top-left corner at ``(x, y)``."""
    validate_placement(base, x, y)

    visible_width = min(overlay.width, base.width - x)
    visible_height = min(overlay.height, base.height - y)
    if visible_width < overlay.width or visible_height < overlay.height:
        logger.info(
            "Watermark %sx%s at (%s, %s) clipped to %sx%s by main image edge",
            overlay.width,
            overlay.height,
            x,
            y,
            visible_width,
            visible_height,
        )
    if visible_width <= 0 or visible_height <= 0:
        return

    for v in range(visible_height):
        overlay_row = overlay.offset(0, v)
        base_row = base.offset(x, y + v)
        for start in range(0, visible_width * CHANNELS, CHANNELS):
            pixel = slice(base_row + start, base_row + start + CHANNELS)
            overlay_pixel = tuple(overlay.samples[overlay_row + start : overlay_row + start + CHANNELS])
            base.samples[pixel] = bytes(blend_pixel(overlay_pixel, tuple(base.samples[pixel])))
