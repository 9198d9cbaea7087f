"""
Pillow-backed codec: file extension sniffing, decode to :class:`PixelBuffer`
and encode back to bytes.

Only three formats are accepted, keyed by extension: JPEG (``.jpg``/``.jpeg``),
PNG and GIF.  Decoding always yields straight RGBA; GIF decodes its first frame.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from watermark_cli.exceptions import ImageDecodeError, ImageEncodeError, ImageIOError, UnsupportedFormatError
from watermark_cli.imaging.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

FORMATS_BY_EXTENSION: dict[str, str] = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".gif": "GIF",
}

SUPPORTED_FORMATS = frozenset(FORMATS_BY_EXTENSION.values())


def image_format_for(path: Path | str) -> str:
    suffix = Path(path).suffix.lower()
    image_format = FORMATS_BY_EXTENSION.get(suffix)
    if image_format is None:
        raise UnsupportedFormatError(f"{path} has to be of type png, jpeg or gif")
    return image_format


def _normalize_format(format_hint: str) -> str:
    image_format = format_hint.upper()
    if image_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(f"Unsupported image format: {format_hint!r}")
    return image_format


def decode(data: bytes, format_hint: str) -> PixelBuffer:
    image_format = _normalize_format(format_hint)
    try:
        with Image.open(io.BytesIO(data), formats=[image_format]) as image:
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Unable to decode {image_format} data: {exc}") from exc

    return PixelBuffer(rgba.width, rgba.height, bytearray(rgba.tobytes()))


def _exact_palette_image(image: Image.Image) -> Image.Image | None:
    """Opaque images with at most 256 colours map to a palette without quantizing."""
    colors = image.getcolors(256)
    if colors is None or any(color[3] != 255 for _, color in colors):
        return None

    # Each pixel read as one native-endian 32-bit word.
    index_of = {int.from_bytes(bytes(color), sys.byteorder): index for index, (_, color) in enumerate(colors)}
    pixels = memoryview(image.tobytes()).cast("I")
    palette_image = Image.frombytes("P", image.size, bytes(index_of[pixel] for pixel in pixels))
    palette_image.putpalette([channel for _, color in colors for channel in color[:3]])
    return palette_image


def encode(buffer: PixelBuffer, format_hint: str) -> bytes:
    image_format = _normalize_format(format_hint)
    if buffer.is_empty:
        raise ImageEncodeError(f"Cannot encode a {buffer.width}x{buffer.height} image")

    image = Image.frombytes("RGBA", buffer.size, bytes(buffer.samples))
    if image_format == "GIF":
        palette_image = _exact_palette_image(image)
        if palette_image is not None:
            image = palette_image
    elif image_format == "JPEG":
        # JPEG has no alpha channel.
        image = image.convert("RGB")

    output = io.BytesIO()
    try:
        image.save(output, format=image_format)
    except (OSError, ValueError) as exc:
        raise ImageEncodeError(f"Unable to encode {image_format} image: {exc}") from exc
    return output.getvalue()


def read_image(path: Path) -> PixelBuffer:
    image_format = image_format_for(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageIOError(f"Unable to read {path}: {exc}") from exc

    buffer = decode(data, image_format)
    logger.info("Decoded %s (%s, %sx%s)", path, image_format, buffer.width, buffer.height)
    return buffer


def write_image(buffer: PixelBuffer, path: Path) -> None:
    data = encode(buffer, image_format_for(path))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise ImageIOError(f"Unable to write {path}: {exc}") from exc
    logger.info("Wrote %s (%s bytes)", path, len(data))
