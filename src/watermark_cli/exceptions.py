"""
Domain-specific exceptions for the watermark pipeline.

Every stage raises one of these and the CLI entry point turns them into an
error message and a non-zero exit code.  All exceptions inherit from
``WatermarkError`` so callers can also use a single broad catch when needed.
"""

from __future__ import annotations


class WatermarkError(Exception):
    """Base exception for all pipeline errors."""


class UnsupportedFormatError(WatermarkError):
    """Raised when a file extension or format hint has no codec."""


class ImageDecodeError(WatermarkError):
    """Raised when the codec rejects the contents of an image file."""


class ImageEncodeError(WatermarkError):
    """Raised when the codec fails to serialize a pixel buffer."""


class ImageIOError(WatermarkError):
    """Raised when an image file cannot be opened, created or written."""


class NullImageError(WatermarkError):
    """Raised when a resize is requested without a source image."""


class OutOfBoundsError(WatermarkError):
    """Raised when the watermark origin falls outside the main image.

    Attributes
    ----------
    position:
        The rejected ``(x, y)`` origin.
    bounds:
        The ``(width, height)`` of the main image it was checked against.
    """

    def __init__(self, message: str, position: tuple[int, int], bounds: tuple[int, int]) -> None:
        super().__init__(message)
        self.position = position
        self.bounds = bounds


class RequestValidationError(WatermarkError, ValueError):
    """Raised when watermark parameters or a job file fail validation."""
