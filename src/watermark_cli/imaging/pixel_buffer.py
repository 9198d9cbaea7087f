from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

RGBA = tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)
CHANNELS = 4


@dataclass(slots=True)
class PixelBuffer:
    """Decoded image as row-major straight (non-premultiplied) RGBA bytes.

    ``samples`` holds ``width * height * 4`` bytes, the same layout Pillow's
    ``tobytes()`` produces for an ``RGBA`` image.
    """

    width: int
    height: int
    samples: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Buffer dimensions must be non-negative, got {self.width}x{self.height}")
        if not isinstance(self.samples, bytearray):
            self.samples = bytearray(self.samples)
        if len(self.samples) != self.width * self.height * CHANNELS:
            raise ValueError(
                f"Expected {self.width * self.height * CHANNELS} bytes for {self.width}x{self.height}, "
                f"got {len(self.samples)}"
            )

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[RGBA]) -> PixelBuffer:
        return cls(width, height, bytearray(channel for pixel in pixels for channel in pixel))

    @classmethod
    def filled(cls, width: int, height: int, color: RGBA) -> PixelBuffer:
        width, height = max(0, width), max(0, height)
        return cls(width, height, bytearray(bytes(color) * (width * height)))

    @classmethod
    def empty(cls, width: int = 0, height: int = 0) -> PixelBuffer:
        return cls.filled(width, height, TRANSPARENT)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def offset(self, x: int, y: int) -> int:
        """Byte offset of pixel ``(x, y)``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return (y * self.width + x) * CHANNELS

    def get_pixel(self, x: int, y: int) -> RGBA:
        start = self.offset(x, y)
        return tuple(self.samples[start : start + CHANNELS])

    def set_pixel(self, x: int, y: int, color: RGBA) -> None:
        start = self.offset(x, y)
        self.samples[start : start + CHANNELS] = bytes(color)

    def pixels(self) -> Iterator[RGBA]:
        data = self.samples
        for start in range(0, len(data), CHANNELS):
            yield tuple(data[start : start + CHANNELS])

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.width, self.height, bytearray(self.samples))
