from .codec import decode, encode, image_format_for, read_image, write_image
from .compositor import blend_pixel, composite, validate_placement
from .pixel_buffer import RGBA, PixelBuffer
from .resampler import resize_nearest

__all__ = [
    "RGBA",
    "PixelBuffer",
    "resize_nearest",
    "blend_pixel",
    "composite",
    "validate_placement",
    "image_format_for",
    "decode",
    "encode",
    "read_image",
    "write_image",
]
