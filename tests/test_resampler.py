import pytest

from watermark_cli.exceptions import NullImageError
from watermark_cli.imaging.pixel_buffer import PixelBuffer
from watermark_cli.imaging.resampler import resize_nearest


def _gradient(width: int, height: int) -> PixelBuffer:
    samples = [(x, y, x + y, 200) for y in range(height) for x in range(width)]
    return PixelBuffer.from_pixels(width, height, samples)


def test_resize_none_raises_null_image() -> None:
    with pytest.raises(NullImageError):
        resize_nearest(None, 2, 2)


@pytest.mark.parametrize("height,width", [(1, 1), (3, 7), (10, 10), (25, 4)])
def test_resize_returns_exact_pixel_count(height: int, width: int) -> None:
    resized = resize_nearest(_gradient(10, 10), height, width)
    assert resized.size == (width, height)
    assert len(list(resized.pixels())) == width * height


def test_resize_to_zero_returns_empty_buffer() -> None:
    resized = resize_nearest(_gradient(4, 4), 0, 0)
    assert resized.is_empty
    assert resized.size == (0, 0)


def test_resize_with_one_zero_axis_returns_empty_buffer() -> None:
    resized = resize_nearest(_gradient(4, 4), 3, 0)
    assert resized.is_empty


def test_downscale_samples_nearest_pixel_verbatim() -> None:
    source = _gradient(10, 10)
    resized = resize_nearest(source, 5, 5)
    for j in range(5):
        for i in range(5):
            assert resized.get_pixel(i, j) == source.get_pixel(2 * i, 2 * j)


def test_upscale_repeats_source_pixels() -> None:
    source = _gradient(2, 1)
    resized = resize_nearest(source, 1, 4)
    assert list(resized.pixels()) == [(0, 0, 0, 200), (0, 0, 0, 200), (1, 0, 1, 200), (1, 0, 1, 200)]


def test_axes_are_resized_independently() -> None:
    resized = resize_nearest(_gradient(10, 2), 6, 3)
    assert resized.size == (3, 6)


def test_resize_never_aliases_source() -> None:
    source = _gradient(3, 3)
    resized = resize_nearest(source, 3, 3)
    assert resized.samples == source.samples
    assert resized is not source
    assert resized.samples is not source.samples


def test_resize_of_zero_area_source_to_positive_target_raises() -> None:
    with pytest.raises(NullImageError):
        resize_nearest(PixelBuffer.empty(0, 0), 2, 2)
