from __future__ import annotations

from dataclasses import asdict, dataclass
from time import perf_counter


@dataclass(slots=True)
class WatermarkResult:
    output_path: str
    base_size: tuple[int, int]
    watermark_size: tuple[int, int]
    placed_size: tuple[int, int]
    resized: bool = False
    execution_time_seconds: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class Stopwatch:
    """Wall-clock time of one watermark run, rounded for reporting."""

    __slots__ = ("_started",)

    def __init__(self) -> None:
        self._started = perf_counter()

    def seconds(self, digits: int = 3) -> float:
        return round(perf_counter() - self._started, digits)
