from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator


class WatermarkRequest(BaseModel):
    main_image_path: Path
    watermark_image_path: Path
    out_path: Path
    x: int = 0
    y: int = 0
    bound_height: int = 0
    bound_width: int = 0

    @field_validator("main_image_path", "watermark_image_path", "out_path", mode="before")
    @classmethod
    def _require_non_empty_path(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            raise ValueError("path must not be empty")
        return value
