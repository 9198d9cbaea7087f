from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import RequestValidationError
from .models.request import WatermarkRequest

MIN_VALID_EXAMPLE_YAML = """main_image_path: photo.jpg
watermark_image_path: logo.png
out_path: photo_watermarked.png
x: 10
y: 10
bound_height: 64
bound_width: 128
"""


_PARSERS: dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def _invalid_job(reason: str) -> RequestValidationError:
    return RequestValidationError(f"{reason}\n\nMinimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}")


def _parse_job_file(job_path: Path) -> dict[str, Any]:
    parser = _PARSERS.get(job_path.suffix.lower())
    if parser is None:
        raise _invalid_job(f"Unsupported job file format {job_path.suffix!r}. Use .yaml, .yml, or .json files.")

    settings = parser(job_path.read_text(encoding="utf-8"))
    if not isinstance(settings, dict):
        raise _invalid_job(f"Job file {job_path} must hold a mapping of watermark settings.")
    return settings


def load_job_file(job_path: Path) -> dict[str, Any]:
    """Read raw watermark settings from a YAML or JSON job file.

    Values are returned unvalidated so command-line flags can still be merged in
    before :func:`build_request` runs.
    """
    if not job_path.exists():
        raise RequestValidationError(f"Job file not found: {job_path}")

    try:
        return _parse_job_file(job_path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise _invalid_job(f"Unable to parse job file: {exc}") from exc


def build_request(settings: dict[str, Any]) -> WatermarkRequest:
    try:
        return WatermarkRequest.model_validate(settings)
    except ValidationError as exc:
        errors = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item["loc"])
            errors.append(f"- {location}: {item['msg']}")
        raise RequestValidationError("Watermark settings are invalid:\n" + "\n".join(errors)) from exc


def load_and_validate_job(job_path: Path) -> WatermarkRequest:
    return build_request(load_job_file(job_path))
