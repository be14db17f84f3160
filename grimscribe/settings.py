from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ConvertOptions(BaseModel):
    """Validated options for one batch conversion run."""

    input: Path
    key: str = Field(min_length=1)
    output: Path
    verbosity: int = 0

    @field_validator("input")
    @classmethod
    def _input_exists(cls, value: Path) -> Path:
        if not value.exists():
            raise ValueError(f"input path does not exist: {value}")
        return value

    @field_validator("output")
    @classmethod
    def _output_dir(cls, value: Path) -> Path:
        value = value.expanduser().resolve()
        if value.is_file():
            raise ValueError(f"output must be a directory, found a file: {value}")
        return value


__all__ = ["ConvertOptions"]
