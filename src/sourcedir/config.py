"""Configuration management for sourcedir."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


load_dotenv()


DEFAULT_SOURCE_SUFFIX = ".rs"


class Config(BaseModel):
    """Application configuration."""

    # Selection Settings
    source_suffix: str = Field(default=DEFAULT_SOURCE_SUFFIX)
    start_dir: Optional[Path] = Field(default=None)

    # Scan Settings
    scan_interval: float = Field(default=1.0)  # seconds between repeated scans

    @field_validator("source_suffix")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return DEFAULT_SOURCE_SUFFIX
        return value if value.startswith(".") else f".{value}"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_float(value: Optional[str], fallback: float) -> float:
            try:
                return float(value) if value is not None else fallback
            except ValueError:
                return fallback

        start_dir_env = os.getenv("START_DIR")

        return cls(
            source_suffix=os.getenv("SOURCE_SUFFIX", DEFAULT_SOURCE_SUFFIX),
            start_dir=Path(start_dir_env) if start_dir_env else None,
            scan_interval=_parse_float(os.getenv("SCAN_INTERVAL"), 1.0),
        )
