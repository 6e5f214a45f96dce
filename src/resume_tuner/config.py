"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

API_KEY_ENV = "ANTHROPIC_API_KEY"


def _check_range(name: str, value: float, low: float, high: float | None = None) -> None:
    if value < low or (high is not None and value > high):
        bound = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bound}, got {value!r}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 8192
    temperature: float = 0.2
    timeout: int = 120
    max_attempts: int = 1

    def __post_init__(self) -> None:
        _check_range("max_tokens", self.max_tokens, 1, 64000)
        _check_range("temperature", self.temperature, 0.0, 1.0)
        _check_range("timeout", self.timeout, 1)
        _check_range("max_attempts", self.max_attempts, 1, 5)


@dataclass(frozen=True)
class IngestConfig:
    max_file_mb: int = 10

    def __post_init__(self) -> None:
        _check_range("max_file_mb", self.max_file_mb, 1, 50)

    @property
    def max_file_bytes(self) -> int:
        return self.max_file_mb * 1024 * 1024


@dataclass(frozen=True)
class ExportConfig:
    filename: str = "Tuned_Resume.pdf"
    page_size: str = "letter"
    orientation: str = "portrait"
    margin_in: float = 0.4
    image_quality: float = 0.98
    page_width_px: int = 816

    def __post_init__(self) -> None:
        _check_range("margin_in", self.margin_in, 0.0, 2.0)
        _check_range("image_quality", self.image_quality, 0.0, 1.0)
        _check_range("page_width_px", self.page_width_px, 320)
        if self.orientation not in ("portrait", "landscape"):
            raise ValueError(f"orientation must be 'portrait' or 'landscape', got {self.orientation!r}")
        if not self.filename.lower().endswith(".pdf"):
            raise ValueError(f"filename must end with .pdf, got {self.filename!r}")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        ingest=IngestConfig(**raw.get("ingest", {})),
        export=ExportConfig(**raw.get("export", {})),
    )


def load_api_key() -> str | None:
    """Read the Anthropic API key once at startup.

    Not validated here; a missing or bad key surfaces as an authentication
    failure on the first tuning request.
    """
    load_dotenv()
    return os.environ.get(API_KEY_ENV) or None
