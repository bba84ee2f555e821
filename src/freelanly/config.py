"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 800
    temperature: float = 0.7
    max_attempts: int = 1  # 1 means a failed cover letter call is not retried
    timeout: int = 60


@dataclass(frozen=True)
class CoverLetterConfig:
    max_projects: int = 3
    max_words: int = 300


@dataclass(frozen=True)
class ExportConfig:
    """PDF geometry in points."""

    left_margin: float = 20
    top_margin: float = 20
    page_bound: float = 270
    heading_size: int = 16
    body_size: int = 12
    heading_step: float = 10
    body_step: float = 7
    blank_step: float = 5


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.freelanly/freelanly.db"
    usage_db_path: str = "~/.freelanly/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()

    @property
    def resolved_usage_db_path(self) -> Path:
        return Path(self.usage_db_path).expanduser()


@dataclass(frozen=True)
class ProfileConfig:
    # Offer to pre-fill the basic-info step from the saved profile
    fetch_enabled: bool = False


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    cover_letter: CoverLetterConfig = field(default_factory=CoverLetterConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
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
        cover_letter=CoverLetterConfig(**raw.get("cover_letter", {})),
        export=ExportConfig(**raw.get("export", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        profile=ProfileConfig(**raw.get("profile", {})),
    )
