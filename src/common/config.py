"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class RankingSettings(BaseModel):
    """Settings for one optimization run."""
    max_candidates: int = Field(default=8, ge=1)
    max_query_keywords: int = Field(default=5, ge=1)
    currency_symbol: str = "$"


class Settings(BaseModel):
    """Top-level application settings."""
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    log_level: str = "INFO"

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        OPTIMIZER_MAX_CANDIDATES and OPTIMIZER_LOG_LEVEL override the file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        if max_candidates := os.getenv("OPTIMIZER_MAX_CANDIDATES"):
            data.setdefault("ranking", {})["max_candidates"] = int(max_candidates)
        if level := os.getenv("OPTIMIZER_LOG_LEVEL"):
            data["log_level"] = level.upper()
        return cls(**data)


# Singleton settings instance
settings = Settings.load()
