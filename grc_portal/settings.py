from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Portal settings, overridable through `APP_*` environment variables."""

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    db_url: str = f"sqlite:///{REPO_ROOT / 'grc_portal.db'}"
    security_config_path: Path = REPO_ROOT / "config" / "security_config.yaml"
    log_level: str = "INFO"
    # Demo departments, users and records on an empty database.
    seed_demo_data: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
