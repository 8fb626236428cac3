"""Configuration loader for jobfill using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (JOBFILL_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("JOBFILL_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "JOBFILL_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class StorageSettings(BaseSettings):
    """Profile and document persistence."""

    model_config = SettingsConfigDict(env_prefix="JOBFILL_STORAGE__")

    sqlite_path: str = "data/jobfill.db"
    profile_key: str = "autofill_profile_v1"


class CryptoSettings(BaseSettings):
    """Passphrase key derivation and profile encryption."""

    model_config = SettingsConfigDict(env_prefix="JOBFILL_CRYPTO__")

    salt: str = "autofill-extension-v1"
    iterations: int = Field(default=100_000, ge=1)
    key_length: int = 32  # bytes (AES-256)
    nonce_length: int = 12


class MatcherSettings(BaseSettings):
    """Dropdown option matching."""

    model_config = SettingsConfigDict(env_prefix="JOBFILL_MATCHER__")

    # Shortest normalized string allowed to take part in containment matching.
    # 0 lets empty option values match too.
    partial_min_length: int = Field(default=1, ge=0)
    default_phone_type: str = "mobile"


class LoggingSettings(BaseSettings):
    """Log output configuration."""

    model_config = SettingsConfigDict(env_prefix="JOBFILL_LOGGING__")

    level: str = "INFO"
    json_output: bool = False


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root jobfill settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="JOBFILL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False

    storage: StorageSettings = Field(default_factory=StorageSettings)
    crypto: CryptoSettings = Field(default_factory=CryptoSettings)
    matcher: MatcherSettings = Field(default_factory=MatcherSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize relative paths against project_root."""
        if not Path(self.storage.sqlite_path).is_absolute():
            self.storage.sqlite_path = str(self.project_root / self.storage.sqlite_path)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
