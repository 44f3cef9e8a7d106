"""Settings loading for how-to-pronounce.

Settings come from an optional JSON file in the user's home directory,
with ``HOW_TO_PRONOUNCE_<FIELD>`` environment variables taking priority.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from how_to_pronounce.errors import ConfigurationError

ENV_PREFIX = "HOW_TO_PRONOUNCE_"


class Settings(BaseModel):
    """User-tunable settings for practice sessions."""

    # Recognition options passed to the speech engine on start
    locale: str = "en-US"
    interim_results: bool = False
    continuous: bool = False
    # Scores below this get an improvement tip
    tip_threshold: int = Field(default=8, ge=0, le=10)
    # Scores at or above this (and below tip_threshold) are shown as "fair"
    fair_threshold: int = Field(default=5, ge=0, le=10)
    # Which recognizer the practice screen uses
    recognizer: Literal["console", "whisper"] = "console"
    whisper_model: str = "base"  # tiny, base, small, medium, large
    whisper_backend: Literal["auto", "openai-whisper", "faster-whisper"] = "auto"

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if self.fair_threshold > self.tip_threshold:
            raise ValueError("fair_threshold must not exceed tip_threshold")
        return self


def get_settings_dir() -> Path:
    """Get the per-user settings directory (``~/.how-to-pronounce``)."""
    return Path.home() / ".how-to-pronounce"


def get_settings_path() -> Path:
    """Get the default settings file path."""
    return get_settings_dir() / "config.json"


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in Settings.model_fields:
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from JSON file and environment.

    Args:
        path: Settings file to read; defaults to ``~/.how-to-pronounce/config.json``.
            A missing file is not an error.

    Returns:
        Settings with file values overridden by environment variables

    Raises:
        ConfigurationError: If the file is not valid JSON or holds invalid values
    """
    config_path = Path(path) if path is not None else get_settings_path()

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Settings file is not valid JSON: {e.msg}",
                context={"path": str(config_path)},
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Settings file must contain a JSON object",
                context={"path": str(config_path)},
            )

    data.update(_env_overrides())

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings: {e.errors()[0]['msg']}",
            context={"path": str(config_path)},
        ) from e


def save_settings(settings: Settings, path: Path | str | None = None) -> Path:
    """Save settings to JSON file with atomic write.

    Args:
        settings: Settings to save
        path: Destination; defaults to ``~/.how-to-pronounce/config.json``

    Returns:
        Path to the saved file
    """
    config_path = Path(path) if path is not None else get_settings_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = config_path.with_suffix(config_path.suffix + ".tmp")

    # Atomic write: write to temp file, then rename
    with open(temp_path, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(), f, indent=2)

    temp_path.replace(config_path)
    return config_path
