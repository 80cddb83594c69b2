"""Configuration management for nodesweep."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NODESWEEP_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "nodesweep" / "config.json"


class Settings(BaseModel):
    """User defaults, overridden by command-line options."""

    max_depth: Optional[int] = Field(None, ge=0, description="Maximum scan depth")
    exclude: list[str] = Field(default_factory=list, description="Paths never scanned or deleted")
    workers: Optional[int] = Field(None, ge=1, description="Worker pool size")


def config_path() -> Path:
    """Location of the settings file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings, falling back to defaults.

    A missing file yields defaults silently; an unreadable or invalid
    file is reported as a warning and also yields defaults.

    Args:
        path: Settings file (defaults to config_path())

    Returns:
        Settings instance
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid config file %s: %s", path, e)
        return Settings()

