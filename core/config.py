import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDE_FILE = ".biomed_override.json"

# Keys an operator may override at runtime through the settings API.
EDITABLE_KEYS = (
    "DATABASE_URL",
    "ALLOW_OVERPAYMENT",
    "EXPIRY_WARNING_DAYS",
    "LOG_LEVEL",
)


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./biomed.db"  # Default to SQLite
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALLOW_OVERPAYMENT: bool = True
    EXPIRY_WARNING_DAYS: int = 30
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


def override_path() -> Path:
    return Path(os.getenv("OVERRIDE_FILE", DEFAULT_OVERRIDE_FILE))


def read_override(path: Path = None) -> Dict[str, Any]:
    """Return the operator override, or an empty dict when none is saved."""
    path = path or override_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.error(f"Failed to parse connection override {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"Ignoring connection override {path}: expected a JSON object")
        return {}
    return {key: value for key, value in data.items() if key in EDITABLE_KEYS}


def write_override(values: Dict[str, Any], path: Path = None) -> Dict[str, Any]:
    path = path or override_path()
    data = {key: value for key, value in values.items() if key in EDITABLE_KEYS and value is not None}
    path.write_text(json.dumps(data, indent=2, sort_keys=True))
    logger.info(f"Saved connection override to {path} ({', '.join(sorted(data)) or 'empty'})")
    return data


def clear_override(path: Path = None) -> bool:
    path = path or override_path()
    if not path.is_file():
        return False
    path.unlink()
    logger.info(f"Removed connection override {path}")
    return True


def load_settings(path: Path = None) -> Settings:
    """Build settings: override file > environment > .env > defaults."""
    return Settings(**read_override(path))


@lru_cache
def get_settings() -> Settings:
    return load_settings()
