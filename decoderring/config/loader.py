# decoderring/config/loader.py
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from loguru import logger

from .schema import AppConfig
from .paths import get_user_config_file

_cached_config: Optional[AppConfig] = None

def _quarantine(config_path: Path) -> None:
    """Moves an unreadable config aside so the next save starts clean."""
    backup_path = config_path.with_suffix(".json.corrupted")
    try:
        os.replace(config_path, backup_path) # Overwrites any earlier backup
        logger.warning(f"Unreadable config moved to {backup_path}")
    except OSError as e:
        logger.error(f"Could not move unreadable config {config_path} aside: {e}")

def _read_settings(config_path: Path) -> Dict[str, Any]:
    """Returns the raw settings dict, or {} when the file is missing or unreadable."""
    if not config_path.exists():
        logger.debug("No config.json yet, using built-in settings.")
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")
        return data
    except (ValueError, OSError) as e: # JSONDecodeError is a ValueError
        logger.error(f"Ignoring config {config_path}: {e}")
        _quarantine(config_path)
        return {}

def load_config() -> AppConfig:
    """Reads config.json from the user data directory once and caches the result."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    settings = _read_settings(get_user_config_file())
    try:
        _cached_config = AppConfig(**settings)
    except ValidationError as e:
        logger.warning(f"Invalid settings in config.json, using defaults: {e}")
        _cached_config = AppConfig()
    return _cached_config

def save_config(config: AppConfig) -> Path:
    """Writes the config atomically and makes it the cached one."""
    global _cached_config
    config_path = get_user_config_file()
    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=config_path.parent, # Same filesystem, so os.replace is atomic
            prefix=f".{config_path.name}_tmp",
            delete=False,
        ) as temp_f:
            temp_path = Path(temp_f.name)
            temp_f.write(config.model_dump_json(indent=4))
            temp_f.flush()
            os.fsync(temp_f.fileno())
        os.replace(temp_path, config_path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
    _cached_config = config
    logger.info(f"Saved settings to {config_path}")
    return config_path

def get_config() -> AppConfig:
    """Returns the cached configuration object, loading if necessary."""
    return load_config()

def reset_config_cache() -> None:
    """Drops the cached configuration so the next get_config() reloads it."""
    global _cached_config
    _cached_config = None
