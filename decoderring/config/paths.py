# decoderring/config/paths.py
import os
from pathlib import Path

def _get_app_name() -> str:
    # Centralize the app name
    return "DecoderRing"

def get_user_data_dir() -> Path:
    """
    Get the user application data directory.

    DECODERRING_HOME wins, then %APPDATA% on Windows, then the XDG config
    directory.
    """
    override = os.environ.get("DECODERRING_HOME")
    appdata_path = os.environ.get("APPDATA")
    if override:
        path = Path(override)
    elif appdata_path:
        path = Path(appdata_path) / _get_app_name()
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        path = base / _get_app_name().lower()

    path.mkdir(parents=True, exist_ok=True)
    return path

def get_user_config_file() -> Path:
    """Get the path to the user's config.json file."""
    return get_user_data_dir() / "config.json"

def get_user_log_dir() -> Path:
    """Get the path to the user's log directory."""
    path = get_user_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path
