import os

# Entry-point discovery is not wanted while testing
os.environ.setdefault("DECODERRING_SKIP_PLUGINS", "1")

import pytest
from loguru import logger

from decoderring.config.loader import reset_config_cache


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Points the user data directory at a temp dir and drops cached config."""
    home = tmp_path / "home"
    monkeypatch.setenv("DECODERRING_HOME", str(home))
    reset_config_cache()
    yield home
    reset_config_cache()
    logger.remove() # Handlers added by the CLI may point at closed streams


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "secrets.txt"
    path.write_bytes(b"user: alice\npassword: hunter2!\n")
    return path
