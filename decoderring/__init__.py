import os
from loguru import logger

__version__ = "0.1.0"

# Centralized engine plugin loading
def _initialize_plugins():
    """Loads engine plugins unless explicitly skipped."""
    # Allow skipping plugin loading for tests or specific environments
    if os.environ.get("DECODERRING_SKIP_PLUGINS", "0") == "1":
        logger.trace("Skipping engine plugin loading due to DECODERRING_SKIP_PLUGINS=1.")
        return

    try:
        from .core.engines import load_engine_plugins
        load_engine_plugins() # Discover and register engines from entry points
    except ImportError as e:
         logger.warning(f"Could not load engine plugins during initial import: {e}")
    except Exception:
        logger.exception("An unexpected error occurred during engine plugin loading.")

_initialize_plugins()
