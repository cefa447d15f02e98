# decoderring/services/logging.py
import sys
from loguru import logger

from ..config.paths import get_user_log_dir

def setup_logging(level="INFO", verbose=False, log_to_file=True):
    """Configures logging using Loguru."""
    log_level = "DEBUG" if verbose else level

    # Remove default handler
    logger.remove()

    # Console handler (colored), simplified format; the file gets the full one
    fmt_console = "<level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
    logger.add(
        sys.stderr,
        level=log_level,
        format=fmt_console,
        colorize=True,
    )

    if not log_to_file:
        logger.debug(f"Logging initialized. Level: {log_level}. File logging disabled.")
        return

    fmt_file = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {process} | {name}:{function}:{line} - {message}"
    try:
        log_file_str = str(get_user_log_dir() / "decoderring_{time:YYYY-MM-DD}.log")
        logger.add(
            log_file_str,
            level="DEBUG", # Log more details to file
            format=fmt_file,
            rotation="1 day", # Rotate logs daily
            retention="7 days", # Keep logs for 7 days
            compression="zip", # Compress rotated logs
            encoding="utf-8"
        )
        logger.debug(f"Logging initialized. Level: {log_level}. Log file: {log_file_str}")
    except Exception as e:
         # Fallback if file logging fails (e.g., permissions)
         logger.error(f"Could not configure file logging: {e}")
         logger.warning("File logging disabled.")
