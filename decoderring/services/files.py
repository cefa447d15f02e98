# decoderring/services/files.py
import os
import tempfile
from pathlib import Path
from typing import Optional
from loguru import logger

from ..core.errors import FileAccessError

def read_bytes(path: Path) -> bytes:
    """Reads the whole target file. Raises FileAccessError if it cannot be opened."""
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError as e:
        raise FileAccessError(path, "File not found", e) from e
    except IsADirectoryError as e:
        raise FileAccessError(path, "Path is a directory", e) from e
    except OSError as e:
        raise FileAccessError(path, "File could not be opened", e) from e
    logger.info(f"File opened successfully: {path} ({len(data)} bytes)")
    return data

def overwrite_bytes(path: Path, data: bytes) -> None:
    """
    Replaces the file contents with `data`.

    Written to a temporary file in the same directory and moved over the
    target with os.replace, so a failed write leaves the original intact.
    """
    temp_file_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='wb',
            dir=path.parent,
            prefix=f".{path.name}_tmp",
            delete=False
        ) as temp_f:
            temp_file_path = Path(temp_f.name)
            temp_f.write(data)
            temp_f.flush()
            os.fsync(temp_f.fileno())
        if path.exists():
            os.chmod(temp_file_path, path.stat().st_mode & 0o7777)
        os.replace(temp_file_path, path)
        temp_file_path = None
    except OSError as e:
        raise FileAccessError(path, "File could not be written", e) from e
    finally:
        if temp_file_path and temp_file_path.exists():
            logger.warning(f"Cleaning up leftover temporary file: {temp_file_path}")
            try: temp_file_path.unlink()
            except OSError as unlink_err: logger.error(f"Failed to remove temporary file {temp_file_path}: {unlink_err}")
    logger.info(f"Successfully overwritten: {path}")

def append_bytes(path: Path, data: bytes, separator: bytes = b"\n") -> None:
    """Appends `separator` followed by `data`, creating the file if needed."""
    try:
        with open(path, 'ab') as f:
            f.write(separator + data)
    except OSError as e:
        raise FileAccessError(path, "File could not be opened for appending", e) from e
    logger.info(f"Appended {len(data)} bytes to: {path}")
