# decoderring/core/errors.py
from pathlib import Path
from typing import Optional


class DecoderRingError(Exception):
    """Base class for all decoderring errors."""


class InvalidSeedError(DecoderRingError, ValueError):
    """A seed was negative or not an integer."""


class UnknownEngineError(DecoderRingError, KeyError):
    """No random engine is registered under the requested name."""

    def __str__(self) -> str: # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class UnknownCommandError(DecoderRingError, ValueError):
    """Session input did not name a supported command."""


class FileAccessError(DecoderRingError):
    """The target file could not be read or written."""

    def __init__(self, path: Path, reason: str, cause: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"{reason}: {path}" + (f" ({cause})" if cause else ""))
