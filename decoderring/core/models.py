# decoderring/core/models.py
from dataclasses import dataclass
from enum import Enum

from .errors import UnknownCommandError

class Command(str, Enum):
    """Operations offered by the interactive session."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    APPEND = "append"
    EXIT = "exit"

    @classmethod
    def parse(cls, text: str) -> "Command":
        """Resolves operator input to a Command. Case and surrounding whitespace are ignored."""
        value = (text or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(c.value for c in cls)
            raise UnknownCommandError(f"Invalid command '{text}'. Expected one of: {choices}") from None

@dataclass(frozen=True)
class TransformResult:
    """Result of running a byte sequence through a DecoderRing."""
    content: bytes
    remapped: int # Bytes found in the ring and substituted
    passed_through: int # Bytes outside the ring, emitted unchanged

    def __len__(self):
        return len(self.content)
