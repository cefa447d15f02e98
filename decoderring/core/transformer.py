# decoderring/core/transformer.py
from typing import Optional, Union
from loguru import logger

from .engines import DEFAULT_ENGINE
from .models import TransformResult
from .ring import DecoderRing, build_map

BytesLike = Union[bytes, bytearray, memoryview]

def _translation_table(ring: DecoderRing) -> bytes:
    """256-entry table for bytes.translate(); codes outside the ring map to themselves."""
    table = bytearray(range(256))
    for code, mapped in ring.mapping.items():
        table[code] = mapped
    return bytes(table)

def transform(data: BytesLike, ring: DecoderRing) -> bytes:
    """
    Replaces every byte found in the ring with its mapped value.

    Bytes outside the ring pass through unchanged. Length and order are
    preserved and no byte depends on any other.
    """
    return bytes(data).translate(_translation_table(ring))

def transform_detailed(data: BytesLike, ring: DecoderRing) -> TransformResult:
    """Same as transform(), also counting remapped and passed-through bytes."""
    raw = bytes(data)
    remapped = sum(1 for b in raw if b in ring)
    result = TransformResult(
        content=raw.translate(_translation_table(ring)),
        remapped=remapped,
        passed_through=len(raw) - remapped,
    )
    logger.trace(f"Transformed {len(raw)} bytes: {result.remapped} remapped, {result.passed_through} passed through.")
    return result

def transform_text(text: str, ring: DecoderRing) -> str:
    """Applies the ring to a str. Code points outside the ring, including non-ASCII, pass through."""
    out = []
    for ch in text:
        mapped = ring.lookup(ord(ch))
        out.append(chr(mapped) if mapped is not None else ch)
    return "".join(out)

# --- Operations ---
# A new ring is built for every call and dropped afterwards.

def encrypt(seed1: int, seed2: int, content: BytesLike, engine: Optional[str] = None) -> bytes:
    return transform(content, build_map(seed1, seed2, engine=engine or DEFAULT_ENGINE))

def decrypt(seed1: int, seed2: int, content: BytesLike, engine: Optional[str] = None) -> bytes:
    """Undoes encrypt() made with the same seeds, by building the ring with the seeds swapped."""
    return transform(content, build_map(seed2, seed1, engine=engine or DEFAULT_ENGINE))

def append(seed1: int, seed2: int, text: BytesLike, engine: Optional[str] = None) -> bytes:
    """
    Encrypts text destined for the end of an existing file.

    The caller writes the line separator before the result; see
    decoderring.services.files.append_bytes.
    """
    return encrypt(seed1, seed2, text, engine=engine)
