# decoderring/core/ring.py
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from loguru import logger

from .engines import DEFAULT_ENGINE, create_engine, seeded_shuffle
from .errors import InvalidSeedError

ALPHABET_START = 31
ALPHABET_END = 126 # Inclusive
SEED_MASK = 0xFFFFFFFF # Seeds behave as 32-bit unsigned integers

def _normalize_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidSeedError(f"Seed must be an integer, got {type(seed).__name__}")
    if seed < 0:
        raise InvalidSeedError("Seed must not be negative")
    return seed & SEED_MASK

class DecoderRing:
    """
    Bijective substitution map over the codes 31..126.

    Two copies of the alphabet are shuffled, the inner one with an engine
    seeded by `seed1` and the outer one with a fresh engine seeded by `seed2`.
    Each inner[i] maps to outer[i]. Swapping the seeds gives the inverse map.
    """

    def __init__(self, seed1: int, seed2: int, engine: str = DEFAULT_ENGINE):
        self.engine_name = engine
        seed1 = _normalize_seed(seed1)
        seed2 = _normalize_seed(seed2)

        self._alphabet: Tuple[int, ...] = tuple(range(ALPHABET_START, ALPHABET_END + 1))
        self._inner = tuple(seeded_shuffle(list(self._alphabet), create_engine(engine, seed1)))
        self._outer = tuple(seeded_shuffle(list(self._alphabet), create_engine(engine, seed2)))
        self._map = dict(zip(self._inner, self._outer))
        self._seeds = (seed1, seed2)
        logger.debug(f"DecoderRing built with engine '{engine}' ({len(self._map)} entries).")

    @property
    def alphabet(self) -> Tuple[int, ...]:
        return self._alphabet

    @property
    def inner(self) -> Tuple[int, ...]:
        return self._inner

    @property
    def outer(self) -> Tuple[int, ...]:
        return self._outer

    @property
    def mapping(self) -> Mapping[int, int]:
        """Read-only view of the inner -> outer pairs."""
        return MappingProxyType(self._map)

    def lookup(self, code: int) -> Optional[int]:
        """Returns the mapped code, or None if `code` is outside the ring."""
        return self._map.get(code)

    def inverse(self) -> "DecoderRing":
        """Builds the ring with the seeds swapped, which undoes this one."""
        return DecoderRing(self._seeds[1], self._seeds[0], engine=self.engine_name)

    def __contains__(self, code) -> bool:
        return code in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        # Never include the seeds
        return f"DecoderRing(engine={self.engine_name!r}, size={len(self._map)})"


def build_map(seed1: int, seed2: int, engine: str = DEFAULT_ENGINE) -> DecoderRing:
    """Constructs a fresh DecoderRing for one operation."""
    return DecoderRing(seed1, seed2, engine=engine)
