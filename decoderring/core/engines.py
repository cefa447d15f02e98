# decoderring/core/engines.py
import random
import importlib.metadata
from abc import ABC, abstractmethod
from typing import Dict, List, MutableSequence, Type
from loguru import logger

from .errors import UnknownEngineError

DEFAULT_ENGINE = "minstd"

class RandomEngine(ABC):
    """
    Abstract base class for seeded pseudo-random engines.

    An engine is constructed with a single seed and must produce the same
    sequence of values for the same seed every time it is constructed.
    """
    name: str = "Unnamed Engine" # Unique identifier name

    def __init__(self, seed: int):
        self.seed = seed

    @abstractmethod
    def below(self, bound: int) -> int:
        """Returns the next value in [0, bound)."""
        pass


class MinStdEngine(RandomEngine):
    """
    Park-Miller "minimal standard" linear congruential generator.

    Same constants and seeding rules as GCC's std::default_random_engine
    (minstd_rand0), and below() reduces with a plain modulo, so shuffles
    match files written by the C++ DecoderRing tool when built with GCC.
    """
    name = "minstd"

    MULTIPLIER = 16807
    MODULUS = 2147483647 # 2**31 - 1

    def __init__(self, seed: int):
        super().__init__(seed)
        state = seed % self.MODULUS
        self._state = state if state != 0 else 1

    def next(self) -> int:
        self._state = (self._state * self.MULTIPLIER) % self.MODULUS
        return self._state

    def below(self, bound: int) -> int:
        return self.next() % bound


class PythonEngine(RandomEngine):
    """Mersenne Twister from the standard `random` module."""
    name = "python"

    def __init__(self, seed: int):
        super().__init__(seed)
        self._random = random.Random(seed)

    def below(self, bound: int) -> int:
        return self._random.randrange(bound)


def seeded_shuffle(items: MutableSequence[int], engine: RandomEngine) -> MutableSequence[int]:
    """
    Shuffles `items` in place and returns it.

    For i = 1 .. n-1, j = engine.below(i + 1) and items[i], items[j] are
    swapped when i != j. The engine is consulted once per element after the
    first, so the permutation depends only on the engine's seed.
    """
    for i in range(1, len(items)):
        j = engine.below(i + 1)
        if i != j:
            items[i], items[j] = items[j], items[i]
    return items

# --- Engine Registry ---
_engine_registry: Dict[str, Type[RandomEngine]] = {}

def register_engine(cls: Type[RandomEngine]):
    """Decorator or function to register an engine class."""
    if not isinstance(cls, type) or not issubclass(cls, RandomEngine):
        raise TypeError("Engine must inherit from RandomEngine")
    if not cls.name or cls.name == "Unnamed Engine":
         raise ValueError(f"Engine {cls.__name__} must define a unique 'name' attribute.")

    if cls.name in _engine_registry and _engine_registry[cls.name] is not cls:
        logger.warning(f"Engine name conflict: '{cls.name}' already registered. Overwriting.")
    _engine_registry[cls.name] = cls
    logger.trace(f"Registered random engine: '{cls.name}'")
    return cls

def load_engine_plugins(entry_point_group="decoderring.engines") -> int:
    """Discovers and registers engines using importlib.metadata entry points."""
    logger.trace(f"Discovering engines using entry point group: '{entry_point_group}'")

    try:
        entry_points = importlib.metadata.entry_points(group=entry_point_group)
    except Exception as e:
         logger.error(f"Error accessing entry points for group '{entry_point_group}': {e}")
         entry_points = [] # Continue with built-in engines only

    loaded_count = 0
    for ep in entry_points:
        try:
            engine_class = ep.load()
            if isinstance(engine_class, type) and issubclass(engine_class, RandomEngine):
                 engine_name = getattr(engine_class, 'name', None)
                 if engine_name and engine_name != "Unnamed Engine":
                     if engine_name in _engine_registry:
                         logger.warning(f"Engine name conflict via entry point: '{engine_name}' already registered. Skipping {ep.name}.")
                     else:
                         _engine_registry[engine_name] = engine_class
                         logger.info(f"Loaded engine '{engine_name}' from entry point '{ep.name}'")
                         loaded_count += 1
                 else:
                      logger.error(f"Engine class {engine_class.__name__} from entry point {ep.name} lacks a valid 'name' attribute.")
            else:
                logger.warning(f"Entry point {ep.name} did not load a RandomEngine subclass.")
        except Exception as e:
            logger.exception(f"Failed to load engine from entry point {ep.name}: {e}")

    logger.trace(f"Loaded {loaded_count} engines via entry points. Total registered: {len(_engine_registry)}")
    return loaded_count

def available_engines() -> List[str]:
    """Returns the names of all registered engines."""
    return sorted(_engine_registry)

def get_engine_class(name: str) -> Type[RandomEngine]:
    """Gets a registered engine class by name."""
    try:
        return _engine_registry[name]
    except KeyError:
        raise UnknownEngineError(
            f"Unknown engine '{name}'. Available engines: {', '.join(available_engines())}"
        ) from None

def create_engine(name: str, seed: int) -> RandomEngine:
    """Constructs a freshly seeded engine."""
    return get_engine_class(name)(seed)

# --- Built-in engines ---
register_engine(MinStdEngine)
register_engine(PythonEngine)
