"""
Sources of randomness for seeding and weighted sampling.

Every draw made by this package goes through a RandomSource, so two runs fed
identically seeded sources make identical draws and return identical results.
A source mutates its state on every draw and must not be shared between
concurrent callers.
"""

from abc import ABC, abstractmethod
import math
from typing import Union

import numpy as np

from .errors import InvalidParameterError


class RandomSource(ABC):
    """Uniform random draws used by the clustering routines."""

    @abstractmethod
    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """Return a float drawn uniformly from [low, high)."""

    def integer(self, low: int, high: int) -> int:
        """Return an int drawn uniformly from [low, high)."""
        if high <= low:
            raise InvalidParameterError(f"Empty integer range [{low}, {high})")
        value = low + int(math.floor(self.uniform() * (high - low)))
        return min(value, high - 1)


def _scale(unit: float, low: float, high: float) -> float:
    value = low + unit * (high - low)
    # Rounding can land exactly on the open upper bound
    if value >= high and high > low:
        value = math.nextafter(high, low)
    return value


class NumpyRandomSource(RandomSource):
    """
    RandomSource backed by a numpy Generator.

    Args:
        seed: An int seed, an existing numpy Generator to draw from, or None
            to seed from operating system entropy.
    """

    def __init__(self, seed: Union[int, np.random.Generator, None] = None):
        if isinstance(seed, np.random.Generator):
            self._generator = seed
        else:
            self._generator = np.random.default_rng(seed)

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return _scale(float(self._generator.random()), low, high)

    def integer(self, low: int, high: int) -> int:
        if high <= low:
            raise InvalidParameterError(f"Empty integer range [{low}, {high})")
        return int(self._generator.integers(low, high))


class LinearCongruentialRandomSource(RandomSource):
    """
    Seedable 64-bit linear congruential generator.

    The output sequence depends only on the seed, never on the platform or
    the numpy version, which makes it suitable for reproducibility tests.
    """

    _MULTIPLIER = 6364136223846793005
    _INCREMENT = 1442695040888963407
    _MASK = (1 << 64) - 1

    def __init__(self, seed: int = 0):
        self._state = seed & self._MASK

    def next_uint64(self) -> int:
        self._state = (self._state * self._MULTIPLIER + self._INCREMENT) & self._MASK
        return self._state

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        # Top 53 bits give every representable double in [0, 1) with step 2**-53
        unit = (self.next_uint64() >> 11) / float(1 << 53)
        return _scale(unit, low, high)


RandomState = Union[None, int, np.random.Generator, RandomSource]


def check_random_source(random_state: RandomState = None) -> RandomSource:
    """
    Turn *random_state* into a RandomSource.

    Args:
        random_state: None for an entropy-seeded source, an int seed, a numpy
            Generator, or a RandomSource (returned unchanged)

    Returns:
        A RandomSource instance

    Raises:
        InvalidParameterError: If *random_state* is none of the above
    """
    if isinstance(random_state, RandomSource):
        return random_state
    if random_state is None or isinstance(random_state, np.random.Generator):
        return NumpyRandomSource(random_state)
    if isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        return NumpyRandomSource(int(random_state))
    raise InvalidParameterError(
        f"{random_state!r} cannot be used as a source of randomness"
    )
