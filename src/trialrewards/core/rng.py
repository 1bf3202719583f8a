"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

import secrets
import threading
from random import Random
from typing import Protocol

_MAX_RANDOM_SEED = 2**63


class RandomSource(Protocol):
    """The draws the reward resolver needs from a random source."""

    def random(self) -> float:
        ...

    def randint(self, a: int, b: int) -> int:
        ...


class RNG:
    """Wrapper around random.Random that is safe to share between threads."""

    def __init__(self, seed: int) -> None:
        self._random = Random(seed)
        self._lock = threading.Lock()

    @classmethod
    def from_entropy(cls) -> "RNG":
        """Return an RNG seeded from the operating system's entropy pool."""
        return cls(secrets.randbelow(_MAX_RANDOM_SEED))

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        with self._lock:
            return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        with self._lock:
            return self._random.random()
