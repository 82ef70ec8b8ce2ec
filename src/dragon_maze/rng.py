"""Seedable random sources for reproducible maze runs."""

from __future__ import annotations

import secrets
from typing import MutableSequence, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the generators rely on.

    ``DeterministicRNG`` and ``random.Random`` both satisfy it.
    """

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def shuffle(self, seq: MutableSequence[T]) -> None: ...


def generate_seed() -> int:
    """Return a positive 63-bit seed for ad-hoc runs."""
    return secrets.randbits(63) or 1


def level_seed(base_seed: int, level: int) -> int:
    """Derive the seed used for one level of a seeded run."""
    return (int(base_seed) * 1_000_003 + int(level) * 7919) & 0x7FFFFFFFFFFFFFFF


class DeterministicRNG:
    """MT19937 generator whose output does not depend on the interpreter."""

    _N = 624
    _M = 397
    _MATRIX_A = 0x9908B0DF
    _UPPER_MASK = 0x80000000
    _LOWER_MASK = 0x7FFFFFFF

    def __init__(self, seed: int | None = None) -> None:
        self._state = [0] * self._N
        self._index = self._N
        self._seed_value = 0
        self.reseed(seed)

    @property
    def seed(self) -> int:
        return self._seed_value

    def reseed(self, value: int | None) -> int:
        """Reset the generator state, returning the normalized seed."""
        if value is None:
            value = generate_seed()
        try:
            normalized = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid seed value: {value}") from exc
        self._seed_value = normalized
        seed32 = normalized & 0xFFFFFFFF
        if seed32 == 0:
            seed32 = 5489  # reference MT seed
        self._state[0] = seed32
        for i in range(1, self._N):
            prev = self._state[i - 1]
            self._state[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & 0xFFFFFFFF
        self._index = self._N
        return normalized

    def spawn(self, level: int) -> DeterministicRNG:
        """Return an independent generator for ``level`` of this run."""
        return DeterministicRNG(level_seed(self._seed_value, level))

    def random(self) -> float:
        """Return a float in the range [0.0, 1.0)."""
        return self._extract_number() / 4294967296.0

    def randint(self, a: int, b: int) -> int:
        if a > b:
            raise ValueError("Lower bound must be <= upper bound for randint")
        return a + self._randbelow(b - a + 1)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self._randbelow(len(seq))]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        for i in range(len(seq) - 1, 0, -1):
            j = self._randbelow(i + 1)
            seq[i], seq[j] = seq[j], seq[i]

    def _randbelow(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError("Upper bound must be positive")
        # rejection sampling keeps small bounds unbiased
        limit = (1 << 32) - ((1 << 32) % bound)
        while True:
            value = self._extract_number()
            if value < limit:
                return value % bound

    def _extract_number(self) -> int:
        if self._index >= self._N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & 0xFFFFFFFF

    def _twist(self) -> None:
        state = self._state
        for i in range(self._N):
            x = (state[i] & self._UPPER_MASK) + (
                state[(i + 1) % self._N] & self._LOWER_MASK
            )
            shifted = x >> 1
            if x & 1:
                shifted ^= self._MATRIX_A
            state[i] = state[(i + self._M) % self._N] ^ shifted
        self._index = 0


__all__ = [
    "DeterministicRNG",
    "RandomSource",
    "generate_seed",
    "level_seed",
]
