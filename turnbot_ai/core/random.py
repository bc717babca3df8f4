"""
Seedable pseudo-random source.

Each agent owns one Random instance. With the same seed and the same
sequence of calls, every method returns the same values, which keeps
searches reproducible.
"""
from __future__ import annotations
import math
import random as _random
from typing import Any, List, Optional, Sequence, Union

Seed = Union[int, str, None]


class Random:
    """A reseedable generator of floats in [0, 1) and helpers built on it."""

    def __init__(self, seed: Seed = None):
        """
        Initialize the random source.

        Args:
            seed: Integer or string seed (None = fresh OS entropy)
        """
        self._seed = seed
        self._rng = _random.Random(seed)

    @property
    def seed(self) -> Seed:
        return self._seed

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        return self._rng.random()

    def reseed(self, seed: Seed) -> None:
        self._seed = seed
        self._rng.seed(seed)

    def random_index(self, n: int) -> int:
        """
        Pick an index in ``range(n)`` uniformly.

        Args:
            n: Number of choices (must be positive)

        Returns:
            ``floor(next() * n)``
        """
        if n <= 0:
            raise ValueError("Cannot pick from an empty range")
        return math.floor(self.next() * n)

    def shuffle(self, seq: Sequence[Any]) -> List[Any]:
        """Return a shuffled copy of ``seq`` (Fisher-Yates)."""
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = self.random_index(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def number(self) -> float:
        return self.next()

    def die(self, spot_value: int = 6, dice_count: Optional[int] = None):
        """
        Roll dice.

        Args:
            spot_value: Number of faces
            dice_count: Number of dice (None = a single value, not a list)

        Returns:
            A value in [1, spot_value], or a list of them
        """
        if dice_count is None:
            return self.random_index(spot_value) + 1
        return [self.random_index(spot_value) + 1 for _ in range(dice_count)]

    def get_state(self) -> Any:
        return self._rng.getstate()

    def set_state(self, state: Any) -> None:
        self._rng.setstate(state)

    def __repr__(self) -> str:
        return f"Random(seed={self._seed!r})"
