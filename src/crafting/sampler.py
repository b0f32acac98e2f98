"""Seedable random sampling handle used by every random operation."""

import random
from typing import Optional, Sequence

from src.core.error_handling import SamplingError


class Sampler:
    """
    Random source threaded explicitly through generation.

    Two samplers built from the same seed produce the same sequence of
    flips, weighted draws and integer rolls, so a whole item generation can
    be replayed. Independent items generated in parallel should each use
    their own sampler.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the sampler.

        Args:
            seed: Seed for a fresh ``random.Random``; ignored when ``rng`` is given
            rng: Existing random source to draw from
        """
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def flip(self) -> bool:
        """Fair coin."""
        return self._rng.random() < 0.5

    def weighted_index(self, weights: Sequence[int]) -> int:
        """
        Draw an index with probability proportional to its weight.

        Raises:
            SamplingError: If the weights are empty, negative or all zero
        """
        if any(w < 0 for w in weights):
            raise SamplingError(f"Negative weight in {list(weights)}")
        total = sum(weights)
        if total <= 0:
            raise SamplingError("Cannot draw from empty or all-zero weights")

        target = self._rng.randrange(total)
        cumulative = 0
        for index, weight in enumerate(weights):
            cumulative += weight
            if target < cumulative:
                return index
        # Unreachable: target < total == final cumulative
        raise SamplingError("Weighted draw fell outside the total weight")

    def uniform_int(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range ``[low, high]``."""
        if low > high:
            raise SamplingError(f"Empty range [{low}, {high}]")
        return self._rng.randint(low, high)
