"""Deterministic, seedable random number source for Monte Carlo sampling.

Every unit of render work owns its own SampleGenerator, so there is no shared
mutable random state between workers. Generators are seeded from the global
seed, the image row and the sample index: a row therefore renders identically
no matter which worker runs it or in which order, and sample range [a, b)
followed by [b, c) draws exactly the numbers a single [a, c) pass would.

Uniform draws come from a numpy PCG64 Generator in blocks and are handed out
one Python float at a time, which keeps the per-draw cost low on the scalar
hot path of the integrator.

Example:
    >>> from pathtracer.core.sampler import SampleGenerator
    >>> rng = SampleGenerator.for_row(seed=1234, row=10, sample_index=0)
    >>> u = rng.next_float()  # uniform in [0, 1)
    >>> dx = rng.tent_sample()  # tent distribution over (-1, 1)
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

# Fixed words mixed into every row seed
ROW_SEED_SALT = (0x15AAC60D, 0xB017F00D)

# Number of uniforms drawn from numpy per refill
BLOCK_SIZE = 256


class SampleGenerator:
    """Stream of uniform doubles in [0, 1) backed by numpy's PCG64.

    Not thread-safe; each worker creates its own instances.

    Attributes:
        seed_words: The integers the underlying SeedSequence was built from.
    """

    __slots__ = ("seed_words", "_rng", "_block", "_pos")

    def __init__(self, seed_words: Sequence[int]) -> None:
        """Create a generator from a sequence of non-negative integers.

        Args:
            seed_words: Entropy for numpy's SeedSequence.

        Raises:
            ValueError: If any seed word is negative.
        """
        if any(word < 0 for word in seed_words):
            raise ValueError(f"Seed words must be non-negative, got {list(seed_words)}")
        self.seed_words = tuple(int(word) for word in seed_words)
        self._rng = np.random.Generator(np.random.PCG64(np.random.SeedSequence(self.seed_words)))
        self._block: list[float] = []
        self._pos = 0

    @classmethod
    def for_row(cls, seed: int, row: int, sample_index: int = 0) -> SampleGenerator:
        """Create the generator for one (row, sample index) unit of work.

        Args:
            seed: Global render seed.
            row: Image row (0 = top).
            sample_index: Index of the sample pass within the pixel.

        Returns:
            A freshly seeded generator.
        """
        return cls((1 + row * row, seed, sample_index, *ROW_SEED_SALT))

    def next_float(self) -> float:
        """Return the next uniform double in [0, 1)."""
        if self._pos >= len(self._block):
            self._block = self._rng.random(BLOCK_SIZE).tolist()
            self._pos = 0
        value = self._block[self._pos]
        self._pos += 1
        return value

    def tent_sample(self) -> float:
        """Draw from the triangular (tent) distribution over (-1, 1).

        Uses one uniform draw u and the inverse CDF of the tent filter:
        sqrt(2u) - 1 when 2u < 1, otherwise 1 - sqrt(2 - 2u).
        """
        r = 2.0 * self.next_float()
        if r < 1.0:
            return math.sqrt(r) - 1.0
        return 1.0 - math.sqrt(2.0 - r)

    def __repr__(self) -> str:
        return f"SampleGenerator(seed_words={self.seed_words!r})"
