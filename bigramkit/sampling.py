#!/usr/bin/env python3
"""
Categorical Sampler
===================
Draws indices from a discrete distribution by inverse-CDF sampling.

Theory:
-------
For weights w_0..w_{n-1} with cumulative sums c_i = w_0 + ... + w_i and
total T = c_{n-1}, draw u uniformly and pick the first i with c_i >= u.
Index i owns the interval (c_{i-1}, c_i], whose length is w_i, so it is
picked with probability w_i / T. Weights need not be normalized.

The draw is taken from (0, T] rather than [0, T): with the ">=" rule a draw
of exactly 0 would otherwise land on a leading zero-weight entry. A draw that
falls exactly on a boundary c_i goes to the lower index i.

Multi-row input (a whole probability matrix) is flattened into one
distribution over all V*V cells before sampling. That is rarely what a caller
wants; to sample the successor of one symbol pass that symbol's row.
"""

import bisect
import logging
import math
import random
from itertools import accumulate
from typing import List, Optional, Sequence

from bigramkit.errors import DegenerateRowError, InsufficientSupportError

logger = logging.getLogger(__name__)


def _is_matrix(distribution) -> bool:
    if hasattr(distribution, 'rows'):
        return True
    return len(distribution) > 0 and isinstance(distribution[0], (list, tuple))


def flatten(matrix) -> List[float]:
    """Concatenate the rows of a matrix (or CountMatrix/ProbabilityMatrix) into one list."""
    rows = matrix.rows if hasattr(matrix, 'rows') else matrix
    return [value for row in rows for value in row]


def _validated_weights(distribution: Sequence[float]) -> List[float]:
    weights = []
    for i, w in enumerate(distribution):
        w = float(w)
        if not math.isfinite(w) or w < 0:
            raise ValueError(f"Weight at index {i} must be finite and non-negative, got {w}")
        weights.append(w)
    return weights


def _draw(cumulative: List[float], rng: random.Random) -> int:
    total = cumulative[-1]
    # u lies in (0, total]
    u = total - rng.random() * total
    return bisect.bisect_left(cumulative, u)


class CategoricalSampler:
    """
    Samples indices from weight vectors using a private random source.

    Each sampler owns its random.Random, so separate samplers can be used
    from separate threads without sharing generator state.

    Usage:
        sampler = CategoricalSampler(seed=42)
        sampler.sample([0.6, 0.3, 0.1], count=5)
        sampler.sample_one(row)
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def sample(self,
               distribution,
               count: int = 1,
               with_replacement: bool = True) -> List[int]:
        """
        Draw ``count`` indices from a weight vector.

        Args:
            distribution: Non-negative weights (a matrix is flattened first)
            count: Number of draws
            with_replacement: If False, each index is returned at most once

        Returns:
            Sampled indices in draw order

        Raises:
            InsufficientSupportError: Without replacement, count exceeds the
                number of positive weights
            DegenerateRowError: With replacement, all weights are zero
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        if _is_matrix(distribution):
            rows = distribution.rows if hasattr(distribution, 'rows') else distribution
            logger.debug("Flattening %d-row distribution before sampling", len(rows))
            distribution = flatten(rows)

        weights = _validated_weights(distribution)

        if not with_replacement:
            available = sum(1 for w in weights if w > 0)
            if count > available:
                raise InsufficientSupportError(count, available)

        if count == 0:
            return []

        cumulative = list(accumulate(weights))
        if not cumulative or cumulative[-1] <= 0:
            raise DegenerateRowError()

        samples = []
        for n in range(count):
            idx = _draw(cumulative, self.rng)
            logger.debug("Sample %d: cumulative total %s, selected index %d", n, cumulative[-1], idx)
            samples.append(idx)

            if not with_replacement:
                weights[idx] = 0.0
                cumulative = list(accumulate(weights))

        return samples

    def sample_one(self, distribution) -> int:
        """Single draw; the distribution is not modified."""
        return self.sample(distribution, count=1, with_replacement=True)[0]


def sample(distribution,
           count: int = 1,
           with_replacement: bool = True,
           rng: Optional[random.Random] = None) -> List[int]:
    """Module-level shortcut for CategoricalSampler(rng).sample(...)."""
    return CategoricalSampler(rng=rng).sample(distribution, count, with_replacement)


__all__ = ['CategoricalSampler', 'sample', 'flatten']
