#!/usr/bin/env python3
"""
Probability Normalizer
======================
Turns a count matrix into a row-stochastic probability matrix.

Each row i is divided by its sum, so P[i][j] is the maximum-likelihood
estimate of P(next = j | current = i). Optional add-k smoothing adds k to
every cell first, which keeps unseen pairs possible.

Rows whose counts sum to zero (only possible with a vocabulary that holds
symbols absent from the counted corpus, and no smoothing) stay all-zero.
They are listed in ``degenerate_rows`` and raise DegenerateRowError when a
caller asks for them as a distribution.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from bigramkit.counting import CountMatrix
from bigramkit.errors import DegenerateRowError
from bigramkit.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

ROW_SUM_TOLERANCE = 1e-5


@dataclass(frozen=True)
class ProbabilityMatrix:
    """Read-only transition probabilities, same shape as the counts."""
    vocabulary: Vocabulary
    rows: tuple
    degenerate_rows: frozenset = frozenset()

    @property
    def size(self) -> int:
        return len(self.rows)

    def __getitem__(self, ij: Tuple[int, int]) -> float:
        i, j = ij
        return self.rows[i][j]

    def get(self, a: str, b: str) -> float:
        """P(b | a) looked up by symbol."""
        return self.rows[self.vocabulary.index_of(a)][self.vocabulary.index_of(b)]

    def is_degenerate(self, i: int) -> bool:
        return i in self.degenerate_rows

    def row(self, i: int) -> tuple:
        """Distribution over the next symbol after symbol i."""
        if i in self.degenerate_rows:
            raise DegenerateRowError(
                f"Row {i} ({self.vocabulary.symbol_at(i)!r}) has no observed transitions",
                row=i,
            )
        return self.rows[i]

    def row_sums(self) -> list:
        return [sum(r) for r in self.rows]

    def to_map(self, include_zero: bool = True) -> dict:
        """Probabilities keyed by symbol pair."""
        symbols = self.vocabulary.symbols
        return {
            (symbols[i], symbols[j]): value
            for i, r in enumerate(self.rows)
            for j, value in enumerate(r)
            if include_zero or value
        }


def normalize(counts: CountMatrix, smoothing: float = 0.0) -> ProbabilityMatrix:
    """
    Normalize each row of a count matrix to sum to 1.

    Args:
        counts: Bigram counts (left untouched)
        smoothing: Pseudo-count added to every cell before normalizing

    Returns:
        ProbabilityMatrix; zero-sum rows are all-zero and marked degenerate
    """
    if smoothing < 0:
        raise ValueError(f"smoothing must be >= 0, got {smoothing}")

    rows = []
    degenerate = set()
    for i, row in enumerate(counts.rows):
        weights = [c + smoothing for c in row]
        total = sum(weights)
        if total > 0:
            rows.append(tuple(w / total for w in weights))
        else:
            degenerate.add(i)
            rows.append(tuple(0.0 for _ in weights))

    if degenerate:
        symbols = counts.vocabulary.symbols
        logger.warning("Zero-sum rows left unnormalized: %s",
                       ', '.join(repr(symbols[i]) for i in sorted(degenerate)))

    result = ProbabilityMatrix(
        vocabulary=counts.vocabulary,
        rows=tuple(rows),
        degenerate_rows=frozenset(degenerate),
    )
    if result.rows:
        logger.debug("First row probabilities sum: %s", sum(result.rows[0]))
    return result


__all__ = ['ProbabilityMatrix', 'normalize', 'ROW_SUM_TOLERANCE']
