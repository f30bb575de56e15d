#!/usr/bin/env python3
"""
Bigram Counter
==============
Tallies adjacent symbol pairs of boundary-wrapped words into a dense
V x V count matrix.

Every word w contributes len(w) + 1 transitions:

    "emma" -> .e  em  mm  ma  a.
    ""     -> ..
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from bigramkit.vocabulary import Vocabulary, DEFAULT_BOUNDARY

logger = logging.getLogger(__name__)


def bigrams(word: str, boundary: str = DEFAULT_BOUNDARY) -> Iterator[Tuple[str, str]]:
    """Yield consecutive pairs of the word wrapped in boundary symbols."""
    chs = [boundary] + list(word) + [boundary]
    return zip(chs, chs[1:])


@dataclass(frozen=True)
class CountMatrix:
    """Read-only bigram counts; rows[i][j] = times symbol i was followed by j."""
    vocabulary: Vocabulary
    rows: tuple

    @property
    def size(self) -> int:
        return len(self.rows)

    def __getitem__(self, ij: Tuple[int, int]) -> int:
        i, j = ij
        return self.rows[i][j]

    def get(self, a: str, b: str) -> int:
        """Count for the pair (a, b) looked up by symbol."""
        return self.rows[self.vocabulary.index_of(a)][self.vocabulary.index_of(b)]

    def row(self, i: int) -> tuple:
        return self.rows[i]

    def row_sum(self, i: int) -> int:
        return sum(self.rows[i])

    def total(self) -> int:
        """Number of transitions observed."""
        return sum(sum(r) for r in self.rows)

    def to_map(self, include_zero: bool = False) -> dict:
        """Counts keyed by symbol pair, e.g. {('.', 'a'): 2}."""
        symbols = self.vocabulary.symbols
        return {
            (symbols[i], symbols[j]): value
            for i, r in enumerate(self.rows)
            for j, value in enumerate(r)
            if include_zero or value
        }

    def most_common(self, n: int = None) -> List[Tuple[Tuple[str, str], int]]:
        """Non-zero pairs by descending count; ties keep matrix order."""
        symbols = self.vocabulary.symbols
        cells = [
            (value, i, j)
            for i, r in enumerate(self.rows)
            for j, value in enumerate(r)
            if value
        ]
        cells.sort(key=lambda c: (-c[0], c[1], c[2]))
        if n is not None:
            cells = cells[:n]
        return [((symbols[i], symbols[j]), value) for value, i, j in cells]


def count(corpus: Iterable[str], vocabulary: Vocabulary) -> CountMatrix:
    """
    Count bigram transitions across a corpus.

    Args:
        corpus: Words to count (empty strings add one boundary->boundary)
        vocabulary: Symbol indexing; must cover every character in the corpus

    Returns:
        Frozen CountMatrix

    Raises:
        UnknownSymbolError: If a word holds a character outside the vocabulary
    """
    size = vocabulary.size()
    matrix = [[0] * size for _ in range(size)]
    boundary = vocabulary.boundary

    words = 0
    for word in corpus:
        for ch1, ch2 in bigrams(word, boundary):
            matrix[vocabulary.index_of(ch1)][vocabulary.index_of(ch2)] += 1
        words += 1

    result = CountMatrix(vocabulary=vocabulary, rows=tuple(tuple(r) for r in matrix))
    logger.debug("Counted %d transitions from %d words over %d symbols",
                 result.total(), words, size)
    return result


__all__ = ['CountMatrix', 'count', 'bigrams']
