#!/usr/bin/env python3
"""
Vocabulary
==========
Ordered set of the distinct characters in a corpus plus one boundary symbol.

The boundary symbol (default '.') marks both the start and the end of every
word and always sits at index 0. The remaining symbols follow code-point
order, so the same corpus always yields the same indices:

    >>> vocab = Vocabulary.build(["emma", "ava"])
    >>> vocab.symbols
    ('.', 'a', 'e', 'm', 'v')
    >>> vocab.index_of('m')
    3
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from bigramkit.errors import UnknownSymbolError

DEFAULT_BOUNDARY = '.'


@dataclass(frozen=True)
class Vocabulary:
    """Immutable symbol <-> index mapping with the boundary at index 0."""
    symbols: tuple
    _index: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.symbols:
            raise ValueError("Vocabulary needs at least the boundary symbol")
        index = {}
        for i, symbol in enumerate(self.symbols):
            if len(symbol) != 1:
                raise ValueError(f"Symbols must be single characters, got {symbol!r}")
            if symbol in index:
                raise ValueError(f"Duplicate symbol {symbol!r} in vocabulary")
            index[symbol] = i
        object.__setattr__(self, 'symbols', tuple(self.symbols))
        object.__setattr__(self, '_index', index)

    @classmethod
    def build(cls, corpus: Iterable[str], boundary: str = DEFAULT_BOUNDARY) -> 'Vocabulary':
        """
        Build the vocabulary of a corpus.

        Args:
            corpus: Words to collect characters from
            boundary: Start/end marker, placed first

        Returns:
            Vocabulary with the boundary at index 0, then code-point order
        """
        if not isinstance(boundary, str) or len(boundary) != 1:
            raise ValueError(f"Boundary must be a single character, got {boundary!r}")

        chars = set()
        for word in corpus:
            chars.update(word)
        chars.discard(boundary)

        return cls(symbols=(boundary,) + tuple(sorted(chars)))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @property
    def boundary(self) -> str:
        return self.symbols[0]

    @property
    def boundary_index(self) -> int:
        return 0

    def size(self) -> int:
        return len(self.symbols)

    def symbol_at(self, index: int) -> str:
        if not 0 <= index < len(self.symbols):
            raise IndexError(f"Symbol index {index} out of range for vocabulary of size {self.size()}")
        return self.symbols[index]

    def index_of(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None

    def char_to_index(self) -> dict:
        """Copy of the symbol -> index map (for renderers)."""
        return dict(self._index)

    # -------------------------------------------------------------------------
    # Word conversion
    # -------------------------------------------------------------------------

    def encode(self, word: str) -> List[int]:
        """Indices of the boundary-wrapped word, e.g. '.ab.' -> [0, 1, 2, 0]."""
        return [0] + [self.index_of(ch) for ch in word] + [0]

    def decode(self, indices: Iterable[int]) -> str:
        """Join symbols for the given indices, skipping the boundary."""
        return ''.join(self.symbol_at(i) for i in indices if i != 0)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol) -> bool:
        return symbol in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)


__all__ = ['Vocabulary', 'DEFAULT_BOUNDARY']
