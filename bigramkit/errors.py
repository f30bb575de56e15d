#!/usr/bin/env python3
"""
Error Kinds
===========
Exceptions raised by the bigram statistics engine.

All of them derive from BigramError so callers (the CLI in particular) can
catch the whole family at once, and from the builtin exception that best
matches their meaning so plain ``except KeyError`` / ``except ValueError``
still works.
"""


class BigramError(Exception):
    """Base class for bigramkit errors."""


class UnknownSymbolError(BigramError, KeyError):
    """A symbol is not part of the vocabulary."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"Unknown symbol {self.symbol!r}: not in vocabulary"


class InsufficientSupportError(BigramError, ValueError):
    """More draws without replacement than positive-weight entries."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot draw {requested} samples without replacement: "
            f"only {available} entries have positive weight"
        )


class DegenerateRowError(BigramError, ValueError):
    """A distribution with zero total weight was sampled from."""

    def __init__(self, message: str = "Cannot sample from a distribution with zero total weight",
                 row: int = None):
        self.row = row
        super().__init__(message)


class ModelStateError(BigramError, RuntimeError):
    """An operation was called before the model reached the required state."""


__all__ = [
    'BigramError',
    'UnknownSymbolError',
    'InsufficientSupportError',
    'DegenerateRowError',
    'ModelStateError',
]
