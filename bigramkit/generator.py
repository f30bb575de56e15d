#!/usr/bin/env python3
"""
Name Generator
==============
Samples new names by walking the bigram chain.

Starting at the boundary symbol, each step draws the next symbol from the
probability row of the current one. Drawing the boundary again ends the name.
A length bound guarantees termination even for matrices in which the
boundary is unreachable from some symbol.

Usage:
    gen = NameGenerator(model.probabilities, seed=42)
    gen.generate(5)                 # ['mor', 'axx', ...]
    for name in gen.stream():       # unbounded, lazy
        ...
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from bigramkit.config import GenerationConfig
from bigramkit.probabilities import ProbabilityMatrix
from bigramkit.sampling import CategoricalSampler

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    """State of a single name walk."""
    GENERATING = "generating"
    DONE = "done"


@dataclass
class GenerationTrace:
    """Everything sampled while producing one name."""
    name: str
    indices: List[int] = field(default_factory=list)         # sampled indices, in order
    probabilities: List[float] = field(default_factory=list)  # P of each sampled step
    truncated: bool = False                                   # stopped by max_length


class NameGenerator:
    """Generates names from a fixed probability matrix; never mutates it."""

    def __init__(self,
                 probabilities: ProbabilityMatrix,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None,
                 max_length: Optional[int] = None):
        """
        Args:
            probabilities: Row-stochastic transition matrix
            rng: Random source (takes precedence over seed)
            seed: Seed for a private random source
            max_length: Safety bound on name length (default from app.yaml)
        """
        if max_length is None:
            max_length = GenerationConfig().max_length
        if max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {max_length}")

        self.probabilities = probabilities
        self.vocabulary = probabilities.vocabulary
        self.sampler = CategoricalSampler(rng=rng, seed=seed)
        self.max_length = max_length

    def trace(self) -> GenerationTrace:
        """Generate one name and keep the sampled path."""
        boundary = self.vocabulary.boundary_index
        state = GenerationState.GENERATING
        current = boundary
        out = []
        trace = GenerationTrace(name='')

        while state is GenerationState.GENERATING:
            row = self.probabilities.row(current)
            ix = self.sampler.sample_one(row)
            trace.indices.append(ix)
            trace.probabilities.append(row[ix])

            if ix == boundary:
                state = GenerationState.DONE
                continue

            out.append(self.vocabulary.symbol_at(ix))
            current = ix
            if len(out) >= self.max_length:
                trace.truncated = True
                state = GenerationState.DONE

        trace.name = ''.join(out)
        if trace.truncated:
            logger.debug("Name truncated at max_length=%d: %s", self.max_length, trace.name)
        return trace

    def generate_one(self) -> str:
        return self.trace().name

    def generate(self, count: int) -> List[str]:
        """Generate ``count`` independent names."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.generate_one() for _ in range(count)]

    def stream(self) -> Iterator[str]:
        """Endless lazy stream of names."""
        while True:
            yield self.generate_one()


__all__ = ['NameGenerator', 'GenerationState', 'GenerationTrace']
