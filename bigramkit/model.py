#!/usr/bin/env python3
"""
Bigram Model
============
Ties vocabulary, counting, normalization and generation together.

The model moves through an explicit state tag:

    UNINITIALIZED --count()--> COUNTED --normalize()--> NORMALIZED

``fit()`` performs both steps. Each operation checks the state on entry, so
asking for probabilities before counting fails with ModelStateError rather
than with an attribute error somewhere downstream. Counting again replaces
both matrices; nothing is updated incrementally.

Evaluation:
-----------
The quality of the model on a set of words is the average negative log
likelihood of all their bigrams. 0 would mean every transition was predicted
with certainty; unseen transitions (probability 0) make it infinite, which
smoothing avoids.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from bigramkit.config import ModelConfig
from bigramkit.counting import CountMatrix, bigrams, count as count_bigrams
from bigramkit.errors import ModelStateError
from bigramkit.generator import NameGenerator
from bigramkit.probabilities import ProbabilityMatrix, normalize as normalize_counts
from bigramkit.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class ModelState(Enum):
    """Which matrices the model currently holds."""
    UNINITIALIZED = "uninitialized"
    COUNTED = "counted"
    NORMALIZED = "normalized"


@dataclass
class EvaluationResult:
    """Log likelihood of a word list under the model."""
    log_likelihood: float
    nll: float
    count: int          # transitions scored

    @property
    def mean_nll(self) -> float:
        return self.nll / self.count if self.count else 0.0


class BigramModel:
    """Character-level bigram language model."""

    def __init__(self,
                 vocabulary: Optional[Vocabulary] = None,
                 boundary: Optional[str] = None,
                 smoothing: Optional[float] = None):
        """
        Args:
            vocabulary: Fixed vocabulary; built from the corpus when None
            boundary: Boundary symbol when building the vocabulary
            smoothing: Add-k pseudo-count used by normalize()
        """
        if vocabulary is not None and boundary is None:
            boundary = vocabulary.boundary
        cfg = ModelConfig(boundary=boundary, smoothing=smoothing)
        if vocabulary is not None and vocabulary.boundary != cfg.boundary:
            raise ValueError(
                f"Boundary {cfg.boundary!r} does not match vocabulary boundary {vocabulary.boundary!r}"
            )

        self.boundary = cfg.boundary
        self.smoothing = cfg.smoothing
        self._fixed_vocabulary = vocabulary is not None
        self._vocabulary = vocabulary
        self._counts: Optional[CountMatrix] = None
        self._probabilities: Optional[ProbabilityMatrix] = None
        self.state = ModelState.UNINITIALIZED

    def _require(self, *states: ModelState):
        if self.state not in states:
            expected = ' or '.join(s.value for s in states)
            raise ModelStateError(f"Model is {self.state.value}, expected {expected}")

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    def count(self, corpus: Iterable[str]) -> CountMatrix:
        """Count the corpus, replacing any previous counts and probabilities."""
        words = list(corpus)
        if not self._fixed_vocabulary:
            self._vocabulary = Vocabulary.build(words, boundary=self.boundary)

        self._counts = count_bigrams(words, self._vocabulary)
        self._probabilities = None
        self.state = ModelState.COUNTED
        logger.info("Counted %d bigrams from %d words (%d symbols)",
                    self._counts.total(), len(words), self._vocabulary.size())
        return self._counts

    def normalize(self) -> ProbabilityMatrix:
        """Derive the probability matrix from the current counts."""
        self._require(ModelState.COUNTED, ModelState.NORMALIZED)
        self._probabilities = normalize_counts(self._counts, smoothing=self.smoothing)
        self.state = ModelState.NORMALIZED
        return self._probabilities

    def fit(self, corpus: Iterable[str]) -> 'BigramModel':
        """Count and normalize in one go."""
        self.count(corpus)
        self.normalize()
        return self

    @classmethod
    def from_counts(cls, counts: CountMatrix, smoothing: Optional[float] = None) -> 'BigramModel':
        """Normalized model around existing counts (used when loading)."""
        model = cls(vocabulary=counts.vocabulary, smoothing=smoothing)
        model._counts = counts
        model.state = ModelState.COUNTED
        model.normalize()
        return model

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def vocabulary(self) -> Vocabulary:
        if self._vocabulary is None:
            raise ModelStateError("Model has no vocabulary yet; call count() or fit() first")
        return self._vocabulary

    @property
    def counts(self) -> CountMatrix:
        self._require(ModelState.COUNTED, ModelState.NORMALIZED)
        return self._counts

    @property
    def probabilities(self) -> ProbabilityMatrix:
        self._require(ModelState.NORMALIZED)
        return self._probabilities

    def count_map(self) -> dict:
        return self.counts.to_map()

    def probability_map(self) -> dict:
        return self.probabilities.to_map()

    # -------------------------------------------------------------------------
    # Generation & evaluation
    # -------------------------------------------------------------------------

    def generator(self,
                  seed: Optional[int] = None,
                  rng: Optional[random.Random] = None,
                  max_length: Optional[int] = None) -> NameGenerator:
        """New NameGenerator with its own random source."""
        return NameGenerator(self.probabilities, rng=rng, seed=seed, max_length=max_length)

    def generate(self,
                 count: int,
                 seed: Optional[int] = None,
                 max_length: Optional[int] = None) -> List[str]:
        return self.generator(seed=seed, max_length=max_length).generate(count)

    def evaluate(self, words: Iterable[str]) -> EvaluationResult:
        """
        Score words by the summed log probability of their bigrams.

        Raises:
            UnknownSymbolError: If a word holds a character outside the vocabulary
        """
        probabilities = self.probabilities
        vocab = self.vocabulary

        log_likelihood = 0.0
        n = 0
        for word in words:
            for ch1, ch2 in bigrams(word, vocab.boundary):
                prob = probabilities[vocab.index_of(ch1), vocab.index_of(ch2)]
                log_likelihood += math.log(prob) if prob > 0 else -math.inf
                n += 1

        result = EvaluationResult(log_likelihood=log_likelihood, nll=-log_likelihood, count=n)
        logger.debug("log_likelihood=%s nll=%s mean=%s", result.log_likelihood, result.nll, result.mean_nll)
        return result


__all__ = ['BigramModel', 'ModelState', 'EvaluationResult']
