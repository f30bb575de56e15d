#!/usr/bin/env python3
"""
bigramkit - Character-Level Bigram Name Model
=============================================

Counts character-pair transitions in a list of names, turns the counts into
probabilities, samples new names and draws the transition matrix as a
heatmap.

Quick Start
-----------
    from bigramkit import BigramModel, load_names

    model = BigramModel().fit(load_names("names.txt"))

    # Sample names
    names = model.generate(10, seed=2147483647)

    # Score words (lower mean NLL = more typical)
    result = model.evaluate(["emma", "qxz"])

Modules
-------
    bigramkit.vocabulary    - Symbol <-> index mapping (boundary '.' first)
    bigramkit.counting      - Bigram count matrix
    bigramkit.probabilities - Row normalization
    bigramkit.sampling      - Inverse-CDF categorical sampler
    bigramkit.generator     - Name generation walk
    bigramkit.model         - Model facade and evaluation
    bigramkit.plot          - Heatmap rendering (matplotlib)

CLI Usage
---------
    python -m bigramkit generate -n 10 --corpus names.txt
    python -m bigramkit heatmap --corpus names.txt
"""

__version__ = "0.1.0"

from .errors import (
    BigramError,
    UnknownSymbolError,
    InsufficientSupportError,
    DegenerateRowError,
    ModelStateError,
)
from .vocabulary import Vocabulary
from .counting import CountMatrix, count, bigrams
from .probabilities import ProbabilityMatrix, normalize
from .sampling import CategoricalSampler, sample, flatten
from .generator import NameGenerator, GenerationState, GenerationTrace
from .model import BigramModel, ModelState, EvaluationResult
from .persistence import save_model, load_model
from .data import load_names
from .settings import get_setting

__all__ = [
    '__version__',
    # Errors
    'BigramError',
    'UnknownSymbolError',
    'InsufficientSupportError',
    'DegenerateRowError',
    'ModelStateError',
    # Core
    'Vocabulary',
    'CountMatrix',
    'count',
    'bigrams',
    'ProbabilityMatrix',
    'normalize',
    'CategoricalSampler',
    'sample',
    'flatten',
    'NameGenerator',
    'GenerationState',
    'GenerationTrace',
    # Model
    'BigramModel',
    'ModelState',
    'EvaluationResult',
    'save_model',
    'load_model',
    # IO
    'load_names',
    'get_setting',
]
