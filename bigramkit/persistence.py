#!/usr/bin/env python3
"""
Model Persistence
=================
Saves a counted model to JSON and loads it back.

Only the counts are stored; probabilities are recomputed on load, so a
saved file never disagrees with its own counts.
"""

import json
from pathlib import Path

from bigramkit.counting import CountMatrix
from bigramkit.model import BigramModel
from bigramkit.vocabulary import Vocabulary

FORMAT_VERSION = 1
REQUIRED_KEYS = ('format', 'boundary', 'symbols', 'counts')


def model_to_dict(model: BigramModel) -> dict:
    """Serialize model to dictionary"""
    counts = model.counts
    return {
        'format': FORMAT_VERSION,
        'boundary': model.vocabulary.boundary,
        'symbols': list(model.vocabulary.symbols),
        'smoothing': model.smoothing,
        'counts': [list(row) for row in counts.rows],
    }


def model_from_dict(data: dict) -> BigramModel:
    """
    Deserialize model from dictionary.

    Raises:
        ValueError: If the document is not a valid model of this format
    """
    if not isinstance(data, dict):
        raise ValueError(f"Model file must hold a JSON object, got {type(data).__name__}")
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f"Model file missing key(s): {', '.join(missing)}")

    version = data['format']
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported model format: {version!r}")

    symbols = data['symbols']
    if not isinstance(symbols, list) or not all(isinstance(s, str) for s in symbols):
        raise ValueError("Model file 'symbols' must be a list of strings")
    vocabulary = Vocabulary(symbols=tuple(symbols))
    if vocabulary.boundary != data['boundary']:
        raise ValueError("Model file boundary does not match first symbol")

    rows = _count_rows(data['counts'], vocabulary.size())

    smoothing = data.get('smoothing')
    if smoothing is not None and (isinstance(smoothing, bool) or not isinstance(smoothing, (int, float))):
        raise ValueError(f"Model file 'smoothing' must be a number, got {smoothing!r}")

    counts = CountMatrix(vocabulary=vocabulary, rows=rows)
    return BigramModel.from_counts(counts, smoothing=smoothing)


def _count_rows(raw, size: int) -> tuple:
    if not isinstance(raw, list) or not all(isinstance(row, list) for row in raw):
        raise ValueError("Model file 'counts' must be a list of rows")
    if len(raw) != size or any(len(row) != size for row in raw):
        raise ValueError(f"Count matrix shape does not match vocabulary size {size}")
    for row in raw:
        for c in row:
            # bool is an int subclass
            if isinstance(c, bool) or not isinstance(c, int):
                raise ValueError(f"Counts must be integers, got {c!r}")
            if c < 0:
                raise ValueError("Counts must be non-negative")
    return tuple(tuple(row) for row in raw)


def save_model(model: BigramModel, filepath) -> Path:
    """Save trained model to JSON file"""
    path = Path(filepath)
    path.write_text(json.dumps(model_to_dict(model), indent=2))
    return path


def load_model(filepath) -> BigramModel:
    """Load trained model from JSON file"""
    data = json.loads(Path(filepath).read_text())
    return model_from_dict(data)


__all__ = ['save_model', 'load_model', 'model_to_dict', 'model_from_dict', 'FORMAT_VERSION']
