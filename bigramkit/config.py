#!/usr/bin/env python3
"""
Configuration Management
========================
Dataclass views over the ``model``, ``generation`` and ``heatmap`` sections
of configs/app.yaml.

Any field left as None is filled from app.yaml in ``__post_init__``; a value
that is still missing afterwards is a configuration error.
"""

from dataclasses import dataclass, field
from typing import Optional

from bigramkit.settings import get_setting


def _require(section: str, values: tuple):
    missing = [name for name, value in values if value is None]
    if missing:
        raise ValueError(f"{section} settings missing in app.yaml: {', '.join(missing)}")


# =============================================================================
# Model
# =============================================================================

@dataclass
class ModelConfig:
    """How the bigram model is built."""
    boundary: Optional[str] = None
    smoothing: Optional[float] = None

    def __post_init__(self):
        cfg = get_setting("model", {}) or {}
        if self.boundary is None:
            self.boundary = cfg.get("boundary")
        if self.smoothing is None:
            self.smoothing = cfg.get("smoothing")

        _require("model", (
            ("boundary", self.boundary),
            ("smoothing", self.smoothing),
        ))
        if len(self.boundary) != 1:
            raise ValueError(f"model.boundary must be a single character, got {self.boundary!r}")
        if self.smoothing < 0:
            raise ValueError(f"model.smoothing must be >= 0, got {self.smoothing}")


# =============================================================================
# Generation
# =============================================================================

@dataclass
class GenerationConfig:
    """How names are sampled from a trained model."""
    count: Optional[int] = None
    max_length: Optional[int] = None
    seed: Optional[int] = None       # None means fresh system randomness

    def __post_init__(self):
        cfg = get_setting("generation", {}) or {}
        if self.count is None:
            self.count = cfg.get("count")
        if self.max_length is None:
            self.max_length = cfg.get("max_length")
        if self.seed is None:
            self.seed = cfg.get("seed")

        _require("generation", (
            ("count", self.count),
            ("max_length", self.max_length),
        ))
        if self.max_length < 1:
            raise ValueError(f"generation.max_length must be >= 1, got {self.max_length}")


# =============================================================================
# Heatmap
# =============================================================================

@dataclass
class HeatmapConfig:
    """Raster size and styling for the bigram heatmap."""
    width: Optional[int] = None          # pixels
    height: Optional[int] = None         # pixels
    dpi: Optional[int] = None
    cmap: Optional[str] = None
    font_size: Optional[float] = None    # cell annotations
    title_size: Optional[float] = None
    outputs: dict = field(default_factory=dict)

    def __post_init__(self):
        cfg = get_setting("heatmap", {}) or {}
        for name in ("width", "height", "dpi", "cmap", "font_size", "title_size"):
            if getattr(self, name) is None:
                setattr(self, name, cfg.get(name))
        if not self.outputs:
            self.outputs = dict(cfg.get("outputs") or {})

        _require("heatmap", (
            ("width", self.width),
            ("height", self.height),
            ("dpi", self.dpi),
            ("cmap", self.cmap),
            ("font_size", self.font_size),
            ("title_size", self.title_size),
        ))

    @property
    def figsize(self) -> tuple:
        """Figure size in inches for matplotlib."""
        return (self.width / self.dpi, self.height / self.dpi)


__all__ = [
    'ModelConfig',
    'GenerationConfig',
    'HeatmapConfig',
]
