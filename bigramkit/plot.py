#!/usr/bin/env python3
"""
Bigram Heatmap
==============
Renders a {(a, b): value} bigram map as an annotated heatmap image.

Rows are the current symbol, columns the next symbol. Every non-zero cell
shows the pair ("em") above its value: integers without decimals, fractions
with three.

Usage:
    from bigramkit.plot import plot_counts
    plot_counts(model.counts, "bigrams.png")
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from bigramkit.config import HeatmapConfig
from bigramkit.counting import CountMatrix
from bigramkit.errors import UnknownSymbolError
from bigramkit.probabilities import ProbabilityMatrix

logger = logging.getLogger(__name__)


def format_value(value: float) -> str:
    if value >= 1.0:
        return f"{int(value)}"
    return f"{value:.3f}"


def _dense(values: Dict[Tuple[str, str], float],
           char_to_index: Dict[str, int],
           n: int) -> list:
    data = [[0.0] * n for _ in range(n)]
    for (ch1, ch2), value in values.items():
        for ch in (ch1, ch2):
            if ch not in char_to_index:
                raise UnknownSymbolError(ch)
        data[char_to_index[ch1]][char_to_index[ch2]] = float(value)
    return data


def plot_bigram_heatmap(values: Dict[Tuple[str, str], float],
                        symbols: Sequence[str],
                        char_to_index: Dict[str, int],
                        output_path,
                        title: str,
                        config: Optional[HeatmapConfig] = None) -> Path:
    """
    Draw a bigram heatmap and save it as an image.

    Args:
        values: Counts or probabilities keyed by (symbol, next_symbol)
        symbols: Axis labels in index order
        char_to_index: Symbol -> row/column index
        output_path: Image file to write (format from the extension)
        title: Figure title
        config: Size and styling (defaults from app.yaml)

    Returns:
        Path of the written image
    """
    cfg = config or HeatmapConfig()
    n = len(symbols)
    data = _dense(values, char_to_index, n)
    max_val = max((v for row in data for v in row), default=0.0)

    # Agg canvas without pyplot
    fig = Figure(figsize=cfg.figsize, dpi=cfg.dpi)
    FigureCanvasAgg(fig)
    ax = fig.subplots()
    ax.imshow(data, cmap=cfg.cmap, vmin=0.0, vmax=max_val or 1.0, interpolation="nearest")
    ax.set_title(title, fontsize=cfg.title_size)
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(symbols)
    ax.set_yticklabels(symbols)
    ax.set_xlabel("next symbol")
    ax.set_ylabel("current symbol")

    for i in range(n):
        for j in range(n):
            value = data[i][j]
            if value <= 0:
                continue
            color = "white" if max_val and value / max_val > 0.6 else "black"
            ax.text(j, i, symbols[i] + symbols[j], ha="center", va="bottom",
                    fontsize=cfg.font_size, color=color)
            ax.text(j, i, format_value(value), ha="center", va="top",
                    fontsize=cfg.font_size, color=color)

    fig.tight_layout()
    path = Path(output_path)
    fig.savefig(path, dpi=cfg.dpi)

    logger.info("Heatmap saved as %s", path)
    return path


def plot_counts(counts: CountMatrix, output_path,
                title: str = "Bigram Counts",
                config: Optional[HeatmapConfig] = None) -> Path:
    vocab = counts.vocabulary
    return plot_bigram_heatmap(counts.to_map(), vocab.symbols, vocab.char_to_index(),
                               output_path, title, config)


def plot_probabilities(probabilities: ProbabilityMatrix, output_path,
                       title: str = "Bigram Probabilities",
                       config: Optional[HeatmapConfig] = None) -> Path:
    vocab = probabilities.vocabulary
    return plot_bigram_heatmap(probabilities.to_map(include_zero=False), vocab.symbols,
                               vocab.char_to_index(), output_path, title, config)


__all__ = ['plot_bigram_heatmap', 'plot_counts', 'plot_probabilities', 'format_value']
