"""
Tests for Heatmap Rendering and Corpus Loading
==============================================
Tests for bigramkit/plot.py and bigramkit/data.py.
"""

import pytest
import subprocess
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bigramkit import BigramModel
from bigramkit.config import HeatmapConfig
from bigramkit.data import load_names
from bigramkit.errors import UnknownSymbolError
from bigramkit.plot import plot_bigram_heatmap, plot_counts, plot_probabilities, format_value

PNG_MAGIC = b'\x89PNG'


@pytest.fixture
def small_config():
    return HeatmapConfig(width=300, height=250, dpi=50)


@pytest.fixture
def model():
    return BigramModel().fit(["emma", "ava", "mia"])


class TestFormatValue:
    """Cell annotation formatting."""

    def test_integer(self):
        assert format_value(12) == "12"
        assert format_value(3.0) == "3"

    def test_fraction(self):
        assert format_value(0.5) == "0.500"
        assert format_value(0.12345) == "0.123"


class TestHeatmap:
    """Image output."""

    def test_counts_png(self, model, tmp_path, small_config):
        path = plot_counts(model.counts, tmp_path / "counts.png", config=small_config)
        assert path.exists()
        assert path.read_bytes()[:4] == PNG_MAGIC

    def test_probabilities_png(self, model, tmp_path, small_config):
        path = plot_probabilities(model.probabilities, tmp_path / "probs.png", config=small_config)
        assert path.exists()
        assert path.stat().st_size > 0

    def test_raw_map(self, tmp_path, small_config):
        values = {('a', 'b'): 10}
        path = plot_bigram_heatmap(values, ['a', 'b'], {'a': 0, 'b': 1},
                                   tmp_path / "raw.png", "Bigram Analysis", config=small_config)
        assert path.read_bytes()[:4] == PNG_MAGIC

    def test_empty_map(self, tmp_path, small_config):
        path = plot_bigram_heatmap({}, ['.'], {'.': 0}, tmp_path / "empty.png", "Empty",
                                   config=small_config)
        assert path.exists()

    def test_unknown_symbol(self, tmp_path, small_config):
        with pytest.raises(UnknownSymbolError):
            plot_bigram_heatmap({('a', 'z'): 1}, ['a'], {'a': 0}, tmp_path / "bad.png", "Bad",
                                config=small_config)


class TestLoadNames:
    """Corpus loader."""

    def test_trims_and_drops_blank(self, tmp_path):
        f = tmp_path / "names.txt"
        f.write_text("emma\n  olivia  \n\n   \nava\n")
        assert load_names(f) == ["emma", "olivia", "ava"]

    def test_unique_keeps_first(self, tmp_path):
        f = tmp_path / "names.txt"
        f.write_text("emma\nava\nemma\nmia\nava\n")
        assert load_names(f, unique=True) == ["emma", "ava", "mia"]
        assert len(load_names(f)) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_names(tmp_path / "nope.txt")

    def test_loaded_corpus_counts(self, tmp_path):
        f = tmp_path / "names.txt"
        f.write_text("ab\nac\n")
        model = BigramModel().fit(load_names(f))
        assert model.counts.get('.', 'a') == 2


class TestBackendIsolation:
    """Rendering must not select a global matplotlib backend."""

    def test_no_pyplot_import(self, tmp_path):
        script = (
            "import sys\n"
            "from bigramkit.config import HeatmapConfig\n"
            "from bigramkit.plot import plot_bigram_heatmap\n"
            "cfg = HeatmapConfig(width=200, height=200, dpi=50)\n"
            f"plot_bigram_heatmap({{('a', 'b'): 2}}, ['a', 'b'], {{'a': 0, 'b': 1}}, {str(tmp_path / 'h.png')!r}, 'T', config=cfg)\n"
            "print('matplotlib.pyplot' in sys.modules)\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            cwd=str(ROOT),
            timeout=60,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "False"
        assert (tmp_path / "h.png").exists()
