"""
Tests for BigramModel
=====================
Tests for the model facade, its state tag, evaluation and persistence.
"""

import json
import math
import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bigramkit import BigramModel, ModelState, Vocabulary, save_model, load_model
from bigramkit.persistence import model_to_dict, model_from_dict
from bigramkit.errors import ModelStateError, UnknownSymbolError

NAMES = ["emma", "olivia", "ava", "isabella", "sophia", "charlotte", "mia", "amelia"]


class TestState:
    """Explicit state transitions."""

    def test_initial_state(self):
        model = BigramModel()
        assert model.state is ModelState.UNINITIALIZED

    def test_counts_before_count(self):
        with pytest.raises(ModelStateError):
            BigramModel().counts

    def test_probabilities_before_normalize(self):
        model = BigramModel()
        model.count(["ab"])
        assert model.state is ModelState.COUNTED
        with pytest.raises(ModelStateError):
            model.probabilities

    def test_normalize_before_count(self):
        with pytest.raises(ModelStateError):
            BigramModel().normalize()

    def test_vocabulary_before_count(self):
        with pytest.raises(ModelStateError):
            BigramModel().vocabulary

    def test_generate_before_normalize(self):
        model = BigramModel()
        model.count(["ab"])
        with pytest.raises(ModelStateError):
            model.generate(1)

    def test_fit(self):
        model = BigramModel().fit(NAMES)
        assert model.state is ModelState.NORMALIZED
        assert model.counts.total() == sum(len(n) for n in NAMES) + len(NAMES)

    def test_recount_replaces_matrices(self):
        model = BigramModel().fit(["ab", "ac"])
        model.count(["xy"])
        assert model.state is ModelState.COUNTED
        assert model.vocabulary.symbols == ('.', 'x', 'y')
        assert model.counts.total() == 3
        with pytest.raises(ModelStateError):
            model.probabilities

    def test_error_message_names_states(self):
        with pytest.raises(ModelStateError) as exc:
            BigramModel().probabilities
        assert "uninitialized" in str(exc.value)
        assert "normalized" in str(exc.value)


class TestConfiguration:
    """Model options."""

    def test_defaults_from_settings(self):
        model = BigramModel()
        assert model.boundary == '.'
        assert model.smoothing == 0.0

    def test_fixed_vocabulary(self):
        vocab = Vocabulary.build(["abc"])
        model = BigramModel(vocabulary=vocab).fit(["ab"])
        assert model.vocabulary is vocab
        assert model.probabilities.degenerate_rows == frozenset({3})

    def test_fixed_vocabulary_unknown_symbol(self):
        model = BigramModel(vocabulary=Vocabulary.build(["ab"]))
        with pytest.raises(UnknownSymbolError):
            model.count(["abz"])

    def test_boundary_mismatch(self):
        with pytest.raises(ValueError):
            BigramModel(vocabulary=Vocabulary.build(["ab"]), boundary='#')

    def test_custom_boundary(self):
        model = BigramModel(boundary='#').fit(["ab"])
        assert model.vocabulary.symbols == ('#', 'a', 'b')

    def test_smoothing(self):
        model = BigramModel(smoothing=1.0).fit(["ab"])
        assert model.probabilities.get('b', 'a') > 0


class TestGeneration:
    """Generation through the facade."""

    def test_generate(self):
        model = BigramModel().fit(["ab", "ac"])
        names = model.generate(20, seed=1)
        assert set(names) <= {"ab", "ac"}

    def test_independent_generators(self):
        model = BigramModel().fit(NAMES)
        a = model.generator(seed=5).generate(10)
        b = model.generator(seed=5).generate(10)
        assert a == b

    def test_maps(self):
        model = BigramModel().fit(["ab", "ac"])
        assert model.count_map()[('.', 'a')] == 2
        assert model.probability_map()[('a', 'b')] == pytest.approx(0.5)


class TestEvaluate:
    """Log likelihood evaluation."""

    def test_ab_ac(self):
        model = BigramModel().fit(["ab", "ac"])
        result = model.evaluate(["ab", "ac"])
        assert result.count == 6
        assert result.log_likelihood == pytest.approx(2 * math.log(0.5))
        assert result.nll == pytest.approx(-2 * math.log(0.5))
        assert result.mean_nll == pytest.approx(math.log(2) / 3)

    def test_unseen_bigram_is_infinite(self):
        model = BigramModel().fit(["ab"])
        result = model.evaluate(["ba"])
        assert result.log_likelihood == -math.inf
        assert result.nll == math.inf

    def test_smoothing_keeps_finite(self):
        model = BigramModel(smoothing=1.0).fit(["ab"])
        assert math.isfinite(model.evaluate(["ba"]).nll)

    def test_empty_words(self):
        result = BigramModel().fit(["ab"]).evaluate([])
        assert result.count == 0
        assert result.mean_nll == 0.0

    def test_unknown_character(self):
        model = BigramModel().fit(["ab"])
        with pytest.raises(UnknownSymbolError):
            model.evaluate(["az"])


class TestPersistence:
    """JSON save/load."""

    def test_round_trip(self, tmp_path):
        model = BigramModel().fit(NAMES)
        path = save_model(model, tmp_path / "model.json")
        loaded = load_model(path)
        assert loaded.state is ModelState.NORMALIZED
        assert loaded.counts == model.counts
        assert loaded.probabilities.rows == model.probabilities.rows

    def test_file_contents(self, tmp_path):
        model = BigramModel().fit(["ab", "ac"])
        path = save_model(model, tmp_path / "model.json")
        data = json.loads(path.read_text())
        assert data['symbols'] == ['.', 'a', 'b', 'c']
        assert data['counts'][0] == [0, 2, 0, 0]

    def test_smoothing_preserved(self):
        model = BigramModel(smoothing=0.5).fit(["ab"])
        assert model_from_dict(model_to_dict(model)).smoothing == 0.5

    def test_unknown_format(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['format'] = 99
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_shape_mismatch(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['counts'] = data['counts'][:-1]
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_negative_counts(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['counts'][0][0] = -1
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_fractional_counts_rejected(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['counts'][0][1] = 1.9
        with pytest.raises(ValueError) as exc:
            model_from_dict(data)
        assert "integers" in str(exc.value)

    def test_boolean_counts_rejected(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['counts'][0][1] = True
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_missing_keys(self):
        with pytest.raises(ValueError) as exc:
            model_from_dict({'format': 1, 'boundary': '.'})
        assert "symbols" in str(exc.value)
        assert "counts" in str(exc.value)

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            model_from_dict([1, 2])

    def test_symbols_not_strings(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['symbols'] = [0, 1, 2]
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_counts_not_rows(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['counts'] = "0 1 0"
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_bad_smoothing(self):
        data = model_to_dict(BigramModel().fit(["ab"]))
        data['smoothing'] = "lots"
        with pytest.raises(ValueError):
            model_from_dict(data)

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_model(path)
