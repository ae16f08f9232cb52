from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
import torch
from unittest import mock

from palmbot.errors import ModelNotLoaded, ShapeMismatch
from palmbot.models.hand_classifier import (
    PROJECT_ROOT,
    HandClassifier,
    ModelState,
    resolve_model_path,
)
from palmbot.utils.image_utils import INPUT_SHAPE


class _BrightnessModel(torch.nn.Module):
    """Scores bright images as right hands."""

    def forward(self, x):
        return torch.sigmoid((x.mean() - 0.5) * 10).reshape(1, 1)


@pytest.fixture
def traced_model_path(tmp_path):
    path = tmp_path / "hand_classifier.ts"
    traced = torch.jit.trace(_BrightnessModel(), torch.zeros(INPUT_SHAPE))
    torch.jit.save(traced, str(path))
    return path


def _tensor(value: float) -> np.ndarray:
    return np.full(INPUT_SHAPE, value, dtype=np.float32)


def _stub_loader(output):
    model = mock.Mock(return_value=output)
    return mock.Mock(return_value=model)


def test_loads_torchscript_and_predicts(traced_model_path):
    clf = HandClassifier(traced_model_path)

    assert clf.state is ModelState.UNLOADED
    assert clf.load() is ModelState.READY
    assert clf.is_ready

    assert clf.predict(_tensor(1.0)) > 0.5
    assert clf.predict(_tensor(0.0)) < 0.5


def test_missing_artifact_fails_permanently(tmp_path):
    loader = mock.Mock()
    clf = HandClassifier(tmp_path / "missing.ts", loader=loader)

    assert clf.load() is ModelState.FAILED
    assert clf.load() is ModelState.FAILED
    loader.assert_not_called()

    with pytest.raises(ModelNotLoaded):
        clf.predict(_tensor(0.5))


def test_loader_error_is_not_retried(tmp_path):
    path = tmp_path / "broken.ts"
    path.write_bytes(b"not a model")
    loader = mock.Mock(side_effect=RuntimeError("bad archive"))
    clf = HandClassifier(path, loader=loader)

    assert clf.load() is ModelState.FAILED
    assert clf.load() is ModelState.FAILED
    assert loader.call_count == 1
    assert not clf.is_ready


def test_predict_before_load_fails_fast(traced_model_path):
    with pytest.raises(ModelNotLoaded):
        HandClassifier(traced_model_path).predict(_tensor(0.5))


@pytest.mark.parametrize("bad", [
    np.zeros((224, 224, 3), dtype=np.float32),
    np.zeros((1, 3, 224, 224), dtype=np.float32),
    np.zeros((1, 224, 224, 4), dtype=np.float32),
    np.zeros(INPUT_SHAPE, dtype=np.float64),
    [[0.0]],
])
def test_predict_rejects_wrong_input(traced_model_path, bad):
    clf = HandClassifier(traced_model_path)
    clf.load()

    with pytest.raises(ShapeMismatch):
        clf.predict(bad)


def test_predict_clips_score(tmp_path):
    path = tmp_path / "model.ts"
    path.touch()
    clf = HandClassifier(path, loader=_stub_loader(torch.tensor([[1.7]])))
    clf.load()

    assert clf.predict(_tensor(0.2)) == 1.0


@pytest.mark.parametrize("output", [torch.tensor([]), torch.tensor([[float("nan")]])])
def test_predict_rejects_unusable_output(tmp_path, output):
    path = tmp_path / "model.ts"
    path.touch()
    clf = HandClassifier(path, loader=_stub_loader(output))
    clf.load()

    with pytest.raises(ShapeMismatch):
        clf.predict(_tensor(0.2))


def test_resolve_model_path(tmp_path):
    assert resolve_model_path("models/x.ts") == PROJECT_ROOT / "models" / "x.ts"
    assert resolve_model_path(str(tmp_path / "y.ts")) == tmp_path / "y.ts"


def test_concurrent_predictions_match_single_threaded(traced_model_path):
    clf = HandClassifier(traced_model_path)
    clf.load()
    values = [1.0, 0.0, 0.7] * 20
    expected = {v: clf.predict(_tensor(v)) for v in set(values)}

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda v: (v, clf.predict(_tensor(v))), values))

    assert len(results) == len(values)
    for value, score in results:
        assert score == pytest.approx(expected[value], abs=1e-6)
