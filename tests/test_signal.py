"""
Unit tests for gasynth/core/signal: construction, arithmetic and analysis-length normalisation.
Run from project root: python -m pytest tests/test_signal.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
import torch

from gasynth.core.signal import Signal
from gasynth.core.types import ANALYSIS_LENGTH, DURATION, SAMPLE_RATE


def test_silence_length_and_values():
    sig = Signal.silence()
    assert sig.n_samples == int(DURATION * SAMPLE_RATE)
    assert sig.sample_rate == SAMPLE_RATE
    assert float(sig.samples.abs().max()) == 0.0


def test_samples_are_float32():
    sig = Signal([1, 2, 3])
    assert sig.samples.dtype == torch.float32
    assert list(sig) == [1.0, 2.0, 3.0]


def test_constructor_copies_tensor():
    data = torch.zeros(4)
    sig = Signal(data)
    data[0] = 1.0
    assert list(sig) == [0.0, 0.0, 0.0, 0.0]


def test_add_amp_over_overlap():
    a = Signal([1.0, 2.0, 3.0])
    b = Signal([0.5, 0.5])
    assert list(a.add_amp(b)) == [1.5, 2.5]
    # Inputs unchanged
    assert list(a) == [1.0, 2.0, 3.0]


def test_scale_amp():
    assert list(Signal([1.0, -2.0]).scale_amp(0.5)) == [0.5, -1.0]


def test_normalise_pads_short_signals():
    sig = Signal([0.25] * 10).normalise()
    assert sig.n_samples == ANALYSIS_LENGTH
    assert float(sig.samples[9]) == 0.25
    assert float(sig.samples[-1]) == 0.0


def test_normalise_truncates_long_signals():
    sig = Signal(torch.ones(ANALYSIS_LENGTH + 100)).normalise()
    assert sig.n_samples == ANALYSIS_LENGTH
    assert float(sig.samples[-1]) == 1.0


def test_normalise_is_idempotent():
    once = Signal(torch.randn(1000)).normalise()
    assert once.normalise() == once


def test_equality():
    assert Signal([1.0, 2.0]) == Signal([1.0, 2.0])
    assert Signal([1.0, 2.0]) != Signal([1.0, 2.5])
    assert Signal([1.0], 22050) != Signal([1.0], 44100)


def test_is_finite():
    assert Signal([0.0, 1.0]).is_finite()
    assert not Signal([0.0, float("nan")]).is_finite()
    assert not Signal([float("inf")]).is_finite()


def test_signal_is_unhashable():
    with pytest.raises(TypeError):
        hash(Signal([1.0]))
