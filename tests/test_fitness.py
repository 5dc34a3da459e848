"""
Fitness evaluation: metric oracles, bounds and failure modes.
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import math

import pytest
import torch

from gasynth.core.errors import InvalidSpectrumError, SignalProcessingError
from gasynth.core.signal import Signal
from gasynth.core.types import ANALYSIS_LENGTH, SAMPLE_RATE, FitnessType
from gasynth.dsp.oscillators import saw_wave, sine_wave
from gasynth.fitness.evaluator import FitnessEvaluator


@pytest.fixture
def target():
    return sine_wave(440.0, 0.5, SAMPLE_RATE)


def test_euclidean_distance_oracle():
    a = Signal([0.0, 0.5, 0.5, 1.0])
    b = Signal([1.0, 0.0, 1.0, 0.0])
    assert FitnessEvaluator.euclidean_distance(a, b) == pytest.approx(math.sqrt(2.5))


def test_euclidean_distance_uses_shorter_signal():
    a = Signal([1.0, 1.0])
    b = Signal([0.0, 0.0, 100.0])
    assert FitnessEvaluator.euclidean_distance(a, b) == pytest.approx(math.sqrt(2.0))


def test_spectrum_shape_and_baseline(target):
    spectrum = FitnessEvaluator.frequency_spectrum(target)
    assert spectrum.shape[-1] == ANALYSIS_LENGTH // 2 + 1
    assert spectrum.min().item() == 0.0


def test_spectrum_mse_divides_by_candidate_bins():
    candidate = torch.tensor([1.0, 1.0, 1.0])
    target = torch.tensor([0.0, 0.0, 0.0, 5.0, 5.0])
    assert FitnessEvaluator.spectrum_mse(candidate, target) == pytest.approx(1.0)


@pytest.mark.parametrize("fitness_type", list(FitnessType))
def test_identical_signals_score_one(target, fitness_type):
    assert FitnessEvaluator.score(target, target, fitness_type) == pytest.approx(1.0)


@pytest.mark.parametrize("fitness_type", list(FitnessType))
def test_fitness_bounded_and_lower_for_different_sound(target, fitness_type):
    other = saw_wave(1234.0, 0.5, SAMPLE_RATE)
    fitness = FitnessEvaluator.score(other, target, fitness_type)
    assert 0.0 <= fitness < 1.0
    assert not math.isnan(fitness)


def test_cost_mapping():
    assert FitnessEvaluator.cost(0.0, 1000.0) == 0.0
    assert FitnessEvaluator.fitness_from_error(0.0, 1000.0) == 1.0
    assert FitnessEvaluator.cost(1000.0, 1000.0) == pytest.approx(1.0)
    assert FitnessEvaluator.fitness_from_error(1000.0, 1000.0) == pytest.approx(2.0 / (1.0 + math.e))


def test_sigmoid_is_stable():
    assert FitnessEvaluator.sigmoid(0.0) == 0.5
    assert FitnessEvaluator.sigmoid(-1000.0) == pytest.approx(0.0)
    assert FitnessEvaluator.sigmoid(1000.0) == pytest.approx(1.0)


def test_empty_candidate_is_padded(target):
    fitness = FitnessEvaluator.score(Signal([]), target, FitnessType.FREQ_DOMAIN_MSE)
    assert 0.0 <= fitness <= 2.0


def test_non_finite_spectrum_raises(target):
    broken = Signal([0.0, float("nan"), 1.0])
    with pytest.raises(InvalidSpectrumError):
        FitnessEvaluator.score(broken, target, FitnessType.FREQ_DOMAIN_MSE)


def test_non_finite_time_domain_raises(target):
    broken = Signal([float("inf")] * 10)
    with pytest.raises(SignalProcessingError):
        FitnessEvaluator.score(broken, target, FitnessType.TIME_DOMAIN_EUCLIDEAN)


def test_fitness_type_accepts_string_value(target):
    assert FitnessEvaluator.score(target, target, "time_domain_euclidean") == pytest.approx(1.0)
