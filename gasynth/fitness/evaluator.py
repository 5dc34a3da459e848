"""
Fitness evaluation: how close a rendered candidate is to the target.

Both metrics reduce an error e >= 0 to a cost exp(log10(e / scale)) and map the
cost into (0, 1] with 2 * sigmoid(-cost). A perfect match (e == 0) scores 1.0;
the [0, 2] contract is an outer bound.
"""
import logging
import math

import torch

from gasynth.core.errors import InvalidSpectrumError, SignalProcessingError
from gasynth.core.signal import Signal
from gasynth.core.types import ANALYSIS_LENGTH, FitnessType

logger = logging.getLogger(__name__)

FREQ_ERROR_SCALE = 1000.0
TIME_ERROR_SCALE = 500.0


class FitnessEvaluator:
    @staticmethod
    def frequency_spectrum(signal: Signal, length: int = ANALYSIS_LENGTH) -> torch.Tensor:
        """
        Magnitude spectrum of the signal normalised to `length` samples,
        with the spectrum minimum subtracted from every bin.
        """
        if not signal.is_finite():
            raise InvalidSpectrumError("cannot compute the spectrum of a signal with non-finite samples")
        samples = signal.normalise(length).samples.to(torch.float64)
        magnitude = torch.fft.rfft(samples).abs()
        return magnitude - magnitude.min()

    @staticmethod
    def spectrum_mse(candidate: torch.Tensor, target: torch.Tensor) -> float:
        """Sum of squared bin differences over the shared bins, divided by the candidate's bin count."""
        n = min(candidate.shape[-1], target.shape[-1])
        if candidate.shape[-1] == 0:
            return 0.0
        diff = candidate[:n] - target[:n]
        return float((diff * diff).sum()) / candidate.shape[-1]

    @staticmethod
    def euclidean_distance(candidate: Signal, target: Signal) -> float:
        """Euclidean distance over the shorter of the two signals."""
        if not (candidate.is_finite() and target.is_finite()):
            raise SignalProcessingError("cannot compare signals with non-finite samples")
        n = min(candidate.n_samples, target.n_samples)
        diff = candidate.samples[:n].to(torch.float64) - target.samples[:n].to(torch.float64)
        return float(torch.sqrt((diff * diff).sum()))

    @staticmethod
    def sigmoid(x: float) -> float:
        if x >= 0:
            return 1.0 / (1.0 + math.exp(-x))
        z = math.exp(x)
        return z / (1.0 + z)

    @staticmethod
    def cost(error: float, scale: float) -> float:
        if error <= 0.0:
            return 0.0
        return math.exp(math.log10(error / scale))

    @staticmethod
    def fitness_from_error(error: float, scale: float) -> float:
        return 2.0 * FitnessEvaluator.sigmoid(-FitnessEvaluator.cost(error, scale))

    @staticmethod
    def score(candidate: Signal, target: Signal, fitness_type: FitnessType = FitnessType.FREQ_DOMAIN_MSE) -> float:
        """Fitness in (0, 1] (within the [0, 2] bound); higher is closer to the target."""
        fitness_type = FitnessType(fitness_type)
        if fitness_type == FitnessType.FREQ_DOMAIN_MSE:
            error = FitnessEvaluator.spectrum_mse(
                FitnessEvaluator.frequency_spectrum(candidate),
                FitnessEvaluator.frequency_spectrum(target),
            )
            scale = FREQ_ERROR_SCALE
        else:
            error = FitnessEvaluator.euclidean_distance(candidate, target)
            scale = TIME_ERROR_SCALE
        fitness = FitnessEvaluator.fitness_from_error(error, scale)
        logger.debug(f"{fitness_type.value} error={error:.6g} fitness={fitness:.6f}")
        return fitness
