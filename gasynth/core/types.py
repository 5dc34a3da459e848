"""
Shared enums and rendering constants.
Every rendered signal is DURATION seconds long at SAMPLE_RATE; spectra are
compared at ANALYSIS_LENGTH samples.
"""
from enum import Enum

SAMPLE_RATE = 44_100
DURATION = 3.0
ANALYSIS_LENGTH = 16_384
NYQUIST = SAMPLE_RATE / 2.0


class FitnessType(str, Enum):
    """Metric used to compare a rendered candidate against the target."""
    FREQ_DOMAIN_MSE = "freq_domain_mse"
    TIME_DOMAIN_EUCLIDEAN = "time_domain_euclidean"


class FilterType(str, Enum):
    LOW_PASS = "low_pass"
    HIGH_PASS = "high_pass"
    BAND_PASS = "band_pass"
    BAND_REJECT = "band_reject"


class PopulationEvolution(str, Enum):
    """CONSTANT keeps the population at its initial size; INCREASING lets immigrants accumulate."""
    CONSTANT = "constant"
    INCREASING = "increasing"


class TerminationReason(str, Enum):
    MAX_ITERATIONS = "max_iterations"
    STEP_SIZE_BELOW_MINIMUM = "step_size_below_minimum"
    TOO_MANY_CONSECUTIVE_FAILURES = "too_many_consecutive_failures"
    CANCELLED = "cancelled"
