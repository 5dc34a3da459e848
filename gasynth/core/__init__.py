"""Signals, shared types, errors, parameter ranges and audio I/O."""
from gasynth.core.errors import AudioReadError, ConfigurationError, GASynthError, InvalidSpectrumError, SignalProcessingError
from gasynth.core.signal import Signal
from gasynth.core.types import (
    ANALYSIS_LENGTH,
    DURATION,
    NYQUIST,
    SAMPLE_RATE,
    FilterType,
    FitnessType,
    PopulationEvolution,
    TerminationReason,
)

__all__ = [
    "Signal",
    "SAMPLE_RATE",
    "DURATION",
    "ANALYSIS_LENGTH",
    "NYQUIST",
    "FitnessType",
    "FilterType",
    "PopulationEvolution",
    "TerminationReason",
    "GASynthError",
    "ConfigurationError",
    "SignalProcessingError",
    "InvalidSpectrumError",
    "AudioReadError",
]
