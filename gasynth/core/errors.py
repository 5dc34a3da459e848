"""
Exception hierarchy.
Configuration and evaluation errors abort a run; invalid genomes and
exhausted searches are not errors and never raise.
"""


class GASynthError(Exception):
    """Base class for every error raised by gasynth."""


class ConfigurationError(GASynthError):
    """A generator or optimizer was built without something it needs (generator, target, method)."""


class SignalProcessingError(GASynthError):
    """A signal could not be compared or analysed."""


class InvalidSpectrumError(SignalProcessingError):
    """The frequency spectrum of a signal could not be computed."""


class AudioReadError(SignalProcessingError):
    """A target file or buffer could not be decoded into a signal."""
