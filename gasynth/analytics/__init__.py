"""Optimizer telemetry rows and the recorder that exports them."""
from gasynth.analytics.recorder import GenerationRow, IterationRow, Recorder

__all__ = ["GenerationRow", "IterationRow", "Recorder"]
