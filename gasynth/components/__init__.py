"""Evolvable synthesiser genes."""
from gasynth.components.base import GenomeComponent
from gasynth.components.envelope import EnvelopeComponent
from gasynth.components.filters import BandFilter, CutoffFilter, FilterComponent, create_filter
from gasynth.components.harmonics import HarmonicsComponent
from gasynth.components.oscillator import OscillatorComponent

__all__ = [
    "GenomeComponent",
    "OscillatorComponent",
    "EnvelopeComponent",
    "CutoffFilter",
    "BandFilter",
    "FilterComponent",
    "create_filter",
    "HarmonicsComponent",
]
