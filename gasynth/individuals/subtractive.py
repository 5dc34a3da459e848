"""
Subtractive synthesis: oscillator -> ADSR envelope -> FIR filter,
rendered onto DURATION seconds of silence.
"""
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from gasynth.components.envelope import EnvelopeComponent
from gasynth.components.filters import FilterComponent, create_filter
from gasynth.components.oscillator import OscillatorComponent
from gasynth.core.signal import Signal
from gasynth.core.types import DURATION, SAMPLE_RATE, FilterType
from gasynth.individuals.base import Individual, IndividualGenerator


@dataclass(frozen=True, eq=False)
class SubtractiveIndividual(Individual):
    oscillator: Optional[OscillatorComponent] = None
    envelope: Optional[EnvelopeComponent] = None
    filter: Optional[FilterComponent] = None

    COMPONENTS = ("oscillator", "envelope", "filter")

    def render(self) -> Signal:
        signal = Signal.silence(DURATION, SAMPLE_RATE)
        for gene in (self.oscillator, self.envelope, self.filter):
            if gene is not None:
                signal = gene.apply(signal)
        return signal

    def is_valid(self) -> bool:
        return self.filter is None or self.filter.is_usable(SAMPLE_RATE)

    def fundamental(self) -> Optional[float]:
        return None if self.oscillator is None else self.oscillator.freq


@dataclass(frozen=True)
class SubtractiveGenerator(IndividualGenerator):
    oscillator: bool = False
    envelope: bool = False
    filter_type: Optional[FilterType] = None

    def with_oscillator(self) -> "SubtractiveGenerator":
        return replace(self, oscillator=True)

    def with_envelope(self) -> "SubtractiveGenerator":
        return replace(self, envelope=True)

    def with_filter(self, filter_type: FilterType) -> "SubtractiveGenerator":
        return replace(self, filter_type=FilterType(filter_type))

    def _generate(self, rng: np.random.Generator) -> SubtractiveIndividual:
        return SubtractiveIndividual(
            self.target,
            self.fitness_type,
            oscillator=OscillatorComponent.create(rng) if self.oscillator else None,
            envelope=EnvelopeComponent.create(rng) if self.envelope else None,
            filter=create_filter(self.filter_type, rng) if self.filter_type is not None else None,
        )
