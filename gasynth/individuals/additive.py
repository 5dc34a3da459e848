"""Additive synthesis: a harmonic series of sine partials."""
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from gasynth.components.harmonics import HarmonicsComponent
from gasynth.core.signal import Signal
from gasynth.core.types import DURATION, NYQUIST, SAMPLE_RATE
from gasynth.individuals.base import Individual, IndividualGenerator


@dataclass(frozen=True, eq=False)
class AdditiveIndividual(Individual):
    harmonics: Optional[HarmonicsComponent] = None

    COMPONENTS = ("harmonics",)

    def render(self) -> Signal:
        signal = Signal.silence(DURATION, SAMPLE_RATE)
        if self.harmonics is not None:
            signal = self.harmonics.apply(signal)
        return signal

    def is_valid(self) -> bool:
        # Partials at or above Nyquist alias; such genomes are never rendered
        return self.harmonics is None or self.harmonics.partials_below_nyquist(NYQUIST)

    def fundamental(self) -> Optional[float]:
        return None if self.harmonics is None else self.harmonics.freq


@dataclass(frozen=True)
class AdditiveGenerator(IndividualGenerator):
    harmonics: bool = False

    def with_harmonics(self) -> "AdditiveGenerator":
        return replace(self, harmonics=True)

    def _generate(self, rng: np.random.Generator) -> AdditiveIndividual:
        return AdditiveIndividual(
            self.target,
            self.fitness_type,
            harmonics=HarmonicsComponent.create(rng) if self.harmonics else None,
        )
