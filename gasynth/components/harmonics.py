from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from gasynth.components.base import GenomeComponent
from gasynth.core.params import ParamDef
from gasynth.core.signal import Signal
from gasynth.core.types import NYQUIST
from gasynth.dsp.harmonics import apply_harmonics, generate_harmonics

N_HARMONICS = 9

FREQ = ParamDef("freq", 20.0, 10_000.0, unit="Hz")
AMPLITUDE = ParamDef("amplitude", 0.0, 1.0)


@dataclass(frozen=True)
class HarmonicsComponent(GenomeComponent):
    """Harmonic series: partial i (1-based) sits at freq * i with amplitudes[i - 1]."""
    freq: float
    amplitudes: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, "amplitudes", tuple(float(a) for a in self.amplitudes))

    @classmethod
    def create(cls, rng: np.random.Generator, n_harmonics: int = N_HARMONICS) -> "HarmonicsComponent":
        return cls(FREQ.sample(rng), tuple(AMPLITUDE.sample(rng) for _ in range(n_harmonics)))

    def combine(self, other, mutation_rate: float, rng: np.random.Generator) -> Optional["HarmonicsComponent"]:
        if not isinstance(other, HarmonicsComponent) or len(other.amplitudes) != len(self.amplitudes):
            return None
        return HarmonicsComponent(
            FREQ.combine(self.freq, other.freq, mutation_rate, rng),
            tuple(
                AMPLITUDE.combine(a, b, mutation_rate, rng)
                for a, b in zip(self.amplitudes, other.amplitudes)
            ),
        )

    def evolve(self, step_size: float, rng: np.random.Generator) -> "HarmonicsComponent":
        return HarmonicsComponent(
            FREQ.evolve(self.freq, step_size, rng),
            tuple(AMPLITUDE.evolve(a, step_size, rng) for a in self.amplitudes),
        )

    def partials(self) -> List[Tuple[float, float]]:
        return generate_harmonics(self.freq, self.amplitudes)

    def highest_partial(self) -> float:
        return self.freq * len(self.amplitudes)

    def partials_below_nyquist(self, nyquist: float = NYQUIST) -> bool:
        return self.highest_partial() < nyquist

    def apply(self, signal: Signal) -> Signal:
        return apply_harmonics(signal, self.freq, self.amplitudes)
