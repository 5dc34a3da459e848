"""
Filter genes.

CutoffFilter covers the low-pass and high-pass families (one cutoff), BandFilter
the band-pass and band-reject families (two edges, always kept low <= high).
The family is fixed at creation: it is never evolved, and two filters of
different families do not combine.
"""
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import torch

from gasynth.components.base import GenomeComponent
from gasynth.core.params import ParamDef
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE, FilterType
from gasynth.dsp import filters as fir

FREQ = ParamDef("freq", 0.0, 20_000.0, unit="Hz")
BAND = ParamDef("band", 0.01, 4.0)

CUTOFF_KINDS = (FilterType.LOW_PASS, FilterType.HIGH_PASS)
BAND_KINDS = (FilterType.BAND_PASS, FilterType.BAND_REJECT)


class _FilterGene(GenomeComponent):
    def kernel(self, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        raise NotImplementedError

    def is_usable(self, sample_rate: int = SAMPLE_RATE) -> bool:
        """False when the kernel is degenerate (very wide bands give zero-sum kernels)."""
        return fir.is_usable(self.kernel(sample_rate))

    def apply(self, signal: Signal) -> Signal:
        return fir.Filter.apply(signal, self.kernel(signal.sample_rate))


@dataclass(frozen=True)
class CutoffFilter(_FilterGene):
    kind: FilterType
    cutoff: float
    band: float

    def __post_init__(self):
        if self.kind not in CUTOFF_KINDS:
            raise ValueError(f"CutoffFilter does not support {self.kind}")

    @classmethod
    def create(cls, rng: np.random.Generator, kind: FilterType = FilterType.LOW_PASS) -> "CutoffFilter":
        return cls(kind, FREQ.sample(rng), BAND.sample(rng))

    def combine(self, other, mutation_rate: float, rng: np.random.Generator) -> Optional["CutoffFilter"]:
        if not isinstance(other, CutoffFilter) or other.kind != self.kind:
            return None
        return CutoffFilter(
            self.kind,
            FREQ.combine(self.cutoff, other.cutoff, mutation_rate, rng),
            BAND.combine(self.band, other.band, mutation_rate, rng),
        )

    def evolve(self, step_size: float, rng: np.random.Generator) -> "CutoffFilter":
        return CutoffFilter(
            self.kind,
            FREQ.evolve(self.cutoff, step_size, rng),
            BAND.evolve(self.band, step_size, rng),
        )

    def kernel(self, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        if self.kind == FilterType.LOW_PASS:
            return fir.Filter.low_pass_kernel(self.cutoff, self.band, sample_rate)
        return fir.Filter.high_pass_kernel(self.cutoff, self.band, sample_rate)


@dataclass(frozen=True)
class BandFilter(_FilterGene):
    kind: FilterType
    low: float
    high: float
    band: float

    def __post_init__(self):
        if self.kind not in BAND_KINDS:
            raise ValueError(f"BandFilter does not support {self.kind}")
        if self.low > self.high:
            low, high = self.high, self.low
            object.__setattr__(self, "low", low)
            object.__setattr__(self, "high", high)

    @classmethod
    def create(cls, rng: np.random.Generator, kind: FilterType = FilterType.BAND_PASS) -> "BandFilter":
        return cls(kind, FREQ.sample(rng), FREQ.sample(rng), BAND.sample(rng))

    def combine(self, other, mutation_rate: float, rng: np.random.Generator) -> Optional["BandFilter"]:
        if not isinstance(other, BandFilter) or other.kind != self.kind:
            return None
        return BandFilter(
            self.kind,
            FREQ.combine(self.low, other.low, mutation_rate, rng),
            FREQ.combine(self.high, other.high, mutation_rate, rng),
            BAND.combine(self.band, other.band, mutation_rate, rng),
        )

    def evolve(self, step_size: float, rng: np.random.Generator) -> "BandFilter":
        return BandFilter(
            self.kind,
            FREQ.evolve(self.low, step_size, rng),
            FREQ.evolve(self.high, step_size, rng),
            BAND.evolve(self.band, step_size, rng),
        )

    def kernel(self, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        if self.kind == FilterType.BAND_PASS:
            return fir.Filter.band_pass_kernel(self.low, self.high, self.band, sample_rate)
        return fir.Filter.band_reject_kernel(self.low, self.high, self.band, sample_rate)


FilterComponent = Union[CutoffFilter, BandFilter]


def create_filter(kind: FilterType, rng: np.random.Generator) -> FilterComponent:
    """Random filter gene of the given family."""
    kind = FilterType(kind)
    if kind in CUTOFF_KINDS:
        return CutoffFilter.create(rng, kind)
    return BandFilter.create(rng, kind)
