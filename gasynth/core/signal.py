"""
Immutable mono signal: float32 samples at a fixed sample rate.
One Signal instance is shared by reference as the target of every individual
in a run, so nothing here mutates the underlying tensor.
"""
from typing import Iterable, Union

import torch

from gasynth.core.types import ANALYSIS_LENGTH, DURATION, SAMPLE_RATE


class Signal:
    __slots__ = ("_samples", "sample_rate")

    def __init__(self, samples: Union[torch.Tensor, Iterable[float]], sample_rate: int = SAMPLE_RATE):
        if isinstance(samples, torch.Tensor):
            data = samples.detach().reshape(-1).to(torch.float32).clone()
        else:
            data = torch.tensor(list(samples), dtype=torch.float32)
        self._samples = data
        self.sample_rate = int(sample_rate)

    @classmethod
    def silence(cls, duration: float = DURATION, sample_rate: int = SAMPLE_RATE) -> "Signal":
        """Zero-valued signal of int(duration * sample_rate) samples."""
        return cls(torch.zeros(int(duration * sample_rate)), sample_rate)

    @classmethod
    def from_samples(cls, samples: Iterable[float], sample_rate: int = SAMPLE_RATE) -> "Signal":
        return cls(samples, sample_rate)

    @property
    def samples(self) -> torch.Tensor:
        """Read-only view of the samples. Callers must not write into it."""
        return self._samples

    @property
    def n_samples(self) -> int:
        return self._samples.shape[-1]

    @property
    def duration(self) -> float:
        return self.n_samples / self.sample_rate

    def add_amp(self, other: "Signal") -> "Signal":
        """Elementwise sum over the overlapping length."""
        n = min(self.n_samples, other.n_samples)
        return Signal(self._samples[:n] + other.samples[:n], self.sample_rate)

    def scale_amp(self, factor: float) -> "Signal":
        return Signal(self._samples * factor, self.sample_rate)

    def normalise(self, length: int = ANALYSIS_LENGTH) -> "Signal":
        """
        Truncate or zero-pad to exactly `length` samples.
        Applying it to a signal already at `length` returns an equal signal.
        """
        n = self.n_samples
        if n >= length:
            return Signal(self._samples[:length], self.sample_rate)
        return Signal(torch.nn.functional.pad(self._samples, (0, length - n)), self.sample_rate)

    def is_finite(self) -> bool:
        return bool(torch.isfinite(self._samples).all())

    def __len__(self) -> int:
        return self.n_samples

    def __iter__(self):
        return iter(self._samples.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signal):
            return NotImplemented
        return self.sample_rate == other.sample_rate and torch.equal(self._samples, other.samples)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Signal(n_samples={self.n_samples}, sample_rate={self.sample_rate})"
