"""
Windowed-sinc FIR filters (Blackman window).
Kernel length is inversely proportional to the transition band:
n = ceil(4 / band), rounded up to an even number of taps.
High-pass kernels are spectral inversions of low-pass kernels; band filters
combine the two.
"""
import math

import numpy as np
import torch
import torchaudio.functional as F

from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE


def blackman_window(size: int) -> torch.Tensor:
    """Blackman window of `size` points (symmetric)."""
    if size < 2:
        return torch.ones(size, dtype=torch.float64)
    i = torch.arange(size, dtype=torch.float64)
    return (
        0.42
        - 0.5 * torch.cos(2.0 * np.pi * i / (size - 1))
        + 0.08 * torch.cos(4.0 * np.pi * i / (size - 1))
    )


def spectral_invert(kernel: torch.Tensor) -> torch.Tensor:
    """Turns a low-pass kernel into a high-pass one (negate, add 1 at the centre tap)."""
    inverted = -kernel.clone()
    inverted[kernel.shape[-1] // 2] += 1.0
    return inverted


def kernel_length(band: float) -> int:
    n = int(math.ceil(4.0 / band))
    if n % 2 == 1:
        n += 1
    return n


def is_usable(kernel: torch.Tensor) -> bool:
    """A kernel is usable when every tap is finite."""
    return kernel.numel() > 0 and bool(torch.isfinite(kernel).all())


class Filter:
    @staticmethod
    def low_pass_kernel(cutoff_freq: float, band: float, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        """
        Windowed-sinc low-pass kernel normalised to unit DC gain.
        A kernel whose taps sum to zero cannot be normalised and comes back non-finite.
        """
        cutoff = cutoff_freq / sample_rate
        n = kernel_length(band)
        i = torch.arange(n, dtype=torch.float64)
        sinc = torch.sinc(2.0 * cutoff * (i - (n - 1) / 2.0))
        kernel = sinc * blackman_window(n)
        return kernel / kernel.sum()

    @staticmethod
    def high_pass_kernel(cutoff_freq: float, band: float, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        return spectral_invert(Filter.low_pass_kernel(cutoff_freq, band, sample_rate))

    @staticmethod
    def band_pass_kernel(low_freq: float, high_freq: float, band: float, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        """Low-pass at high_freq in series with high-pass at low_freq."""
        if low_freq > high_freq:
            raise ValueError(f"low_freq {low_freq} must not exceed high_freq {high_freq}")
        low_pass = Filter.low_pass_kernel(high_freq, band, sample_rate)
        high_pass = Filter.high_pass_kernel(low_freq, band, sample_rate)
        return F.fftconvolve(low_pass, high_pass)

    @staticmethod
    def band_reject_kernel(low_freq: float, high_freq: float, band: float, sample_rate: int = SAMPLE_RATE) -> torch.Tensor:
        """Low-pass at low_freq in parallel with high-pass at high_freq."""
        if low_freq > high_freq:
            raise ValueError(f"low_freq {low_freq} must not exceed high_freq {high_freq}")
        low_pass = Filter.low_pass_kernel(low_freq, band, sample_rate)
        high_pass = Filter.high_pass_kernel(high_freq, band, sample_rate)
        return low_pass + high_pass

    @staticmethod
    def apply(signal: Signal, kernel: torch.Tensor) -> Signal:
        """Convolve the signal with an FIR kernel, keeping the signal length (centred output)."""
        if signal.n_samples == 0:
            return signal
        samples = signal.samples.to(torch.float64)
        filtered = F.fftconvolve(samples, kernel.to(torch.float64), mode="same")
        return Signal(filtered.float(), signal.sample_rate)
