"""
Oscillator generators sampled at t = i / sample_rate.
Every waveform starts at sample 0 with the given phase offset (radians).
"""

import torch
import numpy as np

from gasynth.core.signal import Signal


def _sample_index(duration: float, sample_rate: float) -> torch.Tensor:
    return torch.arange(int(duration * sample_rate), dtype=torch.float64)


class Oscillator:
    @staticmethod
    def sine(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> torch.Tensor:
        """
        Generates a sine wave.

        Args:
            frequency: Frequency (Hz)
            duration: Duration in seconds
            sample_rate: Sample rate
            amplitude: Peak amplitude
            phase: Initial phase offset (radians)
        """
        t = _sample_index(duration, sample_rate) / sample_rate
        wave = amplitude * torch.sin(2 * np.pi * frequency * t + phase)
        return wave.float()

    @staticmethod
    def square(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> torch.Tensor:
        """
        Generates a square wave: +amplitude for the first half of each cycle, -amplitude for the second.
        The phase offset shifts the cycle by phase / (2 * pi) of a period.
        """
        samples_cycle = sample_rate / frequency
        phase_factor = samples_cycle / (2 * np.pi)
        i = _sample_index(duration, sample_rate)
        position = torch.remainder(i + phase_factor * phase, samples_cycle)
        wave = torch.where(position < samples_cycle / 2.0, 1.0, -1.0).to(torch.float64)
        return (amplitude * wave).float()

    @staticmethod
    def saw(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> torch.Tensor:
        """Generates a rising sawtooth from -amplitude to +amplitude once per period."""
        phase_factor = sample_rate / (frequency * 2 * np.pi)
        i = _sample_index(duration, sample_rate)
        position = torch.remainder((i + phase_factor * phase) / sample_rate, 1.0 / frequency)
        wave = frequency * position * 2.0 - 1.0
        return (amplitude * wave).float()


def sine_wave(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> Signal:
    return Signal(Oscillator.sine(frequency, duration, sample_rate, amplitude, phase), int(sample_rate))


def square_wave(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> Signal:
    return Signal(Oscillator.square(frequency, duration, sample_rate, amplitude, phase), int(sample_rate))


def saw_wave(frequency: float, duration: float, sample_rate: float, amplitude: float = 1.0, phase: float = 0.0) -> Signal:
    return Signal(Oscillator.saw(frequency, duration, sample_rate, amplitude, phase), int(sample_rate))
