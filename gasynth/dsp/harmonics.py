from typing import List, Sequence, Tuple

from gasynth.core.signal import Signal
from gasynth.dsp.oscillators import sine_wave


def generate_harmonics(freq: float, amplitudes: Sequence[float]) -> List[Tuple[float, float]]:
    """(freq * i, amplitudes[i - 1]) for i = 1..len(amplitudes)."""
    return [(freq * (i + 1), a) for i, a in enumerate(amplitudes)]


def apply_harmonics(signal: Signal, freq: float, amplitudes: Sequence[float], phase: float = 0.0) -> Signal:
    """Adds one sine partial per harmonic on top of `signal`."""
    for f, a in generate_harmonics(freq, amplitudes):
        signal = signal.add_amp(sine_wave(f, signal.duration, signal.sample_rate, a, phase))
    return signal
