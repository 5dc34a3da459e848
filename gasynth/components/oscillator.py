"""
Oscillator gene: one fundamental frequency driving a sine, a square and a saw
partial, each with its own amplitude and phase.
"""
import math
from dataclasses import dataclass

from gasynth.components.base import GenomeComponent
from gasynth.core.params import ParamDef
from gasynth.core.signal import Signal
from gasynth.dsp.oscillators import saw_wave, sine_wave, square_wave

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class OscillatorComponent(GenomeComponent):
    freq: float
    sine_amp: float
    sine_phase: float
    square_amp: float
    square_phase: float
    saw_amp: float
    saw_phase: float

    PARAMS = (
        ParamDef("freq", 20.0, 10_000.0, unit="Hz"),
        ParamDef("sine_amp", 0.0, 1.0),
        ParamDef("sine_phase", 0.0, TWO_PI, unit="rad"),
        ParamDef("square_amp", 0.0, 1.0),
        ParamDef("square_phase", 0.0, TWO_PI, unit="rad"),
        ParamDef("saw_amp", 0.0, 1.0),
        ParamDef("saw_phase", 0.0, TWO_PI, unit="rad"),
    )

    def apply(self, signal: Signal) -> Signal:
        """Adds the three partials onto `signal` over its own duration."""
        duration, sr = signal.duration, signal.sample_rate
        signal = signal.add_amp(sine_wave(self.freq, duration, sr, self.sine_amp, self.sine_phase))
        signal = signal.add_amp(square_wave(self.freq, duration, sr, self.square_amp, self.square_phase))
        return signal.add_amp(saw_wave(self.freq, duration, sr, self.saw_amp, self.saw_phase))
