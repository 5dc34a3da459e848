from dataclasses import dataclass

from gasynth.components.base import GenomeComponent
from gasynth.core.params import ParamDef
from gasynth.core.signal import Signal
from gasynth.dsp.envelopes import ADSR

SUSTAIN_STEPS = 255


@dataclass(frozen=True)
class EnvelopeComponent(GenomeComponent):
    """ADSR gene. Times are whole milliseconds; sustain is an integer level out of 255."""
    attack: int
    decay: int
    sustain: int
    release: int

    PARAMS = (
        ParamDef("attack", 0, 2000, unit="ms", integer=True),
        ParamDef("decay", 0, 3000, unit="ms", integer=True),
        ParamDef("sustain", 0, SUSTAIN_STEPS, integer=True),
        ParamDef("release", 0, 5000, unit="ms", integer=True),
    )

    @property
    def sustain_level(self) -> float:
        return self.sustain / SUSTAIN_STEPS

    def adsr(self, sample_rate: int) -> ADSR:
        return ADSR.from_ms(sample_rate, self.attack, self.decay, self.sustain_level, self.release)

    def apply(self, signal: Signal) -> Signal:
        return self.adsr(signal.sample_rate).apply(signal)
