import torch
from typing import Optional, Union

from gasynth.core.signal import Signal


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def ms_to_s(ms: float) -> float:
    """Convert milliseconds to seconds."""
    return ms / 1000.0


def clamp01(x: Union[float, torch.Tensor]) -> Union[float, torch.Tensor]:
    """Clamp value(s) to [0, 1]. Accepts scalar or tensor."""
    if isinstance(x, torch.Tensor):
        return torch.clamp(x, 0.0, 1.0)
    return max(0.0, min(1.0, float(x)))


def _segment(start: float, end: float, n: int, seconds: float, curve: str) -> torch.Tensor:
    """n samples moving from start to end; exp curves settle within ~3 time constants."""
    if n <= 0:
        return torch.zeros(0)
    if curve == "linear":
        return torch.linspace(start, end, n)
    t = torch.linspace(0, seconds, n)
    tau = (seconds / 3.0) if seconds > 0 else 1e-6
    return end + (start - end) * torch.exp(-t / tau)


# -----------------------------------------------------------------------------
# Sample-accurate ADSR
# -----------------------------------------------------------------------------

class ADSR:
    """
    ADSR amplitude envelope for offline rendering.
    Timeline: Attack(0 -> 1) -> Decay(to sustain) -> Sustain(until gate) -> Release(to 0).
    If gate_s is None the gate closes at duration - release, so the release ends with the buffer.
    """

    def __init__(
        self,
        sample_rate: int,
        attack_s: float,
        decay_s: float,
        sustain_level: float,
        release_s: float,
        curve: str = "exp",
    ):
        self.sample_rate = sample_rate
        self.attack_s = max(0.0, float(attack_s))
        self.decay_s = max(0.0, float(decay_s))
        self.sustain_level = float(clamp01(sustain_level))
        self.release_s = max(0.0, float(release_s))
        self.curve = curve if curve in ("linear", "exp") else "exp"

    @classmethod
    def from_ms(cls, sample_rate: int, attack_ms: float, decay_ms: float, sustain_level: float, release_ms: float, curve: str = "exp") -> "ADSR":
        return cls(sample_rate, ms_to_s(attack_ms), ms_to_s(decay_ms), sustain_level, ms_to_s(release_ms), curve)

    def render(self, duration_s: float, gate_s: Optional[float] = None) -> torch.Tensor:
        """Envelope of exactly int(duration_s * sample_rate) samples."""
        sr = self.sample_rate
        n = int(duration_s * sr)
        if n <= 0:
            return torch.zeros(0)

        if gate_s is None:
            gate_s = max(self.attack_s + self.decay_s, duration_s - self.release_s)

        n_attack = min(int(self.attack_s * sr), n)
        n_decay_end = min(int((self.attack_s + self.decay_s) * sr), n)
        n_gate = min(max(int(gate_s * sr), n_decay_end), n)
        n_release_end = min(n_gate + int(self.release_s * sr), n)

        env = torch.zeros(n)

        # Attack ramps linearly regardless of curve
        if n_attack > 0:
            env[:n_attack] = torch.linspace(0.0, 1.0, n_attack)

        decay = _segment(1.0, self.sustain_level, n_decay_end - n_attack, self.decay_s, self.curve)
        env[n_attack:n_decay_end] = decay

        # Hold the level the decay actually reached (exp decay stops just above sustain)
        sustain_val = float(decay[-1]) if decay.numel() > 0 else self.sustain_level
        env[n_decay_end:n_gate] = sustain_val

        level_at_gate = float(env[n_gate - 1]) if n_gate > 0 else sustain_val
        release = _segment(level_at_gate, 0.0, n_release_end - n_gate, self.release_s, self.curve)
        env[n_gate:n_release_end] = release

        # Past release: zeros
        return env

    def apply(self, signal: Signal, gate_s: Optional[float] = None) -> Signal:
        """Multiply a signal by this envelope rendered at the signal's own length."""
        env = self.render(signal.duration, gate_s)
        n = min(env.shape[-1], signal.n_samples)
        shaped = signal.samples.clone()
        shaped[:n] = shaped[:n] * env[:n]
        if n < signal.n_samples:
            shaped[n:] = 0.0
        return Signal(shaped, signal.sample_rate)
