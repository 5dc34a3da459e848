import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf
import torch

from gasynth.core.errors import AudioReadError
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _to_numpy(waveform) -> np.ndarray:
    if isinstance(waveform, Signal):
        waveform = waveform.samples
    if isinstance(waveform, torch.Tensor):
        return waveform.detach().cpu().numpy()
    return np.asarray(waveform, dtype=np.float32)


def _to_signal(data: np.ndarray, sample_rate: int) -> Signal:
    # Mix multichannel files down to mono
    if data.ndim > 1:
        data = data.mean(axis=1)
    if sample_rate != SAMPLE_RATE:
        logger.warning(f"Target sample rate {sample_rate} Hz differs from render rate {SAMPLE_RATE} Hz")
    return Signal(torch.from_numpy(np.ascontiguousarray(data, dtype=np.float32)), sample_rate)


class AudioIO:
    @staticmethod
    def save_wav(waveform, sample_rate: int, path: PathLike, normalize: bool = False):
        """Saves a signal or tensor to a WAV file, creating parent directories."""
        data = _to_numpy(waveform)

        if normalize:
            peak = np.max(np.abs(data)) if data.size else 0.0
            if peak > 0:
                data = data / peak

        # Clamp to avoid wrap-around clipping
        data = np.clip(data, -1.0, 1.0)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        sf.write(str(path), data, sample_rate)
        logger.info(f"Signal successfully written to file {path}")

    @staticmethod
    def to_bytes(waveform, sample_rate: int, format: str = 'WAV') -> bytes:
        """Returns audio file as bytes (for API responses)."""
        buffer = io.BytesIO()
        data = np.clip(_to_numpy(waveform), -1.0, 1.0)
        sf.write(buffer, data, sample_rate, format=format)
        return buffer.getvalue()

    @staticmethod
    def load_wav(path: PathLike) -> Signal:
        """Decodes a WAV file into a mono float32 Signal."""
        try:
            data, sample_rate = sf.read(str(path), dtype='float32', always_2d=False)
        except (RuntimeError, OSError) as e:
            raise AudioReadError(f"Could not read audio from {path}: {e}") from e
        return _to_signal(data, sample_rate)

    @staticmethod
    def from_bytes(payload: bytes) -> Signal:
        """Decodes an in-memory audio file (e.g. a request body) into a Signal."""
        try:
            data, sample_rate = sf.read(io.BytesIO(payload), dtype='float32', always_2d=False)
        except (RuntimeError, OSError) as e:
            raise AudioReadError(f"Could not decode audio payload: {e}") from e
        return _to_signal(data, sample_rate)
