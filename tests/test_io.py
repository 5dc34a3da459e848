import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import pytest
import soundfile as sf

from gasynth.core.errors import AudioReadError
from gasynth.core.io import AudioIO
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE
from gasynth.dsp.oscillators import sine_wave
from gasynth.individuals import SubtractiveGenerator


def test_save_and_load_wav(tmp_path):
    sig = sine_wave(440.0, 0.1, SAMPLE_RATE, amplitude=0.5)
    path = tmp_path / "out" / "tone.wav"
    AudioIO.save_wav(sig, SAMPLE_RATE, path)
    loaded = AudioIO.load_wav(path)
    assert loaded.sample_rate == SAMPLE_RATE
    assert loaded.n_samples == sig.n_samples
    assert np.allclose(loaded.samples.numpy(), sig.samples.numpy(), atol=1e-3)


def test_save_clips_out_of_range(tmp_path):
    path = tmp_path / "loud.wav"
    AudioIO.save_wav(Signal([2.0, -3.0, 0.5]), SAMPLE_RATE, path)
    data, _ = sf.read(str(path), dtype="float32")
    assert data.max() <= 1.0
    assert data.min() >= -1.0


def test_bytes_roundtrip_mixes_stereo_to_mono(tmp_path):
    stereo = np.stack([np.full(100, 0.5), np.full(100, -0.5)], axis=1).astype(np.float32)
    path = tmp_path / "stereo.wav"
    sf.write(str(path), stereo, SAMPLE_RATE, subtype="FLOAT")
    sig = AudioIO.from_bytes(path.read_bytes())
    assert sig.n_samples == 100
    assert np.allclose(sig.samples.numpy(), 0.0)


def test_to_bytes_is_wav():
    payload = AudioIO.to_bytes(sine_wave(220.0, 0.05, SAMPLE_RATE), SAMPLE_RATE)
    assert payload[:4] == b"RIFF"
    assert AudioIO.from_bytes(payload).n_samples == int(0.05 * SAMPLE_RATE)


def test_unreadable_input_raises(tmp_path):
    with pytest.raises(AudioReadError):
        AudioIO.load_wav(tmp_path / "missing.wav")
    with pytest.raises(AudioReadError):
        AudioIO.from_bytes(b"not audio at all")


def test_generator_target_from_file(tmp_path):
    path = tmp_path / "target.wav"
    AudioIO.save_wav(sine_wave(440.0, 0.1, SAMPLE_RATE), SAMPLE_RATE, path)
    gen = SubtractiveGenerator().with_target_file(path).with_oscillator()
    assert gen.target.n_samples == int(0.1 * SAMPLE_RATE)
    ind = gen.generate(np.random.default_rng(0))
    assert 0.0 <= ind.fitness <= 2.0
