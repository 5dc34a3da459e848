"""
HTTP service: health, both search endpoints and 400 mapping for bad requests.
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import base64

import pytest
from fastapi.testclient import TestClient

from gasynth.core.io import AudioIO
from gasynth.core.types import SAMPLE_RATE
from gasynth.dsp.oscillators import sine_wave
from gasynth.main import app

client = TestClient(app)


@pytest.fixture(scope="module")
def audio_b64():
    wav = AudioIO.to_bytes(sine_wave(440.0, 0.25, SAMPLE_RATE, amplitude=0.8), SAMPLE_RATE)
    return base64.b64encode(wav).decode("utf-8")


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_genetic_search(audio_b64):
    r = client.post("/search/genetic", json={
        "audio": audio_b64,
        "components": {"oscillator": True, "envelope": True, "filter": "low_pass"},
        "config": {"initial_population": 8, "max_generations": 2, "n_random_additions": 2},
        "seed": 42,
    })
    assert r.status_code == 200, r.text
    data = r.json()
    assert 0.0 <= data["fitness"] <= 2.0
    assert data["generations"] == 2
    assert len(data["history"]) == 3
    assert data["genome"]["filter"]["kind"] == "low_pass"
    assert data["resolved_params"]["config"]["initial_population"] == 8
    assert base64.b64decode(data["audio"])[:4] == b"RIFF"


def test_hillclimbing_search(audio_b64):
    r = client.post("/search/hillclimbing", json={
        "audio": audio_b64,
        "method": "additive",
        "fitness_type": "time_domain_euclidean",
        "config": {"max_iterations": 5},
        "seed": 7,
    })
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["termination"] == "max_iterations"
    assert data["iterations"] == 5
    assert len(data["history"]) == 5
    assert set(data["genome"]) == {"harmonics"}


def test_seeded_requests_repeat(audio_b64):
    body = {"audio": audio_b64, "config": {"max_iterations": 3}, "seed": 3}
    a = client.post("/search/hillclimbing", json=body).json()
    b = client.post("/search/hillclimbing", json=body).json()
    assert a["fitness"] == b["fitness"]
    assert a["genome"] == b["genome"]


@pytest.mark.parametrize("body", [
    {},
    {"audio": "%%% not base64 %%%"},
    {"audio": base64.b64encode(b"garbage").decode("utf-8")},
])
def test_bad_audio_is_400(body):
    r = client.post("/search/genetic", json=body)
    assert r.status_code == 400
    assert "detail" in r.json()


@pytest.mark.parametrize("override", [
    {"method": "granular"},
    {"fitness_type": "cosine"},
    {"components": {"filter": "comb"}},
    {"config": {"population_evolution": "shrinking"}},
    {"config": {"unknown_knob": 1}},
    {"config": {"mutation_rate": "abc"}},
    {"config": {"initial_population": "many"}},
])
def test_bad_configuration_is_400(audio_b64, override):
    r = client.post("/search/genetic", json={"audio": audio_b64, **override})
    assert r.status_code == 400
