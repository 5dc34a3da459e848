from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import logging

# Configure Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("gasynth")

app = FastAPI(
    title="GA Synth Search",
    version="1.0.0",
    description="Evolutionary search for synthesiser parameters matching a target sound"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


from gasynth.core.errors import GASynthError, ConfigurationError


@app.exception_handler(GASynthError)
async def gasynth_error_handler(request: Request, exc: GASynthError):
    logger.warning(f"{request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "gasynth"}


import base64
import binascii
from dataclasses import fields

import numpy as np

from gasynth.algorithms.genetic import GeneticConfig, GeneticOptimizerBuilder
from gasynth.algorithms.hillclimbing import HillClimbingConfig, HillClimbingOptimizerBuilder
from gasynth.core.io import AudioIO
from gasynth.core.types import SAMPLE_RATE
from gasynth.individuals.factory import build_generator
from gasynth.params.clamp import clamp_params
from gasynth.params.resolve import resolve_params


def _decode_target(audio):
    if not audio:
        raise ConfigurationError("Request has no target audio")
    try:
        payload = base64.b64decode(audio, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(f"Target audio is not valid base64: {e}") from e
    return AudioIO.from_bytes(payload)


def _make_config(config_cls, values: dict):
    known = {f.name for f in fields(config_cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(f"Unknown {config_cls.__name__} keys: {sorted(unknown)}")
    try:
        return config_cls(**values)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def _prepare(algorithm: str, request: dict):
    """Splits a request into (target, resolved params, generator, rng)."""
    params = request.copy()
    target = _decode_target(params.pop("audio", None))
    seed = params.pop("seed", None)

    resolved = clamp_params(algorithm, resolve_params(algorithm, params))
    try:
        generator = (
            build_generator(resolved["method"], resolved["components"])
            .with_target(target)
            .with_fitness_type(resolved["fitness_type"])
        )
    except ValueError as e:
        raise ConfigurationError(f"Unknown fitness type: {resolved['fitness_type']!r}") from e
    return resolved, generator, np.random.default_rng(seed)


def _result(best, history, resolved: dict) -> dict:
    wav_bytes = AudioIO.to_bytes(best.render(), SAMPLE_RATE, format='WAV')
    return {
        "audio": base64.b64encode(wav_bytes).decode("utf-8"),
        "fitness": best.fitness,
        "fundamental": best.fundamental(),
        "genome": best.genome(),
        "history": history.as_dicts(),
        "resolved_params": resolved,
    }


@app.post("/search/genetic")
def search_genetic(request: dict):
    """
    Runs a genetic search against the base64 WAV in request["audio"].
    Returns JSON with the best individual's base64 audio, its genome and the per-generation history.
    """
    resolved, generator, rng = _prepare("genetic", request)
    optimizer = (
        GeneticOptimizerBuilder()
        .generator(generator)
        .config(_make_config(GeneticConfig, resolved["config"]))
        .rng(rng)
        .build()
    )
    best = optimizer.run()
    result = _result(best, optimizer.history, resolved)
    result["generations"] = optimizer.generation
    return result


@app.post("/search/hillclimbing")
def search_hillclimbing(request: dict):
    """
    Runs a hill climb against the base64 WAV in request["audio"].
    Returns JSON with the final individual's base64 audio, its genome, the per-iteration history
    and why the climb stopped.
    """
    resolved, generator, rng = _prepare("hillclimbing", request)
    optimizer = (
        HillClimbingOptimizerBuilder()
        .generator(generator)
        .config(_make_config(HillClimbingConfig, resolved["config"]))
        .rng(rng)
        .build()
    )
    best = optimizer.run()
    result = _result(best, optimizer.history, resolved)
    result["iterations"] = optimizer.iteration
    result["termination"] = optimizer.termination.value
    return result


if __name__ == "__main__":
    uvicorn.run("gasynth.main:app", host="0.0.0.0", port=8000, reload=True)
