"""
Config clamping: keeps rates in [0, 1] and sizes/counts non-negative so that a
resolved request always builds a runnable optimizer.
Returns a new dict (does not mutate input).
"""
from gasynth.core.errors import ConfigurationError

# key -> (min, max); None leaves that side open
_BOUNDS = {
    "genetic": {
        "initial_population": (2, None),
        "n_random_additions": (0, None),
        "mutation_rate": (0.0, 1.0),
        "max_generations": (0, None),
        "max_workers": (1, None),
    },
    "hillclimbing": {
        "init_step_size": (0.0, None),
        "min_step_size": (0.0, None),
        "max_iterations": (0, None),
        "max_unsuccessful_iterations": (0, None),
    },
}


def _clamp(key, value, low, high):
    kind = int if isinstance(low, int) and not isinstance(low, bool) else float
    try:
        v = kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e
    if low is not None and v < low:
        v = kind(low)
    if high is not None and v > high:
        v = kind(high)
    return v


def clamp_params(algorithm: str, params: dict) -> dict:
    result = params.copy()
    config = dict(result.get("config") or {})
    for key, (low, high) in _BOUNDS.get(algorithm, {}).items():
        if config.get(key) is not None:
            config[key] = _clamp(key, config[key], low, high)
    result["config"] = config
    return result
