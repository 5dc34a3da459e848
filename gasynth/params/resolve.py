"""
Request resolution: deep-merge SEARCH_DEFAULTS[algorithm] with incoming params.
Incoming params override defaults at any nesting level. The component set
falls back to DEFAULT_COMPONENTS of the resolved method when none is given.
"""
from typing import Any, Dict

from gasynth.core.errors import ConfigurationError
from gasynth.params.defaults import DEFAULT_COMPONENTS, SEARCH_DEFAULTS


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dicts. override values take precedence.
    Returns a new dict (does not mutate inputs).
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def resolve_params(algorithm: str, params: dict) -> dict:
    """
    Resolve a search request by:
    1. Starting from SEARCH_DEFAULTS[algorithm]
    2. Merging incoming params onto it
    3. Filling "components" from the method's defaults if the request has none

    Args:
        algorithm: "genetic" or "hillclimbing"
        params: Incoming request dict (may be partial)
    """
    if algorithm not in SEARCH_DEFAULTS:
        raise ConfigurationError(f"Unknown search algorithm: {algorithm!r}")

    resolved = _deep_merge(SEARCH_DEFAULTS[algorithm], params or {})

    method = resolved.get("method")
    if method not in DEFAULT_COMPONENTS:
        raise ConfigurationError(f"Unknown synthesis method: {method!r}")
    if not resolved.get("components"):
        resolved["components"] = dict(DEFAULT_COMPONENTS[method])
    return resolved
