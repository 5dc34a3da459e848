"""
Search request defaults, resolution and clamping.
Default values: single source is defaults.SEARCH_DEFAULTS; use resolve_params(algorithm, {}) for resolved defaults.
"""
from gasynth.params.clamp import clamp_params
from gasynth.params.defaults import DEFAULT_COMPONENTS, SEARCH_DEFAULTS
from gasynth.params.resolve import resolve_params

__all__ = ["SEARCH_DEFAULTS", "DEFAULT_COMPONENTS", "resolve_params", "clamp_params"]
