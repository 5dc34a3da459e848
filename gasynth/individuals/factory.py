"""Generator construction from a plain component description (as sent in requests)."""
from typing import Any, Mapping

from gasynth.core.errors import ConfigurationError
from gasynth.core.types import FilterType
from gasynth.individuals.additive import AdditiveGenerator
from gasynth.individuals.base import IndividualGenerator
from gasynth.individuals.subtractive import SubtractiveGenerator

_KNOWN_COMPONENTS = {
    "subtractive": {"oscillator", "envelope", "filter"},
    "additive": {"harmonics"},
}


def build_generator(method: str, components: Mapping[str, Any]) -> IndividualGenerator:
    """
    method: "subtractive" or "additive".
    components: {"oscillator": bool, "envelope": bool, "filter": FilterType value or None}
    for subtractive, {"harmonics": bool} for additive.
    """
    if method not in _KNOWN_COMPONENTS:
        raise ConfigurationError(f"Unknown synthesis method: {method!r}")
    unknown = set(components) - _KNOWN_COMPONENTS[method]
    if unknown:
        raise ConfigurationError(f"Unknown {method} components: {sorted(unknown)}")

    if method == "additive":
        generator = AdditiveGenerator()
        if components.get("harmonics"):
            generator = generator.with_harmonics()
        return generator

    generator = SubtractiveGenerator()
    if components.get("oscillator"):
        generator = generator.with_oscillator()
    if components.get("envelope"):
        generator = generator.with_envelope()
    filter_type = components.get("filter")
    if filter_type:
        try:
            generator = generator.with_filter(FilterType(filter_type))
        except ValueError as e:
            raise ConfigurationError(f"Unknown filter type: {filter_type!r}") from e
    return generator
