"""
Bounded genome parameters and the three per-parameter random operations
every genome component is built from: uniform draw, blend-or-mutate, and
bounded local random walk.
The random source is always passed in by the caller.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np


# -----------------------------------------------------------------------------
# Param definition
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParamDef:
    """Legal range [min, max) of a single gene. integer=True truncates values to int."""
    name: str
    min: float
    max: float
    unit: Optional[str] = None
    integer: bool = False

    @property
    def span(self) -> float:
        return self.max - self.min

    def cast(self, value: float):
        return int(value) if self.integer else float(value)

    def sample(self, rng: np.random.Generator):
        """Uniform draw from the legal range."""
        if self.integer:
            return int(rng.integers(int(self.min), int(self.max)))
        return float(rng.uniform(self.min, self.max))

    def combine(self, v_self: float, v_other: float, mutation_rate: float, rng: np.random.Generator):
        return self.cast(random_weighted_average(v_self, v_other, mutation_rate, self.sample(rng), rng))

    def evolve(self, value: float, step_size: float, rng: np.random.Generator):
        return self.cast(evolve_value(value, self.min, self.max, step_size, rng))


# -----------------------------------------------------------------------------
# Random operators
# -----------------------------------------------------------------------------

def random_weighted_average(
    v_self: float,
    v_other: float,
    mutation_rate: float,
    random_val: float,
    rng: np.random.Generator,
) -> float:
    """
    With probability mutation_rate return random_val (mutation), otherwise
    beta * v_self + (1 - beta) * v_other with beta ~ U[0, 1) (crossover).
    """
    beta = rng.random()
    mutation = rng.random()
    if mutation < mutation_rate:
        return random_val
    return beta * v_self + (1.0 - beta) * v_other


def evolve_value(value: float, min_v: float, max_v: float, step_size: float, rng: np.random.Generator) -> float:
    """Uniform draw from a window of width (max_v - min_v) * step_size centred on value, clamped to bounds."""
    dist = (max_v - min_v) * step_size / 2.0
    low = max(min_v, value - dist)
    high = min(max_v, value + dist)
    if high <= low:
        return clamp_if_bounds(value, min_v, max_v)
    return float(rng.uniform(low, high))


def clamp_if_bounds(
    value: float,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> float:
    """
    Clamp value to [min, max] when bounds are not None.
    If both are None, returns value unchanged.
    """
    v = float(value)
    if min is not None and v < min:
        return min
    if max is not None and v > max:
        return max
    return v
