"""
Genome component contract.

Every synthesiser component that can be evolved implements three operations:
- create(rng): draw each parameter uniformly from its legal range;
- combine(other, mutation_rate, rng): per-parameter blend-or-mutate, or None
  when the two components are of different kinds;
- evolve(step_size, rng): bounded local random walk of every parameter.

Components are frozen dataclasses; each operation returns a new instance.
Components whose genes are plain scalars only need to declare PARAMS, one
ParamDef per dataclass field of the same name.
"""
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import ClassVar, Optional, Tuple

import numpy as np

from gasynth.core.params import ParamDef
from gasynth.core.signal import Signal


class GenomeComponent(ABC):
    PARAMS: ClassVar[Tuple[ParamDef, ...]] = ()

    @classmethod
    def create(cls, rng: np.random.Generator):
        return cls(**{p.name: p.sample(rng) for p in cls.PARAMS})

    def combine(self, other, mutation_rate: float, rng: np.random.Generator) -> Optional["GenomeComponent"]:
        if type(other) is not type(self):
            return None
        return type(self)(**{
            p.name: p.combine(getattr(self, p.name), getattr(other, p.name), mutation_rate, rng)
            for p in self.PARAMS
        })

    def evolve(self, step_size: float, rng: np.random.Generator):
        return type(self)(**{
            p.name: p.evolve(getattr(self, p.name), step_size, rng)
            for p in self.PARAMS
        })

    @abstractmethod
    def apply(self, signal: Signal) -> Signal:
        """Returns the signal transformed (or produced) by this component."""

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
