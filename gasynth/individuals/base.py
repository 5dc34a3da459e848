"""
Individual and IndividualGenerator contracts.

An Individual is an immutable genome bound to the (shared) target signal and a
fitness type. Its fitness is computed once, while the instance is being
constructed, so it always matches the components it holds. Individuals are
ordered by fitness.

A generator is an immutable, fluently configured factory for random
Individuals of one synthesis method.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional, Tuple

import numpy as np

from gasynth.core.errors import ConfigurationError, SignalProcessingError
from gasynth.core.io import AudioIO
from gasynth.core.signal import Signal
from gasynth.core.types import FitnessType
from gasynth.fitness.evaluator import FitnessEvaluator


@dataclass(frozen=True, eq=False)
class Individual(ABC):
    target: Signal = field(repr=False)
    fitness_type: FitnessType
    fitness: float = field(init=False, default=0.0)

    # Names of the optional gene fields, in rendering order
    COMPONENTS: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self):
        object.__setattr__(self, "fitness_type", FitnessType(self.fitness_type))
        fitness = self._evaluate()
        if math.isnan(fitness):
            raise SignalProcessingError(f"{type(self).__name__} produced a NaN fitness")
        object.__setattr__(self, "fitness", fitness)

    def _evaluate(self) -> float:
        if not self.is_valid():
            return 0.0
        return FitnessEvaluator.score(self.render(), self.target, self.fitness_type)

    def __lt__(self, other: "Individual") -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness < other.fitness

    def __le__(self, other: "Individual") -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness <= other.fitness

    def __gt__(self, other: "Individual") -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness > other.fitness

    def __ge__(self, other: "Individual") -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness >= other.fitness

    @abstractmethod
    def render(self) -> Signal:
        """Synthesises the genome into a signal."""

    @abstractmethod
    def is_valid(self) -> bool:
        """False for genomes that cannot be rendered meaningfully; they score 0.0."""

    @abstractmethod
    def fundamental(self) -> Optional[float]:
        ...

    def components(self) -> dict:
        return {name: getattr(self, name) for name in self.COMPONENTS}

    def crossover(self, other: "Individual", mutation_rate: float, rng: np.random.Generator) -> "Individual":
        """
        Offspring of self and other. Each gene is combined when both parents
        carry it and the two are compatible, otherwise the offspring lacks it.
        """
        genes = {}
        mine, theirs = self.components(), other.components()
        for name in self.COMPONENTS:
            a, b = mine[name], theirs.get(name)
            genes[name] = None if a is None or b is None else a.combine(b, mutation_rate, rng)
        return type(self)(self.target, self.fitness_type, **genes)

    def evolve(self, step_size: float, rng: np.random.Generator) -> "Individual":
        genes = {
            name: None if gene is None else gene.evolve(step_size, rng)
            for name, gene in self.components().items()
        }
        return type(self)(self.target, self.fitness_type, **genes)

    def genome(self) -> dict:
        """Plain-dict view of the genes, for export."""
        return {
            name: None if gene is None else gene.as_dict()
            for name, gene in self.components().items()
        }


@dataclass(frozen=True)
class IndividualGenerator(ABC):
    target: Optional[Signal] = field(default=None, repr=False)
    fitness_type: FitnessType = FitnessType.FREQ_DOMAIN_MSE

    def with_target(self, target: Signal):
        return replace(self, target=target)

    def with_target_file(self, path):
        return self.with_target(AudioIO.load_wav(path))

    def with_fitness_type(self, fitness_type: FitnessType):
        return replace(self, fitness_type=FitnessType(fitness_type))

    def generate(self, rng: np.random.Generator) -> Individual:
        """Random individual drawn from the enabled component ranges."""
        if self.target is None:
            raise ConfigurationError(f"{type(self).__name__} has no target signal")
        return self._generate(rng)

    @abstractmethod
    def _generate(self, rng: np.random.Generator) -> Individual:
        ...
