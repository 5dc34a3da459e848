"""
Generational genetic search over synthesiser genomes.

One generation:
1. the current population plus n_random_additions fresh immigrants form the pool;
2. the fittest half survives (half the *initial* size in CONSTANT mode, half
   the pool in INCREASING mode, rounded down, never fewer than one pair);
3. survivors are shuffled and paired twice; every pair yields one offspring;
4. survivors + offspring, sorted fittest first, become the next population.
   In CONSTANT mode any places still free (initial sizes not divisible by 4)
   go to the best non-survivors of the pool.

Immigrants and offspring are scored on a thread pool. Each task draws from its
own child generator spawned from the optimizer's generator, so a seeded run
does not depend on how the pool schedules work.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from gasynth.analytics.recorder import GenerationRow, Recorder, fundamental_or_zero
from gasynth.core.errors import ConfigurationError
from gasynth.core.io import AudioIO
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE, PopulationEvolution
from gasynth.individuals.base import Individual, IndividualGenerator

logger = logging.getLogger(__name__)

Observer = Callable[[GenerationRow], None]


@dataclass
class GeneticConfig:
    initial_population: int = 100
    n_random_additions: int = 5
    mutation_rate: float = 0.05
    max_generations: int = 1000
    population_evolution: PopulationEvolution = PopulationEvolution.CONSTANT
    csv_path: Optional[str] = None
    wav_path: Optional[str] = None
    max_workers: Optional[int] = None
    log_every: int = 10

    def __post_init__(self):
        self.population_evolution = PopulationEvolution(self.population_evolution)


class GeneticOptimizer:
    def __init__(
        self,
        generator: IndividualGenerator,
        config: Optional[GeneticConfig] = None,
        rng: Optional[np.random.Generator] = None,
        observers: Iterable[Observer] = (),
        cancel_event: Optional[threading.Event] = None,
    ):
        self.generator = generator
        self.config = config or GeneticConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.history = Recorder()
        self.observers: List[Observer] = [self.history, *observers]
        self.cancel_event = cancel_event or threading.Event()

        self.generation = 0
        self.last_offspring = 0
        self.cancelled = False
        self.population: List[Individual] = sorted(self._generate(self.config.initial_population), reverse=True)
        self.fundamental = self.fittest.fundamental() if self.population else None

    # -------------------------------------------------------------------------
    # Population helpers
    # -------------------------------------------------------------------------

    @property
    def fittest(self) -> Individual:
        return self.population[0]

    def _map(self, fn, items: Sequence) -> list:
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            return list(executor.map(fn, items))

    def _generate(self, n: int) -> List[Individual]:
        return self._map(self.generator.generate, self.rng.spawn(n) if n > 0 else [])

    def _pairs(self, pool: Sequence[Individual]) -> list:
        """Consecutive pairs of a uniform shuffle of pool; the odd one out sits this pass out."""
        order = self.rng.permutation(len(pool))
        shuffled = [pool[i] for i in order]
        return list(zip(shuffled[0::2], shuffled[1::2]))

    def _breed(self, pool: Sequence[Individual]) -> List[Individual]:
        pairs = self._pairs(pool) + self._pairs(pool)
        rate = self.config.mutation_rate
        tasks = list(zip(pairs, self.rng.spawn(len(pairs)) if pairs else []))
        return self._map(lambda task: task[0][0].crossover(task[0][1], rate, task[1]), tasks)

    def survivor_count(self, pool_size: int) -> int:
        if self.config.population_evolution == PopulationEvolution.CONSTANT:
            return self.config.initial_population // 2
        # At least one pair must survive or the population dies out
        return max(pool_size // 2, min(2, pool_size))

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def step(self) -> None:
        """Advances the search by one generation."""
        pool = list(self.population) + self._generate(self.config.n_random_additions)
        pool.sort(reverse=True)

        n_survivors = self.survivor_count(len(pool))
        survivors = pool[:n_survivors]
        offspring = self._breed(survivors)

        population = survivors + offspring
        if self.config.population_evolution == PopulationEvolution.CONSTANT:
            # Odd pairings leave up to two places empty; the next-fittest of the pool fill them
            shortfall = self.config.initial_population - len(population)
            population += pool[n_survivors:n_survivors + shortfall]

        self.population = sorted(population, reverse=True)
        self.last_offspring = len(offspring)
        self.fundamental = self.fittest.fundamental()
        self.generation += 1

    def row(self) -> GenerationRow:
        fitnesses = np.array([ind.fitness for ind in self.population], dtype=np.float64)
        return GenerationRow(
            generation=self.generation,
            offspring=self.last_offspring,
            fundamental=fundamental_or_zero(self.fundamental),
            max_fitness=float(fitnesses.max()),
            average_fitness=float(fitnesses.mean()),
            std=float(fitnesses.std()),
        )

    def _emit(self) -> GenerationRow:
        row = self.row()
        for observer in self.observers:
            observer(row)
        return row

    def run(self) -> Individual:
        """Runs until max_generations (or cancellation) and returns the fittest individual."""
        cfg = self.config
        logger.info(
            f"Starting genetic search: population={len(self.population)}, "
            f"max_generations={cfg.max_generations}, mode={cfg.population_evolution.value}"
        )
        self._emit()
        while self.generation < cfg.max_generations:
            if self.cancel_event.is_set():
                self.cancelled = True
                logger.warning(f"Genetic search cancelled at generation {self.generation}")
                break
            self.step()
            row = self._emit()
            if cfg.log_every and self.generation % cfg.log_every == 0:
                logger.info(
                    f"Generation {row.generation}: max={row.max_fitness:.6f}, "
                    f"avg={row.average_fitness:.6f}, size={len(self.population)}, "
                    f"fundamental={row.fundamental:.2f}"
                )

        best = self.fittest
        logger.info(f"Genetic search finished at generation {self.generation}: fitness={best.fitness:.6f}")
        self.export(best)
        return best

    def export(self, best: Individual) -> None:
        if self.config.csv_path:
            self.history.to_csv(self.config.csv_path)
        if self.config.wav_path:
            AudioIO.save_wav(best.render(), SAMPLE_RATE, self.config.wav_path)


class GeneticOptimizerBuilder:
    """Fluent construction of a GeneticOptimizer. A generator with a target is required."""

    def __init__(self):
        self._generator: Optional[IndividualGenerator] = None
        self._config = GeneticConfig()
        self._rng: Optional[np.random.Generator] = None
        self._observers: List[Observer] = []
        self._cancel_event: Optional[threading.Event] = None

    def generator(self, generator: IndividualGenerator) -> "GeneticOptimizerBuilder":
        self._generator = generator
        return self

    def target(self, target: Signal) -> "GeneticOptimizerBuilder":
        if self._generator is None:
            raise ConfigurationError("set a generator before its target")
        self._generator = self._generator.with_target(target)
        return self

    def initial_population(self, n: int) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, initial_population=int(n))
        return self

    def n_random_additions(self, n: int) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, n_random_additions=int(n))
        return self

    def mutation_rate(self, rate: float) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, mutation_rate=float(rate))
        return self

    def max_generations(self, n: int) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, max_generations=int(n))
        return self

    def population_evolution(self, mode: PopulationEvolution) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, population_evolution=PopulationEvolution(mode))
        return self

    def csv(self, path: str) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, csv_path=path)
        return self

    def wav(self, path: str) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, wav_path=path)
        return self

    def max_workers(self, n: Optional[int]) -> "GeneticOptimizerBuilder":
        self._config = replace(self._config, max_workers=n)
        return self

    def config(self, config: GeneticConfig) -> "GeneticOptimizerBuilder":
        self._config = config
        return self

    def rng(self, rng: np.random.Generator) -> "GeneticOptimizerBuilder":
        self._rng = rng
        return self

    def seed(self, seed: int) -> "GeneticOptimizerBuilder":
        return self.rng(np.random.default_rng(seed))

    def observer(self, observer: Observer) -> "GeneticOptimizerBuilder":
        self._observers.append(observer)
        return self

    def cancel_event(self, event: threading.Event) -> "GeneticOptimizerBuilder":
        self._cancel_event = event
        return self

    def build(self) -> GeneticOptimizer:
        if self._generator is None:
            raise ConfigurationError("GeneticOptimizer needs an individual generator")
        if self._generator.target is None:
            raise ConfigurationError("GeneticOptimizer needs a target signal")
        if self._config.initial_population < 2:
            raise ConfigurationError("initial population must hold at least two individuals")
        return GeneticOptimizer(
            self._generator,
            self._config,
            rng=self._rng,
            observers=self._observers,
            cancel_event=self._cancel_event,
        )
