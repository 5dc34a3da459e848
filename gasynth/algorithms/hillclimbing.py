"""
Hill climbing over a single genome.

Each iteration perturbs the current individual within a window of
step_size times every parameter's range. A strictly fitter proposal replaces
the current individual and widens the window (step_size / 0.95); anything
else counts as a consecutive failure.
"""
import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional

import numpy as np

from gasynth.analytics.recorder import IterationRow, Recorder, fundamental_or_zero
from gasynth.core.errors import ConfigurationError
from gasynth.core.io import AudioIO
from gasynth.core.signal import Signal
from gasynth.core.types import SAMPLE_RATE, TerminationReason
from gasynth.individuals.base import Individual, IndividualGenerator

logger = logging.getLogger(__name__)

Observer = Callable[[IterationRow], None]

STEP_GROWTH = 0.95


@dataclass
class HillClimbingConfig:
    init_step_size: float = 1.0
    min_step_size: float = 0.0001
    max_iterations: int = 3000
    max_unsuccessful_iterations: int = 5000
    csv_path: Optional[str] = None
    wav_path: Optional[str] = None
    log_every: int = 100


class HillClimbingOptimizer:
    def __init__(
        self,
        generator: IndividualGenerator,
        config: Optional[HillClimbingConfig] = None,
        rng: Optional[np.random.Generator] = None,
        observers: Iterable[Observer] = (),
        cancel_event: Optional[threading.Event] = None,
    ):
        self.generator = generator
        self.config = config or HillClimbingConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.history = Recorder()
        self.observers: List[Observer] = [self.history, *observers]
        self.cancel_event = cancel_event or threading.Event()

        self.iteration = 0
        self.step_size = self.config.init_step_size
        self.consecutive_failures = 0
        self.termination: Optional[TerminationReason] = None
        self.current: Individual = generator.generate(self.rng)
        self.fundamental = self.current.fundamental()

    def termination_reason(self) -> Optional[TerminationReason]:
        """Why the search must stop now, or None while it may continue."""
        cfg = self.config
        if self.iteration >= cfg.max_iterations:
            return TerminationReason.MAX_ITERATIONS
        if self.step_size < cfg.min_step_size:
            return TerminationReason.STEP_SIZE_BELOW_MINIMUM
        if self.consecutive_failures >= cfg.max_unsuccessful_iterations:
            return TerminationReason.TOO_MANY_CONSECUTIVE_FAILURES
        if self.cancel_event.is_set():
            return TerminationReason.CANCELLED
        return None

    def row(self) -> IterationRow:
        return IterationRow(
            iteration=self.iteration,
            fitness=self.current.fitness,
            fundamental=fundamental_or_zero(self.fundamental),
        )

    def step(self) -> bool:
        """One proposal. Returns True when it was accepted."""
        candidate = self.current.evolve(self.step_size, self.rng)
        accepted = candidate.fitness > self.current.fitness
        if accepted:
            self.current = candidate
            self.step_size /= STEP_GROWTH
            self.consecutive_failures = 0
            self.fundamental = candidate.fundamental()
        else:
            self.consecutive_failures += 1
        self.iteration += 1
        return accepted

    def run(self) -> Individual:
        """Climbs until a termination condition holds and returns the final individual."""
        cfg = self.config
        logger.info(
            f"Starting hill climbing: step_size={cfg.init_step_size}, min_step_size={cfg.min_step_size}, "
            f"max_iterations={cfg.max_iterations}"
        )
        while True:
            reason = self.termination_reason()
            if reason is not None:
                break
            row = self.row()
            for observer in self.observers:
                observer(row)
            accepted = self.step()
            if accepted:
                logger.debug(f"Iteration {row.iteration}: accepted fitness={self.current.fitness:.6f}")
            if cfg.log_every and self.iteration % cfg.log_every == 0:
                logger.info(
                    f"Iteration {self.iteration}: fitness={self.current.fitness:.6f}, "
                    f"step_size={self.step_size:.6f}"
                )

        self.termination = reason
        logger.info(f"Hill climbing stopped ({reason.value}) after {self.iteration} iterations: fitness={self.current.fitness:.6f}")
        self.export(self.current)
        return self.current

    def export(self, best: Individual) -> None:
        if self.config.csv_path:
            self.history.to_csv(self.config.csv_path)
        if self.config.wav_path:
            AudioIO.save_wav(best.render(), SAMPLE_RATE, self.config.wav_path)


class HillClimbingOptimizerBuilder:
    """Fluent construction of a HillClimbingOptimizer. A generator with a target is required."""

    def __init__(self):
        self._generator: Optional[IndividualGenerator] = None
        self._config = HillClimbingConfig()
        self._rng: Optional[np.random.Generator] = None
        self._observers: List[Observer] = []
        self._cancel_event: Optional[threading.Event] = None

    def generator(self, generator: IndividualGenerator) -> "HillClimbingOptimizerBuilder":
        self._generator = generator
        return self

    def target(self, target: Signal) -> "HillClimbingOptimizerBuilder":
        if self._generator is None:
            raise ConfigurationError("set a generator before its target")
        self._generator = self._generator.with_target(target)
        return self

    def init_step_size(self, step_size: float) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, init_step_size=float(step_size))
        return self

    def min_step_size(self, step_size: float) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, min_step_size=float(step_size))
        return self

    def max_iterations(self, n: int) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, max_iterations=int(n))
        return self

    def max_unsuccessful_iterations(self, n: int) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, max_unsuccessful_iterations=int(n))
        return self

    def csv(self, path: str) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, csv_path=path)
        return self

    def wav(self, path: str) -> "HillClimbingOptimizerBuilder":
        self._config = replace(self._config, wav_path=path)
        return self

    def config(self, config: HillClimbingConfig) -> "HillClimbingOptimizerBuilder":
        self._config = config
        return self

    def rng(self, rng: np.random.Generator) -> "HillClimbingOptimizerBuilder":
        self._rng = rng
        return self

    def seed(self, seed: int) -> "HillClimbingOptimizerBuilder":
        return self.rng(np.random.default_rng(seed))

    def observer(self, observer: Observer) -> "HillClimbingOptimizerBuilder":
        self._observers.append(observer)
        return self

    def cancel_event(self, event: threading.Event) -> "HillClimbingOptimizerBuilder":
        self._cancel_event = event
        return self

    def build(self) -> HillClimbingOptimizer:
        if self._generator is None:
            raise ConfigurationError("HillClimbingOptimizer needs an individual generator")
        if self._generator.target is None:
            raise ConfigurationError("HillClimbingOptimizer needs a target signal")
        return HillClimbingOptimizer(
            self._generator,
            self._config,
            rng=self._rng,
            observers=self._observers,
            cancel_event=self._cancel_event,
        )
