"""Search algorithms: generational genetic search and hill climbing."""
from gasynth.algorithms.genetic import GeneticConfig, GeneticOptimizer, GeneticOptimizerBuilder
from gasynth.algorithms.hillclimbing import HillClimbingConfig, HillClimbingOptimizer, HillClimbingOptimizerBuilder

__all__ = [
    "GeneticConfig",
    "GeneticOptimizer",
    "GeneticOptimizerBuilder",
    "HillClimbingConfig",
    "HillClimbingOptimizer",
    "HillClimbingOptimizerBuilder",
]
