"""
Canonical search defaults: single source for request initialisation.
Optimizer settings mirror GeneticConfig / HillClimbingConfig; requests only
need to send what they change.
"""
from typing import Any, Dict

from gasynth.core.types import FitnessType, PopulationEvolution

# Enabled genes per synthesis method. "filter" holds a FilterType value or None.
DEFAULT_COMPONENTS: Dict[str, Dict[str, Any]] = {
    "subtractive": {"oscillator": True, "envelope": True, "filter": None},
    "additive": {"harmonics": True},
}

SEARCH_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "genetic": {
        "method": "subtractive",
        "fitness_type": FitnessType.FREQ_DOMAIN_MSE.value,
        "config": {
            "initial_population": 100,
            "n_random_additions": 5,
            "mutation_rate": 0.05,
            "max_generations": 1000,
            "population_evolution": PopulationEvolution.CONSTANT.value,
            "max_workers": None,
        },
    },
    "hillclimbing": {
        "method": "subtractive",
        "fitness_type": FitnessType.FREQ_DOMAIN_MSE.value,
        "config": {
            "init_step_size": 1.0,
            "min_step_size": 0.0001,
            "max_iterations": 3000,
            "max_unsuccessful_iterations": 5000,
        },
    },
}
