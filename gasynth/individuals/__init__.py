"""Genomes (individuals) and the generators that draw them at random."""
from gasynth.individuals.additive import AdditiveGenerator, AdditiveIndividual
from gasynth.individuals.base import Individual, IndividualGenerator
from gasynth.individuals.factory import build_generator
from gasynth.individuals.subtractive import SubtractiveGenerator, SubtractiveIndividual

__all__ = [
    "Individual",
    "IndividualGenerator",
    "SubtractiveIndividual",
    "SubtractiveGenerator",
    "AdditiveIndividual",
    "AdditiveGenerator",
    "build_generator",
]
