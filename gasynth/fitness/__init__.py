"""Scoring of rendered candidates against a target signal."""
from gasynth.fitness.evaluator import FitnessEvaluator

__all__ = ["FitnessEvaluator"]
