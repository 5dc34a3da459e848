"""Stochastic search for synthesiser parameters that reproduce a target sound."""
