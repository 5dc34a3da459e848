"""Rendering primitives: oscillators, envelopes, FIR filters and harmonic series."""
