"""Tiled two-dimensional prefix sums over a simulated grid of ranks."""

__version__ = "0.1.0"