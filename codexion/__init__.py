"""Threaded simulation of coders competing for shared dongles under FIFO or EDF scheduling."""

__version__ = "0.1.0"

__all__ = ["arbiter", "cli", "heap", "parsing", "simulation", "timing"]