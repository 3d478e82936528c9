"""Dining philosophers simulation with threads, forks, watchers and a command-line runner."""

__version__ = "1.0.0"