"""Example-based fuzzy intent classification."""

__version__ = "1.0.0"
