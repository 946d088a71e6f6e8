"""Limousine reservation rate engine."""

__version__ = "1.0.0"
