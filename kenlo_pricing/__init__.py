"""Kenlo pricing and proposal engine."""

__version__ = "0.1.0"
