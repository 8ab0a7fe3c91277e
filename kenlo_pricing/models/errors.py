"""
Error hierarchy for the pricing engine.

Pricing functions raise these on malformed input or unknown catalog keys
instead of returning a silent zero.
"""

from __future__ import annotations


class PricingError(Exception):
    """Base class for every error raised by the engine."""


class CatalogError(PricingError):
    """The pricing catalog could not be read or failed validation."""


class UnknownCatalogKeyError(PricingError, KeyError):
    """A plan, add-on, frequency or bundle key is not in the catalog."""

    def __init__(self, kind: str, key: object):
        self.kind = kind
        self.key = key
        super().__init__(f"Unknown {kind}: {key!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidConfigurationError(PricingError, ValueError):
    """A quote configuration breaks a business rule."""
