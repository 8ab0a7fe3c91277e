"""
Tiered (graduated) pricing.

A quantity is split across consecutive tiers; each unit is charged at the
price of the tier it falls in. Arithmetic runs in Decimal so band
subtotals and their sum stay exact.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from kenlo_pricing.catalog.schema import Tier
from kenlo_pricing.models.schemas import TierBand
from kenlo_pricing.rules.rounding import to_decimal
from kenlo_pricing.utils.formatters import format_number, format_unit_price


def tiered_breakdown(quantity: int, tiers: Sequence[Tier]) -> list[TierBand]:
    """Bands consumed by `quantity`, in tier order. Empty for quantity <= 0."""
    bands: list[TierBand] = []
    remaining = int(quantity)
    for tier in tiers:
        if remaining <= 0:
            break
        capacity = tier.capacity
        taken = remaining if capacity is None else min(remaining, capacity)
        subtotal = to_decimal(tier.unit_price) * taken
        bands.append(TierBand(
            start=tier.start,
            end=tier.end,
            quantity=taken,
            unit_price=tier.unit_price,
            subtotal=float(subtotal),
        ))
        remaining -= taken
    return bands


def _exact_cost(quantity: int, tiers: Sequence[Tier]) -> Decimal:
    total = Decimal(0)
    remaining = int(quantity)
    for tier in tiers:
        if remaining <= 0:
            break
        capacity = tier.capacity
        taken = remaining if capacity is None else min(remaining, capacity)
        total += to_decimal(tier.unit_price) * taken
        remaining -= taken
    return total


def tiered_cost(quantity: int, tiers: Sequence[Tier]) -> float:
    if quantity <= 0:
        return 0.0
    return float(_exact_cost(quantity, tiers))


def effective_unit_price(quantity: int, tiers: Sequence[Tier]) -> float:
    """Average price per unit over the whole quantity."""
    if quantity <= 0:
        return 0.0
    return float(_exact_cost(quantity, tiers) / quantity)


def format_tier_breakdown(bands: Sequence[TierBand]) -> str:
    """'250 × R$ 4,00 + 50 × R$ 3,50' for proposal footnotes."""
    return " + ".join(
        f"{format_number(band.quantity)} × R$ {format_unit_price(band.unit_price)}" for band in bands
    )
