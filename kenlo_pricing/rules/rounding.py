"""
Price rounding rules.

Monthly licence prices are shown as integers. Below the threshold a price
is simply ceiled; from the threshold up it is pushed to the next integer
ending in 7 (the commercial "…7" price points).
"""

from __future__ import annotations

from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kenlo_pricing.catalog.schema import PricingCatalog
    from kenlo_pricing.models.enums import PaymentFrequency

ROUNDING_THRESHOLD = 100


def to_decimal(value: float | int | Decimal) -> Decimal:
    """Exact decimal of the value as written, not of its binary approximation."""
    if isinstance(value, Decimal):
        return value
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)


def round_to_seven(value: float | int | Decimal, threshold: int = ROUNDING_THRESHOLD) -> int:
    ceiled = int(to_decimal(value).to_integral_value(rounding=ROUND_CEILING))
    if ceiled < threshold:
        return ceiled
    return ceiled + (7 - ceiled % 10) % 10


def round_half_up(value: float | int | Decimal) -> int:
    """Nearest integer, halves away from zero (2.5 -> 3)."""
    return int(to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_annual_to_monthly(
    annual_price: float | int,
    frequency: "PaymentFrequency | str",
    catalog: "PricingCatalog",
) -> int:
    """Monthly price at a payment frequency, from the annual-plan price."""
    multiplier = catalog.multiplier(frequency)
    exact = to_decimal(annual_price) * to_decimal(multiplier)
    return round_to_seven(exact, catalog.rounding_threshold)


def apply_discount(price: int, discount: float) -> int:
    """Price after a bundle discount, rounded half-up."""
    return round_half_up(Decimal(price) * (1 - to_decimal(discount)))
