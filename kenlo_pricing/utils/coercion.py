"""
Numeric coercion for values typed by sales reps.

Inputs arrive as numbers or as pt-BR formatted strings ("R$ 1.234,56").
Anything unparseable, non-finite or negative becomes 0.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

_THOUSANDS_ONLY = re.compile(r"^\d{1,3}(\.\d{3})+$")


def _parse_text(text: str) -> float:
    cleaned = text.replace("R$", "").replace("\u00a0", "").replace(" ", "").strip()
    if not cleaned:
        return 0.0
    if "," in cleaned:
        # pt-BR: dots group thousands, comma marks decimals
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif _THOUSANDS_ONLY.match(cleaned):
        cleaned = cleaned.replace(".", "")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def to_number(value: Any) -> float:
    """Coerce a user-entered value to a non-negative finite float."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        number = _parse_text(value)
    else:
        return 0.0

    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def to_count(value: Any) -> int:
    """Coerce to a non-negative whole quantity, rounding halves up."""
    number = to_number(value)
    return int(Decimal(repr(number)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
