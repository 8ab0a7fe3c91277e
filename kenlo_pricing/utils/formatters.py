"""pt-BR display formatting for currency and quantities."""

from __future__ import annotations


def _group_thousands(integer_part: str) -> str:
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    return ".".join(groups)


def format_number(value: float, decimals: int = 0) -> str:
    """1234.5 -> '1.234,50' (with decimals=2)."""
    negative = value < 0
    text = f"{abs(value):.{decimals}f}"
    integer_part, _, fraction = text.partition(".")
    formatted = _group_thousands(integer_part)
    if fraction:
        formatted = f"{formatted},{fraction}"
    return f"-{formatted}" if negative else formatted


def format_currency(value: float, decimals: int = 2) -> str:
    return f"R$ {format_number(value, decimals)}"


def format_unit_price(value: float) -> str:
    """Per-unit prices always show cents: 2.5 -> '2,50'."""
    return format_number(value, 2)

