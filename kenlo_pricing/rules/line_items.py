"""
Licence line items — one per selected product and priced add-on.

Each item carries its reference monthly price (monthly billing), the
price at the chosen frequency, the same price after the active bundle
discount, and its implementation fee (zero when the bundle waives it).
"""

from __future__ import annotations

import logging
from typing import Optional

from kenlo_pricing.catalog.schema import KomboDefinition, PricingCatalog
from kenlo_pricing.models.enums import KomboType, PaymentFrequency, ProductLine
from kenlo_pricing.models.schemas import LineItem
from kenlo_pricing.models.state import QuoteConfig
from kenlo_pricing.rules.addons import effective_addons
from kenlo_pricing.rules.rounding import apply_discount, round_annual_to_monthly

logger = logging.getLogger(__name__)


def _line_item(
    key: str,
    name: str,
    annual_price: int,
    implementation: int,
    frequency: PaymentFrequency,
    definition: Optional[KomboDefinition],
    catalog: PricingCatalog,
) -> LineItem:
    discount = definition.discount if definition else 0.0
    reference = round_annual_to_monthly(annual_price, PaymentFrequency.MONTHLY, catalog)
    price = round_annual_to_monthly(annual_price, frequency, catalog)
    waived = definition is not None and definition.waives(key)
    return LineItem(
        key=key,
        name=name,
        monthly_ref_sem_kombo=reference,
        monthly_ref_com_kombo=apply_discount(reference, discount),
        price_sem_kombo=price,
        price_com_kombo=apply_discount(price, discount),
        implantation=0 if waived else implementation,
    )


def build_line_items(
    config: QuoteConfig,
    kombo: KomboType,
    catalog: PricingCatalog,
    frequency: Optional[PaymentFrequency] = None,
) -> list[LineItem]:
    """Line items for the configuration, priced at `frequency` (default: the configured one)."""
    frequency = frequency or config.frequency
    definition = catalog.kombo(kombo)
    items: list[LineItem] = []

    # ── Products ─────────────────────────────────────────
    plans = {ProductLine.IMOB: config.imob_plan, ProductLine.LOC: config.loc_plan}
    for line in config.product.product_lines:
        product = catalog.product(line)
        plan = plans[line]
        items.append(_line_item(
            line.value,
            f"{product.name} - {plan.label}",
            product.plans[plan].annual_price,
            product.implementation,
            frequency,
            definition,
            catalog,
        ))

    # ── Add-ons with a licence price ─────────────────────
    addons = effective_addons(config.product, config.addons, catalog)
    for key in addons.enabled():
        addon = catalog.addon(key)
        if addon.annual_price <= 0:
            continue
        items.append(_line_item(
            key.value,
            addon.name,
            addon.annual_price,
            addon.implementation,
            frequency,
            definition,
            catalog,
        ))

    logger.debug(f"{len(items)} line items at {frequency.value} (kombo={kombo.value})")
    return items


# ── Aggregates ───────────────────────────────────────────


def total_monthly(items: list[LineItem], kombo: KomboType) -> int:
    if kombo == KomboType.NONE:
        return sum(item.price_sem_kombo for item in items)
    return sum(item.price_com_kombo for item in items)


def total_implementation(items: list[LineItem]) -> int:
    return sum(item.implantation for item in items)


def implementation_fee(items: list[LineItem], definition: Optional[KomboDefinition]) -> int:
    """Flat bundle fee when a kombo is active, else the per-item sum."""
    if definition is not None:
        return definition.implementation
    return total_implementation(items)
