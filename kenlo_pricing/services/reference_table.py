"""
Reference price table — every catalog price at every payment frequency.

Sales uses it as the printed price sheet. It depends only on the catalog,
which is why ReferenceArtifactCache can key it on the catalog hash.
"""

from __future__ import annotations

import json
from typing import Any

from kenlo_pricing.catalog.schema import PricingCatalog, Tier
from kenlo_pricing.models.enums import ProductLine
from kenlo_pricing.rules.rounding import round_annual_to_monthly


def _prices_by_frequency(annual_price: int, catalog: PricingCatalog) -> dict[str, int]:
    return {
        frequency.value: round_annual_to_monthly(annual_price, frequency, catalog)
        for frequency in catalog.frequencies
    }


def _tiers(tiers: list[Tier]) -> list[dict[str, Any]]:
    return [tier.model_dump(by_alias=True) for tier in tiers]


def build_reference_table(catalog: PricingCatalog) -> dict[str, Any]:
    products = {}
    for line in ProductLine:
        product = catalog.product(line)
        products[line.value] = {
            "name": product.name,
            "implementation": product.implementation,
            "plans": {
                plan.value: {
                    "label": plan.label,
                    "included": price.included,
                    "monthly": _prices_by_frequency(price.annual_price, catalog),
                }
                for plan, price in product.plans.items()
            },
        }

    addons = {
        key.value: {
            "name": addon.name,
            "implementation": addon.implementation,
            "monthly": _prices_by_frequency(addon.annual_price, catalog),
        }
        for key, addon in catalog.addons.items()
        if addon.annual_price > 0
    }

    costs = catalog.variable_costs
    return {
        "catalogVersion": catalog.version,
        "catalogHash": catalog.content_hash,
        "frequencies": {
            frequency.value: {"label": rule.label, "installments": rule.installments}
            for frequency, rule in catalog.frequencies.items()
        },
        "products": products,
        "addons": addons,
        "postPaid": {
            "additionalUsers": {plan.value: _tiers(t) for plan, t in costs.additional_users.items()},
            "additionalContracts": {plan.value: _tiers(t) for plan, t in costs.additional_contracts.items()},
            "boletoSplit": {plan.value: _tiers(t) for plan, t in costs.boleto_split.items()},
            "whatsappLeads": _tiers(costs.whatsapp_leads),
            "signatures": _tiers(costs.signatures),
        },
        "kombos": {
            kombo.value: {"name": definition.name, "discount": definition.discount}
            for kombo, definition in catalog.kombos.items()
        },
    }


def render_reference_table(catalog: PricingCatalog) -> bytes:
    return json.dumps(build_reference_table(catalog), ensure_ascii=False, indent=2).encode("utf-8")
