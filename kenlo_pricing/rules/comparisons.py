"""Side-by-side comparisons shown on the proposal: bundles and payment frequencies."""

from __future__ import annotations

from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.models.enums import KomboType, ProductSelection
from kenlo_pricing.models.schemas import FrequencyComparisonEntry, KomboComparisonEntry, LineItem
from kenlo_pricing.models.state import QuoteConfig
from kenlo_pricing.rules.line_items import build_line_items, total_monthly
from kenlo_pricing.rules.rounding import apply_discount, round_half_up, to_decimal

NO_KOMBO_LABEL = "Sem Kombo"


def build_kombo_comparison(
    items: list[LineItem],
    active_kombo: KomboType,
    product: ProductSelection,
    catalog: PricingCatalog,
) -> list[KomboComparisonEntry]:
    """Undiscounted baseline first, then every catalog bundle applied to it."""
    baseline = sum(item.price_sem_kombo for item in items)
    rows = [KomboComparisonEntry(
        kombo=KomboType.NONE,
        name=NO_KOMBO_LABEL,
        discount_percent=0,
        total_monthly=baseline,
        savings=0,
        is_selected=active_kombo == KomboType.NONE,
        is_available=True,
    )]
    for kombo, definition in catalog.kombos.items():
        total = apply_discount(baseline, definition.discount)
        rows.append(KomboComparisonEntry(
            kombo=kombo,
            name=definition.name,
            discount_percent=round_half_up(to_decimal(definition.discount) * 100),
            total_monthly=total,
            savings=baseline - total,
            is_selected=kombo == active_kombo,
            is_available=definition.is_available_for(product),
        ))
    return rows


def build_frequency_comparison(
    config: QuoteConfig,
    kombo: KomboType,
    catalog: PricingCatalog,
) -> list[FrequencyComparisonEntry]:
    """Monthly equivalent of the same selection under every payment frequency."""
    rows = []
    for frequency, rule in catalog.frequencies.items():
        items = build_line_items(config, kombo, catalog, frequency=frequency)
        rows.append(FrequencyComparisonEntry(
            frequency=frequency,
            name=rule.label,
            multiplier=rule.multiplier,
            installments=rule.installments,
            monthly_equivalent=total_monthly(items, kombo),
            is_selected=frequency == config.frequency,
        ))
    return rows
