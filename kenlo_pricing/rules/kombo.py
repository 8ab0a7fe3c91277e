"""
Kombo Rules — bundle detection, selection and recommendation.

A kombo is a named bundle of product(s) plus add-ons that earns a
discount on monthly licences and waives some implementation fees.
Detection is derived from the configuration: it is never stored.
"""

from __future__ import annotations

import logging
from typing import Optional

from kenlo_pricing.catalog.schema import KomboDefinition, PricingCatalog
from kenlo_pricing.models.enums import AddonKey, KomboType, ProductSelection
from kenlo_pricing.models.errors import InvalidConfigurationError
from kenlo_pricing.models.schemas import KomboRecommendation
from kenlo_pricing.models.state import AddonsState, QuoteConfig
from kenlo_pricing.rules.addons import effective_addons
from kenlo_pricing.rules.line_items import build_line_items
from kenlo_pricing.rules.rounding import round_annual_to_monthly, to_decimal
from kenlo_pricing.utils.formatters import format_number

logger = logging.getLogger(__name__)

# Most specific bundle first
DETECTION_ORDER = (
    KomboType.ELITE,
    KomboType.CORE_GESTAO,
    KomboType.IMOB_PRO,
    KomboType.IMOB_START,
    KomboType.LOCACAO_PRO,
)

MIN_RECOMMENDATION_SAVINGS = 50


def _qualifies(definition: KomboDefinition, product: ProductSelection, active: list[AddonKey]) -> bool:
    if not definition.is_available_for(product):
        return False
    if definition.max_addons is not None and len(active) > definition.max_addons:
        return False
    if any(addon not in active for addon in definition.required_addons):
        return False
    if any(addon in active for addon in definition.forbidden_addons):
        return False
    return True


def is_kombo_available(kombo: KomboType, product: ProductSelection, catalog: PricingCatalog) -> bool:
    definition = catalog.kombo(kombo)
    return definition is not None and definition.is_available_for(product)


def detect_kombo(product: ProductSelection, addons: AddonsState, catalog: PricingCatalog) -> KomboType:
    """Bundle the selection qualifies for, or KomboType.NONE."""
    active = effective_addons(product, addons, catalog).enabled()
    for kombo in DETECTION_ORDER:
        definition = catalog.kombos.get(kombo)
        if definition is not None and _qualifies(definition, product, active):
            logger.debug(f"Detected {kombo.value} for {product.value} with {[a.value for a in active]}")
            return kombo
    return KomboType.NONE


def apply_kombo_selection(
    kombo: KomboType,
    product: ProductSelection,
    addons: AddonsState,
    catalog: PricingCatalog,
) -> AddonsState:
    """Add-on flags after the user picks a bundle: required on, forbidden off.

    Picking KomboType.NONE leaves the add-ons untouched.
    """
    definition = catalog.kombo(kombo)
    if definition is None:
        return addons
    if not definition.is_available_for(product):
        raise InvalidConfigurationError(
            f"{definition.name} is not available for product selection '{product.value}'"
        )
    if definition.max_addons == 0:
        return AddonsState()

    updates = {addon.value: True for addon in definition.required_addons}
    updates.update({addon.value: False for addon in definition.forbidden_addons})
    return addons.with_flags(**updates)


def recommend_kombo(config: QuoteConfig, catalog: PricingCatalog) -> Optional[KomboRecommendation]:
    """Suggest the bundle that would save the most, when none is active yet."""
    if detect_kombo(config.product, config.addons, catalog) != KomboType.NONE:
        return None

    active = effective_addons(config.product, config.addons, catalog).enabled()
    current_total = sum(item.price_sem_kombo for item in build_line_items(config, KomboType.NONE, catalog))

    best: Optional[KomboRecommendation] = None
    for kombo, definition in catalog.kombos.items():
        if not definition.is_available_for(config.product):
            continue
        if any(addon in active for addon in definition.forbidden_addons):
            continue
        if definition.max_addons is not None and len(active) > definition.max_addons:
            continue

        missing = [addon for addon in definition.required_addons if addon not in active]
        extra = sum(
            round_annual_to_monthly(catalog.addon(addon).annual_price, config.frequency, catalog)
            for addon in missing
        )
        factor = 1 - to_decimal(definition.discount)
        projected = (current_total + extra) * factor
        savings = float(current_total - projected)
        if savings <= MIN_RECOMMENDATION_SAVINGS:
            continue
        if best is not None and savings <= best.savings:
            continue

        if missing:
            names = ", ".join(catalog.addon(addon).name for addon in missing)
            message = f"Adicione {names} para ativar o {definition.name} e economizar R$ {format_number(savings)}/mês"
        else:
            message = f"Ative o {definition.name} e economize R$ {format_number(savings)}/mês"
        best = KomboRecommendation(
            kombo=kombo,
            kombo_name=definition.name,
            savings=savings,
            missing_addons=missing,
            message=message,
        )

    if best is not None:
        logger.info(f"Recommending {best.kombo.value} (saves {best.savings:.2f}/month)")
    return best
