"""Add-on availability per product selection."""

from __future__ import annotations

from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.models.enums import AddonKey, ProductSelection
from kenlo_pricing.models.state import AddonsState


def is_addon_available(addon: AddonKey | str, product: ProductSelection, catalog: PricingCatalog) -> bool:
    return catalog.addon(addon).is_available_for(product)


def effective_addons(product: ProductSelection, addons: AddonsState, catalog: PricingCatalog) -> AddonsState:
    """Enabled add-ons with the ones the product cannot use switched off."""
    cleared = {
        key.value: False
        for key in addons.enabled()
        if not is_addon_available(key, product, catalog)
    }
    return addons.model_copy(update=cleared) if cleared else addons
