from kenlo_pricing.catalog.schema import (
    AddonPrice,
    FrequencyRule,
    KomboDefinition,
    PlanPrice,
    PricingCatalog,
    Tier,
)
from kenlo_pricing.catalog.loader import CatalogStore, get_catalog, get_catalog_store, load_catalog

__all__ = [
    "AddonPrice",
    "FrequencyRule",
    "KomboDefinition",
    "PlanPrice",
    "PricingCatalog",
    "Tier",
    "CatalogStore",
    "get_catalog",
    "get_catalog_store",
    "load_catalog",
]
