"""Premium services: VIP support and a dedicated customer-success manager."""

from __future__ import annotations

from kenlo_pricing.catalog.schema import PremiumService, PricingCatalog
from kenlo_pricing.models.enums import KomboType, PlanTier
from kenlo_pricing.models.schemas import PremiumServices
from kenlo_pricing.models.state import QuoteConfig


def _selected_plans(config: QuoteConfig) -> list[PlanTier]:
    plans = []
    if config.product.includes_imob:
        plans.append(config.imob_plan)
    if config.product.includes_loc:
        plans.append(config.loc_plan)
    return plans


def _included(service: PremiumService, plans: list[PlanTier], by_kombo: bool) -> bool:
    # Included in any selected product means included for all of them
    return by_kombo or any(plan in service.included_in for plan in plans)


def compute_premium_services(config: QuoteConfig, kombo: KomboType, catalog: PricingCatalog) -> PremiumServices:
    definition = catalog.kombo(kombo)
    by_kombo = definition is not None and definition.includes_premium_services
    plans = _selected_plans(config)
    services = catalog.premium_services
    metrics = config.metrics
    product = config.product

    vip_included = _included(services.vip_support, plans, by_kombo)
    cs_included = _included(services.dedicated_cs, plans, by_kombo)
    vip_requested = (product.includes_imob and metrics.imob_vip_support) or (
        product.includes_loc and metrics.loc_vip_support
    )
    cs_requested = (product.includes_imob and metrics.imob_dedicated_cs) or (
        product.includes_loc and metrics.loc_dedicated_cs
    )

    return PremiumServices(
        vip_included=vip_included,
        cs_included=cs_included,
        vip_requested=vip_requested,
        cs_requested=cs_requested,
        vip_price=0 if vip_included or not vip_requested else services.vip_support.monthly_price,
        cs_price=0 if cs_included or not cs_requested else services.dedicated_cs.monthly_price,
    )
