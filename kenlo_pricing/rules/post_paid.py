"""
Post-paid Rules — usage-based monthly charges beyond plan allowances.

Six categories, each billed through a tier table from the catalog:

  IMOB     additional users over the plan allowance
  LOCAÇÃO  additional contracts over the plan allowance,
           boletos and splits (Pay) on the full contract volume
  Shared   digital signatures and WhatsApp lead messages

A category the customer prepays is left out of the monthly breakdown.
Screens and exports both call compute_post_paid, so they cannot disagree.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from kenlo_pricing.catalog.schema import PricingCatalog, Tier
from kenlo_pricing.models.enums import PostPaidCategory
from kenlo_pricing.models.schemas import PostPaidBreakdown, PostPaidGroup, PostPaidItem
from kenlo_pricing.models.state import QuoteConfig
from kenlo_pricing.rules.addons import effective_addons
from kenlo_pricing.rules.prepaid import is_prepaid_available
from kenlo_pricing.rules.tiers import effective_unit_price, tiered_breakdown, tiered_cost

logger = logging.getLogger(__name__)

IMOB_GROUP_LABEL = "IMOB"
LOC_GROUP_LABEL = "LOCAÇÃO"
SHARED_GROUP_LABEL = "Add-ons Compartilhados (IMOB + LOC)"

_LABELS: dict[PostPaidCategory, tuple[str, str]] = {
    PostPaidCategory.ADDITIONAL_USERS: ("Usuários Adicionais", "usuário"),
    PostPaidCategory.ADDITIONAL_CONTRACTS: ("Contratos Adicionais", "contrato"),
    PostPaidCategory.BOLETOS: ("Custo Boletos (Pay)", "boleto"),
    PostPaidCategory.SPLITS: ("Custo Split (Pay)", "split"),
    PostPaidCategory.SIGNATURES: ("Assinaturas Digitais (compartilhado)", "assinatura"),
    PostPaidCategory.WHATSAPP_LEADS: ("Mensagens WhatsApp", "msg"),
}


def excess(volume: int, included: int) -> int:
    return max(0, volume - included)


def _item(
    category: PostPaidCategory,
    volume: int,
    included: int,
    tiers: Sequence[Tier],
) -> Optional[PostPaidItem]:
    """Item for the billable excess; None when nothing is billed."""
    additional = excess(volume, included)
    if additional <= 0:
        return None
    label, unit_label = _LABELS[category]
    return PostPaidItem(
        key=category,
        label=label,
        unit_label=unit_label,
        included=included,
        additional=additional,
        per_unit=effective_unit_price(additional, tiers),
        total=tiered_cost(additional, tiers),
        bands=tiered_breakdown(additional, tiers),
    )


def _group(label: str, items: list[Optional[PostPaidItem]]) -> Optional[PostPaidGroup]:
    present = [item for item in items if item is not None]
    return PostPaidGroup(group_label=label, items=present) if present else None


def compute_post_paid(config: QuoteConfig, catalog: PricingCatalog) -> PostPaidBreakdown:
    product = config.product
    metrics = config.metrics
    addons = effective_addons(product, config.addons, catalog)
    costs = catalog.variable_costs
    prepaid = is_prepaid_available(config.frequency, catalog)

    # ── IMOB: additional users ───────────────────────────
    imob_items: list[Optional[PostPaidItem]] = []
    if product.includes_imob and not (prepaid and config.prepay_additional_users):
        imob_items.append(_item(
            PostPaidCategory.ADDITIONAL_USERS,
            metrics.imob_users,
            catalog.imob.plans[config.imob_plan].included,
            catalog.user_tiers(config.imob_plan),
        ))

    # ── LOC: additional contracts, boletos, splits ───────
    loc_items: list[Optional[PostPaidItem]] = []
    if product.includes_loc:
        if not (prepaid and config.prepay_additional_contracts):
            loc_items.append(_item(
                PostPaidCategory.ADDITIONAL_CONTRACTS,
                metrics.contracts_under_management,
                catalog.loc.plans[config.loc_plan].included,
                catalog.contract_tiers(config.loc_plan),
            ))
        if addons.pay:
            payment_tiers = catalog.boleto_split_tiers(config.loc_plan)
            if metrics.charges_boleto_to_tenant:
                loc_items.append(_item(
                    PostPaidCategory.BOLETOS, metrics.contracts_under_management, 0, payment_tiers,
                ))
            if metrics.charges_split_to_owner:
                loc_items.append(_item(
                    PostPaidCategory.SPLITS, metrics.contracts_under_management, 0, payment_tiers,
                ))

    # ── Shared: signatures, WhatsApp ─────────────────────
    shared_items: list[Optional[PostPaidItem]] = []
    if addons.assinatura:
        signatures = 0
        if product.includes_imob:
            signatures += metrics.closings_per_month
        if product.includes_loc:
            signatures += metrics.new_contracts_per_month
        shared_items.append(_item(
            PostPaidCategory.SIGNATURES,
            signatures,
            costs.included_signatures,
            costs.signatures,
        ))
    if addons.leads and metrics.lead_channel.wants_whatsapp:
        shared_items.append(_item(
            PostPaidCategory.WHATSAPP_LEADS,
            metrics.leads_per_month,
            costs.included_whatsapp_leads,
            costs.whatsapp_leads,
        ))

    breakdown = PostPaidBreakdown(
        imob_addons=_group(IMOB_GROUP_LABEL, imob_items),
        loc_addons=_group(LOC_GROUP_LABEL, loc_items),
        shared_addons=_group(SHARED_GROUP_LABEL, shared_items),
    )
    logger.debug(f"Post-paid total {breakdown.total:.2f} across {len(breakdown.groups())} groups")
    return breakdown


def post_paid_category_costs(breakdown: PostPaidBreakdown) -> dict[str, float]:
    """Cost per category, zero for categories that were not billed."""
    return {category.value: cost for category, cost in breakdown.category_costs().items()}
