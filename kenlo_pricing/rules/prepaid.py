"""
Prepayment of additional users and contracts.

On annual and biennial contracts the customer may pay the excess users or
contracts up front for the whole term, at a discount on the tiered price.
A prepaid category is then removed from the monthly post-paid bill.
"""

from __future__ import annotations

import logging
from typing import Sequence

from kenlo_pricing.catalog.schema import PricingCatalog, Tier
from kenlo_pricing.models.enums import PaymentFrequency
from kenlo_pricing.models.schemas import PrepaymentAmounts
from kenlo_pricing.models.state import QuoteConfig
from kenlo_pricing.rules.tiers import tiered_cost

logger = logging.getLogger(__name__)


def prepaid_months(frequency: PaymentFrequency | str, catalog: PricingCatalog) -> int:
    return catalog.frequency(frequency).prepaid_months


def is_prepaid_available(frequency: PaymentFrequency | str, catalog: PricingCatalog) -> bool:
    return prepaid_months(frequency, catalog) > 0


def prepaid_monthly_cost(quantity: int, tiers: Sequence[Tier], catalog: PricingCatalog) -> float:
    """Tiered cost with the prepaid discount, no further rounding."""
    return tiered_cost(quantity, tiers) * catalog.prepaid.discount_multiplier


def compute_prepayment(config: QuoteConfig, catalog: PricingCatalog) -> PrepaymentAmounts:
    months = prepaid_months(config.frequency, catalog)
    if months == 0:
        return PrepaymentAmounts()

    metrics = config.metrics
    user_count = contract_count = 0
    users_amount = contracts_amount = 0.0

    if config.prepay_additional_users and config.product.includes_imob:
        user_count = max(0, metrics.imob_users - catalog.imob.plans[config.imob_plan].included)
        users_amount = prepaid_monthly_cost(user_count, catalog.user_tiers(config.imob_plan), catalog) * months

    if config.prepay_additional_contracts and config.product.includes_loc:
        contract_count = max(0, metrics.contracts_under_management - catalog.loc.plans[config.loc_plan].included)
        contracts_amount = (
            prepaid_monthly_cost(contract_count, catalog.contract_tiers(config.loc_plan), catalog) * months
        )

    amounts = PrepaymentAmounts(
        months=months,
        user_count=user_count,
        contract_count=contract_count,
        users_amount=users_amount,
        contracts_amount=contracts_amount,
    )
    if amounts.total:
        logger.debug(f"Prepayment over {months} months: {amounts.total:.2f}")
    return amounts
