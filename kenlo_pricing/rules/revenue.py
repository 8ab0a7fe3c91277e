"""
Revenue the customer earns through Kenlo Pay and Seguros.

Boleto and split fees are passed on per contract under management;
insurance brokerage is estimated per contract. Flat multiplication only.
"""

from __future__ import annotations

from decimal import Decimal

from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.models.enums import ProductSelection
from kenlo_pricing.models.schemas import RevenueBreakdown
from kenlo_pricing.models.state import AddonsState, MetricsState
from kenlo_pricing.rules.addons import effective_addons
from kenlo_pricing.rules.rounding import to_decimal


def _per_contract(contracts: int, amount: float) -> float:
    return float(Decimal(contracts) * to_decimal(amount))


def compute_revenue(
    product: ProductSelection,
    addons: AddonsState,
    metrics: MetricsState,
    catalog: PricingCatalog,
) -> RevenueBreakdown:
    if not product.includes_loc:
        return RevenueBreakdown()

    active = effective_addons(product, addons, catalog)
    contracts = metrics.contracts_under_management

    boleto = split = seguros = 0.0
    if active.pay and metrics.charges_boleto_to_tenant:
        boleto = _per_contract(contracts, metrics.boleto_charge_amount)
    if active.pay and metrics.charges_split_to_owner:
        split = _per_contract(contracts, metrics.split_charge_amount)
    if active.seguros:
        seguros = _per_contract(contracts, catalog.seguros.revenue_per_contract)

    return RevenueBreakdown(boleto_revenue=boleto, split_revenue=split, seguros_revenue=seguros)
