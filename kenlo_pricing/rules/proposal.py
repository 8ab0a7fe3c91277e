"""
Proposal Assembler — composes every rule into one ProposalData snapshot.

build_summary() runs kombo → line items → totals → implementation →
post-paid → revenue → prepayment → premium services once; the calculator
screen shows that summary and assemble_proposal() flattens it, adding
the comparisons and the discount breakdown.

`generated_at` is the only time-dependent input; fixing it makes two
assemblies of the same configuration identical.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.models.enums import AddonKey, KomboType
from kenlo_pricing.models.errors import InvalidConfigurationError
from kenlo_pricing.models.schemas import LineItem, ProposalData, QuoteSummary
from kenlo_pricing.models.state import ClientInfo, QuoteConfig, QuoteInfo
from kenlo_pricing.rules.addons import effective_addons
from kenlo_pricing.rules.comparisons import build_frequency_comparison, build_kombo_comparison
from kenlo_pricing.rules.kombo import detect_kombo, recommend_kombo
from kenlo_pricing.rules.line_items import build_line_items, implementation_fee, total_monthly
from kenlo_pricing.rules.post_paid import compute_post_paid
from kenlo_pricing.rules.premium import compute_premium_services
from kenlo_pricing.rules.prepaid import compute_prepayment
from kenlo_pricing.rules.revenue import compute_revenue
from kenlo_pricing.rules.rounding import round_half_up, to_decimal

logger = logging.getLogger(__name__)

_PRODUCT_KEYS = ("imob", "loc")


def _final_price(item: LineItem, kombo: KomboType) -> int:
    return item.price_sem_kombo if kombo == KomboType.NONE else item.price_com_kombo


def _installments(quote_info: QuoteInfo, max_installments: int) -> int:
    if quote_info.installments is None:
        return max_installments
    if quote_info.installments > max_installments:
        raise InvalidConfigurationError(
            f"{quote_info.installments} installments exceed the {max_installments} "
            f"allowed for this payment frequency"
        )
    return quote_info.installments


def build_summary(config: QuoteConfig, catalog: PricingCatalog) -> QuoteSummary:
    """Every figure of a quote, computed once."""
    kombo = detect_kombo(config.product, config.addons, catalog)
    definition = catalog.kombo(kombo)
    items = build_line_items(config, kombo, catalog)

    summary = QuoteSummary(
        kombo=kombo,
        kombo_name=definition.name if definition else None,
        kombo_discount=definition.discount if definition else 0.0,
        line_items=items,
        total_monthly=total_monthly(items, kombo),
        implantation_fee=implementation_fee(items, definition),
        post_paid=compute_post_paid(config, catalog),
        prepayment=compute_prepayment(config, catalog),
        revenue=compute_revenue(config.product, config.addons, config.metrics, catalog),
        premium=compute_premium_services(config, kombo, catalog),
        recommendation=recommend_kombo(config, catalog),
    )
    logger.debug(f"Summary for {config.product.value}: monthly={summary.total_monthly}")
    return summary


def assemble_proposal(
    config: QuoteConfig,
    catalog: PricingCatalog,
    client: Optional[ClientInfo] = None,
    quote_info: Optional[QuoteInfo] = None,
    generated_at: Optional[datetime] = None,
) -> ProposalData:
    client = client or ClientInfo()
    quote_info = quote_info or QuoteInfo()
    metrics = config.metrics
    frequency_rule = catalog.frequency(config.frequency)

    # ── Licences, post-paid, revenue, prepayment ─────────
    summary = build_summary(config, catalog)
    kombo = summary.kombo
    definition = catalog.kombo(kombo)
    items = summary.line_items
    monthly = summary.total_monthly
    annual = summary.total_annual
    implantation = summary.implantation_fee
    post_paid = summary.post_paid
    revenue = summary.revenue
    prepayment = summary.prepayment
    premium = summary.premium
    first_year = annual + implantation + prepayment.total

    # ── Discount breakdown ───────────────────────────────
    before_discounts = sum(item.monthly_ref_sem_kombo for item in items)
    if kombo == KomboType.NONE:
        after_kombo = before_discounts
    else:
        after_kombo = sum(item.monthly_ref_com_kombo for item in items)

    selected_addons = [
        key for key in effective_addons(config.product, config.addons, catalog).enabled()
        if key != AddonKey.CASH
    ]
    prices = {item.key: _final_price(item, kombo) for item in items}

    proposal = ProposalData(
        vendor_name=quote_info.vendor_name,
        vendor_email=quote_info.vendor_email,
        vendor_phone=quote_info.vendor_phone,
        vendor_role=quote_info.vendor_role,
        client_name=client.client_name,
        agency_name=client.agency_name,
        business_type=client.business_type,
        email=client.email,
        cellphone=client.cellphone,
        landline=client.landline,
        website=client.website,
        product_type=config.product,
        imob_plan=config.imob_plan if config.product.includes_imob else None,
        loc_plan=config.loc_plan if config.product.includes_loc else None,
        selected_addons=selected_addons,
        kombo=kombo,
        kombo_name=definition.name if definition else None,
        kombo_discount=round_half_up(to_decimal(definition.discount) * 100) if definition else 0,
        frequency=config.frequency,
        frequency_label=frequency_rule.label,
        installments=_installments(quote_info, frequency_rule.installments),
        validity_days=quote_info.validity_days,
        imob_users=metrics.imob_users,
        closings_per_month=metrics.closings_per_month,
        leads_per_month=metrics.leads_per_month,
        contracts_under_management=metrics.contracts_under_management,
        new_contracts_per_month=metrics.new_contracts_per_month,
        wants_whatsapp=metrics.lead_channel.wants_whatsapp,
        uses_external_ai=metrics.lead_channel.uses_external_ai,
        external_ai_name=metrics.lead_channel.partner_name,
        charges_boleto_to_tenant=metrics.charges_boleto_to_tenant,
        boleto_amount=metrics.boleto_charge_amount,
        charges_split_to_owner=metrics.charges_split_to_owner,
        split_amount=metrics.split_charge_amount,
        line_items=items,
        imob_price=prices.get("imob"),
        loc_price=prices.get("loc"),
        addon_prices={key: price for key, price in prices.items() if key not in _PRODUCT_KEYS},
        total_monthly=monthly,
        total_annual=annual,
        implantation_fee=implantation,
        first_year_total=first_year,
        monthly_before_discounts=before_discounts,
        kombo_discount_amount=after_kombo - before_discounts,
        cycle_discount_amount=monthly - after_kombo,
        post_paid_total=post_paid.total,
        post_paid_breakdown=post_paid,
        prepay_additional_users=config.prepay_additional_users,
        prepay_additional_contracts=config.prepay_additional_contracts,
        prepayment_users_amount=prepayment.users_amount,
        prepayment_contracts_amount=prepayment.contracts_amount,
        prepayment_months=prepayment.months,
        has_premium_services=premium.has_premium_services,
        premium_services_price=premium.total,
        vip_included=premium.vip_included,
        cs_included=premium.cs_included,
        revenue_from_boletos=revenue.payment_revenue,
        revenue_from_insurance=revenue.seguros_revenue,
        net_gain=summary.net_gain,
        kombo_comparison=build_kombo_comparison(items, kombo, config.product, catalog),
        frequency_comparison=build_frequency_comparison(config, kombo, catalog),
        recommendation=summary.recommendation,
        catalog_version=catalog.version,
        catalog_hash=catalog.content_hash,
        generated_at=generated_at or datetime.now(timezone.utc),
    )
    logger.info(
        f"Proposal assembled: kombo={kombo.value} monthly={monthly} "
        f"implantation={implantation} post_paid={post_paid.total:.2f}"
    )
    return proposal
