"""
Pricing rules — pure functions over an explicit PricingCatalog.
No rule reads settings or module-level prices; callers pass the catalog.
"""

from kenlo_pricing.rules.rounding import round_annual_to_monthly, round_half_up, round_to_seven
from kenlo_pricing.rules.tiers import effective_unit_price, format_tier_breakdown, tiered_breakdown, tiered_cost
from kenlo_pricing.rules.addons import effective_addons, is_addon_available
from kenlo_pricing.rules.line_items import build_line_items, implementation_fee
from kenlo_pricing.rules.kombo import apply_kombo_selection, detect_kombo, is_kombo_available, recommend_kombo
from kenlo_pricing.rules.post_paid import compute_post_paid, post_paid_category_costs
from kenlo_pricing.rules.prepaid import compute_prepayment, is_prepaid_available, prepaid_monthly_cost, prepaid_months
from kenlo_pricing.rules.revenue import compute_revenue
from kenlo_pricing.rules.premium import compute_premium_services
from kenlo_pricing.rules.comparisons import build_frequency_comparison, build_kombo_comparison
from kenlo_pricing.rules.proposal import assemble_proposal, build_summary

__all__ = [
    "round_annual_to_monthly",
    "round_half_up",
    "round_to_seven",
    "effective_unit_price",
    "format_tier_breakdown",
    "tiered_breakdown",
    "tiered_cost",
    "effective_addons",
    "is_addon_available",
    "build_line_items",
    "implementation_fee",
    "apply_kombo_selection",
    "detect_kombo",
    "is_kombo_available",
    "recommend_kombo",
    "compute_post_paid",
    "post_paid_category_costs",
    "compute_prepayment",
    "is_prepaid_available",
    "prepaid_monthly_cost",
    "prepaid_months",
    "compute_revenue",
    "compute_premium_services",
    "build_frequency_comparison",
    "build_kombo_comparison",
    "assemble_proposal",
    "build_summary",
]
