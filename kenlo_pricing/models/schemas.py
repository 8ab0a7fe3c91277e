"""
Output schemas produced by the pricing rules.

Every derived figure a screen or an export shows lives in one of these
models, so both read the exact same numbers. Aggregates are computed
fields: a group subtotal is always the sum of its items.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from .enums import (
    AddonKey,
    KomboType,
    PaymentFrequency,
    PlanTier,
    PostPaidCategory,
    ProductSelection,
)

_OUTPUT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class _Snapshot(BaseModel):
    model_config = _OUTPUT_CONFIG


# ── Tiered pricing ───────────────────────────────────────


class TierBand(_Snapshot):
    """The slice of a quantity that fell inside one tier."""
    start: int
    end: Optional[int] = None  # None: unbounded
    quantity: int
    unit_price: float
    subtotal: float


# ── Line items ───────────────────────────────────────────


class LineItem(_Snapshot):
    key: str  # product line or add-on key
    name: str
    monthly_ref_sem_kombo: int
    monthly_ref_com_kombo: int
    price_sem_kombo: int
    price_com_kombo: int
    implantation: int = Field(ge=0)

    @model_validator(mode="after")
    def _discount_never_raises_price(self) -> "LineItem":
        if min(self.monthly_ref_sem_kombo, self.price_sem_kombo, self.price_com_kombo) < 0:
            raise ValueError(f"{self.name}: prices must be non-negative")
        if self.price_com_kombo > self.price_sem_kombo or self.monthly_ref_com_kombo > self.monthly_ref_sem_kombo:
            raise ValueError(f"{self.name}: bundle price exceeds list price")
        return self


# ── Post-paid ────────────────────────────────────────────


class PostPaidItem(_Snapshot):
    key: PostPaidCategory
    label: str
    unit_label: str
    included: int
    additional: int
    per_unit: float
    total: float
    bands: list[TierBand] = []


class PostPaidGroup(_Snapshot):
    group_label: str
    items: list[PostPaidItem]

    @computed_field(alias="groupTotal")
    @property
    def group_total(self) -> float:
        return sum((item.total for item in self.items), 0.0)


class PostPaidBreakdown(_Snapshot):
    """Usage-based monthly charges, grouped for display."""
    imob_addons: Optional[PostPaidGroup] = None
    loc_addons: Optional[PostPaidGroup] = None
    shared_addons: Optional[PostPaidGroup] = None

    def groups(self) -> list[PostPaidGroup]:
        return [g for g in (self.imob_addons, self.loc_addons, self.shared_addons) if g is not None]

    @computed_field(alias="total")
    @property
    def total(self) -> float:
        return sum((group.group_total for group in self.groups()), 0.0)

    def category_cost(self, category: PostPaidCategory) -> float:
        for group in self.groups():
            for item in group.items:
                if item.key == category:
                    return item.total
        return 0.0

    def category_costs(self) -> dict[PostPaidCategory, float]:
        return {category: self.category_cost(category) for category in PostPaidCategory}


# ── Prepayment / revenue / premium ──────────────────────


class PrepaymentAmounts(_Snapshot):
    months: int = 0
    user_count: int = 0
    contract_count: int = 0
    users_amount: float = 0.0
    contracts_amount: float = 0.0

    @computed_field(alias="total")
    @property
    def total(self) -> float:
        return self.users_amount + self.contracts_amount


class RevenueBreakdown(_Snapshot):
    boleto_revenue: float = 0.0
    split_revenue: float = 0.0
    seguros_revenue: float = 0.0

    @computed_field(alias="paymentRevenue")
    @property
    def payment_revenue(self) -> float:
        return self.boleto_revenue + self.split_revenue

    @computed_field(alias="total")
    @property
    def total(self) -> float:
        return self.boleto_revenue + self.split_revenue + self.seguros_revenue


class PremiumServices(_Snapshot):
    vip_included: bool = False
    cs_included: bool = False
    vip_requested: bool = False
    cs_requested: bool = False
    vip_price: int = 0
    cs_price: int = 0

    @computed_field(alias="total")
    @property
    def total(self) -> int:
        return self.vip_price + self.cs_price

    @property
    def has_premium_services(self) -> bool:
        return self.vip_included or self.cs_included or self.total > 0


# ── Kombos and comparisons ───────────────────────────────


class KomboRecommendation(_Snapshot):
    kombo: KomboType
    kombo_name: str
    savings: float
    missing_addons: list[AddonKey] = []
    message: str = ""


class KomboComparisonEntry(_Snapshot):
    kombo: KomboType
    name: str
    discount_percent: int
    total_monthly: int
    savings: int
    is_selected: bool
    is_available: bool


class FrequencyComparisonEntry(_Snapshot):
    frequency: PaymentFrequency
    name: str
    multiplier: float
    installments: int
    monthly_equivalent: int
    is_selected: bool

    @computed_field(alias="annualEquivalent")
    @property
    def annual_equivalent(self) -> int:
        return self.monthly_equivalent * 12


# ── Screen summary ───────────────────────────────────────


class QuoteSummary(_Snapshot):
    """What the interactive calculator shows."""
    kombo: KomboType
    kombo_name: Optional[str] = None
    kombo_discount: float = 0.0
    line_items: list[LineItem]
    total_monthly: int
    implantation_fee: int
    post_paid: PostPaidBreakdown
    prepayment: PrepaymentAmounts
    revenue: RevenueBreakdown
    premium: PremiumServices
    recommendation: Optional[KomboRecommendation] = None

    @computed_field(alias="totalAnnual")
    @property
    def total_annual(self) -> int:
        return self.total_monthly * 12

    @computed_field(alias="netGain")
    @property
    def net_gain(self) -> float:
        return self.revenue.total - self.total_monthly - self.post_paid.total


# ── Proposal ─────────────────────────────────────────────

_EMBEDDED_JSON_FIELDS = ("postPaidBreakdown", "komboComparison", "frequencyComparison")


class ProposalData(_Snapshot):
    """Flat record handed to the document renderer."""

    # Identification
    vendor_name: str = ""
    vendor_email: str = ""
    vendor_phone: str = ""
    vendor_role: str = ""
    client_name: str = ""
    agency_name: str = ""
    business_type: str = ""
    email: str = ""
    cellphone: str = ""
    landline: str = ""
    website: str = ""

    # Selection
    product_type: ProductSelection
    imob_plan: Optional[PlanTier] = None
    loc_plan: Optional[PlanTier] = None
    selected_addons: list[AddonKey] = []
    kombo: KomboType = KomboType.NONE
    kombo_name: Optional[str] = None
    kombo_discount: int = 0  # percent
    frequency: PaymentFrequency
    frequency_label: str
    installments: int = 1
    validity_days: int = 30

    # Business metrics
    imob_users: int = 0
    closings_per_month: int = 0
    leads_per_month: int = 0
    contracts_under_management: int = 0
    new_contracts_per_month: int = 0
    wants_whatsapp: bool = False
    uses_external_ai: bool = False
    external_ai_name: str = ""
    charges_boleto_to_tenant: bool = False
    boleto_amount: float = 0.0
    charges_split_to_owner: bool = False
    split_amount: float = 0.0

    # Licences
    line_items: list[LineItem] = []
    imob_price: Optional[int] = None
    loc_price: Optional[int] = None
    addon_prices: dict[str, int] = {}
    total_monthly: int = 0
    total_annual: int = 0
    implantation_fee: int = 0
    first_year_total: float = 0.0
    monthly_before_discounts: int = 0
    kombo_discount_amount: int = 0
    cycle_discount_amount: int = 0

    # Post-paid
    post_paid_total: float = 0.0
    post_paid_breakdown: PostPaidBreakdown = Field(default_factory=PostPaidBreakdown)

    # Prepayment
    prepay_additional_users: bool = False
    prepay_additional_contracts: bool = False
    prepayment_users_amount: float = 0.0
    prepayment_contracts_amount: float = 0.0
    prepayment_months: int = 0

    # Premium services
    has_premium_services: bool = False
    premium_services_price: int = 0
    vip_included: bool = False
    cs_included: bool = False

    # Revenue
    revenue_from_boletos: float = 0.0
    revenue_from_insurance: float = 0.0
    net_gain: float = 0.0

    # Comparisons
    kombo_comparison: list[KomboComparisonEntry] = []
    frequency_comparison: list[FrequencyComparisonEntry] = []
    recommendation: Optional[KomboRecommendation] = None

    # Provenance
    catalog_version: str = ""
    catalog_hash: str = ""
    generated_at: datetime

    @model_validator(mode="after")
    def _post_paid_total_matches_breakdown(self) -> "ProposalData":
        if self.post_paid_total != self.post_paid_breakdown.total:
            raise ValueError(
                f"post-paid total {self.post_paid_total} disagrees with "
                f"its breakdown ({self.post_paid_breakdown.total})"
            )
        return self

    def to_export_dict(self) -> dict[str, Any]:
        """camelCase record with the nested structures embedded as JSON strings."""
        data = self.model_dump(mode="json", by_alias=True)
        data["selectedAddons"] = json.dumps(data["selectedAddons"], ensure_ascii=False)
        data["addonPrices"] = json.dumps(data["addonPrices"], ensure_ascii=False)
        for key in _EMBEDDED_JSON_FIELDS:
            data[key] = json.dumps(data[key], ensure_ascii=False)
        return data
