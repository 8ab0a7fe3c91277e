"""
Catalog schema — the typed shape of pricing_catalog.json.

Every price, tier table, multiplier and bundle rule the engine uses is
declared in the catalog file and validated here on load. Lookups raise
UnknownCatalogKeyError for keys the catalog does not define.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kenlo_pricing.models.enums import (
    AddonKey,
    KomboType,
    PaymentFrequency,
    PlanTier,
    ProductLine,
    ProductSelection,
)
from kenlo_pricing.models.errors import UnknownCatalogKeyError

_E = TypeVar("_E", bound=Enum)


def _coerce_key(enum_cls: type[_E], value: object, kind: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownCatalogKeyError(kind, value) from None


class _CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ── Tier tables ──────────────────────────────────────────


class Tier(_CatalogModel):
    start: int = Field(alias="from", ge=1)
    end: Optional[int] = Field(default=None, alias="to")
    unit_price: float = Field(alias="price", ge=0)

    @property
    def capacity(self) -> Optional[int]:
        return None if self.end is None else self.end - self.start + 1


def _validate_tier_table(name: str, tiers: list[Tier]) -> None:
    """Tiers must start at 1, be contiguous, and only the last may be open-ended."""
    if not tiers:
        raise ValueError(f"{name}: tier table is empty")
    expected_start = 1
    for index, tier in enumerate(tiers):
        if tier.start != expected_start:
            raise ValueError(f"{name}: tier {index} starts at {tier.start}, expected {expected_start}")
        is_last = index == len(tiers) - 1
        if tier.end is None:
            if not is_last:
                raise ValueError(f"{name}: only the last tier may be unbounded")
            break
        if tier.end < tier.start:
            raise ValueError(f"{name}: tier {index} ends before it starts")
        expected_start = tier.end + 1
    if tiers[-1].end is not None:
        raise ValueError(f"{name}: last tier must be unbounded")


def _validate_plan_tables(name: str, tables: dict[PlanTier, list[Tier]]) -> None:
    missing = set(PlanTier) - set(tables)
    if missing:
        raise ValueError(f"{name}: missing plans {sorted(p.value for p in missing)}")
    for plan, tiers in tables.items():
        _validate_tier_table(f"{name}[{plan.value}]", tiers)


# ── Frequencies ──────────────────────────────────────────


class FrequencyRule(_CatalogModel):
    label: str
    multiplier: float = Field(gt=0)
    installments: int = Field(ge=1)
    prepaid_months: int = Field(default=0, ge=0)


# ── Products and add-ons ─────────────────────────────────


class PlanPrice(_CatalogModel):
    annual_price: int = Field(ge=0)
    included: int = Field(ge=0)


class ProductCatalog(_CatalogModel):
    name: str
    implementation: int = Field(ge=0)
    included_unit: str  # what the plan allowance counts ("users", "contracts")
    plans: dict[PlanTier, PlanPrice]


class AddonPrice(_CatalogModel):
    name: str
    annual_price: int = Field(default=0, ge=0)
    implementation: int = Field(default=0, ge=0)
    requires: Optional[ProductLine] = None

    def is_available_for(self, product: ProductSelection) -> bool:
        if self.requires is None:
            return True
        return self.requires in product.product_lines


# ── Post-paid variable costs ─────────────────────────────


class VariableCosts(_CatalogModel):
    additional_users: dict[PlanTier, list[Tier]]
    additional_contracts: dict[PlanTier, list[Tier]]
    boleto_split: dict[PlanTier, list[Tier]]
    whatsapp_leads: list[Tier]
    included_whatsapp_leads: int = Field(ge=0)
    signatures: list[Tier]
    included_signatures: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_tables(self) -> "VariableCosts":
        _validate_plan_tables("additional_users", self.additional_users)
        _validate_plan_tables("additional_contracts", self.additional_contracts)
        _validate_plan_tables("boleto_split", self.boleto_split)
        _validate_tier_table("whatsapp_leads", self.whatsapp_leads)
        _validate_tier_table("signatures", self.signatures)
        return self


class PrepaidPolicy(_CatalogModel):
    discount_percent: int = Field(ge=0, le=100)
    discount_multiplier: float = Field(gt=0, le=1)

    @model_validator(mode="after")
    def _percent_matches_multiplier(self) -> "PrepaidPolicy":
        if round(1 - self.discount_percent / 100, 6) != round(self.discount_multiplier, 6):
            raise ValueError("prepaid discount_percent and discount_multiplier disagree")
        return self


class SegurosPolicy(_CatalogModel):
    revenue_per_contract: float = Field(ge=0)


class PremiumService(_CatalogModel):
    name: str
    monthly_price: int = Field(ge=0)
    included_in: list[PlanTier] = []


class PremiumServicesCatalog(_CatalogModel):
    vip_support: PremiumService
    dedicated_cs: PremiumService


# ── Kombos ───────────────────────────────────────────────

ImplementationKey = Literal["imob", "loc", "leads", "inteligencia", "assinatura", "pay", "seguros", "cash"]


class KomboDefinition(_CatalogModel):
    name: str
    description: str = ""
    discount: float = Field(ge=0, lt=1)
    required_products: list[ProductSelection]
    required_addons: list[AddonKey] = []
    forbidden_addons: list[AddonKey] = []
    max_addons: Optional[int] = Field(default=None, ge=0)
    free_implementations: list[ImplementationKey] = []
    implementation: int = Field(ge=0)
    includes_premium_services: bool = True

    @model_validator(mode="after")
    def _rules_are_consistent(self) -> "KomboDefinition":
        overlap = set(self.required_addons) & set(self.forbidden_addons)
        if overlap:
            raise ValueError(f"{self.name}: add-ons both required and forbidden: {sorted(a.value for a in overlap)}")
        if self.max_addons is not None and len(self.required_addons) > self.max_addons:
            raise ValueError(f"{self.name}: requires more add-ons than max_addons allows")
        return self

    def is_available_for(self, product: ProductSelection) -> bool:
        return product in self.required_products

    def waives(self, key: str) -> bool:
        return key in self.free_implementations


# ── Root ─────────────────────────────────────────────────


class PricingCatalog(_CatalogModel):
    version: str
    currency: str = "BRL"
    rounding_threshold: int = 100
    frequencies: dict[PaymentFrequency, FrequencyRule]
    imob: ProductCatalog
    loc: ProductCatalog
    addons: dict[AddonKey, AddonPrice]
    variable_costs: VariableCosts
    prepaid: PrepaidPolicy
    seguros: SegurosPolicy
    premium_services: PremiumServicesCatalog
    kombos: dict[KomboType, KomboDefinition]
    content_hash: str = ""  # SHA-256 of the source file, filled by the loader

    @model_validator(mode="after")
    def _complete(self) -> "PricingCatalog":
        missing_freq = set(PaymentFrequency) - set(self.frequencies)
        if missing_freq:
            raise ValueError(f"frequencies: missing {sorted(f.value for f in missing_freq)}")
        for line in (self.imob, self.loc):
            missing_plans = set(PlanTier) - set(line.plans)
            if missing_plans:
                raise ValueError(f"{line.name}: missing plans {sorted(p.value for p in missing_plans)}")
        missing_addons = set(AddonKey) - set(self.addons)
        if missing_addons:
            raise ValueError(f"addons: missing {sorted(a.value for a in missing_addons)}")
        if KomboType.NONE in self.kombos:
            raise ValueError("kombos: 'none' is not a bundle")
        return self

    # ── Lookups ──────────────────────────────────────────

    def frequency(self, frequency: PaymentFrequency | str) -> FrequencyRule:
        key = _coerce_key(PaymentFrequency, frequency, "payment frequency")
        return self.frequencies[key]

    def multiplier(self, frequency: PaymentFrequency | str) -> float:
        return self.frequency(frequency).multiplier

    def product(self, line: ProductLine | str) -> ProductCatalog:
        key = _coerce_key(ProductLine, line, "product")
        return self.imob if key == ProductLine.IMOB else self.loc

    def plan(self, line: ProductLine | str, tier: PlanTier | str) -> PlanPrice:
        key = _coerce_key(PlanTier, tier, "plan")
        return self.product(line).plans[key]

    def addon(self, key: AddonKey | str) -> AddonPrice:
        return self.addons[_coerce_key(AddonKey, key, "add-on")]

    def kombo(self, kombo: KomboType | str) -> Optional[KomboDefinition]:
        """Definition of a bundle; None for KomboType.NONE."""
        key = _coerce_key(KomboType, kombo, "kombo")
        if key == KomboType.NONE:
            return None
        if key not in self.kombos:
            raise UnknownCatalogKeyError("kombo", kombo)
        return self.kombos[key]

    def user_tiers(self, tier: PlanTier | str) -> list[Tier]:
        return self.variable_costs.additional_users[_coerce_key(PlanTier, tier, "plan")]

    def contract_tiers(self, tier: PlanTier | str) -> list[Tier]:
        return self.variable_costs.additional_contracts[_coerce_key(PlanTier, tier, "plan")]

    def boleto_split_tiers(self, tier: PlanTier | str) -> list[Tier]:
        return self.variable_costs.boleto_split[_coerce_key(PlanTier, tier, "plan")]
