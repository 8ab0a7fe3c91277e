"""
Quote configuration — the complete input to every pricing computation.

All models are immutable; screens derive a new configuration with
`model_copy(update=...)` or the `with_*` helpers instead of mutating one.
Field names accept both snake_case and the camelCase used by the web UI.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from kenlo_pricing.models.enums import (
    AddonKey,
    LeadChannelKind,
    PaymentFrequency,
    PlanTier,
    ProductSelection,
)
from kenlo_pricing.models.errors import InvalidConfigurationError, UnknownCatalogKeyError
from kenlo_pricing.utils.coercion import to_count, to_number

_INPUT_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


# ── Add-ons ──────────────────────────────────────────────


class AddonsState(BaseModel):
    """On/off flag per add-on. Unknown add-on names are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    leads: bool = False
    inteligencia: bool = False
    assinatura: bool = False
    pay: bool = False
    seguros: bool = False
    cash: bool = False

    @classmethod
    def all_enabled(cls) -> "AddonsState":
        return cls(**{key.value: True for key in AddonKey})

    def is_enabled(self, key: AddonKey | str) -> bool:
        try:
            addon = AddonKey(key)
        except ValueError:
            raise UnknownCatalogKeyError("add-on", key) from None
        return getattr(self, addon.value)

    def enabled(self) -> list[AddonKey]:
        """Enabled add-ons in catalog order."""
        return [key for key in AddonKey if getattr(self, key.value)]

    def with_flags(self, **flags: bool) -> "AddonsState":
        known = {key.value for key in AddonKey}
        for name in flags:
            if name not in known:
                raise UnknownCatalogKeyError("add-on", name)
        return self.model_copy(update=flags)


# ── Lead channel ─────────────────────────────────────────


class LeadChannel(BaseModel):
    """How inbound leads are handled: WhatsApp, an external AI SDR, or neither.

    A single tagged value makes WhatsApp and external AI mutually exclusive.
    """

    model_config = _INPUT_CONFIG

    kind: LeadChannelKind = LeadChannelKind.NONE
    partner_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def _partner_only_for_external_ai(cls, data: Any) -> Any:
        if isinstance(data, dict):
            kind = data.get("kind", LeadChannelKind.NONE)
            if kind not in (LeadChannelKind.EXTERNAL_AI, LeadChannelKind.EXTERNAL_AI.value):
                data = {k: v for k, v in data.items() if k not in ("partner_name", "partnerName")}
        return data

    @classmethod
    def none(cls) -> "LeadChannel":
        return cls()

    @classmethod
    def whatsapp(cls) -> "LeadChannel":
        return cls(kind=LeadChannelKind.WHATSAPP)

    @classmethod
    def external_ai(cls, partner_name: str = "") -> "LeadChannel":
        return cls(kind=LeadChannelKind.EXTERNAL_AI, partner_name=partner_name)

    @property
    def wants_whatsapp(self) -> bool:
        return self.kind == LeadChannelKind.WHATSAPP

    @property
    def uses_external_ai(self) -> bool:
        return self.kind == LeadChannelKind.EXTERNAL_AI


# ── Business metrics ─────────────────────────────────────

_COUNT_FIELDS = (
    "imob_users",
    "closings_per_month",
    "leads_per_month",
    "contracts_under_management",
    "new_contracts_per_month",
)
_AMOUNT_FIELDS = ("boleto_charge_amount", "split_charge_amount")

_FLAG = TypeAdapter(bool)


def _pop_flag(data: dict, *keys: str) -> bool:
    """Remove every spelling of a legacy flag and parse the first with pydantic bool rules."""
    values = [data.pop(key) for key in keys if key in data]
    if not values or values[0] is None:
        return False
    try:
        return _FLAG.validate_python(values[0])
    except ValidationError:
        raise ValueError(f"{keys[0]} must be a boolean, got {values[0]!r}") from None


class MetricsState(BaseModel):
    """Operational volumes and charging preferences of the prospect."""

    model_config = _INPUT_CONFIG

    imob_users: int = 0
    closings_per_month: int = 0
    leads_per_month: int = 0
    contracts_under_management: int = 0
    new_contracts_per_month: int = 0

    lead_channel: LeadChannel = Field(default_factory=LeadChannel)

    charges_boleto_to_tenant: bool = False
    boleto_charge_amount: float = 0.0
    charges_split_to_owner: bool = False
    split_charge_amount: float = 0.0

    imob_vip_support: bool = False
    imob_dedicated_cs: bool = False
    loc_vip_support: bool = False
    loc_dedicated_cs: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fold_lead_flags(cls, data: Any) -> Any:
        """Accept the flat wantsWhatsApp / usesExternalAI flags older clients send."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        whatsapp = _pop_flag(data, "wantsWhatsApp", "wants_whatsapp")
        external = _pop_flag(data, "usesExternalAI", "uses_external_ai")
        partner = data.pop("externalAIName", data.pop("external_ai_name", "")) or ""

        if whatsapp and external:
            raise ValueError("WhatsApp and external AI lead handling are mutually exclusive")
        if "lead_channel" in data or "leadChannel" in data:
            if whatsapp or external:
                raise ValueError("Pass either leadChannel or the legacy lead flags, not both")
            return data
        if whatsapp:
            data["lead_channel"] = LeadChannel.whatsapp()
        elif external:
            data["lead_channel"] = LeadChannel.external_ai(partner)
        return data

    @field_validator(*_COUNT_FIELDS, mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return to_count(value)

    @field_validator(*_AMOUNT_FIELDS, mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return to_number(value)

    @classmethod
    def from_flags(
        cls,
        wants_whatsapp: bool = False,
        uses_external_ai: bool = False,
        external_ai_name: str = "",
        **values: Any,
    ) -> "MetricsState":
        """Build from the legacy flag pair; both flags set is an error."""
        if wants_whatsapp and uses_external_ai:
            raise InvalidConfigurationError("WhatsApp and external AI lead handling are mutually exclusive")
        if wants_whatsapp:
            channel = LeadChannel.whatsapp()
        elif uses_external_ai:
            channel = LeadChannel.external_ai(external_ai_name)
        else:
            channel = LeadChannel.none()
        return cls(lead_channel=channel, **values)

    def with_lead_channel(self, channel: LeadChannel) -> "MetricsState":
        return self.model_copy(update={"lead_channel": channel})


# ── Full configuration ───────────────────────────────────


class QuoteConfig(BaseModel):
    """Everything the engine needs to price a quote."""

    model_config = _INPUT_CONFIG

    product: ProductSelection = ProductSelection.IMOB
    imob_plan: PlanTier = PlanTier.K
    loc_plan: PlanTier = PlanTier.K
    addons: AddonsState = Field(default_factory=AddonsState)
    metrics: MetricsState = Field(default_factory=MetricsState)
    frequency: PaymentFrequency = PaymentFrequency.ANNUAL
    prepay_additional_users: bool = False
    prepay_additional_contracts: bool = False

    @field_validator("frequency", mode="before")
    @classmethod
    def _normalize_frequency(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "semiannual":
                return PaymentFrequency.SEMESTRAL
        return value

    def with_addons(self, **flags: bool) -> "QuoteConfig":
        return self.model_copy(update={"addons": self.addons.with_flags(**flags)})

    def with_metrics(self, **values: Any) -> "QuoteConfig":
        merged = {**self.metrics.model_dump(), **values}
        return self.model_copy(update={"metrics": MetricsState.model_validate(merged)})


# ── Identification (proposal only) ───────────────────────


class ClientInfo(BaseModel):
    model_config = _INPUT_CONFIG

    client_name: str = ""
    agency_name: str = ""
    business_type: str = ""
    email: str = ""
    cellphone: str = ""
    landline: str = ""
    website: str = ""


class QuoteInfo(BaseModel):
    """Seller identification and commercial terms printed on the proposal."""

    model_config = _INPUT_CONFIG

    vendor_name: str = ""
    vendor_email: str = ""
    vendor_phone: str = ""
    vendor_role: str = ""
    installments: Optional[int] = Field(default=None, ge=1)
    validity_days: int = Field(default=30, ge=1)


class ProposalRequest(BaseModel):
    """A configuration plus the identification printed on its proposal."""

    model_config = _INPUT_CONFIG

    config: QuoteConfig
    client: ClientInfo = Field(default_factory=ClientInfo)
    quote_info: QuoteInfo = Field(default_factory=QuoteInfo)
