from .enums import (
    AddonKey,
    KomboType,
    LeadChannelKind,
    PaymentFrequency,
    PlanTier,
    PostPaidCategory,
    ProductLine,
    ProductSelection,
)
from .errors import (
    CatalogError,
    InvalidConfigurationError,
    PricingError,
    UnknownCatalogKeyError,
)
from .state import AddonsState, ClientInfo, LeadChannel, MetricsState, ProposalRequest, QuoteConfig, QuoteInfo
from .schemas import (
    FrequencyComparisonEntry,
    KomboComparisonEntry,
    KomboRecommendation,
    LineItem,
    PostPaidBreakdown,
    PostPaidGroup,
    PostPaidItem,
    PremiumServices,
    PrepaymentAmounts,
    ProposalData,
    QuoteSummary,
    RevenueBreakdown,
    TierBand,
)

__all__ = [
    "AddonKey",
    "KomboType",
    "LeadChannelKind",
    "PaymentFrequency",
    "PlanTier",
    "PostPaidCategory",
    "ProductLine",
    "ProductSelection",
    "CatalogError",
    "InvalidConfigurationError",
    "PricingError",
    "UnknownCatalogKeyError",
    "AddonsState",
    "ClientInfo",
    "LeadChannel",
    "MetricsState",
    "ProposalRequest",
    "QuoteConfig",
    "QuoteInfo",
    "FrequencyComparisonEntry",
    "KomboComparisonEntry",
    "KomboRecommendation",
    "LineItem",
    "PostPaidBreakdown",
    "PostPaidGroup",
    "PostPaidItem",
    "PremiumServices",
    "PrepaymentAmounts",
    "ProposalData",
    "QuoteSummary",
    "RevenueBreakdown",
    "TierBand",
]
