from enum import Enum


class PlanTier(str, Enum):
    PRIME = "prime"
    K = "k"
    K2 = "k2"

    @property
    def label(self) -> str:
        return {"prime": "Prime", "k": "K", "k2": "K²"}[self.value]

    @property
    def rank(self) -> int:
        return ("prime", "k", "k2").index(self.value)


class ProductLine(str, Enum):
    """A single licensed product."""
    IMOB = "imob"
    LOC = "loc"


class ProductSelection(str, Enum):
    IMOB = "imob"
    LOC = "loc"
    BOTH = "both"

    @property
    def includes_imob(self) -> bool:
        return self in (ProductSelection.IMOB, ProductSelection.BOTH)

    @property
    def includes_loc(self) -> bool:
        return self in (ProductSelection.LOC, ProductSelection.BOTH)

    @property
    def product_lines(self) -> list[ProductLine]:
        lines = []
        if self.includes_imob:
            lines.append(ProductLine.IMOB)
        if self.includes_loc:
            lines.append(ProductLine.LOC)
        return lines


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    SEMESTRAL = "semestral"
    ANNUAL = "annual"
    BIENNIAL = "biennial"


class AddonKey(str, Enum):
    LEADS = "leads"
    INTELIGENCIA = "inteligencia"
    ASSINATURA = "assinatura"
    PAY = "pay"
    SEGUROS = "seguros"
    CASH = "cash"


class KomboType(str, Enum):
    IMOB_START = "imob_start"
    IMOB_PRO = "imob_pro"
    LOCACAO_PRO = "locacao_pro"
    CORE_GESTAO = "core_gestao"
    ELITE = "elite"
    NONE = "none"


class LeadChannelKind(str, Enum):
    NONE = "none"
    WHATSAPP = "whatsapp"
    EXTERNAL_AI = "external_ai"


class PostPaidCategory(str, Enum):
    ADDITIONAL_USERS = "additional_users"
    ADDITIONAL_CONTRACTS = "additional_contracts"
    WHATSAPP_LEADS = "whatsapp_leads"
    SIGNATURES = "signatures"
    BOLETOS = "boletos"
    SPLITS = "splits"
