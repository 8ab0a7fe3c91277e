"""
Quote Service — the one entry point screens and exports go through.

summary() feeds the interactive calculator, export() feeds the proposal
document. The export flattens the same summary the screen shows, so the
totals a client sees on screen are the ones printed on paper.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from kenlo_pricing.catalog.loader import get_catalog
from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.models.enums import KomboType
from kenlo_pricing.models.schemas import ProposalData, QuoteSummary
from kenlo_pricing.models.state import ClientInfo, QuoteConfig, QuoteInfo
from kenlo_pricing.rules.kombo import apply_kombo_selection
from kenlo_pricing.rules.proposal import assemble_proposal, build_summary

logger = logging.getLogger(__name__)


class QuoteService:
    """Prices quote configurations against one catalog."""

    def __init__(self, catalog: Optional[PricingCatalog] = None):
        self.catalog = catalog or get_catalog()

    def summary(self, config: QuoteConfig) -> QuoteSummary:
        return build_summary(config, self.catalog)

    def export(
        self,
        config: QuoteConfig,
        client: Optional[ClientInfo] = None,
        quote_info: Optional[QuoteInfo] = None,
        generated_at: Optional[datetime] = None,
    ) -> ProposalData:
        return assemble_proposal(
            config,
            self.catalog,
            client=client,
            quote_info=quote_info,
            generated_at=generated_at,
        )

    def export_dict(
        self,
        config: QuoteConfig,
        client: Optional[ClientInfo] = None,
        quote_info: Optional[QuoteInfo] = None,
        generated_at: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """Flat export record for the document renderer."""
        return self.export(config, client, quote_info, generated_at).to_export_dict()

    def select_kombo(self, config: QuoteConfig, kombo: KomboType) -> QuoteConfig:
        """Configuration after the user picks a bundle on screen."""
        addons = apply_kombo_selection(kombo, config.product, config.addons, self.catalog)
        logger.info(f"Selected {kombo.value} for {config.product.value}: {[a.value for a in addons.enabled()]}")
        return config.model_copy(update={"addons": addons})
