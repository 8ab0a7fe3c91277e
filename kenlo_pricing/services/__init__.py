from kenlo_pricing.services.quote_service import QuoteService
from kenlo_pricing.services.reference_cache import CachedArtifact, ReferenceArtifactCache
from kenlo_pricing.services.reference_table import build_reference_table, render_reference_table

__all__ = [
    "QuoteService",
    "CachedArtifact",
    "ReferenceArtifactCache",
    "build_reference_table",
    "render_reference_table",
]
