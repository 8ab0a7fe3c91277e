"""
API routes — thin HTTP layer over QuoteService.

Routes:
  GET  /health                        → API health check + active catalog
  GET  /api/catalog                   → The active pricing catalog
  GET  /api/catalog/reference         → Reference price table (cached by catalog hash)
  GET  /api/catalog/reference/status  → Reference cache status
  POST /api/quote/summary             → Calculator summary for a configuration
  POST /api/quote/proposal            → Flat proposal export record
  POST /api/quote/kombo/{kombo}       → Configuration after selecting a bundle
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, HTTPException, Response

from kenlo_pricing.models.enums import KomboType
from kenlo_pricing.models.errors import CatalogError, PricingError
from kenlo_pricing.models.state import ProposalRequest, QuoteConfig
from kenlo_pricing.services.quote_service import QuoteService
from kenlo_pricing.services.reference_cache import ReferenceArtifactCache

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
catalog_router = APIRouter()
quote_router = APIRouter()


# ── Shared instances ─────────────────────────────────────

@lru_cache()
def get_quote_service() -> QuoteService:
    return QuoteService()


@lru_cache()
def get_reference_cache() -> ReferenceArtifactCache:
    return ReferenceArtifactCache()


def _http_error(e: PricingError) -> HTTPException:
    if isinstance(e, CatalogError):
        logger.error(f"Catalog failure: {e}")
        return HTTPException(status_code=500, detail=str(e))
    logger.warning(f"Rejected quote: {e}")
    return HTTPException(status_code=422, detail=str(e))


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    try:
        catalog = get_quote_service().catalog
    except CatalogError as e:
        raise _http_error(e)
    return {
        "status": "ok",
        "catalog_version": catalog.version,
        "catalog_hash": catalog.content_hash,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Catalog ──────────────────────────────────────────────

@catalog_router.get("")
async def get_catalog_document() -> dict[str, Any]:
    try:
        catalog = get_quote_service().catalog
    except CatalogError as e:
        raise _http_error(e)
    return catalog.model_dump(mode="json", by_alias=True)


@catalog_router.get("/reference")
async def get_reference_table() -> Response:
    try:
        artifact = get_reference_cache().get()
    except CatalogError as e:
        raise _http_error(e)
    return Response(
        content=artifact.content,
        media_type="application/json",
        headers={
            "X-Cache": "HIT" if artifact.from_cache else "MISS",
            "X-Catalog-Hash": artifact.catalog_hash,
        },
    )


@catalog_router.get("/reference/status")
async def get_reference_status() -> dict[str, Any]:
    return get_reference_cache().status()


# ── Quotes ───────────────────────────────────────────────

@quote_router.post("/summary")
async def quote_summary(config: QuoteConfig) -> dict[str, Any]:
    try:
        summary = get_quote_service().summary(config)
    except PricingError as e:
        raise _http_error(e)
    return summary.model_dump(mode="json", by_alias=True)


@quote_router.post("/proposal")
async def quote_proposal(request: ProposalRequest) -> dict[str, Any]:
    try:
        return get_quote_service().export_dict(request.config, request.client, request.quote_info)
    except PricingError as e:
        raise _http_error(e)


@quote_router.post("/kombo/{kombo}")
async def select_kombo(kombo: KomboType, config: QuoteConfig) -> dict[str, Any]:
    try:
        updated = get_quote_service().select_kombo(config, kombo)
    except PricingError as e:
        raise _http_error(e)
    return updated.model_dump(mode="json", by_alias=True)
