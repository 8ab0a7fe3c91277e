"""
FastAPI application factory and API package.

Run with:
    uvicorn kenlo_pricing.api:app --reload --port 8000

Or via the CLI:
    python -m kenlo_pricing --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kenlo_pricing import __version__
from kenlo_pricing.config import get_settings
from kenlo_pricing.api.routes import catalog_router, health_router, quote_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory: create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Kenlo Pricing API",
        description="Quote summaries and proposal records for the Kenlo price calculator",
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # The calculator front-end is served from another origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(catalog_router, prefix="/api/catalog", tags=["Catalog"])
    application.include_router(quote_router, prefix="/api/quote", tags=["Quote"])

    logger.info(f"Created {settings.app_name} API")
    return application


# Module-level instance for `uvicorn kenlo_pricing.api:app`
app = create_app()
