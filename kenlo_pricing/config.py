"""
Application configuration using Pydantic Settings.
Catalog location, logging and API values are centralized here.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "catalog" / "pricing_catalog.json"


class Settings(BaseSettings):
    """Application settings loaded from KENLO_* environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Kenlo Pricing Engine"
    debug: bool = False

    # ── Catalog ──────────────────────────────────────────
    catalog_path: str = str(DEFAULT_CATALOG_PATH)

    # ── Reference artifact cache ─────────────────────────
    reference_cache_dir: str = ""  # empty keeps the cache in memory only

    # ── API ──────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "KENLO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
