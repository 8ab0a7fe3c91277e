"""Shared fixtures for the pricing engine tests."""

import json
from datetime import datetime, timezone

import pytest

from kenlo_pricing.catalog.loader import load_catalog
from kenlo_pricing.config import DEFAULT_CATALOG_PATH
from kenlo_pricing.models.state import AddonsState, MetricsState, QuoteConfig
from kenlo_pricing.services.quote_service import QuoteService

FIXED_TIME = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def catalog():
    return load_catalog(DEFAULT_CATALOG_PATH)


@pytest.fixture
def catalog_data() -> dict:
    """A fresh, mutable copy of the default catalog JSON."""
    return json.loads(DEFAULT_CATALOG_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def write_catalog(tmp_path):
    """Write a catalog dict to a temp file and return its path."""
    def _write(data: dict, name: str = "catalog.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def service(catalog):
    return QuoteService(catalog)


@pytest.fixture
def fixed_time():
    return FIXED_TIME


@pytest.fixture
def make_config():
    """Build a QuoteConfig from flat keyword overrides.

    make_config(product="loc", addons=["pay"], contracts_under_management=300)
    """
    def _make(addons=(), **overrides):
        config_fields = {
            key: overrides.pop(key)
            for key in list(overrides)
            if key in QuoteConfig.model_fields
        }
        return QuoteConfig(
            addons=AddonsState(**{name: True for name in addons}),
            metrics=MetricsState(**overrides),
            **config_fields,
        )
    return _make
