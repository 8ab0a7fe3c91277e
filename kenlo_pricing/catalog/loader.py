"""
Catalog Store — loads and caches the pricing catalog file.

The catalog is read once per process and validated against the schema.
A malformed or incomplete file fails loudly with CatalogError instead of
producing zero prices. The SHA-256 of the file travels with the catalog
so derived artifacts can tell when it changed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.config import get_settings
from kenlo_pricing.models.errors import CatalogError
from kenlo_pricing.utils.hashing import file_sha256, sha256_hash

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path) -> PricingCatalog:
    """Read, hash and validate a catalog file."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CatalogError(f"Cannot read pricing catalog at {path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogError(f"Pricing catalog {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"Pricing catalog {path} must be a JSON object")

    data["content_hash"] = sha256_hash(raw)
    try:
        catalog = PricingCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Pricing catalog {path} failed validation:\n{e}") from e

    logger.info(f"Loaded pricing catalog v{catalog.version} from {path} (sha256 {catalog.content_hash[:12]})")
    return catalog


class CatalogStore:
    """
    Process-wide holder of the active catalog.
    Cached after first load; reload() re-reads the file.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or get_settings().catalog_path)
        self._catalog: Optional[PricingCatalog] = None

    def get(self) -> PricingCatalog:
        if self._catalog is None:
            self._catalog = load_catalog(self.path)
        return self._catalog

    def reload(self) -> PricingCatalog:
        self._catalog = None
        return self.get()

    def current_hash(self) -> str:
        """Hash of the file as it is on disk right now, which may differ from the loaded one."""
        try:
            return file_sha256(self.path)
        except OSError as e:
            raise CatalogError(f"Cannot read pricing catalog at {self.path}: {e}") from e


_stores: dict[Path, CatalogStore] = {}


def get_catalog_store(path: str | Path | None = None) -> CatalogStore:
    """One store per resolved catalog path; the settings path by default."""
    resolved = Path(path or get_settings().catalog_path).resolve()
    if resolved not in _stores:
        _stores[resolved] = CatalogStore(resolved)
    return _stores[resolved]


def get_catalog(path: str | Path | None = None) -> PricingCatalog:
    """Return the cached catalog for `path` (settings path by default)."""
    return get_catalog_store(path).get()
