"""
Reference Artifact Cache — catalog-derived artifacts, keyed by catalog hash.

The artifact is rebuilt only when the SHA-256 of the catalog file changes.
With a storage directory configured the artifact is also written to disk,
so a restarted process can reuse it.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel

from kenlo_pricing.catalog.loader import CatalogStore, get_catalog_store
from kenlo_pricing.catalog.schema import PricingCatalog
from kenlo_pricing.config import get_settings
from kenlo_pricing.services.reference_table import render_reference_table

logger = logging.getLogger(__name__)


class CachedArtifact(BaseModel):
    content: bytes
    catalog_hash: str
    generated_at: datetime
    from_cache: bool = False


class ReferenceArtifactCache:
    """Builds an artifact from the catalog once per catalog version."""

    def __init__(
        self,
        builder: Callable[[PricingCatalog], bytes] = render_reference_table,
        store: Optional[CatalogStore] = None,
        storage_dir: str | Path | None = None,
        name: str = "reference_table",
        suffix: str = ".json",
    ):
        self.builder = builder
        self.store = store or get_catalog_store()
        if storage_dir is None:
            storage_dir = get_settings().reference_cache_dir
        self.storage_dir = Path(storage_dir) if storage_dir else None
        self.name = name
        self.suffix = suffix
        self._artifact: Optional[CachedArtifact] = None
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _disk_path(self, catalog_hash: str) -> Optional[Path]:
        if self.storage_dir is None:
            return None
        return self.storage_dir / f"{self.name}_{catalog_hash[:16]}{self.suffix}"

    def get(self) -> CachedArtifact:
        with self._lock:
            current_hash = self.store.current_hash()

            if self._artifact is not None and self._artifact.catalog_hash == current_hash:
                self._hits += 1
                logger.debug(f"Cache hit for {self.name} ({current_hash[:12]})")
                return self._artifact.model_copy(update={"from_cache": True})

            path = self._disk_path(current_hash)
            if path is not None and path.exists():
                self._hits += 1
                self._artifact = CachedArtifact(
                    content=path.read_bytes(),
                    catalog_hash=current_hash,
                    generated_at=datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc),
                )
                logger.info(f"Loaded {self.name} from {path}")
                return self._artifact.model_copy(update={"from_cache": True})

            self._misses += 1
            catalog = self.store.get()
            if catalog.content_hash != current_hash:
                logger.info(f"Catalog changed on disk ({catalog.content_hash[:12]} -> {current_hash[:12]}), reloading")
                catalog = self.store.reload()

            self._artifact = CachedArtifact(
                content=self.builder(catalog),
                catalog_hash=catalog.content_hash,
                generated_at=datetime.now(timezone.utc),
            )
            # The file may have changed since current_hash(); name it after what was built
            target = self._disk_path(catalog.content_hash)
            if target is not None:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(self._artifact.content)
                logger.info(f"Saved {self.name} to {target}")
            logger.info(f"Built {self.name} for catalog {catalog.content_hash[:12]}")
            return self._artifact

    def invalidate(self) -> None:
        """Drop the cached artifact, in memory and on disk."""
        with self._lock:
            if self._artifact is not None:
                path = self._disk_path(self._artifact.catalog_hash)
                if path is not None and path.exists():
                    path.unlink()
            self._artifact = None
            logger.info(f"Invalidated {self.name}")

    def status(self) -> dict[str, Any]:
        with self._lock:
            artifact = self._artifact
            return {
                "name": self.name,
                "cached": artifact is not None,
                "catalog_hash": artifact.catalog_hash if artifact else None,
                "generated_at": artifact.generated_at.isoformat() if artifact else None,
                "size_bytes": len(artifact.content) if artifact else 0,
                "hits": self._hits,
                "misses": self._misses,
            }
