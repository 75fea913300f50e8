"""Route registry for published assets, built once at startup and read-only afterwards."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from hashsite.ads.models import AdDescriptor

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedAsset:
    """A file served under a fixed URL. content_hash is SHA-256 hex of the bytes at startup."""

    content_hash: str
    extension: str
    source_path: Path


@dataclass(frozen=True)
class AssetRegistry:
    """Immutable view of published routes and the ad list."""

    routes: Mapping[str, PublishedAsset] = field(default_factory=lambda: MappingProxyType({}))
    ads: Tuple[AdDescriptor, ...] = ()

    def lookup(self, url_path: str) -> Optional[PublishedAsset]:
        """Return the asset registered at url_path, or None."""
        return self.routes.get(url_path)

    def __len__(self) -> int:
        return len(self.routes)


class RegistryBuilder:
    """Collects routes and ads during startup. Call freeze() when done."""

    def __init__(self) -> None:
        self._routes: Dict[str, PublishedAsset] = {}
        self._ads: List[AdDescriptor] = []

    def publish(self, url_path: str, asset: PublishedAsset) -> None:
        """Register asset at url_path. A later registration for the same path wins."""
        previous = self._routes.get(url_path)
        if previous is not None and previous.source_path != asset.source_path:
            log.debug(
                "Route %s re-registered: %s replaces %s",
                url_path, asset.source_path, previous.source_path,
            )
        self._routes[url_path] = asset
        log.info("Published '%s' at '%s'", asset.source_path, url_path)

    def add_ad(self, ad: AdDescriptor) -> None:
        self._ads.append(ad)

    def freeze(self) -> AssetRegistry:
        return AssetRegistry(
            routes=MappingProxyType(dict(self._routes)),
            ads=tuple(self._ads),
        )
