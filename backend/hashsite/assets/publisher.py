"""Startup publishing: hash files and register them in the route registry."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from hashsite.ads.models import DEFAULT_AD_DESCRIPTION, AdDescriptor, AdMeta
from hashsite.assets.hashing import compute_hash
from hashsite.assets.registry import AssetRegistry, PublishedAsset, RegistryBuilder
from hashsite.assets.source import AssetSource, DirectoryAssetSource
from hashsite.config import Settings

log = logging.getLogger(__name__)

ADS_CATEGORY = "ads"

_ads_meta_adapter = TypeAdapter(List[AdMeta])


def publish_file(
    builder: RegistryBuilder, url_path: str, file_path: Path
) -> Optional[PublishedAsset]:
    """Register file_path at url_path. Missing files are logged and skipped."""
    resolved = Path(file_path).resolve()
    if not resolved.is_file():
        log.error("File not found: %s", resolved)
        return None
    asset = PublishedAsset(
        content_hash=compute_hash(resolved.read_bytes()),
        extension=resolved.suffix,
        source_path=resolved,
    )
    builder.publish(url_path, asset)
    return asset


def publish_directory(
    builder: RegistryBuilder,
    category: str,
    source: AssetSource,
    exclude: Iterable[str] = (),
) -> Dict[str, PublishedAsset]:
    """
    Publish every file of source at /<category>/<sha256><ext>.
    Returns url path -> PublishedAsset for the files published here.
    """
    if not source.exists():
        log.warning("'%s' directory not found, skipping publishing.", category)
        return {}
    skip = set(exclude)
    published: Dict[str, PublishedAsset] = {}
    for entry in source.list_files():
        if entry.name in skip:
            continue
        body = source.read_bytes(entry)
        asset = PublishedAsset(
            content_hash=compute_hash(body),
            extension=Path(entry.name).suffix,
            source_path=entry.path,
        )
        url_path = f"/{category}/{asset.content_hash}{asset.extension}"
        builder.publish(url_path, asset)
        published[url_path] = asset
    return published


def load_ads_meta(path: Path) -> List[AdMeta]:
    """Read the ads sidecar. Missing or malformed sidecar yields an empty list."""
    if not path.is_file():
        return []
    try:
        return _ads_meta_adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as e:
        log.error("Error parsing %s: %s", path.name, e)
        return []


def _ad_for(url_path: str, filename: str, meta: Mapping[str, AdMeta]) -> AdDescriptor:
    entry = meta.get(filename)
    stem = Path(filename).stem
    return AdDescriptor(
        image_url=url_path,
        title=(entry.label if entry else None) or stem,
        description=(entry.description if entry else None) or DEFAULT_AD_DESCRIPTION,
        redirect_url=(entry.redirect_url if entry else None) or None,
    )


def publish_ads(
    builder: RegistryBuilder,
    source: AssetSource,
    meta: List[AdMeta],
    meta_filename: str = "ads.json",
) -> Dict[str, PublishedAsset]:
    """Publish the ads directory and add one AdDescriptor per published file."""
    by_file: Dict[str, AdMeta] = {}
    for m in meta:
        # First entry for a filename wins
        by_file.setdefault(m.file, m)
    published = publish_directory(builder, ADS_CATEGORY, source, exclude=(meta_filename,))
    for url_path, asset in published.items():
        builder.add_ad(_ad_for(url_path, asset.source_path.name, by_file))
    return published


def build_registry(
    settings: Settings,
    sources: Optional[Mapping[str, AssetSource]] = None,
) -> AssetRegistry:
    """
    Scan the site once and return the frozen registry.
    sources overrides the directory source per category (including "ads").
    """
    sources = dict(sources or {})
    builder = RegistryBuilder()

    for url_path, rel_path in settings.pages.items():
        publish_file(builder, url_path, settings.resolve(Path(rel_path)))

    ads_dir = settings.resolve(settings.ads_dir)
    ads_source = sources.get(ADS_CATEGORY) or DirectoryAssetSource(ads_dir)
    meta = load_ads_meta(ads_dir / settings.ads_meta_file)
    publish_ads(builder, ads_source, meta, meta_filename=settings.ads_meta_file)

    for category in settings.asset_categories_list:
        source = sources.get(category) or DirectoryAssetSource(settings.resolve(Path(category)))
        publish_directory(builder, category, source)

    registry = builder.freeze()
    log.info("Published %d routes, %d ads", len(registry), len(registry.ads))
    return registry
