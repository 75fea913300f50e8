"""Static site: published asset routes and the not-found document."""

import logging
import mimetypes
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse, PlainTextResponse, Response

from hashsite.assets.registry import AssetRegistry
from hashsite.config import Settings
from hashsite.dependencies import get_app_settings, get_registry

router = APIRouter(tags=["site"])
log = logging.getLogger(__name__)

# Font types are missing from the mimetypes tables on several platforms
mimetypes.add_type("font/woff", ".woff")
mimetypes.add_type("font/woff2", ".woff2")
mimetypes.add_type("font/ttf", ".ttf")
mimetypes.add_type("font/otf", ".otf")

NOT_FOUND_PAGE = "404.html"

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def not_found_response(settings: Settings) -> Response:
    """404 with the site's not-found document (plain text if the document is missing)."""
    page = settings.resolve(settings.html_dir) / NOT_FOUND_PAGE
    if page.is_file():
        return FileResponse(page, status_code=status.HTTP_404_NOT_FOUND, media_type="text/html")
    log.warning("Not-found document missing: %s", page)
    return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)


@router.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
async def serve_asset(
    request: Request,
    registry: Annotated[AssetRegistry, Depends(get_registry)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """
    Serve a published asset by its exact URL path. Must be registered last:
    it matches every path not claimed by another route.
    """
    asset = registry.lookup(request.url.path)
    if asset is None or request.method not in ("GET", "HEAD"):
        return not_found_response(settings)
    if not asset.source_path.is_file():
        # Removed after startup; routes are not refreshed until restart
        log.error("Published file vanished: %s", asset.source_path)
        return not_found_response(settings)
    return FileResponse(asset.source_path)
