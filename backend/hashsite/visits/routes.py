"""Homepage (counts a visit) and visit count API."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hashsite.config import Settings
from hashsite.db.session import get_session
from hashsite.dependencies import get_app_settings, get_session_factory
from hashsite.site import not_found_response
from hashsite.visits.models import VisitsResponse
from hashsite.visits.service import get_visits as read_visits
from hashsite.visits.service import increment_visits

router = APIRouter(tags=["visits"])
log = logging.getLogger(__name__)

HOMEPAGE = "index.html"


@router.get("/")
async def homepage(
    settings: Annotated[Settings, Depends(get_app_settings)],
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> Response:
    """
    Count the visit, then serve the homepage document. The page is served even
    when the count cannot be stored, with status 500.
    """
    status_code = status.HTTP_200_OK
    try:
        async with get_session(factory) as session:
            count = await increment_visits(session)
        log.debug("Homepage visit #%d", count)
    except SQLAlchemyError as e:
        log.error("Error updating visits: %s", e)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    page = settings.resolve(settings.html_dir) / HOMEPAGE
    if not page.is_file():
        log.error("Homepage document missing: %s", page)
        if status_code != status.HTTP_200_OK:
            return PlainTextResponse("Internal Server Error", status_code=status_code)
        return not_found_response(settings)
    return FileResponse(page, status_code=status_code, media_type="text/html")


@router.get("/api/getVisits", response_model=VisitsResponse)
async def get_visits(
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> Response:
    """Return the visit count. A database error is logged and reported as 0."""
    try:
        async with get_session(factory) as session:
            visits = await read_visits(session)
    except SQLAlchemyError as e:
        log.error("Error reading visits: %s", e)
        visits = 0
    return JSONResponse(content=VisitsResponse(visits=visits).model_dump())
