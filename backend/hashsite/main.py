"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hashsite.ads.routes import router as ads_router
from hashsite.assets.publisher import build_registry
from hashsite.assets.source import AssetSource
from hashsite.config import Settings, get_settings
from hashsite.db.session import create_engine, create_session_factory, init_db
from hashsite.mail.routes import router as mail_router
from hashsite.mail.store import load_mailboxes
from hashsite.site import not_found_response
from hashsite.site import router as site_router
from hashsite.visits.routes import router as visits_router

log = logging.getLogger(__name__)

# Headers the server never sends
_STRIPPED_HEADERS = ("etag", "x-powered-by")


def _setup_logging(settings: Settings) -> None:
    """Configure logging from settings (stderr always; optional file)."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger("hashsite")
    root.setLevel(level)
    root.handlers.clear()
    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    root.addHandler(sh)
    if settings.log_file and str(settings.log_file).strip():
        try:
            fh = logging.FileHandler(settings.log_file, encoding="utf-8")
            fh.setLevel(level)
            fh.setFormatter(fmt)
            root.addHandler(fh)
            root.info("Logging to file %s", settings.log_file)
        except OSError as e:
            root.warning("Could not open log file %s: %s", settings.log_file, e)
    else:
        root.debug("Logging to stderr only (no log_file set)")


def create_app(
    settings: Optional[Settings] = None,
    sources: Optional[Mapping[str, AssetSource]] = None,
) -> FastAPI:
    """
    Build the application. Publishing, mailbox loading and table creation
    happen in the lifespan, so the server is not ready until they finish.
    sources overrides asset directories per category (tests).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Startup: publishing assets from %s", settings.site_root.resolve())
        app.state.registry = build_registry(settings, sources)
        app.state.mailboxes = load_mailboxes(settings.resolve(settings.mail_file))
        engine = create_engine(settings.resolve(settings.db_path))
        await init_db(engine)
        app.state.session_factory = create_session_factory(engine)
        log.info("Startup complete")
        try:
            yield
        finally:
            await engine.dispose()
            log.info("Shutdown")

    app = FastAPI(
        title="Hashsite",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def set_response_headers(request: Request, call_next):
        """Add nosniff and drop headers the site does not expose."""
        response = await call_next(request)
        for name in _STRIPPED_HEADERS:
            if name in response.headers:
                del response.headers[name]
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """404s get the site's not-found document; other HTTP errors stay JSON."""
        if exc.status_code == 404:
            return not_found_response(settings)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Return generic 500 without leaking stack trace or internals."""
        log.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    app.include_router(visits_router)
    app.include_router(ads_router)
    app.include_router(mail_router)
    # Catch-all, must stay last
    app.include_router(site_router)
    return app


_settings = get_settings()
_setup_logging(_settings)
app = create_app(_settings)


def run() -> None:
    """Console entry point: serve app with uvicorn on the configured port."""
    import uvicorn

    log.info("Server running at http://localhost:%d", _settings.port)
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())
