"""gmtracker – FastAPI web application.

Serves a single HTML page listing the live Garry's Mod 12 servers known to
the Steam master server, refreshed at most once per cache TTL.
"""

import logging
from datetime import timedelta

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from gmtracker import __version__
from gmtracker.cache import FreshnessCache
from gmtracker.errors import RenderError
from gmtracker.rendering import render_server_list
from gmtracker.settings import TrackerSettings
from gmtracker.steam_api import SteamServerListClient

# ---------------------------------------------------------------------------
# Colored logging (reuse uvicorn's formatter)
# ---------------------------------------------------------------------------


def _setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root ``gmtracker`` logger with uvicorn-style colours."""
    from uvicorn.logging import DefaultFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(
        DefaultFormatter(fmt="%(levelprefix)s %(name)s - %(message)s", use_colors=True)
    )
    app_logger = logging.getLogger("gmtracker")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # urllib3 logs every request URL, API key included, at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def build_cache(settings: TrackerSettings) -> FreshnessCache:
    """Wire a :class:`FreshnessCache` to the Steam server list client."""
    client = SteamServerListClient(
        settings.apikey,
        app_id=settings.app_id,
        version_match=settings.version_match,
        timeout=settings.request_timeout,
    )
    stale_after = (
        timedelta(seconds=settings.stale_warning_after)
        if settings.stale_warning_after is not None
        else None
    )
    return FreshnessCache(client, stale_warning_after=stale_after)


def create_app(settings: TrackerSettings, cache: FreshnessCache | None = None) -> FastAPI:
    """Create the web application around an explicitly owned server cache."""
    app = FastAPI(
        title="gmtracker",
        version=__version__,
        description="The Garry's Mod 12 server browser.",
        license_info={"name": "AGPL-3.0", "url": "https://www.gnu.org/licenses/agpl-3.0.html"},
        docs_url=None,
        redoc_url=None,
    )
    app.state.server_cache = cache if cache is not None else build_cache(settings)

    # Sync handlers run on Starlette's worker thread pool, so a blocking
    # refresh never stalls the event loop.
    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index(request: Request) -> Response:
        """Serve the server list page."""
        server_cache: FreshnessCache = request.app.state.server_cache
        snapshot, error = server_cache.get()
        if error is not None:
            logger.warning("update failed: %s", error)

        try:
            body = render_server_list(snapshot.servers)
        except RenderError:
            logger.exception("response generation failed")
            return PlainTextResponse("failed to generate response!", status_code=500)
        return HTMLResponse(body)

    @app.get("/health", tags=["Health"], summary="Service health")
    def health(request: Request) -> JSONResponse:
        """Report cache state without triggering a refresh."""
        snapshot = request.app.state.server_cache.peek()
        return JSONResponse(
            {
                "status": "ok",
                "version": __version__,
                "servers": len(snapshot.servers),
                "lastUpdate": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
            }
        )

    return app
