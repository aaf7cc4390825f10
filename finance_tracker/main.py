# main.py
# Role: Application entry point for the finance tracker.
#       Builds the FastAPI app, configures logging, mounts static assets,
#       attaches the session registry and registers the screen routers.

"""
Main FastAPI app for the personal finance tracker.

Here we only:
- create the FastAPI app
- set up logging and static files
- hand out a session cookie so each browser gets its own stores
- include route modules

Run with: uvicorn finance_tracker.main:app
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from .config import Settings, load_settings
from .deps import STATIC_DIR, SessionRegistry
from .logging_setup import configure_logging, get_logger
from .routes_expenses import router as expenses_router
from .routes_reports import router as reports_router
from .routes_root import router as root_router

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging()

    app = FastAPI(title=settings.title)
    app.state.settings = settings
    app.state.sessions = SessionRegistry(seed_data=settings.seed_data, max_sessions=settings.max_sessions)

    # Serve static files (CSS) from /static
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.middleware("http")
    async def session_cookie(request: Request, call_next):
        # Reuse the browser's session id if this process issued it; anything
        # else (first visit, evicted or made-up id) gets a fresh session.
        registry: SessionRegistry = app.state.sessions
        cookie_id = request.cookies.get(settings.session_cookie)
        request.state.session_id = cookie_id if cookie_id in registry else registry.create()

        response = await call_next(request)

        if request.state.session_id != cookie_id:
            response.set_cookie(settings.session_cookie, request.state.session_id, httponly=True, samesite="lax")
        return response

    # -------------------------------------------------------------------
    # Include routers
    # -------------------------------------------------------------------

    # Root redirect
    app.include_router(root_router)

    # Expenses screen: list, filters, add / edit / delete
    app.include_router(expenses_router)

    # Reports screen: period summary and CSV export
    app.include_router(reports_router)

    logger.info("Finance tracker app created (seed_data=%s)", settings.seed_data)
    return app


app = create_app()
