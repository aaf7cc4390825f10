# deps.py
# Role: Shared application-level dependencies.
#       Provides the Jinja2 templates loader (with the display filters and the
#       shared enums registered as globals), the per-browser session registry
#       that owns each session's stores, and the FastAPI dependencies routes
#       use to reach them.

"""
Shared dependencies for the finance tracker app.
"""

import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .config import Settings
from .logging_setup import get_logger
from .models import Category, Period, TransactionType
from .services.filters import ALL
from .services.formatting import format_money, format_percentage
from .services.reports import ReportCache
from .store import EXPENSES_SEED, REPORTS_SEED, TransactionStore

logger = get_logger(__name__)

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = format_money
templates.env.filters["percent"] = format_percentage
templates.env.globals.update(
    categories=list(Category),
    transaction_types=list(TransactionType),
    periods=list(Period),
    ALL=ALL,
)

# -------------------------------------------------------------------
# Per-session state
# -------------------------------------------------------------------


@dataclass
class SessionState:
    """
    Everything one browser session owns. The Expenses and Reports screens
    each get their own store; they never read each other's data.
    """

    expenses: TransactionStore
    reports: TransactionStore
    report_cache: ReportCache = field(default_factory=ReportCache)


class SessionRegistry:
    """
    In-memory map of session id -> SessionState.

    Ids are only ever issued by create(); a cookie naming an id the registry
    does not hold gets a fresh session. At most ``max_sessions`` are kept,
    the least recently used one is dropped first.
    """

    def __init__(self, seed_data: bool = True, max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.seed_data = seed_data
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SessionState]" = OrderedDict()

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> str:
        session_id = new_session_id()
        self._sessions[session_id] = SessionState(
            expenses=TransactionStore(EXPENSES_SEED if self.seed_data else ()),
            reports=TransactionStore(REPORTS_SEED if self.seed_data else ()),
        )
        logger.info("Started session %s (seeded=%s)", session_id, self.seed_data)
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted session %s", evicted)
        return session_id

    def get(self, session_id: Optional[str]) -> Optional[SessionState]:
        state = self._sessions.get(session_id) if session_id else None
        if state is not None:
            self._sessions.move_to_end(session_id)
        return state


def new_session_id() -> str:
    return uuid.uuid4().hex


# -------------------------------------------------------------------
# Dependencies
# -------------------------------------------------------------------

async def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> SessionState:
    """
    FastAPI dependency returning the caller's SessionState.

    The session id is put on request.state by the session middleware in
    main.py. Declared async so it runs on the event loop with the routes.
    """
    registry: SessionRegistry = request.app.state.sessions
    state = registry.get(request.state.session_id)
    if state is None:
        # Evicted between the middleware and this dependency.
        request.state.session_id = registry.create()
        state = registry.get(request.state.session_id)
    return state


async def get_today() -> date:
    """Reference date for period filters; overridden in tests."""
    return date.today()
