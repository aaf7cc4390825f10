# config.py
# Role: Application settings read from the environment (and an optional .env).
#       Only the app factory reads these; the store and report code take
#       everything they need as arguments.

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_truthy(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default)
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class Settings:
    title: str = "Finance Tracker"
    # Shown before every amount on both screens
    currency_symbol: str = "₹"
    session_cookie: str = "ft_session"
    # Load the demo transactions into every new session
    seed_data: bool = True
    # Least recently used sessions are dropped beyond this many
    max_sessions: int = 1000


def load_settings() -> Settings:
    """Build Settings from FINANCE_TRACKER_* environment variables."""
    return Settings(
        title=os.getenv("FINANCE_TRACKER_TITLE", "Finance Tracker"),
        currency_symbol=os.getenv("FINANCE_TRACKER_CURRENCY_SYMBOL", "₹"),
        session_cookie=os.getenv("FINANCE_TRACKER_SESSION_COOKIE", "ft_session"),
        seed_data=_env_truthy("FINANCE_TRACKER_SEED_DATA", "1"),
        max_sessions=int(os.getenv("FINANCE_TRACKER_MAX_SESSIONS", "1000")),
    )
