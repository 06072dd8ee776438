"""Bot module containing handlers, keyboards, and messaging utilities."""

from reelpick.bot.router import setup_routers
from reelpick.bot.session import SessionStore, UserSession

__all__ = [
    "setup_routers",
    "SessionStore",
    "UserSession",
]
