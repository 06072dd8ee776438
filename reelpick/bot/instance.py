"""Shared Bot, service client and session store — import from here to avoid circular imports."""

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from reelpick.bot.session import SessionStore
from reelpick.config import config
from reelpick.core import PreferenceState, SessionController
from reelpick.providers.recs_client import RecommendationClient

bot = Bot(
    token=config.bot_token,
    default=DefaultBotProperties(parse_mode=ParseMode.HTML),
)

recs_client = RecommendationClient(
    url=config.recs_service_url,
    timeout=config.recs_request_timeout_s,
)


def new_controller() -> SessionController:
    """Build a controller for a fresh user session."""
    return SessionController(
        recs_client,
        initial=PreferenceState(minimum_rating=config.default_minimum_rating),
        deadline_s=config.recs_submit_deadline_s,
    )


user_sessions = SessionStore(new_controller, ttl_seconds=config.session_ttl_seconds)
