"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from typing import Literal

from dotenv import load_dotenv

load_dotenv()

DEFAULT_RECS_SERVICE_URL = "http://localhost:8080/recommendations"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


def _env_float(name: str, default: float) -> float:
    """Read a float env var, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    """Read an int env var, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Bot settings
    bot_token: str
    bot_mode: Literal["webhook", "polling"]
    webhook_url: str | None
    webhook_path: str
    host: str
    port: int
    log_level: str

    # Recommendation Service
    recs_service_url: str
    recs_request_timeout_s: float
    recs_submit_deadline_s: float

    # Session settings
    session_ttl_seconds: int
    default_minimum_rating: float

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        bot_token = os.getenv("BOT_TOKEN")
        if not bot_token:
            raise ConfigurationError("BOT_TOKEN environment variable is required")

        bot_mode = os.getenv("BOT_MODE", "polling").lower()
        if bot_mode not in ("webhook", "polling"):
            raise ConfigurationError("BOT_MODE must be 'webhook' or 'polling'")

        webhook_url = os.getenv("WEBHOOK_URL")
        webhook_path = os.getenv("WEBHOOK_PATH", "/telegram/webhook")

        if bot_mode == "webhook" and not webhook_url:
            raise ConfigurationError("WEBHOOK_URL is required when BOT_MODE=webhook")

        host = os.getenv("HOST", "0.0.0.0")
        port_str = os.getenv("PORT", "8000")
        try:
            port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got: {port_str}")

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        recs_service_url = os.getenv("RECS_SERVICE_URL", DEFAULT_RECS_SERVICE_URL).strip()
        if not recs_service_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"RECS_SERVICE_URL must be an http(s) URL, got: {recs_service_url}"
            )

        recs_request_timeout_s = _env_float("RECS_REQUEST_TIMEOUT_S", 15.0)
        recs_submit_deadline_s = _env_float("RECS_SUBMIT_DEADLINE_S", 30.0)
        if recs_request_timeout_s <= 0:
            recs_request_timeout_s = 15.0
        if recs_submit_deadline_s <= 0:
            recs_submit_deadline_s = 30.0

        session_ttl_seconds = _env_int("SESSION_TTL_SECONDS", 3600)

        # Clamped the same way the reducer clamps user input
        default_minimum_rating = min(10.0, max(0.0, _env_float("DEFAULT_MINIMUM_RATING", 7.0)))

        return cls(
            bot_token=bot_token,
            bot_mode=bot_mode,  # type: ignore[arg-type]
            webhook_url=webhook_url,
            webhook_path=webhook_path,
            host=host,
            port=port,
            log_level=log_level,
            recs_service_url=recs_service_url,
            recs_request_timeout_s=recs_request_timeout_s,
            recs_submit_deadline_s=recs_submit_deadline_s,
            session_ttl_seconds=session_ttl_seconds,
            default_minimum_rating=default_minimum_rating,
        )


config = Config.from_env()
