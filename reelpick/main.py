"""Application entrypoint for FastAPI and bot startup."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from aiogram import Dispatcher
from aiogram.types import Update
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reelpick.bot.instance import bot, recs_client, user_sessions
from reelpick.bot.router import setup_routers
from reelpick.config import config
from reelpick.logging import get_logger, setup_logging

setup_logging(config.log_level)
logger = get_logger(__name__)

dp = Dispatcher()

setup_routers(dp)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Starting application, Recommendation Service at {config.recs_service_url}")

    if config.bot_mode == "webhook":
        webhook_full_url = f"{config.webhook_url}{config.webhook_path}"
        logger.info(f"Setting webhook to {webhook_full_url}")
        await bot.set_webhook(
            url=webhook_full_url,
            drop_pending_updates=True,
        )
        logger.info("Webhook registered successfully")

    yield

    logger.info("Shutting down application")

    if config.bot_mode == "webhook":
        await bot.delete_webhook()
        logger.info("Webhook deleted")

    await recs_client.close()
    await bot.session.close()
    logger.info("Bot session closed")


app = FastAPI(
    title="ReelPick Bot",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"ok": True, "sessions": len(user_sessions)}


@app.post(config.webhook_path)
async def telegram_webhook(request: Request) -> JSONResponse:
    """Handle incoming Telegram webhook updates."""
    if config.bot_mode != "webhook":
        return JSONResponse(
            status_code=400,
            content={"error": "Webhook mode is not enabled"},
        )

    try:
        data = await request.json()
        update = Update.model_validate(data, context={"bot": bot})
        await dp.feed_update(bot=bot, update=update)
        return JSONResponse(content={"ok": True})
    except Exception as e:
        logger.exception(f"Error processing webhook update: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )


async def run_polling() -> None:
    """Run the bot in polling mode."""
    logger.info(f"Starting bot in polling mode, Recommendation Service at {config.recs_service_url}")

    try:
        await dp.start_polling(
            bot,
            drop_pending_updates=True,
            allowed_updates=["message", "callback_query"],
        )
    finally:
        await recs_client.close()
        await bot.session.close()
        logger.info("Polling stopped, bot session closed")


def main() -> None:
    """Main entrypoint supporting both polling and webhook modes."""
    if len(sys.argv) > 1 and sys.argv[1] == "polling":
        asyncio.run(run_polling())
    elif config.bot_mode == "polling" and len(sys.argv) == 1:
        asyncio.run(run_polling())
    else:
        logger.info(f"Starting FastAPI server on {config.host}:{config.port}")
        uvicorn.run(
            "reelpick.main:app",
            host=config.host,
            port=config.port,
            reload=False,
        )


if __name__ == "__main__":
    main()
