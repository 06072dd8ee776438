"""Handlers for bot commands (/start, /help, /reset, /rating)."""

from aiogram import Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from reelpick.bot.handlers_flow import show_panel
from reelpick.bot.instance import user_sessions
from reelpick.bot.messages import (
    HELP_MESSAGE,
    rating_set,
    rating_usage,
    reset_done,
    start_message,
)
from reelpick.bot.sender import safe_send_message
from reelpick.core import ValidationError
from reelpick.logging import get_logger

router = Router(name="start")
logger = get_logger(__name__)


def parse_rating_arg(args: str | None) -> str | None:
    """Extract the rating argument of `/rating <value>`.

    Accepts a decimal comma ("7,5") as well as a point.

    Args:
        args: Raw command arguments

    Returns:
        Normalized number text, or None if no argument was given
    """
    if not args or not args.strip():
        return None
    return args.strip().split()[0].replace(",", ".")


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    """Handle the /start command: greet and show a fresh panel."""
    user = message.from_user
    if not user:
        return

    user_id = str(user.id)
    logger.info(f"User {user_id} started the bot")

    session = user_sessions.get_or_create(user_id)
    session.panel_message_id = None

    await safe_send_message(
        bot=message.bot,
        chat_id=message.chat.id,
        text=start_message(),
    )
    await show_panel(message.bot, message.chat.id, session)


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handle the /help command."""
    await safe_send_message(
        bot=message.bot,
        chat_id=message.chat.id,
        text=HELP_MESSAGE,
    )


@router.message(Command("reset"))
async def handle_reset(message: Message) -> None:
    """Handle the /reset command - restore default preferences."""
    user = message.from_user
    if not user:
        return

    session = user_sessions.get_or_create(str(user.id))
    session.controller.reset()
    session.panel_message_id = None
    logger.info(f"User {user.id} reset preferences")

    await safe_send_message(bot=message.bot, chat_id=message.chat.id, text=reset_done())
    await show_panel(message.bot, message.chat.id, session)


@router.message(Command("rating"))
async def handle_rating_command(message: Message, command: CommandObject) -> None:
    """Handle `/rating <value>`."""
    user = message.from_user
    if not user:
        return

    raw = parse_rating_arg(command.args)
    if raw is None:
        await safe_send_message(bot=message.bot, chat_id=message.chat.id, text=rating_usage())
        return

    session = user_sessions.get_or_create(str(user.id))
    try:
        prefs = session.controller.set_minimum_rating(float(raw))
    except (ValueError, ValidationError) as e:
        logger.info(f"User {user.id} sent invalid rating {raw!r}: {e}")
        await safe_send_message(bot=message.bot, chat_id=message.chat.id, text=rating_usage())
        return

    await safe_send_message(
        bot=message.bot,
        chat_id=message.chat.id,
        text=rating_set(prefs.minimum_rating),
    )
    await show_panel(message.bot, message.chat.id, session)
