"""Handlers for the preferences panel and recommendation display."""

from aiogram import Bot, F, Router
from aiogram.types import CallbackQuery

from reelpick.bot.instance import user_sessions
from reelpick.bot.keyboards import (
    RATING_STEP,
    kb_preferences,
    kb_restart,
    kb_results,
    parse_callback,
    parse_category,
)
from reelpick.bot.messages import (
    preferences_message,
    request_in_progress,
    results_messages,
    session_expired,
    submit_failed,
)
from reelpick.bot.sender import safe_answer_callback, safe_edit_message, safe_send_message
from reelpick.bot.session import UserSession
from reelpick.core import (
    ContentCategory,
    RequestInProgressError,
    RequestPhase,
    ValidationError,
)
from reelpick.logging import get_logger

router = Router(name="flow")
logger = get_logger(__name__)


async def show_panel(bot: Bot | None, chat_id: int, session: UserSession) -> None:
    """Render the preferences panel, editing the previous one when possible."""
    view = session.controller.view()
    text = preferences_message(view)
    markup = kb_preferences(view)

    if session.panel_message_id is not None:
        edited = await safe_edit_message(
            bot=bot,
            chat_id=chat_id,
            message_id=session.panel_message_id,
            text=text,
            reply_markup=markup,
        )
        if edited:
            return

    message = await safe_send_message(bot=bot, chat_id=chat_id, text=text, reply_markup=markup)
    if message is not None:
        session.panel_message_id = message.message_id


async def send_results(
    bot: Bot | None,
    chat_id: int,
    session: UserSession,
    category: ContentCategory,
) -> None:
    """Send a category's cached results."""
    messages = results_messages(category, session.controller.results_for(category))
    for i, text in enumerate(messages):
        last = i == len(messages) - 1
        await safe_send_message(
            bot=bot,
            chat_id=chat_id,
            text=text,
            reply_markup=kb_results() if last else None,
        )


async def _session_for(callback: CallbackQuery) -> UserSession | None:
    """Live session for the callback's user; tells the user when it expired."""
    if not callback.message or not callback.from_user:
        return None

    session = user_sessions.get(str(callback.from_user.id))
    if session is None:
        await safe_send_message(
            bot=callback.bot,
            chat_id=callback.message.chat.id,
            text=session_expired(),
            reply_markup=kb_restart(),
        )
    return session


@router.callback_query(F.data == "n:panel")
async def handle_panel(callback: CallbackQuery) -> None:
    """Show the preferences panel, starting a session if needed."""
    await safe_answer_callback(callback)

    if not callback.message or not callback.from_user:
        return

    session = user_sessions.get_or_create(str(callback.from_user.id))
    session.panel_message_id = None
    await show_panel(callback.bot, callback.message.chat.id, session)


@router.callback_query(F.data.startswith("c:"))
async def handle_category(callback: CallbackQuery) -> None:
    """Handle a category tab."""
    await safe_answer_callback(callback)

    session = await _session_for(callback)
    if session is None or not callback.data:
        return

    _, value, _ = parse_callback(callback.data)
    category = parse_category(value)
    if category is None:
        logger.warning(f"Invalid category value: {value}")
        return

    session.controller.set_category(category)
    logger.info(f"User {session.user_id} switched to {category.value}")

    await show_panel(callback.bot, callback.message.chat.id, session)


@router.callback_query(F.data.startswith("g:"))
async def handle_genre(callback: CallbackQuery) -> None:
    """Handle a genre toggle or the clear button."""
    session = await _session_for(callback)
    if session is None or not callback.data:
        await safe_answer_callback(callback)
        return

    controller = session.controller
    _, value, extra = parse_callback(callback.data)

    # Buttons from a panel rendered for the other category are stale
    built_for = parse_category(extra[0] if extra else None)
    if built_for != controller.preferences.category:
        await safe_answer_callback(callback, text="That list is out of date.")
        await show_panel(callback.bot, callback.message.chat.id, session)
        return

    if value == "clear":
        controller.set_genres(frozenset())
    else:
        try:
            genre = controller.taxonomy.genre_at(built_for, int(value))
        except (ValueError, IndexError):
            logger.warning(f"Invalid genre index: {value}")
            await safe_answer_callback(callback)
            return
        controller.toggle_genre(genre.name)

    await safe_answer_callback(callback)
    await show_panel(callback.bot, callback.message.chat.id, session)


@router.callback_query(F.data.startswith("r:"))
async def handle_rating(callback: CallbackQuery) -> None:
    """Handle the rating step buttons."""
    session = await _session_for(callback)
    if session is None or not callback.data:
        await safe_answer_callback(callback)
        return

    controller = session.controller
    _, direction, _ = parse_callback(callback.data)

    if direction == "up":
        controller.set_minimum_rating(controller.preferences.minimum_rating + RATING_STEP)
    elif direction == "down":
        controller.set_minimum_rating(controller.preferences.minimum_rating - RATING_STEP)
    else:
        await safe_answer_callback(
            callback,
            text=f"Minimum rating: {controller.preferences.minimum_rating:.1f}",
        )
        return

    await safe_answer_callback(callback)
    await show_panel(callback.bot, callback.message.chat.id, session)


@router.callback_query(F.data == "n:submit")
async def handle_submit(callback: CallbackQuery) -> None:
    """Submit preferences and send the results for the submitted category."""
    session = await _session_for(callback)
    if session is None:
        await safe_answer_callback(callback)
        return

    controller = session.controller
    chat_id = callback.message.chat.id
    category = controller.preferences.category

    async def on_started() -> None:
        await show_panel(callback.bot, chat_id, session)

    await safe_answer_callback(callback)

    try:
        state = await controller.submit(on_started=on_started)
    except ValidationError as e:
        logger.info(f"User {session.user_id} submit rejected: {e}")
        await show_panel(callback.bot, chat_id, session)
        return
    except RequestInProgressError:
        await safe_send_message(bot=callback.bot, chat_id=chat_id, text=request_in_progress(category))
        return

    logger.info(f"User {session.user_id} {category.value} submit finished: {state.phase.value}")

    if state.phase == RequestPhase.SUCCESS:
        await send_results(callback.bot, chat_id, session, category)
    else:
        await safe_send_message(
            bot=callback.bot,
            chat_id=chat_id,
            text=submit_failed(state.phase, state.error_message),
        )

    await show_panel(callback.bot, chat_id, session)


@router.callback_query(F.data == "n:results")
async def handle_results(callback: CallbackQuery) -> None:
    """Show cached results for the active category."""
    await safe_answer_callback(callback)

    session = await _session_for(callback)
    if session is None:
        return

    await send_results(
        callback.bot,
        callback.message.chat.id,
        session,
        session.controller.preferences.category,
    )
