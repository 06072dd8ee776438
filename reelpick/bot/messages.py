"""Message templates and text rendering."""

from aiogram.utils.text_decorations import html_decoration

from reelpick.core import ContentCategory, RecommendationItem, RequestPhase, SessionView

MAX_MESSAGE_CHARS = 4000  # Telegram limit is 4096
DESCRIPTION_MAX_CHARS = 200


def _q(text: str) -> str:
    return html_decoration.quote(text)


def start_message() -> str:
    """Welcome message."""
    return (
        "<b>Hi! I'll find movies and TV shows that match your taste.</b>\n\n"
        "Pick a category, choose your favorite genres, set the minimum rating "
        "and tap <b>Get Recommendations</b>."
    )


HELP_MESSAGE = (
    "<b>How it works</b>\n\n"
    "1. Choose <b>Movies</b> or <b>TV Shows</b>. Switching clears the genre selection.\n"
    "2. Tap genres to select or deselect them.\n"
    "3. Use ➖/➕ or <code>/rating 7.5</code> to set the minimum rating (0-10).\n"
    "4. Tap <b>Get Recommendations</b>.\n\n"
    "Results are kept separately for movies and shows until you refresh them.\n\n"
    "/start - preferences panel\n"
    "/reset - restore default preferences\n"
    "/help - this message"
)


def preferences_message(view: SessionView) -> str:
    """Preferences panel text.

    Args:
        view: Current session view

    Returns:
        Panel text with the current selections and request status
    """
    genres = ", ".join(
        _q(g.name) for g in view.available_genres if g.name in view.selected_genres
    )
    lines = [
        "<b>Your Preferences</b>",
        "",
        f"Category: <b>{view.category.label}</b>",
        f"Favorite genres: {genres or '<i>none selected</i>'}",
        f"Minimum rating: <b>{view.minimum_rating:.1f}</b>",
    ]

    if view.loading:
        lines += ["", "⏳ Finding recommendations..."]
    elif view.error_message:
        lines += ["", f"⚠️ {_q(view.error_message)}"]

    return "\n".join(lines)


def item_block(index: int, item: RecommendationItem) -> str:
    """Format a single recommendation.

    Args:
        index: Item number (1-based)
        item: Recommendation to render

    Returns:
        Formatted block
    """
    description = item.description
    if len(description) > DESCRIPTION_MAX_CHARS:
        description = description[: DESCRIPTION_MAX_CHARS - 1].rstrip() + "…"

    lines = [
        f"{index}. <b>{_q(item.title)}</b>",
        f"{item.year} • Rating: {item.rating:.1f}",
    ]
    if description:
        lines.append(_q(description))
    if item.genres:
        lines.append(f"<i>{_q(', '.join(item.genres))}</i>")
    if item.where_to_watch:
        lines.append(f"Watch on: {_q(', '.join(item.where_to_watch))}")
    return "\n".join(lines)


def results_messages(
    category: ContentCategory,
    items: tuple[RecommendationItem, ...],
) -> list[str]:
    """Render a category's results, split to fit Telegram's message limit.

    Args:
        category: Category the results belong to
        items: Cached recommendations

    Returns:
        One or more message texts
    """
    if not items:
        return [no_results(category)]

    header = f"<b>Your Recommendations: {category.label}</b>\n{len(items)} results"
    messages: list[str] = []
    current = header

    for index, item in enumerate(items, start=1):
        block = item_block(index, item)
        if len(current) + len(block) + 2 > MAX_MESSAGE_CHARS:
            messages.append(current)
            current = block
        else:
            current = f"{current}\n\n{block}"

    messages.append(current)
    return messages


def no_results(category: ContentCategory) -> str:
    """Shown when a category has nothing to display yet."""
    return (
        f"No {category.label.lower()} recommendations yet.\n"
        "Choose some genres and tap <b>Get Recommendations</b>."
    )


def submit_failed(phase: RequestPhase, error_message: str | None) -> str:
    """Shown when a submit ended without fresh results."""
    if phase == RequestPhase.ERROR and error_message:
        return f"⚠️ {_q(error_message)}\n\nPrevious results, if any, are still available."
    return "⚠️ Failed to fetch recommendations"


def request_in_progress(category: ContentCategory) -> str:
    """Callback alert when a submit for the category is already running."""
    return f"Still looking for {category.label.lower()}, please wait."


def rating_usage() -> str:
    """Usage hint for /rating."""
    return "Usage: <code>/rating 7.5</code> (a number from 0 to 10)"


def rating_set(value: float) -> str:
    """Confirmation after /rating."""
    return f"Minimum rating set to <b>{value:.1f}</b>."


def reset_done() -> str:
    """Confirmation that preferences were reset."""
    return "Done! Your preferences are back to defaults."


def session_expired() -> str:
    """Shown when a button belongs to an expired session."""
    return "Your session has expired. Let's start again."
