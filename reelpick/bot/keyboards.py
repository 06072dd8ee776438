"""Inline keyboard builders with compact callback data."""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from reelpick.core import ContentCategory, SessionView

# Callback data prefixes:
# c: category tab (movies/shows)
# g: genre toggle by catalog index, with the category the keyboard was built for
# r: rating step (up/down)
# n: navigation (submit/results/panel)

RATING_STEP = 0.5
GENRES_PER_ROW = 2


def kb_preferences(view: SessionView) -> InlineKeyboardMarkup:
    """Preferences panel: category tabs, genre toggles, rating and actions.

    Args:
        view: Current session view

    Returns:
        Keyboard reflecting the current selections
    """
    category = view.category.value

    tabs = []
    for option in ContentCategory:
        mark = "● " if option == view.category else ""
        tabs.append(
            InlineKeyboardButton(text=f"{mark}{option.label}", callback_data=f"c:{option.value}")
        )

    rows: list[list[InlineKeyboardButton]] = [tabs]

    genre_row: list[InlineKeyboardButton] = []
    for index, genre in enumerate(view.available_genres):
        mark = "✅ " if genre.name in view.selected_genres else ""
        genre_row.append(
            InlineKeyboardButton(
                text=f"{mark}{genre.name}",
                callback_data=f"g:{index}|{category}",
            )
        )
        if len(genre_row) == GENRES_PER_ROW:
            rows.append(genre_row)
            genre_row = []
    if genre_row:
        rows.append(genre_row)

    if view.selected_genres:
        rows.append(
            [InlineKeyboardButton(text="Clear genres", callback_data=f"g:clear|{category}")]
        )

    rows.append(
        [
            InlineKeyboardButton(text="➖", callback_data="r:down"),
            InlineKeyboardButton(text=f"⭐ {view.minimum_rating:.1f}+", callback_data="r:show"),
            InlineKeyboardButton(text="➕", callback_data="r:up"),
        ]
    )

    submit_text = "⏳ Finding recommendations..." if view.loading else "Get Recommendations"
    rows.append([InlineKeyboardButton(text=submit_text, callback_data="n:submit")])

    if view.items:
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"Show {view.category.label} ({len(view.items)})",
                    callback_data="n:results",
                )
            ]
        )

    return InlineKeyboardMarkup(inline_keyboard=rows)


def kb_results() -> InlineKeyboardMarkup:
    """Keyboard under a results message."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="Refresh", callback_data="n:submit"),
                InlineKeyboardButton(text="Preferences", callback_data="n:panel"),
            ]
        ]
    )


def kb_restart() -> InlineKeyboardMarkup:
    """Keyboard shown when a session has expired."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="Start again", callback_data="n:panel")]
        ]
    )


# Parsing utilities

def parse_callback(data: str) -> tuple[str, str, list[str]]:
    """Parse callback data into prefix, value, and extra params.

    Args:
        data: Raw callback data string

    Returns:
        Tuple of (prefix, value, extra_params)

    Examples:
        "c:shows" -> ("c", "shows", [])
        "g:3|movies" -> ("g", "3", ["movies"])
    """
    if ":" not in data:
        return ("", data, [])

    prefix, rest = data.split(":", 1)
    parts = rest.split("|")
    value = parts[0]
    extra = parts[1:] if len(parts) > 1 else []

    return (prefix, value, extra)


def parse_category(value: str | None) -> ContentCategory | None:
    """Map a callback value to a category, None if unknown."""
    if not value:
        return None
    try:
        return ContentCategory(value)
    except ValueError:
        return None
