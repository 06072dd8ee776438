"""Preference reducer: `(state, event) -> state`."""

import math
from dataclasses import replace

from reelpick.core.contracts import (
    CategorySelected,
    GenresSelected,
    MinimumRatingChanged,
    PreferenceEvent,
    PreferencesReset,
    PreferenceState,
)
from reelpick.core.errors import ValidationError
from reelpick.core.taxonomy import TAXONOMY, TaxonomyRegistry

MIN_RATING = 0.0
MAX_RATING = 10.0


def normalize_rating(value: object) -> float:
    """Validate and clamp a rating threshold to [0, 10].

    Raises:
        ValidationError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError("minimum rating must be a finite number")
    try:
        rating = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("minimum rating must be a finite number")
    if not math.isfinite(rating):
        raise ValidationError("minimum rating must be a finite number")
    return min(MAX_RATING, max(MIN_RATING, rating))


def reduce_preferences(
    state: PreferenceState,
    event: PreferenceEvent,
    taxonomy: TaxonomyRegistry = TAXONOMY,
    defaults: PreferenceState | None = None,
) -> PreferenceState:
    """Apply a preference event and return the new state.

    Switching category clears the genre selection, so the selection is
    always a subset of the active category's catalog.

    Args:
        state: Current preferences
        event: Event to apply
        taxonomy: Registry used to check genre names
        defaults: State returned on reset (default: PreferenceState())

    Returns:
        New preference state (the same object when nothing changed)

    Raises:
        ValidationError: If the event carries an unacceptable value
    """
    if isinstance(event, CategorySelected):
        if event.category == state.category:
            return state
        return replace(state, category=event.category, selected_genres=frozenset())

    if isinstance(event, GenresSelected):
        selection = frozenset(event.genres)
        unknown = selection - taxonomy.names_for(state.category)
        if unknown:
            raise ValidationError(
                f"Unknown {state.category.label} genre(s): {', '.join(sorted(unknown))}"
            )
        return replace(state, selected_genres=selection)

    if isinstance(event, MinimumRatingChanged):
        return replace(state, minimum_rating=normalize_rating(event.value))

    if isinstance(event, PreferencesReset):
        return defaults if defaults is not None else PreferenceState()

    raise TypeError(f"Unsupported preference event: {event!r}")


def toggle_genre(state: PreferenceState, name: str) -> frozenset[str]:
    """Complete selection after toggling one genre."""
    if name in state.selected_genres:
        return state.selected_genres - {name}
    return state.selected_genres | {name}
