"""Tests for the preference reducer."""

import math

import pytest

from reelpick.core import (
    CategorySelected,
    ContentCategory,
    GenresSelected,
    MinimumRatingChanged,
    PreferencesReset,
    PreferenceState,
    TAXONOMY,
    ValidationError,
    normalize_rating,
    reduce_preferences,
)
from reelpick.core.preferences import toggle_genre


def test_defaults():
    """Sessions start with movies, no genres and a 7.0 threshold."""
    state = PreferenceState()
    assert state.category == ContentCategory.MOVIES
    assert state.selected_genres == frozenset()
    assert state.minimum_rating == 7.0


def test_switching_category_clears_genres():
    """Switching category empties the selection."""
    state = PreferenceState(selected_genres=frozenset({"Comedy", "Drama"}))

    new_state = reduce_preferences(state, CategorySelected(ContentCategory.SHOWS))

    assert new_state.category == ContentCategory.SHOWS
    assert new_state.selected_genres == frozenset()
    assert new_state.minimum_rating == state.minimum_rating
    # Original is untouched
    assert state.selected_genres == frozenset({"Comedy", "Drama"})


def test_selecting_active_category_keeps_genres():
    """Re-selecting the active tab is a no-op."""
    state = PreferenceState(selected_genres=frozenset({"Comedy"}))
    assert reduce_preferences(state, CategorySelected(ContentCategory.MOVIES)) is state


def test_genres_replace_wholesale():
    """A genre event replaces the selection instead of adding to it."""
    state = PreferenceState(selected_genres=frozenset({"Comedy", "Drama"}))

    new_state = reduce_preferences(state, GenresSelected(frozenset({"Horror"})))

    assert new_state.selected_genres == frozenset({"Horror"})


def test_genres_outside_taxonomy_rejected():
    """TV-only genres cannot be selected for movies."""
    state = PreferenceState()

    with pytest.raises(ValidationError):
        reduce_preferences(state, GenresSelected(frozenset({"Kids"})))


def test_selection_stays_subset_of_taxonomy():
    """After any sequence of events the selection fits the active catalog."""
    state = PreferenceState()
    events = [
        GenresSelected(frozenset({"Action", "Comedy"})),
        CategorySelected(ContentCategory.SHOWS),
        GenresSelected(frozenset({"Kids", "Comedy"})),
        CategorySelected(ContentCategory.MOVIES),
        GenresSelected(frozenset({"War"})),
    ]
    for event in events:
        state = reduce_preferences(state, event)
        assert state.selected_genres <= TAXONOMY.names_for(state.category)


def test_rating_is_clamped():
    """Ratings are clamped to [0, 10]."""
    state = PreferenceState()
    assert reduce_preferences(state, MinimumRatingChanged(12.5)).minimum_rating == 10.0
    assert reduce_preferences(state, MinimumRatingChanged(-3)).minimum_rating == 0.0
    assert reduce_preferences(state, MinimumRatingChanged(6.5)).minimum_rating == 6.5


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "abc", None, True])
def test_rating_rejects_non_finite(value):
    """Non-finite or non-numeric ratings raise ValidationError."""
    with pytest.raises(ValidationError):
        reduce_preferences(PreferenceState(), MinimumRatingChanged(value))


def test_normalize_rating_accepts_numeric_strings():
    """Numeric text is accepted and clamped."""
    assert normalize_rating("7.5") == 7.5
    assert normalize_rating("11") == 10.0


def test_reset_returns_defaults():
    """Reset restores the given defaults."""
    state = PreferenceState(
        category=ContentCategory.SHOWS,
        selected_genres=frozenset({"Kids"}),
        minimum_rating=3.0,
    )
    defaults = PreferenceState(minimum_rating=6.0)

    assert reduce_preferences(state, PreferencesReset()) == PreferenceState()
    assert reduce_preferences(state, PreferencesReset(), defaults=defaults) is defaults


def test_unknown_event_type():
    """Unsupported events are a programming error."""
    with pytest.raises(TypeError):
        reduce_preferences(PreferenceState(), "nope")  # type: ignore[arg-type]


def test_toggle_genre():
    """Toggling adds a missing genre and removes a present one."""
    state = PreferenceState(selected_genres=frozenset({"Comedy"}))
    assert toggle_genre(state, "Drama") == frozenset({"Comedy", "Drama"})
    assert toggle_genre(state, "Comedy") == frozenset()


def test_request_body_follows_taxonomy_order():
    """favorite_genres is ordered by catalog position."""
    state = PreferenceState(selected_genres=frozenset({"Western", "Action", "Comedy"}))

    body = state.to_request(TAXONOMY.genres_for(ContentCategory.MOVIES))

    assert body == {
        "favorite_genres": ["Action", "Comedy", "Western"],
        "minimum_rating": 7.0,
        "content_type": "movies",
    }
