"""Tests for the session controller."""

import pytest

from reelpick.core import (
    NO_GENRE_MESSAGE,
    ContentCategory,
    PreferenceState,
    RecommendationItem,
    RequestPhase,
    SessionController,
    TransportError,
    ValidationError,
)

MOVIES = ContentCategory.MOVIES
SHOWS = ContentCategory.SHOWS


def make_item(title: str) -> RecommendationItem:
    return RecommendationItem(
        title=title,
        year=2021,
        rating=7.5,
        description="",
        genres=("Drama",),
    )


class FakeFetcher:
    def __init__(self, *responses) -> None:
        self.calls: list[dict] = []
        self.responses = list(responses)

    async def fetch_recommendations(self, body: dict) -> list[RecommendationItem]:
        self.calls.append(body)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return list(response)


def test_initial_view():
    """A new session shows movies with nothing selected."""
    controller = SessionController(FakeFetcher())
    view = controller.view()

    assert view.category == MOVIES
    assert view.selected_genres == frozenset()
    assert view.minimum_rating == 7.0
    assert view.phase == RequestPhase.IDLE
    assert view.items == ()
    assert not view.loading
    assert view.available_genres[0].name == "Action"


def test_custom_initial_preferences():
    """Configured defaults are used at start and on reset."""
    controller = SessionController(FakeFetcher(), initial=PreferenceState(minimum_rating=6.0))
    controller.set_minimum_rating(9)
    controller.reset()
    assert controller.preferences.minimum_rating == 6.0


@pytest.mark.anyio
async def test_switching_back_and_forth_keeps_cache():
    """Movies -> Shows -> Movies without a submit leaves movie results as they were."""
    controller = SessionController(FakeFetcher([make_item("M1"), make_item("M2")]))
    controller.set_genres({"Drama"})
    await controller.submit()
    before = controller.results_for(MOVIES)

    controller.set_category(SHOWS)
    assert controller.view().items == ()
    assert controller.view().available_genres[0].name == "Action & Adventure"
    controller.set_category(MOVIES)

    assert controller.results_for(MOVIES) is before
    assert [i.title for i in controller.view().items] == ["M1", "M2"]


def test_switching_category_clears_selection():
    """Category switch resets genres."""
    controller = SessionController(FakeFetcher())
    controller.set_genres({"Comedy", "Horror"})
    controller.set_category(SHOWS)
    assert controller.preferences.selected_genres == frozenset()


def test_toggle_genre():
    """Toggling builds the full selection."""
    controller = SessionController(FakeFetcher())
    controller.toggle_genre("Comedy")
    controller.toggle_genre("Drama")
    controller.toggle_genre("Comedy")
    assert controller.preferences.selected_genres == frozenset({"Drama"})


def test_rejected_event_records_error():
    """A rejected event keeps preferences and records the reason."""
    controller = SessionController(FakeFetcher())
    controller.set_minimum_rating(8)

    with pytest.raises(ValidationError):
        controller.set_minimum_rating(float("nan"))

    assert controller.preferences.minimum_rating == 8.0
    assert controller.view().error_message == "minimum rating must be a finite number"


@pytest.mark.anyio
async def test_submit_without_genres():
    """Empty submit surfaces the inline message and makes no call."""
    fetcher = FakeFetcher()
    controller = SessionController(fetcher)

    with pytest.raises(ValidationError):
        await controller.submit()

    view = controller.view()
    assert view.error_message == NO_GENRE_MESSAGE
    assert view.phase == RequestPhase.IDLE
    assert fetcher.calls == []


@pytest.mark.anyio
async def test_submit_uses_snapshot():
    """Edits made while a request is out do not change what was sent."""
    controller = SessionController(FakeFetcher([make_item("M")]))
    controller.set_genres({"Drama"})

    async def on_started():
        controller.set_category(SHOWS)

    await controller.submit(on_started=on_started)

    assert controller.preferences.category == SHOWS
    assert [i.title for i in controller.results_for(MOVIES)] == ["M"]
    assert controller.results_for(SHOWS) == ()


@pytest.mark.anyio
async def test_failed_submit_keeps_results_visible():
    """After an error the previous results are still shown."""
    controller = SessionController(FakeFetcher([make_item("M")], TransportError("down")))
    controller.set_genres({"Drama"})
    await controller.submit()
    await controller.submit()

    view = controller.view()
    assert view.phase == RequestPhase.ERROR
    assert view.error_message == "Failed to fetch recommendations"
    assert [i.title for i in view.items] == ["M"]


def test_reset_clears_error_and_keeps_cache():
    """Reset restores defaults but keeps cached results."""
    controller = SessionController(FakeFetcher())
    controller.cache.replace(MOVIES, [make_item("M")])
    controller.set_category(SHOWS)
    with pytest.raises(ValidationError):
        controller.set_genres({"Not A Genre"})

    controller.reset()

    view = controller.view()
    assert view.category == MOVIES
    assert view.error_message is None
    assert [i.title for i in view.items] == ["M"]
