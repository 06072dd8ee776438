"""Session controller: the single entry point for the presentation layer."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from reelpick.core.cache import RecommendationCache
from reelpick.core.contracts import (
    CategorySelected,
    ContentCategory,
    Genre,
    GenresSelected,
    MinimumRatingChanged,
    PreferenceEvent,
    PreferencesReset,
    PreferenceState,
    RecommendationItem,
    RequestPhase,
    RequestState,
)
from reelpick.core.errors import ValidationError
from reelpick.core.orchestrator import RecommendationFetcher, RequestOrchestrator
from reelpick.core.preferences import reduce_preferences, toggle_genre
from reelpick.core.taxonomy import TAXONOMY, TaxonomyRegistry
from reelpick.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionView:
    """Everything the presentation layer needs to render the session."""

    category: ContentCategory
    available_genres: tuple[Genre, ...]
    selected_genres: frozenset[str]
    minimum_rating: float
    phase: RequestPhase
    error_message: str | None
    items: tuple[RecommendationItem, ...]
    loading: bool


class SessionController:
    """Owns one session's preferences, cache and request orchestration."""

    def __init__(
        self,
        fetcher: RecommendationFetcher,
        taxonomy: TaxonomyRegistry = TAXONOMY,
        initial: PreferenceState | None = None,
        deadline_s: float | None = None,
    ) -> None:
        self.taxonomy = taxonomy
        self._defaults = initial if initial is not None else PreferenceState()
        self._preferences = self._defaults
        self.cache = RecommendationCache()
        self.orchestrator = RequestOrchestrator(
            fetcher,
            self.cache,
            taxonomy=taxonomy,
            deadline_s=deadline_s,
        )

    @property
    def preferences(self) -> PreferenceState:
        return self._preferences

    @property
    def request_state(self) -> RequestState:
        return self.orchestrator.state

    def dispatch(self, event: PreferenceEvent) -> PreferenceState:
        """Apply a preference event.

        A rejected event leaves the preferences as they were and records the
        reason as the session's error message.

        Raises:
            ValidationError: If the reducer rejects the event
        """
        try:
            self._preferences = reduce_preferences(
                self._preferences,
                event,
                taxonomy=self.taxonomy,
                defaults=self._defaults,
            )
        except ValidationError as e:
            self.orchestrator.set_error_message(str(e))
            raise
        return self._preferences

    def set_category(self, category: ContentCategory) -> PreferenceState:
        return self.dispatch(CategorySelected(category))

    def set_genres(self, genres: set[str] | frozenset[str]) -> PreferenceState:
        return self.dispatch(GenresSelected(frozenset(genres)))

    def toggle_genre(self, name: str) -> PreferenceState:
        """Add or remove one genre from the current selection."""
        return self.set_genres(toggle_genre(self._preferences, name))

    def set_minimum_rating(self, value: float) -> PreferenceState:
        return self.dispatch(MinimumRatingChanged(value))

    def reset(self) -> PreferenceState:
        """Restore default preferences; cached results are kept."""
        self.orchestrator.set_error_message(None)
        return self.dispatch(PreferencesReset())

    async def submit(
        self,
        on_started: Callable[[], Awaitable[None]] | None = None,
    ) -> RequestState:
        """Submit the current preferences.

        The snapshot is taken before awaiting, so later edits or category
        switches do not affect the request in flight.
        """
        snapshot = self._preferences
        return await self.orchestrator.submit(snapshot, on_started=on_started)

    def results_for(self, category: ContentCategory) -> tuple[RecommendationItem, ...]:
        return self.cache.get(category)

    def view(self) -> SessionView:
        """Snapshot of the session for rendering the active category."""
        prefs = self._preferences
        state = self.orchestrator.state
        return SessionView(
            category=prefs.category,
            available_genres=self.taxonomy.genres_for(prefs.category),
            selected_genres=prefs.selected_genres,
            minimum_rating=prefs.minimum_rating,
            phase=state.phase,
            error_message=state.error_message,
            items=self.cache.get(prefs.category),
            loading=state.is_loading(prefs.category),
        )
