"""Domain contracts and type definitions."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_MINIMUM_RATING = 7.0


class ContentCategory(str, Enum):
    """Content categories; the value is the wire `content_type`."""

    MOVIES = "movies"
    SHOWS = "shows"

    @property
    def label(self) -> str:
        """Human-readable label."""
        return "Movies" if self is ContentCategory.MOVIES else "TV Shows"


class RequestPhase(str, Enum):
    """Lifecycle of a recommendation request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Genre:
    """Catalog genre. `id` is display metadata; requests use `name`."""

    id: int
    name: str


@dataclass(frozen=True)
class RecommendationItem:
    """A single recommended title as returned by the service."""

    title: str
    year: int
    rating: float
    description: str
    genres: tuple[str, ...] = ()
    where_to_watch: tuple[str, ...] = ()


@dataclass(frozen=True)
class PreferenceState:
    """User selections for the session.

    Replaced as a whole by the reducer on every event, never mutated.
    """

    category: ContentCategory = ContentCategory.MOVIES
    selected_genres: frozenset[str] = field(default_factory=frozenset)
    minimum_rating: float = DEFAULT_MINIMUM_RATING

    def ordered_genres(self, taxonomy: Iterable[Genre]) -> list[str]:
        """Return the selection in taxonomy order.

        Names outside the taxonomy are appended alphabetically.
        """
        known = [g.name for g in taxonomy if g.name in self.selected_genres]
        unknown = sorted(self.selected_genres.difference(known))
        return known + unknown

    def to_request(self, taxonomy: Iterable[Genre]) -> dict:
        """Build the Recommendation Service request body."""
        return {
            "favorite_genres": self.ordered_genres(taxonomy),
            "minimum_rating": self.minimum_rating,
            "content_type": self.category.value,
        }


@dataclass(frozen=True)
class RequestState:
    """Session-wide request status.

    `in_flight` holds the categories with a request currently outstanding.
    """

    phase: RequestPhase = RequestPhase.IDLE
    error_message: str | None = None
    in_flight: frozenset[ContentCategory] = field(default_factory=frozenset)

    def is_loading(self, category: ContentCategory) -> bool:
        """Check whether a request for the category is outstanding."""
        return category in self.in_flight


# Preference events


@dataclass(frozen=True)
class CategorySelected:
    """User switched the active category."""

    category: ContentCategory


@dataclass(frozen=True)
class GenresSelected:
    """User's complete current genre selection."""

    genres: frozenset[str]


@dataclass(frozen=True)
class MinimumRatingChanged:
    """User changed the rating threshold."""

    value: float


@dataclass(frozen=True)
class PreferencesReset:
    """User asked to start over with default preferences."""


PreferenceEvent = CategorySelected | GenresSelected | MinimumRatingChanged | PreferencesReset
