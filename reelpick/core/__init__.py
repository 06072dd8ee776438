"""Core module containing the preference session and request orchestration."""

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
from reelpick.core.controller import SessionController, SessionView
from reelpick.core.errors import (
    ParseError,
    RecommendationServiceError,
    ReelPickError,
    RequestInProgressError,
    ServiceError,
    TransportError,
    ValidationError,
)
from reelpick.core.orchestrator import (
    GENERIC_ERROR_MESSAGE,
    NO_GENRE_MESSAGE,
    RequestOrchestrator,
)
from reelpick.core.preferences import normalize_rating, reduce_preferences
from reelpick.core.taxonomy import TAXONOMY, TaxonomyRegistry, genres_for

__all__ = [
    # Contracts/Types
    "CategorySelected",
    "ContentCategory",
    "Genre",
    "GenresSelected",
    "MinimumRatingChanged",
    "PreferenceEvent",
    "PreferencesReset",
    "PreferenceState",
    "RecommendationItem",
    "RequestPhase",
    "RequestState",
    # Errors
    "ParseError",
    "RecommendationServiceError",
    "ReelPickError",
    "RequestInProgressError",
    "ServiceError",
    "TransportError",
    "ValidationError",
    # Components
    "RecommendationCache",
    "RequestOrchestrator",
    "SessionController",
    "SessionView",
    "TaxonomyRegistry",
    "TAXONOMY",
    "genres_for",
    "reduce_preferences",
    "normalize_rating",
    "GENERIC_ERROR_MESSAGE",
    "NO_GENRE_MESSAGE",
]
