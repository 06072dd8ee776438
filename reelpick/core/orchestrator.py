"""Submit orchestration: validation, service call, cache and phase updates."""

import asyncio
from dataclasses import replace
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from reelpick.core.cache import RecommendationCache
from reelpick.core.contracts import (
    PreferenceState,
    RecommendationItem,
    RequestPhase,
    RequestState,
)
from reelpick.core.errors import (
    RecommendationServiceError,
    RequestInProgressError,
    ServiceError,
    TransportError,
    ValidationError,
)
from reelpick.core.taxonomy import TAXONOMY, TaxonomyRegistry
from reelpick.logging import get_logger

logger = get_logger(__name__)

NO_GENRE_MESSAGE = "Please select at least one genre"
GENERIC_ERROR_MESSAGE = "Failed to fetch recommendations"


class RecommendationFetcher(Protocol):
    """Anything that can turn a request body into recommendations."""

    async def fetch_recommendations(self, body: dict[str, Any]) -> list[RecommendationItem]:
        ...


def error_message_for(error: RecommendationServiceError) -> str:
    """User-facing message for a failed request.

    Only a service-provided message is shown verbatim; everything else gets
    the generic text.
    """
    if isinstance(error, ServiceError) and error.service_message:
        return error.service_message
    return GENERIC_ERROR_MESSAGE


class RequestOrchestrator:
    """Runs submits against the service and records their outcome.

    At most one request per category is outstanding; the two categories are
    independent.
    """

    def __init__(
        self,
        fetcher: RecommendationFetcher,
        cache: RecommendationCache,
        taxonomy: TaxonomyRegistry = TAXONOMY,
        deadline_s: float | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            fetcher: Recommendation Service client
            cache: Session cache written on success
            taxonomy: Registry used to order the genre list
            deadline_s: Overall time limit per submit, None for no limit
        """
        self._fetcher = fetcher
        self._cache = cache
        self._taxonomy = taxonomy
        self._deadline_s = deadline_s
        self._state = RequestState()

    @property
    def state(self) -> RequestState:
        """Current request state."""
        return self._state

    def set_error_message(self, message: str | None) -> None:
        """Record an inline error without changing the phase."""
        self._state = replace(self._state, error_message=message)

    async def submit(
        self,
        preferences: PreferenceState,
        on_started: Callable[[], Awaitable[None]] | None = None,
    ) -> RequestState:
        """Request recommendations for a preferences snapshot.

        Service failures end the submit in the ERROR phase and are not
        raised; the category's cached results are kept as they were.
        Any other exception, cancellation included, also ends the submit in
        ERROR with the generic message and is then re-raised.

        Args:
            preferences: Snapshot taken when the user submitted
            on_started: Awaited once the request is accepted, before the call

        Returns:
            Request state after the submit completed

        Raises:
            ValidationError: If no genre is selected (no request is made)
            RequestInProgressError: If the category already has a request out
        """
        category = preferences.category

        if not preferences.selected_genres:
            self.set_error_message(NO_GENRE_MESSAGE)
            raise ValidationError(NO_GENRE_MESSAGE)

        if category in self._state.in_flight:
            raise RequestInProgressError(category.label)

        body = preferences.to_request(self._taxonomy.genres_for(category))

        self._state = RequestState(
            phase=RequestPhase.LOADING,
            error_message=None,
            in_flight=self._state.in_flight | {category},
        )

        logger.info(
            f"Submitting {category.value} request: "
            f"{len(body['favorite_genres'])} genres, min rating {body['minimum_rating']}"
        )

        try:
            if on_started is not None:
                await on_started()
            items = await self._fetch(body)
        except RecommendationServiceError as e:
            logger.warning(f"{category.value} request failed: {e}")
            self._state = replace(
                self._state,
                phase=RequestPhase.ERROR,
                error_message=error_message_for(e),
            )
        except BaseException as e:
            logger.exception(f"{category.value} request aborted: {e!r}")
            self._state = replace(
                self._state,
                phase=RequestPhase.ERROR,
                error_message=GENERIC_ERROR_MESSAGE,
            )
            raise
        else:
            self._cache.replace(category, items)
            self._state = replace(self._state, phase=RequestPhase.SUCCESS, error_message=None)
            logger.info(f"{category.value} results updated: {len(items)} items")
        finally:
            self._state = replace(self._state, in_flight=self._state.in_flight - {category})

        return self._state

    async def _fetch(self, body: dict[str, Any]) -> list[RecommendationItem]:
        """Call the fetcher, bounded by the overall deadline."""
        if self._deadline_s is None:
            return await self._fetcher.fetch_recommendations(body)
        try:
            return await asyncio.wait_for(
                self._fetcher.fetch_recommendations(body),
                timeout=self._deadline_s,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(f"No response within {self._deadline_s}s") from e
