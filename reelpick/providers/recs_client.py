"""Recommendation Service HTTP client.

The service is called once per submit; failures are reported to the caller
and never retried here.
"""

import math
from typing import Any

import httpx

from reelpick.core.contracts import RecommendationItem
from reelpick.core.errors import ParseError, ServiceError, TransportError
from reelpick.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 15.0


def _require_str(entry: dict[str, Any], key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise ParseError(f"Item {index}: '{key}' must be a string")
    return value


def _str_list(entry: dict[str, Any], key: str, index: int, required: bool) -> tuple[str, ...]:
    value = entry.get(key)
    if value is None and not required:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(f"Item {index}: '{key}' must be a list of strings")
    return tuple(value)


def _parse_year(value: Any, index: int) -> int:
    # The backend serialises year as an optional string
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise ParseError(f"Item {index}: 'year' must be an integer")


def _parse_rating(value: Any, index: int) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Item {index}: 'rating' must be a number")
    rating = float(value)
    if not math.isfinite(rating):
        raise ParseError(f"Item {index}: 'rating' must be finite")
    return rating


def parse_recommendation(entry: Any, index: int = 0) -> RecommendationItem:
    """Convert one response entry into a RecommendationItem.

    Args:
        entry: Decoded JSON object
        index: Position in the response, used in error messages

    Returns:
        Parsed item

    Raises:
        ParseError: If a required field is missing or mistyped
    """
    if not isinstance(entry, dict):
        raise ParseError(f"Item {index}: expected an object")

    return RecommendationItem(
        title=_require_str(entry, "title", index),
        year=_parse_year(entry.get("year"), index),
        rating=_parse_rating(entry.get("rating"), index),
        description=_require_str(entry, "description", index),
        genres=_str_list(entry, "genre", index, required=True),
        where_to_watch=_str_list(entry, "where_to_watch", index, required=False),
    )


def parse_recommendations(payload: Any) -> list[RecommendationItem]:
    """Parse a success body; a single bad entry rejects the whole response.

    Raises:
        ParseError: If the payload is not a list of well-formed items
    """
    if not isinstance(payload, list):
        raise ParseError("Expected a JSON array of recommendations")
    return [parse_recommendation(entry, i) for i, entry in enumerate(payload)]


def extract_error_message(response: httpx.Response) -> str | None:
    """Return the `{"error": ...}` message of a failed response, if any."""
    if not response.content:
        return None
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


class RecommendationClient:
    """Async client for the Recommendation Service."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            url: Full URL of the recommendations endpoint
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_recommendations(self, body: dict[str, Any]) -> list[RecommendationItem]:
        """POST preferences and return the parsed recommendations.

        Args:
            body: Request body with favorite_genres, minimum_rating, content_type

        Returns:
            Recommendations in service order

        Raises:
            TransportError: On connection failure or timeout
            ServiceError: On a non-success status
            ParseError: On a malformed success body
        """
        client = await self._get_client()

        try:
            response = await client.post(self.url, json=body)
        except httpx.TimeoutException as e:
            logger.warning(f"Recommendation Service timeout: {e!r}")
            raise TransportError(f"Request timed out: {e!r}") from e
        except httpx.RequestError as e:
            logger.warning(f"Recommendation Service request error: {e!r}")
            raise TransportError(f"Request failed: {e!r}") from e

        if not response.is_success:
            service_message = extract_error_message(response)
            logger.warning(
                f"Recommendation Service returned {response.status_code}"
                + (f": {service_message}" if service_message else "")
            )
            raise ServiceError(response.status_code, service_message)

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError("Response body is not valid JSON") from e

        items = parse_recommendations(payload)
        logger.info(
            f"Received {len(items)} recommendations for {body.get('content_type')}"
        )
        return items
