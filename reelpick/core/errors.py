"""Error types raised by the session core and the service client."""


class ReelPickError(Exception):
    """Base exception for recommendation session errors."""


class ValidationError(ReelPickError):
    """User input cannot be accepted; corrected by further input."""


class RequestInProgressError(ReelPickError):
    """A submit for this category is already waiting on the service."""

    def __init__(self, category: str):
        super().__init__(f"A request for {category} is already in progress")
        self.category = category


class RecommendationServiceError(ReelPickError):
    """Base exception for Recommendation Service failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(RecommendationServiceError):
    """The service could not be reached (connection failure, timeout)."""


class ServiceError(RecommendationServiceError):
    """The service answered with a non-success status.

    `service_message` holds the `{"error": ...}` text when the body carried one.
    """

    def __init__(self, status_code: int, service_message: str | None = None):
        super().__init__(
            service_message or f"HTTP {status_code}",
            status_code=status_code,
        )
        self.service_message = service_message


class ParseError(RecommendationServiceError):
    """A success response did not have the expected shape."""
