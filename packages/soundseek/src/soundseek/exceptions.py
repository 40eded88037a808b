"""Custom exceptions for soundseek.

All exceptions include an HTTP status_code attribute and a machine-readable
error_code for easy integration with web frameworks like FastAPI.
"""


class CatalogError(Exception):
    """Base exception for soundseek.

    Attributes:
        status_code: HTTP status code for API error responses.
        error_code: Machine-readable error identifier.
    """

    status_code: int = 500
    error_code: str = "catalog_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(CatalogError):
    """A required parameter is missing or malformed."""

    status_code: int = 400  # Bad Request
    error_code: str = "invalid_input"


class InvalidIdError(CatalogError):
    """Content ID does not match the catalog's video ID scheme.

    Raised before any network call is attempted.
    """

    status_code: int = 400  # Bad Request
    error_code: str = "invalid_id"


class NotFoundError(CatalogError):
    """Resolution or lookup yielded nothing.

    Raised when no channel matches an artist name, when a mood search finds
    no playlist, or when a video has no retrievable information.
    """

    status_code: int = 404  # Not Found
    error_code: str = "not_found"


class NoPlayableStreamError(CatalogError):
    """Video exists but none of its formats is playable."""

    status_code: int = 404  # Not Found
    error_code: str = "no_playable_stream"


class CatalogUnavailableError(CatalogError):
    """The catalog client failed to initialize or to answer a request.

    Treated as transient by callers.
    """

    status_code: int = 500  # Internal Server Error
    error_code: str = "catalog_unavailable"


class CatalogTimeoutError(CatalogUnavailableError):
    """A catalog operation did not complete within its time budget.

    The underlying request may still be running in its worker thread;
    callers must treat a timeout as "no result".
    """

    error_code: str = "catalog_timeout"
