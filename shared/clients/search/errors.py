"""Exceptions raised by the search clients and the query builder."""


class SearchConfigurationError(ValueError):
    """A required search backend parameter (e.g. an index name) is missing or blank."""


class SearchRetrievalError(Exception):
    """A search or scroll request failed or returned an unusable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ScrollCursorExpiredError(SearchRetrievalError):
    """The scroll cursor timed out (or was cleared) before the drain finished."""


class ScrollExhaustedError(SearchRetrievalError):
    """The scroll cursor stopped returning hits before the reported total was collected."""


class InvalidSearchQueryError(ValueError):
    """The caller's filter parameters cannot form a bounded query (e.g. a lookup without any id)."""
