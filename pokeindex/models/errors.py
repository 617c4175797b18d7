"""
Catalog error taxonomy.

Fetch errors surface to the caller unchanged. A search that fails wraps
the first underlying error in SearchFailedError. Storage read errors never
leave the favorites store.
"""

from pokeindex.models.failure import FailureKind, KnownError


class NetworkError(KnownError):
    """Transport failure or non-success status from the catalog."""

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
        http_status: int = 502,
    ):
        self.url = url
        self.upstream_status = status_code
        super().__init__(
            kind=kind,
            message=f"Request to {url} failed: {reason}",
            detail=reason,
            suggestion="Check your connection and try again.",
            status_code=http_status,
        )


class RecordNotFoundError(NetworkError):
    """The catalog has no record for the requested identifier."""

    def __init__(self, url: str, pokemon_id: int):
        self.pokemon_id = pokemon_id
        super().__init__(
            url=url,
            reason=f"no Pokemon with id {pokemon_id}",
            status_code=404,
            kind=FailureKind.NOT_FOUND,
            http_status=404,
        )
        self.suggestion = "Go back to search and pick another Pokemon."


class MalformedResponseError(KnownError):
    """Payload did not have the expected shape."""

    def __init__(self, reason: str, source: str | None = None):
        self.source = source
        message = f"Unexpected payload from {source}: {reason}" if source else reason
        super().__init__(
            kind=FailureKind.MALFORMED_RESPONSE,
            message=message,
            detail=reason,
            status_code=502,
        )


class SearchFailedError(KnownError):
    """
    A search could not be completed.

    Raised when the index fetch or any detail fetch of the fan-out fails.
    The originating error is chained as ``__cause__``.
    """

    def __init__(self, query: str, cause: KnownError):
        self.query = query
        self.cause = cause
        # A record missing mid-search is an upstream inconsistency, not a 404
        kind = cause.kind
        if kind == FailureKind.NOT_FOUND:
            kind = FailureKind.EXTERNAL_API_ERROR
        super().__init__(
            kind=kind,
            message=f"Search for '{query}' failed",
            detail=cause.message,
            suggestion="Try the search again.",
            status_code=502,
        )


class StorageReadError(Exception):
    """Stored favorites could not be decoded."""
