from dataclasses import dataclass, field
from enum import Enum

from pokeindex.models.pokemon import DetailRecord


class FanOutPolicy(str, Enum):
    """What a search does when some detail fetches fail."""

    ALL_OR_NOTHING = "all_or_nothing"
    PARTIAL = "partial"


class SearchStatus(str, Enum):
    """How a search ended."""

    EMPTY_QUERY = "empty_query"
    NO_MATCHES = "no_matches"
    FOUND = "found"
    PARTIAL = "partial"
    FAILED = "failed"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class SearchOutcome:
    """
    Classified result of one search.

    NO_MATCHES and FAILED both carry an empty ``records`` list; only
    ``status`` tells them apart.

    Attributes:
        query: The query as submitted
        status: How the search ended
        records: Matching records in ascending id order
        failed_ids: Ids whose detail fetch failed (PARTIAL only)
        error: Failure description (FAILED only)
    """

    query: str
    status: SearchStatus
    records: list[DetailRecord] = field(default_factory=list)
    failed_ids: list[int] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status in (SearchStatus.FOUND, SearchStatus.NO_MATCHES, SearchStatus.PARTIAL)

    @property
    def failed(self) -> bool:
        return self.status == SearchStatus.FAILED

    def count(self) -> int:
        """Number of records found."""
        return len(self.records)
