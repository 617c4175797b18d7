from pokeindex.models.errors import (
    MalformedResponseError,
    NetworkError,
    RecordNotFoundError,
    SearchFailedError,
    StorageReadError,
)
from pokeindex.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from pokeindex.models.pokemon import Ability, DetailRecord, IndexEntry, Sprites, StatValue
from pokeindex.models.search import FanOutPolicy, SearchOutcome, SearchStatus

__all__ = [
    "Ability",
    "ApiResponse",
    "DetailRecord",
    "FailureDetail",
    "FailureKind",
    "FanOutPolicy",
    "IndexEntry",
    "KnownError",
    "MalformedResponseError",
    "NetworkError",
    "OutcomeType",
    "RecordNotFoundError",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SearchFailedError",
    "SearchOutcome",
    "SearchStatus",
    "Sprites",
    "StatValue",
    "StorageReadError",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
