"""Match orchestration over storage, embeddings and the scorer."""

from .service import (
    DuplicateFounderError,
    FounderNotFoundError,
    InvalidQueryError,
    MatchService,
    MatchServiceError,
    MissingEmbeddingError,
)

__all__ = [
    "DuplicateFounderError",
    "FounderNotFoundError",
    "InvalidQueryError",
    "MatchService",
    "MatchServiceError",
    "MissingEmbeddingError",
]
