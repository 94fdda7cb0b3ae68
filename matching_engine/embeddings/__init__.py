"""Profile embedding generation (OpenAI)."""

from .client import (
    EMBEDDING_DIMENSION,
    EMBEDDING_MODEL,
    BatchEmbeddingResult,
    EmbeddingClient,
    EmbeddingError,
    EmbeddingResponse,
    ProfileEmbedding,
)
from .text import (
    estimate_embedding_cost,
    estimate_token_count,
    generate_founder_embedding_text,
    generate_funder_embedding_text,
)

__all__ = [
    "EMBEDDING_DIMENSION",
    "EMBEDDING_MODEL",
    "BatchEmbeddingResult",
    "EmbeddingClient",
    "EmbeddingError",
    "EmbeddingResponse",
    "ProfileEmbedding",
    "estimate_embedding_cost",
    "estimate_token_count",
    "generate_founder_embedding_text",
    "generate_funder_embedding_text",
]
