"""Semantic sub-scorer: cosine similarity between profile embeddings."""

from typing import Optional, Sequence

import numpy as np

from ..models.score_breakdown import SemanticScoreResult

MISSING_EMBEDDINGS_REASONING = "Embeddings not available"
MISSING_EMBEDDINGS_DISTANCE = 2.0

# (lower bound, reasoning), checked highest first
SIMILARITY_BUCKETS = (
    (0.90, "Exceptional semantic alignment in business model and investment focus"),
    (0.80, "Strong alignment in investment thesis and company description"),
    (0.70, "Good thematic overlap between founder and funder"),
    (0.50, "Moderate semantic relevance"),
)
LIMITED_REASONING = "Limited semantic connection between profiles"


class InvalidInputError(ValueError):
    """Raised when two embeddings cannot be compared (dimension mismatch)."""


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity in [-1, 1]; 0.0 when either vector has zero norm.

    Raises:
        InvalidInputError: If the vectors differ in length.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise InvalidInputError(
            f"Embeddings must have same dimension, got {va.size} and {vb.size}"
        )

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine distance (0 = identical, 2 = opposite), as pgvector's <=> operator."""
    return 1.0 - cosine_similarity(a, b)


def search_distance(
    founder_embedding: Optional[Sequence[float]],
    funder_embedding: Optional[Sequence[float]],
) -> float:
    """Cosine distance for in-memory nearest-neighbour search.

    Pairs that cannot be compared (missing, zero-norm or different-length
    vectors) get the maximum distance 2.0 so they sort last.
    """
    if not _has_vector(founder_embedding) or not _has_vector(funder_embedding):
        return MISSING_EMBEDDINGS_DISTANCE
    if len(founder_embedding) != len(funder_embedding):
        return MISSING_EMBEDDINGS_DISTANCE
    if not np.any(founder_embedding) or not np.any(funder_embedding):
        return MISSING_EMBEDDINGS_DISTANCE
    return cosine_distance(founder_embedding, funder_embedding)


def describe_similarity(similarity: float) -> str:
    for lower_bound, reasoning in SIMILARITY_BUCKETS:
        if similarity >= lower_bound:
            return reasoning
    return LIMITED_REASONING


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def calculate_semantic_score(
    founder_embedding: Optional[Sequence[float]],
    funder_embedding: Optional[Sequence[float]],
) -> SemanticScoreResult:
    """Score two raw embeddings.

    Negative similarity is floored to 0 in the score; the unclamped value is
    still reflected in `distance`.
    """
    if not _has_vector(founder_embedding) or not _has_vector(funder_embedding):
        return SemanticScoreResult(
            score=0.0,
            distance=MISSING_EMBEDDINGS_DISTANCE,
            reasoning=MISSING_EMBEDDINGS_REASONING,
        )

    similarity = cosine_similarity(founder_embedding, funder_embedding)
    return SemanticScoreResult(
        score=_clamp(similarity),
        distance=1.0 - similarity,
        reasoning=describe_similarity(similarity),
    )


def semantic_score_from_similarity(similarity: float) -> SemanticScoreResult:
    """Wrap a similarity already computed by nearest-neighbour search."""
    return SemanticScoreResult(
        score=_clamp(similarity),
        distance=1.0 - similarity,
        reasoning=describe_similarity(similarity),
    )


def _has_vector(embedding: Optional[Sequence[float]]) -> bool:
    return embedding is not None and len(embedding) > 0
