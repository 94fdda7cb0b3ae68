"""Scoring a candidate set and ranking it."""

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.enums import QualityTier
from ..models.founder import Founder
from ..models.funder import Funder
from ..models.match import MatchCandidate
from .engine import score_match
from .weights import DEFAULT_CONFIG, ScoringConfig


def score_candidates(
    founder: Founder,
    pairs: Iterable[Tuple[Funder, Optional[float]]],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> List[MatchCandidate]:
    """Score each (funder, precomputed similarity or None) pair, preserving order."""
    return [
        MatchCandidate(
            funder=funder,
            semantic_score=similarity,
            breakdown=score_match(founder, funder, similarity, config),
        )
        for funder, similarity in pairs
    ]


def rank_matches(
    candidates: Sequence[MatchCandidate],
    min_score: float = 0.5,
    limit: int = 10,
) -> List[MatchCandidate]:
    """Filter by minimum total score, sort descending and truncate.

    `sorted` is stable, so candidates with equal totals keep their input
    order. The input sequence is left untouched.

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    qualifying = [c for c in candidates if c.breakdown.total_score >= min_score]
    ranked = sorted(qualifying, key=lambda c: c.breakdown.total_score, reverse=True)
    return ranked[:limit]


def filter_by_quality_tier(
    candidates: Iterable[MatchCandidate],
    tier: QualityTier,
) -> List[MatchCandidate]:
    tier = QualityTier(tier)
    return [c for c in candidates if c.breakdown.quality_tier == tier]
