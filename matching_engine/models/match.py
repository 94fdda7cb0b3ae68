"""Match records, ranked candidates and the response envelopes built from them."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .enums import QualityTier
from .funder import Funder
from .score_breakdown import ScoreBreakdown


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MatchCandidate(BaseModel):
    """A funder paired with its breakdown against one founder."""

    model_config = {"frozen": True}

    funder: Funder
    semantic_score: Optional[float] = Field(None, description="Precomputed similarity, if any")
    breakdown: ScoreBreakdown


class SimilarFunder(BaseModel):
    """One row of the nearest-neighbour funder search."""

    funder: Funder
    semantic_score: float = Field(..., description="Cosine similarity, 1 = identical")
    distance: float = Field(..., description="Cosine distance as reported by pgvector")


class Match(BaseModel):
    """Persisted row of the matches table (unique on founder_id, funder_id)."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None

    founder_id: str
    funder_id: str

    semantic_score: float
    rule_score: float
    stage_score: float
    total_score: float

    score_breakdown: ScoreBreakdown
    quality_tier: QualityTier

    is_viewed: bool = False
    viewed_at: Optional[datetime] = None

    @classmethod
    def record_from_candidate(cls, founder_id: str, candidate: MatchCandidate) -> Dict[str, Any]:
        """Row payload for an upsert into the matches table."""
        breakdown = candidate.breakdown
        return {
            "founder_id": founder_id,
            "funder_id": candidate.funder.id,
            "semantic_score": breakdown.semantic.score,
            "rule_score": breakdown.rule.score,
            "stage_score": breakdown.stage.score,
            "total_score": breakdown.total_score,
            "score_breakdown": breakdown.model_dump(mode="json"),
            "quality_tier": breakdown.quality_tier.value,
        }


class MatchStats(BaseModel):
    total_matches: int = 0
    excellent_count: int = 0
    good_count: int = 0
    fair_count: int = 0
    poor_count: int = 0
    avg_score: float = 0.0


class FunderSummary(BaseModel):
    id: str
    name: str
    firm_name: str
    bio: Optional[str] = None


class FounderSummary(BaseModel):
    id: str
    name: str
    company_name: Optional[str] = None


class MatchScores(BaseModel):
    total_score: float
    semantic_score: float
    rule_score: float
    stage_score: float
    quality_tier: QualityTier


class MatchResult(BaseModel):
    funder: FunderSummary
    scores: MatchScores
    reasoning: ScoreBreakdown

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate) -> "MatchResult":
        funder = candidate.funder
        breakdown = candidate.breakdown
        return cls(
            funder=FunderSummary(
                id=funder.id,
                name=funder.name,
                firm_name=funder.firm_name,
                bio=funder.bio,
            ),
            scores=MatchScores(
                total_score=breakdown.total_score,
                semantic_score=breakdown.semantic.score,
                rule_score=breakdown.rule.score,
                stage_score=breakdown.stage.score,
                quality_tier=breakdown.quality_tier,
            ),
            reasoning=breakdown,
        )


class MatchResponse(BaseModel):
    founder: FounderSummary
    matches: List[MatchResult] = Field(default_factory=list)
    total_results: int = 0
    generated_at: datetime = Field(default_factory=_utcnow)
    note: Optional[str] = None


class IngestFounderResponse(BaseModel):
    id: str
    embedding_generated: bool
    profile_completeness: float
    created_at: Optional[datetime] = None
