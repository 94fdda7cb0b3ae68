"""Sub-score results and the nested ScoreBreakdown audit trail."""

from pydantic import BaseModel, Field

from .enums import QualityTier


class ScoreResult(BaseModel):
    """A single sub-scorer's output: a score plus why."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    reasoning: str


class SemanticScoreResult(ScoreResult):
    distance: float = Field(..., description="1 - similarity; 2.0 when embeddings are missing")


class CheckSizeScoreResult(ScoreResult):
    overlap_amount: float = Field(..., ge=0.0, description="Width of the overlapping range (k)")
    founder_range: float = Field(..., ge=0.0, description="Width of the founder's range (k)")


class CompletenessScoreResult(ScoreResult):
    filled_fields: int = Field(..., ge=0)
    total_fields: int = Field(..., ge=1)


class SubScore(BaseModel):
    """One weighted leaf of the rule breakdown."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)
    reasoning: str


class RuleScoreBreakdown(BaseModel):
    model_config = {"frozen": True}

    industry_match: SubScore
    check_size: SubScore
    geography: SubScore
    completeness: SubScore


class RuleScoreResult(BaseModel):
    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    breakdown: RuleScoreBreakdown


class SemanticComponent(BaseModel):
    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)
    contribution: float = Field(..., ge=0.0, le=1.0)
    reasoning: str


class RuleComponent(BaseModel):
    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)
    contribution: float = Field(..., ge=0.0, le=1.0)
    breakdown: RuleScoreBreakdown


class StageComponent(BaseModel):
    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)
    contribution: float = Field(..., ge=0.0, le=1.0)
    reasoning: str


class ScoreBreakdown(BaseModel):
    """Full, auditable decomposition of one founder/funder total score.

    Created fresh per pair and never mutated; persisted verbatim as the
    matches.score_breakdown JSON column.
    """

    model_config = {"frozen": True}

    semantic: SemanticComponent
    rule: RuleComponent
    stage: StageComponent
    total_score: float = Field(..., ge=0.0, le=1.0)
    quality_tier: QualityTier
