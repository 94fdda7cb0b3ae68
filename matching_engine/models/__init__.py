"""Shared Pydantic models - contract between storage, scoring and callers."""

from .enums import Geography, Industry, QualityTier, Stage
from .founder import Founder, FounderProfileInput
from .funder import Funder
from .score_breakdown import (
    CheckSizeScoreResult,
    CompletenessScoreResult,
    RuleComponent,
    RuleScoreBreakdown,
    RuleScoreResult,
    ScoreBreakdown,
    ScoreResult,
    SemanticComponent,
    SemanticScoreResult,
    StageComponent,
    SubScore,
)
from .match import (
    FounderSummary,
    FunderSummary,
    IngestFounderResponse,
    Match,
    MatchCandidate,
    MatchResponse,
    MatchResult,
    MatchScores,
    MatchStats,
    SimilarFunder,
)
from .vector import format_embedding, parse_embedding

__all__ = [
    "Geography",
    "Industry",
    "QualityTier",
    "Stage",
    "Founder",
    "FounderProfileInput",
    "Funder",
    "CheckSizeScoreResult",
    "CompletenessScoreResult",
    "RuleComponent",
    "RuleScoreBreakdown",
    "RuleScoreResult",
    "ScoreBreakdown",
    "ScoreResult",
    "SemanticComponent",
    "SemanticScoreResult",
    "StageComponent",
    "SubScore",
    "FounderSummary",
    "FunderSummary",
    "IngestFounderResponse",
    "Match",
    "MatchCandidate",
    "MatchResponse",
    "MatchResult",
    "MatchScores",
    "MatchStats",
    "SimilarFunder",
    "format_embedding",
    "parse_embedding",
]
