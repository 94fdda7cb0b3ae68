"""Hybrid founder/funder scoring engine."""

from .engine import score_match
from .ranking import filter_by_quality_tier, rank_matches, score_candidates
from .rules import (
    calculate_profile_completeness,
    score_check_size,
    score_completeness,
    score_geography,
    score_industry,
    score_rules,
)
from .semantic import (
    InvalidInputError,
    calculate_semantic_score,
    cosine_distance,
    cosine_similarity,
    search_distance,
    semantic_score_from_similarity,
)
from .stage import score_stage
from .tiers import QUALITY_TIER_INFO, get_quality_tier, get_quality_tier_info
from .validation import validate_score_breakdown
from .weights import (
    DEFAULT_CONFIG,
    DEFAULT_WEIGHTS,
    RuleWeights,
    ScoringConfig,
    ScoringWeights,
    TierThresholds,
    load_scoring_config,
    save_scoring_config,
)

__all__ = [
    "score_match",
    "filter_by_quality_tier",
    "rank_matches",
    "score_candidates",
    "calculate_profile_completeness",
    "score_check_size",
    "score_completeness",
    "score_geography",
    "score_industry",
    "score_rules",
    "InvalidInputError",
    "calculate_semantic_score",
    "cosine_distance",
    "cosine_similarity",
    "search_distance",
    "semantic_score_from_similarity",
    "score_stage",
    "QUALITY_TIER_INFO",
    "get_quality_tier",
    "get_quality_tier_info",
    "validate_score_breakdown",
    "DEFAULT_CONFIG",
    "DEFAULT_WEIGHTS",
    "RuleWeights",
    "ScoringConfig",
    "ScoringWeights",
    "TierThresholds",
    "load_scoring_config",
    "save_scoring_config",
]
