"""Hybrid scoring engine for founder/funder pairs.

Combines three weighted branches into one explainable total:
semantic similarity, rule-based fit and stage alignment.
"""

from typing import Optional

from ..models.founder import Founder
from ..models.funder import Funder
from ..models.score_breakdown import (
    RuleComponent,
    ScoreBreakdown,
    SemanticComponent,
    StageComponent,
)
from .rules import score_rules
from .semantic import calculate_semantic_score, semantic_score_from_similarity
from .stage import score_stage
from .tiers import get_quality_tier
from .weights import DEFAULT_CONFIG, ScoringConfig

SCORE_PRECISION = 4


def score_match(
    founder: Founder,
    funder: Funder,
    semantic_similarity: Optional[float] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ScoreBreakdown:
    """Score one funder against one founder.

    Branches (default weights):
    1. Semantic (40%): precomputed similarity if given, else cosine of the
       two stored embeddings, else 0
    2. Rule (40%): industry, check size, geography, completeness
    3. Stage (20%): exact or adjacent stage preference

    Args:
        founder: Founder being matched
        funder: Candidate funder
        semantic_similarity: Similarity from nearest-neighbour search, if any
        config: Scoring constants; never renormalised

    Returns:
        ScoreBreakdown whose total equals the sum of its contributions

    Raises:
        InvalidInputError: If both embeddings are present but differ in length
    """

    weights = config.weights

    if semantic_similarity is not None:
        semantic = semantic_score_from_similarity(semantic_similarity)
    else:
        semantic = calculate_semantic_score(founder.embedding, funder.embedding)

    rule = score_rules(founder, funder, config)
    stage = score_stage(founder.stage, funder.preferred_stages, config.adjacent_stages)

    semantic_score = round(semantic.score, SCORE_PRECISION)
    rule_score = round(rule.score, SCORE_PRECISION)
    stage_score = round(stage.score, SCORE_PRECISION)

    semantic_contribution = round(semantic_score * weights.semantic, SCORE_PRECISION)
    rule_contribution = round(rule_score * weights.rule, SCORE_PRECISION)
    stage_contribution = round(stage_score * weights.stage, SCORE_PRECISION)

    total_score = round(
        min(1.0, semantic_contribution + rule_contribution + stage_contribution),
        SCORE_PRECISION,
    )

    return ScoreBreakdown(
        semantic=SemanticComponent(
            score=semantic_score,
            weight=weights.semantic,
            contribution=semantic_contribution,
            reasoning=semantic.reasoning,
        ),
        rule=RuleComponent(
            score=rule_score,
            weight=weights.rule,
            contribution=rule_contribution,
            breakdown=rule.breakdown,
        ),
        stage=StageComponent(
            score=stage_score,
            weight=weights.stage,
            contribution=stage_contribution,
            reasoning=stage.reasoning,
        ),
        total_score=total_score,
        quality_tier=get_quality_tier(total_score, config.tiers),
    )
