"""Rule-based sub-scorers: industry, check size, geography, completeness.

Each scorer returns its score together with the reasoning string shown to
the user. `score_rules` combines them with the rule sub-weights.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence, FrozenSet

from ..models.enums import Geography, Industry
from ..models.founder import Founder
from ..models.funder import Funder
from ..models.score_breakdown import (
    CheckSizeScoreResult,
    CompletenessScoreResult,
    RuleScoreBreakdown,
    RuleScoreResult,
    ScoreResult,
    SubScore,
)
from .relationships import (
    COMPLETENESS_FIELDS,
    INDUSTRY_RELATIONSHIPS,
    find_first_in,
    get_related_industries,
)
from .weights import DEFAULT_CONFIG, ScoringConfig


def _join(values: Iterable[Any]) -> str:
    return ", ".join(getattr(v, "value", str(v)) for v in values)


def _fmt_k(amount: float) -> str:
    if float(amount).is_integer():
        amount = int(amount)
    return f"${amount}k"


def score_industry(
    industry: Industry,
    preferred: Sequence[Industry],
    relationships: Mapping[Industry, FrozenSet[Industry]] = INDUSTRY_RELATIONSHIPS,
) -> ScoreResult:
    """1.0 exact, 0.5 related (founder-side lookup only), else 0.0."""
    if industry in preferred:
        return ScoreResult(score=1.0, reasoning=f"Exact match: {industry.value}")

    related = find_first_in(preferred, get_related_industries(industry, relationships))
    if related is not None:
        return ScoreResult(
            score=0.5,
            reasoning=f"Related industry: {industry.value} ↔ {related.value}",
        )

    return ScoreResult(
        score=0.0,
        reasoning=f"No industry overlap: {industry.value} vs [{_join(preferred)}]",
    )


def score_check_size(
    founder_min: Optional[float],
    founder_max: Optional[float],
    funder_min: Optional[float],
    funder_max: Optional[float],
) -> CheckSizeScoreResult:
    """Share of the founder's seeking range covered by the funder's check range.

    Amounts are in thousands. A missing bound on either side short-circuits to
    a neutral (founder) or optimistic (funder) score; 0 is a real bound.
    """
    if founder_min is None or founder_max is None:
        return CheckSizeScoreResult(
            score=0.5,
            overlap_amount=0.0,
            founder_range=0.0,
            reasoning="Founder seeking amount not specified - neutral score",
        )

    founder_range = founder_max - founder_min

    if funder_min is None or funder_max is None:
        return CheckSizeScoreResult(
            score=1.0,
            overlap_amount=founder_range,
            founder_range=founder_range,
            reasoning="Funder check size flexible - assumed match",
        )

    overlap_start = max(founder_min, funder_min)
    overlap_end = min(founder_max, funder_max)
    overlap_amount = max(0.0, overlap_end - overlap_start)

    if founder_range > 0:
        score = max(0.0, min(1.0, overlap_amount / founder_range))
    else:
        score = 0.0

    coverage = round(score * 100)
    if score == 1.0:
        reasoning = (
            f"Perfect fit: {_fmt_k(founder_min)}-{_fmt_k(founder_max)} fully within "
            f"funder range {_fmt_k(funder_min)}-{_fmt_k(funder_max)}"
        )
    elif score >= 0.5:
        reasoning = f"Good overlap: {coverage}% of founder's range covered"
    elif score > 0:
        reasoning = (
            f"Partial overlap: {_fmt_k(overlap_start)}-{_fmt_k(overlap_end)} "
            f"({coverage}% coverage)"
        )
    else:
        reasoning = (
            f"No overlap: Founder seeks {_fmt_k(founder_min)}-{_fmt_k(founder_max)}, "
            f"Funder invests {_fmt_k(funder_min)}-{_fmt_k(funder_max)}"
        )

    return CheckSizeScoreResult(
        score=score,
        overlap_amount=overlap_amount,
        founder_range=founder_range,
        reasoning=reasoning,
    )


def score_geography(
    geography: Optional[Geography],
    focus: Sequence[Geography],
) -> ScoreResult:
    """Unrestricted funders always match; an unknown founder region is neutral."""
    if not focus or Geography.GLOBAL in focus:
        return ScoreResult(score=1.0, reasoning="Funder invests globally")

    if geography is None:
        return ScoreResult(
            score=0.5,
            reasoning="Founder geography not specified - neutral score",
        )

    if geography in focus:
        return ScoreResult(score=1.0, reasoning=f"Geography match: {geography.value}")

    return ScoreResult(
        score=0.0,
        reasoning=f"Geography mismatch: {geography.value} not in [{_join(focus)}]",
    )


def _is_filled(value: Any) -> bool:
    # 0 is a legitimate amount, only None and "" count as empty
    return value is not None and value != ""


def count_filled_fields(record: Any, fields: Sequence[str] = COMPLETENESS_FIELDS) -> int:
    """Count checklist fields present on a model instance or a plain mapping."""
    if isinstance(record, Mapping):
        lookup = record.get
    else:
        lookup = lambda name: getattr(record, name, None)  # noqa: E731
    return sum(1 for name in fields if _is_filled(lookup(name)))


def calculate_profile_completeness(
    record: Any,
    fields: Sequence[str] = COMPLETENESS_FIELDS,
) -> float:
    """Filled share of the checklist, rounded to 2 decimals."""
    return round(count_filled_fields(record, fields) / len(fields), 2)


def score_completeness(
    founder: Founder,
    fields: Sequence[str] = COMPLETENESS_FIELDS,
) -> CompletenessScoreResult:
    filled = count_filled_fields(founder, fields)
    total = len(fields)
    score = round(filled / total, 2)
    return CompletenessScoreResult(
        score=score,
        filled_fields=filled,
        total_fields=total,
        reasoning=f"Profile {round(score * 100)}% complete ({filled}/{total} fields)",
    )


def score_rules(
    founder: Founder,
    funder: Funder,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> RuleScoreResult:
    """Weighted rule score with the per-field breakdown.

    Args:
        founder: Founder being matched
        funder: Candidate funder
        config: Weights and lookup tables to score with

    Returns:
        RuleScoreResult, score rounded to 4 decimals
    """
    weights = config.rule_weights

    industry = score_industry(
        founder.industry, funder.preferred_industries, config.industry_relationships
    )
    check_size = score_check_size(
        founder.seeking_amount_min,
        founder.seeking_amount_max,
        funder.check_size_min,
        funder.check_size_max,
    )
    geography = score_geography(founder.geography, funder.geography_focus)
    completeness = score_completeness(founder, config.completeness_fields)

    total = (
        industry.score * weights.industry +
        check_size.score * weights.check_size +
        geography.score * weights.geography +
        completeness.score * weights.completeness
    )

    return RuleScoreResult(
        score=round(min(1.0, total), 4),
        breakdown=RuleScoreBreakdown(
            industry_match=SubScore(
                score=industry.score, weight=weights.industry, reasoning=industry.reasoning
            ),
            check_size=SubScore(
                score=check_size.score, weight=weights.check_size, reasoning=check_size.reasoning
            ),
            geography=SubScore(
                score=geography.score, weight=weights.geography, reasoning=geography.reasoning
            ),
            completeness=SubScore(
                score=completeness.score,
                weight=weights.completeness,
                reasoning=completeness.reasoning,
            ),
        ),
    )
