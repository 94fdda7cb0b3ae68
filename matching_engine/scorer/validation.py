"""Consistency check for a ScoreBreakdown before it is persisted."""

import logging

from ..models.score_breakdown import ScoreBreakdown

logger = logging.getLogger(__name__)


def validate_score_breakdown(breakdown: ScoreBreakdown, tolerance: float = 0.01) -> bool:
    """Check that contributions add up to the total and weights add up to 1.0.

    Logs a warning naming the failed check and returns False; never raises.
    """
    calculated = (
        breakdown.semantic.contribution +
        breakdown.rule.contribution +
        breakdown.stage.contribution
    )
    if abs(calculated - breakdown.total_score) > tolerance:
        logger.warning(
            f"Score breakdown validation failed: calculated {calculated:.4f} "
            f"vs reported {breakdown.total_score:.4f}"
        )
        return False

    weight_sum = breakdown.semantic.weight + breakdown.rule.weight + breakdown.stage.weight
    if abs(weight_sum - 1.0) > tolerance:
        logger.warning(f"Weight sum validation failed: {weight_sum:.4f} (expected 1.0)")
        return False

    return True
