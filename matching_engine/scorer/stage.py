"""Stage sub-scorer: categorical alignment on the linear stage chain."""

from typing import FrozenSet, Mapping, Sequence

from ..models.enums import Stage
from ..models.score_breakdown import ScoreResult
from .relationships import ADJACENT_STAGES, find_first_in, get_adjacent_stages


def score_stage(
    stage: Stage,
    preferred: Sequence[Stage],
    adjacency: Mapping[Stage, FrozenSet[Stage]] = ADJACENT_STAGES,
) -> ScoreResult:
    """1.0 exact, 0.5 for an immediate neighbour, else 0.0."""
    if stage in preferred:
        return ScoreResult(score=1.0, reasoning=f"Exact stage match: {stage.value}")

    adjacent = find_first_in(preferred, get_adjacent_stages(stage, adjacency))
    if adjacent is not None:
        return ScoreResult(
            score=0.5,
            reasoning=f"Adjacent stage: {stage.value} ↔ {adjacent.value}",
        )

    listed = ", ".join(s.value for s in preferred)
    return ScoreResult(score=0.0, reasoning=f"Stage mismatch: {stage.value} vs [{listed}]")
