"""Quality tier classification and display metadata."""

from typing import Dict

from ..models.enums import QualityTier
from .weights import DEFAULT_TIER_THRESHOLDS, TierThresholds

QUALITY_TIER_INFO: Dict[QualityTier, Dict[str, str]] = {
    QualityTier.EXCELLENT: {
        "label": "Excellent Match",
        "color": "#10B981",
        "description": "Exceptional fit across all dimensions",
    },
    QualityTier.GOOD: {
        "label": "Good Match",
        "color": "#3B82F6",
        "description": "Strong match with minor gaps",
    },
    QualityTier.FAIR: {
        "label": "Fair Match",
        "color": "#F59E0B",
        "description": "Moderate fit, worth exploring",
    },
    QualityTier.POOR: {
        "label": "Poor Match",
        "color": "#EF4444",
        "description": "Weak match, low priority",
    },
}


def get_quality_tier(
    total_score: float,
    thresholds: TierThresholds = DEFAULT_TIER_THRESHOLDS,
) -> QualityTier:
    """Map a total score to its tier.

    Thresholds are inclusive lower bounds (defaults):
    - Excellent: >= 0.90
    - Good: >= 0.75
    - Fair: >= 0.50
    - Poor: below 0.50
    """

    if total_score >= thresholds.excellent:
        return QualityTier.EXCELLENT
    elif total_score >= thresholds.good:
        return QualityTier.GOOD
    elif total_score >= thresholds.fair:
        return QualityTier.FAIR
    else:
        return QualityTier.POOR


def get_quality_tier_info(tier: QualityTier) -> Dict[str, str]:
    return dict(QUALITY_TIER_INFO[QualityTier(tier)])
