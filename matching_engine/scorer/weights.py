"""Scoring weight configuration system.

The production constants live in DEFAULT_CONFIG. Alternate weightings are
built as new ScoringConfig instances and passed to the scorer explicitly,
optionally loaded from a JSON or YAML file.
"""

import json
import yaml
from pathlib import Path
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from ..models.enums import Industry, Stage
from .relationships import ADJACENT_STAGES, COMPLETENESS_FIELDS, INDUSTRY_RELATIONSHIPS

WEIGHT_SUM_TOLERANCE = 0.001


def _check_unit_range(v: float) -> float:
    if not 0 <= v <= 1:
        raise ValueError(f"Weight must be between 0 and 1, got {v}")
    return v


class ScoringWeights(BaseModel):
    """Top-level branch weights. Must sum to 1.0; never renormalised at runtime."""

    model_config = {"frozen": True}

    semantic: float = 0.40
    rule: float = 0.40
    stage: float = 0.20
    version: str = "1.0"

    @field_validator("semantic", "rule", "stage")
    @classmethod
    def weight_range(cls, v: float) -> float:
        return _check_unit_range(v)

    def model_post_init(self, __context) -> None:
        total = self.semantic + self.rule + self.stage
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"Weights must sum to 1.0, got {total:.3f}. "
                f"(S:{self.semantic}, R:{self.rule}, ST:{self.stage})"
            )


class RuleWeights(BaseModel):
    """Split of the rule branch: 0.375/0.375/0.125/0.125 is 15/15/5/5 % of the total."""

    model_config = {"frozen": True}

    industry: float = 0.375
    check_size: float = 0.375
    geography: float = 0.125
    completeness: float = 0.125

    @field_validator("industry", "check_size", "geography", "completeness")
    @classmethod
    def weight_range(cls, v: float) -> float:
        return _check_unit_range(v)

    def model_post_init(self, __context) -> None:
        total = self.industry + self.check_size + self.geography + self.completeness
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"Rule weights must sum to 1.0, got {total:.3f}. "
                f"(I:{self.industry}, C:{self.check_size}, "
                f"G:{self.geography}, P:{self.completeness})"
            )


class TierThresholds(BaseModel):
    """Lower bounds (inclusive) of the quality tiers on the total score."""

    model_config = {"frozen": True}

    excellent: float = 0.90
    good: float = 0.75
    fair: float = 0.50

    @field_validator("excellent", "good", "fair")
    @classmethod
    def threshold_range(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError(f"Threshold must be between 0 and 1, got {v}")
        return v

    def model_post_init(self, __context) -> None:
        if not self.excellent > self.good > self.fair:
            raise ValueError(
                "Tier thresholds must be strictly descending "
                f"(excellent={self.excellent}, good={self.good}, fair={self.fair})"
            )


class ScoringConfig(BaseModel):
    """Everything the scorer treats as a constant, bundled and immutable."""

    model_config = {"frozen": True}

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    rule_weights: RuleWeights = Field(default_factory=RuleWeights)
    tiers: TierThresholds = Field(default_factory=TierThresholds)
    industry_relationships: Mapping[Industry, FrozenSet[Industry]] = Field(
        default_factory=lambda: INDUSTRY_RELATIONSHIPS
    )
    adjacent_stages: Mapping[Stage, FrozenSet[Stage]] = Field(
        default_factory=lambda: ADJACENT_STAGES
    )
    completeness_fields: Tuple[str, ...] = COMPLETENESS_FIELDS

    @field_validator("industry_relationships", "adjacent_stages")
    @classmethod
    def read_only_table(cls, v: Mapping) -> Mapping:
        # Shared by every caller of DEFAULT_CONFIG; writes must fail
        return MappingProxyType(dict(v))

    @field_validator("completeness_fields")
    @classmethod
    def non_empty_checklist(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("Completeness checklist must name at least one field")
        return v

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON/YAML serialization."""
        return {
            "weights": self.weights.model_dump(),
            "rule_weights": self.rule_weights.model_dump(),
            "tiers": self.tiers.model_dump(),
            "industry_relationships": {
                industry.value: sorted(related.value for related in relations)
                for industry, relations in self.industry_relationships.items()
            },
            "adjacent_stages": {
                stage.value: sorted(adjacent.value for adjacent in neighbours)
                for stage, neighbours in self.adjacent_stages.items()
            },
            "completeness_fields": list(self.completeness_fields),
        }


DEFAULT_WEIGHTS = ScoringWeights()
DEFAULT_RULE_WEIGHTS = RuleWeights()
DEFAULT_TIER_THRESHOLDS = TierThresholds()
DEFAULT_CONFIG = ScoringConfig(
    weights=DEFAULT_WEIGHTS,
    rule_weights=DEFAULT_RULE_WEIGHTS,
    tiers=DEFAULT_TIER_THRESHOLDS,
)


def load_scoring_config(filepath: Optional[str] = None) -> ScoringConfig:
    """Load a scoring configuration from file or return the defaults.

    Supports JSON and YAML formats. Sections missing from the file keep
    their default values.

    Args:
        filepath: Optional path to a configuration file

    Returns:
        ScoringConfig instance

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If the format is unsupported or the weights are invalid
    """

    if not filepath:
        return DEFAULT_CONFIG

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Scoring config file not found: {filepath}")

    if path.suffix == '.json':
        with open(path, 'r') as f:
            data = json.load(f)
    elif path.suffix in ['.yaml', '.yml']:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")

    return ScoringConfig(**(data or {}))


def save_scoring_config(config: ScoringConfig, filepath: str) -> None:
    """Save a scoring configuration to file (extension determines format)."""

    path = Path(filepath)
    data = config.to_dict()

    if path.suffix == '.json':
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
    elif path.suffix in ['.yaml', '.yml']:
        with open(path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")
