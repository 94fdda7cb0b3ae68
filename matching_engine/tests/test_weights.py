"""Tests for scoring weights, tier thresholds and config files."""

import json

import pytest
import yaml

from matching_engine.models import Industry, Stage
from matching_engine.scorer import score_rules
from matching_engine.scorer.relationships import INDUSTRY_RELATIONSHIPS
from matching_engine.scorer.weights import (
    DEFAULT_CONFIG,
    DEFAULT_WEIGHTS,
    RuleWeights,
    ScoringConfig,
    ScoringWeights,
    TierThresholds,
    load_scoring_config,
    save_scoring_config,
)
from matching_engine.tests.conftest import make_founder, make_funder


def test_default_weights():
    assert DEFAULT_WEIGHTS.semantic == 0.40
    assert DEFAULT_WEIGHTS.rule == 0.40
    assert DEFAULT_WEIGHTS.stage == 0.20
    total = DEFAULT_WEIGHTS.semantic + DEFAULT_WEIGHTS.rule + DEFAULT_WEIGHTS.stage
    assert abs(total - 1.0) < 1e-6


def test_default_rule_weights_sum_to_one():
    rw = DEFAULT_CONFIG.rule_weights
    assert (rw.industry, rw.check_size, rw.geography, rw.completeness) == (
        0.375, 0.375, 0.125, 0.125
    )


def test_weights_must_sum_to_one():
    with pytest.raises(ValueError, match="must sum to 1.0"):
        ScoringWeights(semantic=0.5, rule=0.5, stage=0.2)


def test_weight_out_of_range():
    with pytest.raises(ValueError):
        ScoringWeights(semantic=1.2, rule=-0.4, stage=0.2)


def test_rule_weights_must_sum_to_one():
    with pytest.raises(ValueError, match="Rule weights must sum to 1.0"):
        RuleWeights(industry=0.5, check_size=0.5, geography=0.125, completeness=0.125)


def test_tier_thresholds_must_descend():
    with pytest.raises(ValueError, match="strictly descending"):
        TierThresholds(excellent=0.7, good=0.75, fair=0.5)


def test_config_is_frozen():
    with pytest.raises(ValueError):
        DEFAULT_CONFIG.weights = ScoringWeights(semantic=0.5, rule=0.3, stage=0.2)


def test_default_tables_match_constants():
    assert DEFAULT_CONFIG.industry_relationships[Industry.FINTECH] == frozenset(
        {Industry.ENTERPRISE_SAAS, Industry.DEEPTECH}
    )
    assert DEFAULT_CONFIG.adjacent_stages[Stage.SEED] == frozenset({Stage.PRE_SEED, Stage.SERIES_A})
    assert len(DEFAULT_CONFIG.industry_relationships) == len(INDUSTRY_RELATIONSHIPS) == 10
    assert len(DEFAULT_CONFIG.completeness_fields) == 9


def test_default_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.industry_relationships[Industry.FINTECH] = frozenset()
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.adjacent_stages[Stage.SEED] = frozenset()


def test_loaded_tables_are_read_only(tmp_path):
    path = tmp_path / "scoring.yaml"
    path.write_text(yaml.dump({"adjacent_stages": {"Seed": ["Series A"]}}))

    config = load_scoring_config(str(path))

    assert config.adjacent_stages[Stage.SEED] == frozenset({Stage.SERIES_A})
    with pytest.raises(TypeError):
        config.adjacent_stages[Stage.SEED] = frozenset()


def test_writes_to_caller_dict_do_not_reach_config():
    table = {Industry.FINTECH: frozenset({Industry.DEEPTECH})}
    config = ScoringConfig(industry_relationships=table)

    table[Industry.FINTECH] = frozenset()

    assert config.industry_relationships[Industry.FINTECH] == frozenset({Industry.DEEPTECH})


def test_rule_scoring_unaffected_by_rejected_table_write():
    founder = make_founder()
    funder = make_funder(preferred_industries=["Enterprise SaaS"])
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.industry_relationships[Industry.FINTECH] = frozenset()

    assert score_rules(founder, funder).breakdown.industry_match.score == 0.5


def test_empty_completeness_checklist_rejected():
    with pytest.raises(ValueError):
        ScoringConfig(completeness_fields=())


def test_load_without_path_returns_default():
    assert load_scoring_config() is DEFAULT_CONFIG


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scoring_config(str(tmp_path / "nope.yaml"))


def test_load_unsupported_format(tmp_path):
    path = tmp_path / "weights.toml"
    path.write_text("semantic = 0.4")
    with pytest.raises(ValueError, match="Unsupported file format"):
        load_scoring_config(str(path))


def test_load_partial_yaml_keeps_defaults(tmp_path):
    path = tmp_path / "scoring.yaml"
    path.write_text(yaml.dump({"weights": {"semantic": 0.5, "rule": 0.3, "stage": 0.2}}))

    config = load_scoring_config(str(path))

    assert config.weights.semantic == 0.5
    assert config.rule_weights == DEFAULT_CONFIG.rule_weights
    assert config.tiers == DEFAULT_CONFIG.tiers


def test_load_invalid_weights_from_json(tmp_path):
    path = tmp_path / "scoring.json"
    path.write_text(json.dumps({"weights": {"semantic": 0.9, "rule": 0.4, "stage": 0.2}}))
    with pytest.raises(ValueError):
        load_scoring_config(str(path))


@pytest.mark.parametrize("suffix", [".json", ".yaml", ".yml"])
def test_save_then_load(tmp_path, suffix):
    config = ScoringConfig(
        weights=ScoringWeights(semantic=0.5, rule=0.3, stage=0.2, version="2.0"),
        tiers=TierThresholds(excellent=0.85, good=0.7, fair=0.45),
    )
    path = tmp_path / f"scoring{suffix}"

    save_scoring_config(config, str(path))
    loaded = load_scoring_config(str(path))

    assert loaded == config


def test_save_unsupported_format(tmp_path):
    with pytest.raises(ValueError):
        save_scoring_config(DEFAULT_CONFIG, str(tmp_path / "scoring.txt"))
