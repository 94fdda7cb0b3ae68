"""Unit tests for the semantic sub-scorer."""

import random

import pytest

from matching_engine.scorer.semantic import (
    InvalidInputError,
    calculate_semantic_score,
    cosine_distance,
    cosine_similarity,
    describe_similarity,
    search_distance,
    semantic_score_from_similarity,
)
from matching_engine.tests.conftest import base_vector, unit_vector


class TestCosineSimilarity:
    def test_identical_vectors(self):
        v = [0.3, -1.2, 4.0, 0.5]
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_symmetric(self):
        rng = random.Random(7)
        for _ in range(20):
            a = [rng.uniform(-1, 1) for _ in range(16)]
            b = [rng.uniform(-1, 1) for _ in range(16)]
            assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_zero_norm_returns_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(InvalidInputError):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)

    def test_distance_is_one_minus_similarity(self):
        a, b = [1.0, 2.0, 3.0], [3.0, 2.0, 1.0]
        assert cosine_distance(a, b) == pytest.approx(1.0 - cosine_similarity(a, b))


class TestCalculateSemanticScore:
    def test_missing_founder_embedding(self):
        result = calculate_semantic_score(None, base_vector())
        assert result.score == 0.0
        assert result.distance == 2.0
        assert result.reasoning == "Embeddings not available"

    def test_empty_funder_embedding(self):
        result = calculate_semantic_score(base_vector(), [])
        assert result.score == 0.0
        assert result.distance == 2.0

    def test_strong_alignment(self):
        result = calculate_semantic_score(base_vector(), unit_vector(0.85))
        assert result.score == pytest.approx(0.85)
        assert result.distance == pytest.approx(0.15)
        assert result.reasoning == "Strong alignment in investment thesis and company description"

    def test_negative_similarity_clamped(self):
        result = calculate_semantic_score([1.0, 0.0], [-1.0, 0.0])
        assert result.score == 0.0
        assert result.distance == pytest.approx(2.0)
        assert result.reasoning == "Limited semantic connection between profiles"

    def test_symmetric_score(self):
        a, b = unit_vector(0.6), unit_vector(0.95)
        assert calculate_semantic_score(a, b).score == pytest.approx(
            calculate_semantic_score(b, a).score
        )

    def test_dimension_mismatch_propagates(self):
        with pytest.raises(InvalidInputError):
            calculate_semantic_score([1.0, 0.0], [1.0, 0.0, 0.0])


class TestPrecomputedSimilarity:
    def test_value_used_as_is(self):
        result = semantic_score_from_similarity(0.72)
        assert result.score == pytest.approx(0.72)
        assert result.distance == pytest.approx(0.28)
        assert result.reasoning == "Good thematic overlap between founder and funder"

    def test_out_of_range_values_clamped(self):
        assert semantic_score_from_similarity(1.3).score == 1.0
        assert semantic_score_from_similarity(-0.4).score == 0.0


class TestReasoningBuckets:
    @pytest.mark.parametrize("similarity,expected", [
        (0.95, "Exceptional semantic alignment in business model and investment focus"),
        (0.90, "Exceptional semantic alignment in business model and investment focus"),
        (0.8999, "Strong alignment in investment thesis and company description"),
        (0.70, "Good thematic overlap between founder and funder"),
        (0.50, "Moderate semantic relevance"),
        (0.4999, "Limited semantic connection between profiles"),
        (0.0, "Limited semantic connection between profiles"),
    ])
    def test_bucket_boundaries(self, similarity, expected):
        assert describe_similarity(similarity) == expected


class TestSearchDistance:
    def test_matches_cosine_distance(self):
        assert search_distance(base_vector(), unit_vector(0.75)) == pytest.approx(0.25)

    @pytest.mark.parametrize("a,b", [
        ([], [1.0, 0.0]),
        (None, [1.0, 0.0]),
        ([1.0, 0.0], [1.0, 0.0, 0.0]),
        ([0.0, 0.0], [1.0, 0.0]),
        ([1.0, 0.0], [0.0, 0.0]),
    ])
    def test_incomparable_pairs_are_maximally_distant(self, a, b):
        assert search_distance(a, b) == 2.0
