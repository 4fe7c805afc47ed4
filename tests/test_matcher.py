"""Tests for the match engine."""

import math

import numpy as np
import pytest

from facerecognizer.constants import MatchingConfig
from facerecognizer.errors import InvalidInput
from facerecognizer.recognition import EnrollmentRecord, MatchEngine


class TestMatchEngine:
    """Test cases for MatchEngine.match."""

    def test_empty_candidates(self, matching_config):
        """No candidates means no match, never an error."""
        decision = MatchEngine(matching_config).match([1.0, 0.0], [])

        assert decision.accepted is False
        assert decision.best_record is None
        assert decision.best_cosine_similarity == -1.0
        assert decision.corresponding_euclidean_distance == math.inf
        assert decision.candidate_count == 0

    def test_selects_most_similar(self, matching_config):
        candidates = [
            EnrollmentRecord("A", [1.0, 0.0]),
            EnrollmentRecord("B", [0.0, 1.0]),
        ]
        decision = MatchEngine(matching_config).match([1.0, 0.0], candidates)

        assert decision.accepted is True
        assert decision.best_record.identity == "A"
        assert decision.identity == "A"
        assert decision.best_cosine_similarity == pytest.approx(1.0)
        assert decision.corresponding_euclidean_distance == pytest.approx(0.0)
        assert decision.candidate_count == 2

    def test_candidate_order_does_not_matter(self, matching_config):
        candidates = [
            EnrollmentRecord("B", [0.0, 1.0]),
            EnrollmentRecord("A", [1.0, 0.0]),
        ]
        decision = MatchEngine(matching_config).match([1.0, 0.0], candidates)
        assert decision.identity == "A"

    def test_length_mismatch_candidate_never_accepted(self):
        config = MatchingConfig(embedding_dim=3)
        decision = MatchEngine(config).match([1.0, 0.0, 0.0], [EnrollmentRecord("A", [1.0, 0.0])])

        assert decision.accepted is False
        assert decision.best_record is None
        assert decision.best_cosine_similarity == 0.0
        assert decision.corresponding_euclidean_distance == math.inf

    def test_distance_belongs_to_cosine_leader(self, matching_config):
        """The reported distance is the leader's, not the smallest distance."""
        candidates = [
            # Same direction, far away: best cosine, large distance
            EnrollmentRecord("far", [10.0, 0.0]),
            # Different direction, close by: smaller distance, lower cosine
            EnrollmentRecord("near", [1.0, 0.9]),
        ]
        decision = MatchEngine(matching_config).match([1.0, 0.0], candidates)

        assert decision.best_cosine_similarity == pytest.approx(1.0)
        assert decision.corresponding_euclidean_distance == pytest.approx(9.0)
        assert decision.accepted is False
        assert decision.best_record is None

    def test_rejected_keeps_scores(self, matching_config):
        decision = MatchEngine(matching_config).match([1.0, 0.0], [EnrollmentRecord("B", [0.0, 1.0])])

        assert decision.accepted is False
        assert decision.best_record is None
        assert decision.best_cosine_similarity == pytest.approx(0.0)
        assert decision.corresponding_euclidean_distance == pytest.approx(math.sqrt(2))

    def test_cosine_threshold_is_strict(self):
        config = MatchingConfig(cosine_threshold=1.0, euclidean_threshold=3.0, embedding_dim=2)
        decision = MatchEngine(config).match([1.0, 0.0], [EnrollmentRecord("A", [1.0, 0.0])])
        assert decision.accepted is False

    def test_euclidean_threshold_is_strict(self):
        config = MatchingConfig(cosine_threshold=0.6, euclidean_threshold=1.0, embedding_dim=2)
        decision = MatchEngine(config).match([1.0, 0.0], [EnrollmentRecord("A", [2.0, 0.0])])

        assert decision.corresponding_euclidean_distance == pytest.approx(1.0)
        assert decision.accepted is False

    def test_exact_tie_keeps_first_seen(self, matching_config):
        candidates = [
            EnrollmentRecord("first", [1.0, 0.0]),
            EnrollmentRecord("second", [1.0, 0.0]),
        ]
        decision = MatchEngine(matching_config).match([1.0, 0.0], candidates)
        assert decision.identity == "first"

    def test_later_failing_leader_clears_match(self, matching_config):
        """Acceptance is judged on the final leader only."""
        candidates = [
            EnrollmentRecord("close", [0.9, 0.3]),
            EnrollmentRecord("aligned_but_far", [5.0, 0.0]),
        ]
        decision = MatchEngine(matching_config).match([1.0, 0.0], candidates)

        assert decision.best_cosine_similarity == pytest.approx(1.0)
        assert decision.accepted is False
        assert decision.best_record is None

    def test_wrong_length_probe_raises(self, matching_config):
        with pytest.raises(InvalidInput):
            MatchEngine(matching_config).match([1.0, 0.0, 0.0], [EnrollmentRecord("A", [1.0, 0.0])])

    def test_wrong_length_probe_raises_even_when_empty(self, matching_config):
        with pytest.raises(InvalidInput):
            MatchEngine(matching_config).match([1.0], [])

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_probe_raises(self, matching_config, bad):
        """A NaN or infinite probe never yields a decision."""
        with pytest.raises(InvalidInput):
            MatchEngine(matching_config).match([bad, 0.0], [EnrollmentRecord("A", [1.0, 0.0])])

    def test_matrix_probe_raises(self, matching_config):
        with pytest.raises(InvalidInput):
            MatchEngine(matching_config).match(np.ones((2, 2)), [])

    def test_realistic_embeddings(self, unit_vector_128):
        rng = np.random.default_rng(3)
        others = [EnrollmentRecord(f"user{i}", rng.standard_normal(128)) for i in range(20)]
        target = EnrollmentRecord("target", unit_vector_128)
        probe = unit_vector_128 + rng.normal(0, 0.01, 128).astype(np.float32)

        decision = MatchEngine().match(probe, others + [target])

        assert decision.identity == "target"
        assert decision.best_cosine_similarity > 0.99
        assert decision.candidate_count == 21
