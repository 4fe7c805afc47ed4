"""Tests for decision rendering."""

import math

from facerecognizer.constants import MatchingConfig
from facerecognizer.presentation import (
    format_debug_report,
    format_decision,
    format_enrollment,
    format_recognition,
)
from facerecognizer.recognition import EnrollmentRecord, MatchDecision
from facerecognizer.service import (
    EnrollmentResult,
    EnrollmentStatus,
    RecognitionResult,
    RecognitionStatus,
)
from facerecognizer.session import RegistrationSession


class TestFormatDecision:
    """Test cases for format_decision."""

    def test_accepted(self):
        decision = MatchDecision(
            best_record=EnrollmentRecord("42", [1.0, 0.0]),
            best_cosine_similarity=0.91234,
            corresponding_euclidean_distance=0.5,
            accepted=True,
            candidate_count=3,
        )
        text = format_decision(decision, MatchingConfig())

        assert text.startswith("Face Recognized!")
        assert "Welcome, User 42!" in text
        assert "Cosine Similarity: 0.9123" in text
        assert "Euclidean Distance: 0.5000" in text

    def test_rejected_shows_configured_thresholds(self):
        config = MatchingConfig(cosine_threshold=0.7, euclidean_threshold=2.5)
        decision = MatchDecision(best_cosine_similarity=0.41, corresponding_euclidean_distance=4.0)

        text = format_decision(decision, config)

        assert text.startswith("Face Not Recognized")
        assert "Best Cosine Similarity: 0.4100" in text
        assert "(Cosine Threshold: 0.7, Euclidean Threshold: 2.5)" in text
        assert "0.3" not in text and "1.5" not in text

    def test_empty_store_decision(self):
        text = format_decision(MatchDecision(), MatchingConfig())
        assert "Best Cosine Similarity: -1.0000" in text
        assert "Euclidean Distance: inf" in text


def test_debug_report_lists_users():
    decision = MatchDecision(best_cosine_similarity=0.5, corresponding_euclidean_distance=math.inf)
    text = format_debug_report(decision, ["1", "2"], MatchingConfig())

    assert "Registered faces: 2" in text
    assert "Cosine threshold: 0.6" in text
    assert "Euclidean threshold: 3.0" in text
    assert text.endswith("1. User 1\n2. User 2")


def test_status_messages():
    session = RegistrationSession("Alice", "42")
    assert format_enrollment(EnrollmentResult(EnrollmentStatus.ENROLLED, session)) == "Live face saved for Alice"
    assert format_enrollment(EnrollmentResult(EnrollmentStatus.SPOOF_DETECTED, session)) == "Spoof detected!"
    assert "No face" in format_enrollment(EnrollmentResult(EnrollmentStatus.NO_FACE, session))
    assert "model missing" in format_enrollment(
        EnrollmentResult(EnrollmentStatus.LIVENESS_FAILED, session, error="model missing")
    )
    assert "boom" in format_enrollment(
        EnrollmentResult(EnrollmentStatus.EMBEDDING_FAILED, session, error="boom")
    )
    assert "No face detected" in format_recognition(RecognitionResult(RecognitionStatus.NO_FACE), MatchingConfig())
    assert "boom" in format_recognition(
        RecognitionResult(RecognitionStatus.EMBEDDING_FAILED, error="boom"), MatchingConfig()
    )
