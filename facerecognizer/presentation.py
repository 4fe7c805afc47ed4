"""Text rendering of recognition and enrollment outcomes."""

from typing import Sequence

from .constants import MatchingConfig
from .recognition import MatchDecision
from .service import EnrollmentResult, EnrollmentStatus, RecognitionResult, RecognitionStatus


def format_decision(decision: MatchDecision, config: MatchingConfig) -> str:
    """Render an accept/reject message with both scores.

    The thresholds shown are the ones the engine decided with.
    """
    if decision.accepted and decision.best_record is not None:
        return (
            "Face Recognized!\n"
            f"Welcome, User {decision.best_record.identity}!\n"
            f"Cosine Similarity: {decision.best_cosine_similarity:.4f}\n"
            f"Euclidean Distance: {decision.corresponding_euclidean_distance:.4f}"
        )

    return (
        "Face Not Recognized\n"
        "This face is not registered in the system.\n"
        f"Best Cosine Similarity: {decision.best_cosine_similarity:.4f}\n"
        f"Euclidean Distance: {decision.corresponding_euclidean_distance:.4f}\n"
        f"(Cosine Threshold: {config.cosine_threshold}, "
        f"Euclidean Threshold: {config.euclidean_threshold})"
    )


def format_debug_report(
    decision: MatchDecision,
    identities: Sequence[str],
    config: MatchingConfig,
) -> str:
    """Render the detailed scores and the list of enrolled identities."""
    lines = [
        "=== DEBUG INFO ===",
        f"Registered faces: {len(identities)}",
        f"Best cosine similarity: {decision.best_cosine_similarity:.6f}",
        f"Euclidean distance: {decision.corresponding_euclidean_distance:.6f}",
        f"Cosine threshold: {config.cosine_threshold}",
        f"Euclidean threshold: {config.euclidean_threshold}",
        "",
        "All registered users:",
    ]
    lines.extend(f"{i}. User {identity}" for i, identity in enumerate(identities, start=1))
    return "\n".join(lines)


def format_enrollment(result: EnrollmentResult) -> str:
    if result.status == EnrollmentStatus.ENROLLED:
        return f"Live face saved for {result.session.user_name}"
    if result.status == EnrollmentStatus.SPOOF_DETECTED:
        return "Spoof detected!"
    if result.status == EnrollmentStatus.NO_FACE:
        return "No face detected."
    if result.status == EnrollmentStatus.LIVENESS_FAILED:
        return f"Could not run the liveness check: {result.error}"
    return f"Could not generate a face embedding: {result.error}"


def format_recognition(result: RecognitionResult, config: MatchingConfig) -> str:
    if result.status == RecognitionStatus.DECIDED:
        return format_decision(result.decision, config)
    if result.status == RecognitionStatus.NO_FACE:
        return "No face detected. Please ensure your face is clearly visible and well-lit."
    return f"Error processing image: {result.error}"
