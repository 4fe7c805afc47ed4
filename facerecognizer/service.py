"""Enrollment and recognition flows.

Ties the collaborators together:

    image -> locator -> (liveness) -> embedder -> store      (enrollment)
    image -> locator -> embedder -> engine(store snapshot)   (recognition)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .detection import BaseFaceLocator
from .errors import EmbeddingFailure, LivenessFailure
from .liveness import BaseLivenessChecker
from .recognition import BaseEmbeddingBackend, EmbeddingStore, EnrollmentRecord, MatchDecision, MatchEngine
from .session import RegistrationSession

logger = logging.getLogger(__name__)


class EnrollmentStatus(Enum):
    ENROLLED = "enrolled"
    NO_FACE = "no_face"
    SPOOF_DETECTED = "spoof_detected"
    LIVENESS_FAILED = "liveness_failed"
    EMBEDDING_FAILED = "embedding_failed"


class RecognitionStatus(Enum):
    DECIDED = "decided"
    NO_FACE = "no_face"
    EMBEDDING_FAILED = "embedding_failed"


@dataclass(frozen=True)
class EnrollmentResult:
    """Result of an enrollment attempt."""

    status: EnrollmentStatus
    session: RegistrationSession
    record: Optional[EnrollmentRecord] = None
    error: Optional[str] = None

    @property
    def enrolled(self) -> bool:
        return self.status == EnrollmentStatus.ENROLLED


@dataclass(frozen=True)
class RecognitionResult:
    """Result of a recognition attempt.

    ``decision`` is present exactly when ``status`` is DECIDED.
    """

    status: RecognitionStatus
    decision: Optional[MatchDecision] = None
    error: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.decision is not None and self.decision.accepted


class FaceRecognitionService:
    """Main face recognition service combining localization, embedding, and matching."""

    def __init__(
        self,
        store: EmbeddingStore,
        engine: MatchEngine,
        embedder: BaseEmbeddingBackend,
        locator: BaseFaceLocator,
        liveness: Optional[BaseLivenessChecker] = None,
    ):
        self.store = store
        self.engine = engine
        self.embedder = embedder
        self.locator = locator
        self.liveness = liveness

    def enroll(self, session: RegistrationSession, image: np.ndarray) -> EnrollmentResult:
        """Enroll the face in an image under the session's identity.

        Args:
            session: Who is being enrolled
            image: Captured BGR image

        Returns:
            EnrollmentResult describing what happened
        """
        face = self.locator.locate(image)
        if face is None:
            logger.warning(f"No face detected for {session.user_name}")
            return EnrollmentResult(EnrollmentStatus.NO_FACE, session)

        if self.liveness is not None:
            try:
                live = self.liveness.is_live(face)
            except LivenessFailure as e:
                logger.error(f"Liveness check failed for {session.user_name}: {e}")
                return EnrollmentResult(EnrollmentStatus.LIVENESS_FAILED, session, error=str(e))

            if not live:
                logger.warning(f"Spoof detected while enrolling {session.user_name}")
                return EnrollmentResult(EnrollmentStatus.SPOOF_DETECTED, session)

        try:
            embedding = self.embedder.extract(face)
        except EmbeddingFailure as e:
            logger.error(f"Could not extract embedding for {session.user_name}: {e}")
            return EnrollmentResult(EnrollmentStatus.EMBEDDING_FAILED, session, error=str(e))

        return self.enroll_embedding(session, embedding)

    def enroll_embedding(self, session: RegistrationSession, embedding) -> EnrollmentResult:
        """Enroll a precomputed embedding under the session's identity."""
        record = self.store.add(session.identity, embedding)
        logger.info(f"Live face saved for {session.user_name} (id {session.user_id})")
        return EnrollmentResult(EnrollmentStatus.ENROLLED, session, record=record)

    def recognize(self, image: np.ndarray) -> RecognitionResult:
        """Recognize the face in an image.

        Args:
            image: Captured BGR image

        Returns:
            RecognitionResult with a decision, or the reason none was made
        """
        face = self.locator.locate(image)
        if face is None:
            logger.info("No face detected")
            return RecognitionResult(RecognitionStatus.NO_FACE)

        try:
            probe = self.embedder.extract(face)
        except EmbeddingFailure as e:
            logger.error(f"Error generating face embedding: {e}")
            return RecognitionResult(RecognitionStatus.EMBEDDING_FAILED, error=str(e))

        return RecognitionResult(RecognitionStatus.DECIDED, decision=self.recognize_embedding(probe))

    def recognize_embedding(self, probe) -> MatchDecision:
        """Match a precomputed probe against the current enrollments."""
        decision = self.engine.match(probe, self.store.snapshot())
        if decision.accepted:
            logger.info(f"Recognized {decision.identity} (cosine {decision.best_cosine_similarity:.4f})")
        else:
            logger.info(f"Face not recognized (best cosine {decision.best_cosine_similarity:.4f})")
        return decision
