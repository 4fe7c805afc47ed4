"""Nearest-match decision engine."""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..constants import MatchingConfig
from ..errors import InvalidInput
from .metrics import cosine_similarity, euclidean_distance
from .types import EnrollmentRecord, MatchDecision

logger = logging.getLogger(__name__)


class MatchEngine:
    """Decide whether a probe embedding belongs to an enrolled identity.

    Cosine similarity ranks the candidates. The Euclidean distance is tracked
    for the leading candidate only and acts as a second gate on acceptance:
    the leader is accepted when its similarity is above the cosine threshold
    and its distance is below the Euclidean threshold.

    Exact cosine ties keep the first candidate seen.
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def _validate_probe(self, probe) -> np.ndarray:
        vec = np.asarray(probe, dtype=np.float32)
        if vec.ndim != 1:
            raise InvalidInput(f"Probe must be a 1-D vector, got shape {vec.shape}")
        if vec.shape[0] != self.config.embedding_dim:
            raise InvalidInput(
                f"Probe has {vec.shape[0]} values, expected {self.config.embedding_dim}"
            )
        if not np.all(np.isfinite(vec)):
            raise InvalidInput("Probe contains non-finite values")
        return vec

    def match(self, probe, candidates: Sequence[EnrollmentRecord]) -> MatchDecision:
        """Match a probe against a snapshot of enrolled records.

        Args:
            probe: Probe embedding of length ``embedding_dim``
            candidates: Records to compare against (not mutated)

        Returns:
            MatchDecision; ``best_record`` is set only when accepted

        Raises:
            InvalidInput: If the probe has the wrong shape or length, or
                non-finite values
        """
        vec = self._validate_probe(probe)

        if not candidates:
            logger.debug("No registered faces found")
            return MatchDecision()

        logger.debug(f"Comparing against {len(candidates)} registered faces")

        leader: Optional[EnrollmentRecord] = None
        max_similarity = -1.0
        leader_distance = math.inf

        for index, record in enumerate(candidates):
            distance = euclidean_distance(vec, record.embedding)
            similarity = cosine_similarity(vec, record.embedding)

            logger.debug(
                f"Face {index + 1} ({record.identity}): cosine={similarity:.6f} "
                f"euclidean={distance:.6f}"
            )

            if similarity > max_similarity:
                max_similarity = similarity
                leader_distance = distance
                leader = record

        accepted = (
            leader is not None
            and max_similarity > self.config.cosine_threshold
            and leader_distance < self.config.euclidean_threshold
        )

        decision = MatchDecision(
            best_record=leader if accepted else None,
            best_cosine_similarity=max_similarity,
            corresponding_euclidean_distance=leader_distance,
            accepted=accepted,
            candidate_count=len(candidates),
        )

        logger.debug(
            f"Best cosine similarity: {max_similarity:.6f}, "
            f"corresponding euclidean distance: {leader_distance:.6f}, "
            f"recognized: {decision.identity or 'None'}"
        )
        return decision
