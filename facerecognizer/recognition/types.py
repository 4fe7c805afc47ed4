"""Face recognition types."""

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class EnrollmentRecord:
    """An enrolled identity and its embedding.

    The embedding is a read-only float32 copy owned by the record, so a
    record handed out by the store can be shared between threads.
    """

    identity: str
    embedding: np.ndarray = field(repr=False, compare=False)

    def __post_init__(self):
        vec = np.array(self.embedding, dtype=np.float32).reshape(-1)
        vec.setflags(write=False)
        object.__setattr__(self, "embedding", vec)

    @property
    def dim(self) -> int:
        """Length of the embedding vector."""
        return int(self.embedding.shape[0])


@dataclass(frozen=True)
class MatchDecision:
    """Outcome of matching a probe against the enrolled records.

    ``corresponding_euclidean_distance`` belongs to the candidate with the
    best cosine similarity; it is not the minimum distance over all records.
    """

    best_record: Optional[EnrollmentRecord] = None
    best_cosine_similarity: float = -1.0
    corresponding_euclidean_distance: float = math.inf
    accepted: bool = False
    candidate_count: int = 0

    @property
    def identity(self) -> Optional[str]:
        """Identity of the accepted record, or None."""
        if self.accepted and self.best_record is not None:
            return self.best_record.identity
        return None
