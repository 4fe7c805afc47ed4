"""Face Enrollment & Recognition.

Stores enrolled face embeddings and decides whether a new face matches one
of them, using cosine similarity to rank candidates and a Euclidean
distance gate on the best one.

Quick Start:
    # Command line
    python -m facerecognizer enroll --name "Alice" --id 42 --image alice.jpg
    python -m facerecognizer recognize --image photo.jpg

    # As library
    from facerecognizer import EmbeddingStore, MatchEngine

    store = EmbeddingStore(embedding_dim=128)
    store.add("42", embedding)
    decision = MatchEngine().match(probe, store.snapshot())
"""

__version__ = "0.1.0"

from .constants import Config, MatchingConfig, get_config
from .errors import CorruptRecord, EmbeddingFailure, FaceRecognizerError, InvalidInput, LivenessFailure
from .recognition import (
    DirectoryEmbeddingRepository,
    EmbeddingStore,
    EnrollmentRecord,
    InMemoryEmbeddingRepository,
    MatchDecision,
    MatchEngine,
    cosine_similarity,
    euclidean_distance,
)
from .session import RegistrationSession
from .service import (
    EnrollmentResult,
    EnrollmentStatus,
    FaceRecognitionService,
    RecognitionResult,
    RecognitionStatus,
)

__all__ = [
    "Config",
    "MatchingConfig",
    "get_config",
    "CorruptRecord",
    "EmbeddingFailure",
    "FaceRecognizerError",
    "InvalidInput",
    "LivenessFailure",
    "DirectoryEmbeddingRepository",
    "EmbeddingStore",
    "EnrollmentRecord",
    "InMemoryEmbeddingRepository",
    "MatchDecision",
    "MatchEngine",
    "cosine_similarity",
    "euclidean_distance",
    "RegistrationSession",
    "EnrollmentResult",
    "EnrollmentStatus",
    "FaceRecognitionService",
    "RecognitionResult",
    "RecognitionStatus",
]
