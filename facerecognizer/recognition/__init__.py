"""Face recognition module.

Contains:
- EmbeddingStore: enrolled identities and their embeddings
- MatchEngine: dual-threshold nearest-match decision
- Persistence backends for the enrolled embeddings
- Embedding backends (facenet)
"""

from .types import EnrollmentRecord, MatchDecision
from .metrics import cosine_similarity, euclidean_distance
from .persistence import (
    BaseEmbeddingRepository,
    DirectoryEmbeddingRepository,
    InMemoryEmbeddingRepository,
    format_embedding,
    parse_embedding,
)
from .store import EmbeddingStore
from .matcher import MatchEngine
from .embeddings import (
    BaseEmbeddingBackend,
    FaceNetEmbeddingBackend,
    EMBEDDING_BACKENDS,
)

__all__ = [
    # Types
    "EnrollmentRecord", "MatchDecision",
    # Metrics
    "cosine_similarity", "euclidean_distance",
    # Persistence
    "BaseEmbeddingRepository", "DirectoryEmbeddingRepository", "InMemoryEmbeddingRepository",
    "format_embedding", "parse_embedding",
    # Store and matching
    "EmbeddingStore", "MatchEngine",
    # Embeddings
    "BaseEmbeddingBackend", "FaceNetEmbeddingBackend", "EMBEDDING_BACKENDS",
]
