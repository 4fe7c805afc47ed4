"""Face embedding backends.

Embedding backends turn a cropped face image into a fixed-length vector
for comparison and recognition.
"""

from .base import BaseEmbeddingBackend
from .facenet import FaceNetEmbeddingBackend

EMBEDDING_BACKENDS = {
    "facenet": FaceNetEmbeddingBackend,
}

__all__ = [
    "BaseEmbeddingBackend",
    "FaceNetEmbeddingBackend",
    "EMBEDDING_BACKENDS",
]
