"""Base class for face embedding backends."""

from abc import ABC, abstractmethod

import numpy as np


class BaseEmbeddingBackend(ABC):
    """Abstract base class for face embedding extraction."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the embedding backend."""
        pass

    @property
    @abstractmethod
    def embedding_dim(self) -> int:
        """Return the dimensionality of the embedding vector."""
        pass

    @abstractmethod
    def extract(self, face_image: np.ndarray) -> np.ndarray:
        """Extract embedding from a face image.

        Args:
            face_image: BGR face image (cropped)

        Returns:
            Embedding vector of length ``embedding_dim``

        Raises:
            EmbeddingFailure: If no embedding could be produced
        """
        pass
