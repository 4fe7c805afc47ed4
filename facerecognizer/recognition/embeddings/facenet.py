"""FaceNet embedding backend running on OpenCV DNN."""

import logging
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from ...constants import EmbeddingConfig
from ...errors import EmbeddingFailure
from .base import BaseEmbeddingBackend

logger = logging.getLogger(__name__)


class FaceNetEmbeddingBackend(BaseEmbeddingBackend):
    """Face embedding using a FaceNet model via OpenCV DNN (128D)."""

    def __init__(self, config: Optional[EmbeddingConfig] = None, embedding_dim: int = 128):
        """Initialize FaceNet embedding backend.

        Args:
            config: Model path and preprocessing constants
            embedding_dim: Expected length of the model output
        """
        self.config = config or EmbeddingConfig()
        self._embedding_dim = int(embedding_dim)
        self._net = None

    @property
    def name(self) -> str:
        return "facenet"

    @property
    def embedding_dim(self) -> int:
        return self._embedding_dim

    def _initialize(self):
        """Lazy initialization of the FaceNet model."""
        if self._net is not None:
            return self._net

        model_file = Path(self.config.model_path)
        if not model_file.exists():
            raise EmbeddingFailure(f"FaceNet model not found: {model_file}")

        try:
            self._net = cv2.dnn.readNet(str(model_file))
        except Exception as e:
            logger.error(f"Failed to load FaceNet model: {e}")
            raise EmbeddingFailure(f"Failed to load FaceNet model from {model_file}", e)

        logger.info(f"Loaded FaceNet model from {model_file}")
        return self._net

    def preprocess(self, face_image: np.ndarray) -> np.ndarray:
        """Resize and normalize a face crop into a network input blob."""
        if face_image is None or face_image.size == 0:
            raise EmbeddingFailure("Empty face image")

        return cv2.dnn.blobFromImage(
            face_image,
            scalefactor=self.config.scale,
            size=tuple(self.config.input_size),
            mean=(self.config.mean, self.config.mean, self.config.mean),
            swapRB=self.config.swap_rb,
            crop=False,
        )

    def extract(self, face_image: np.ndarray) -> np.ndarray:
        """Extract a 128D embedding using FaceNet.

        Args:
            face_image: BGR face image

        Returns:
            Embedding vector (float32)

        Raises:
            EmbeddingFailure: If the model is unavailable or inference fails
        """
        net = self._initialize()

        try:
            blob = self.preprocess(face_image)
            net.setInput(blob)
            output = net.forward()
        except EmbeddingFailure:
            raise
        except Exception as e:
            logger.error(f"FaceNet embedding extraction failed: {e}")
            raise EmbeddingFailure("FaceNet inference failed", e)

        embedding = np.asarray(output, dtype=np.float32).flatten()
        if embedding.shape[0] != self._embedding_dim:
            raise EmbeddingFailure(
                f"FaceNet produced {embedding.shape[0]} values, expected {self._embedding_dim}"
            )

        logger.debug(f"Generated embedding, first values: {embedding[:10].tolist()}")
        return embedding
