"""Liveness (anti-spoof) check used when enrolling a face."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from .constants import LivenessConfig
from .errors import LivenessFailure

logger = logging.getLogger(__name__)


class BaseLivenessChecker(ABC):
    """Abstract anti-spoof classifier.

    Subclasses wrap a model returning the probability that a face crop is
    a spoof (photo, screen replay).
    """

    def __init__(self, config: Optional[LivenessConfig] = None):
        self.config = config or LivenessConfig()

    @abstractmethod
    def spoof_probability(self, face_image: np.ndarray) -> float:
        """Return the probability in [0, 1] that the face is a spoof."""
        pass

    def is_live(self, face_image: np.ndarray) -> bool:
        return self.spoof_probability(face_image) < self.config.spoof_threshold


class DnnLivenessChecker(BaseLivenessChecker):
    """Two-class anti-spoof model (real, spoof) run through OpenCV DNN."""

    def __init__(self, config: Optional[LivenessConfig] = None):
        super().__init__(config)
        self._net = None

    def _initialize(self):
        """Lazy initialization of the anti-spoof model."""
        if self._net is not None:
            return self._net

        model_file = Path(self.config.model_path)
        if not model_file.exists():
            raise LivenessFailure(f"Anti-spoof model not found: {model_file}")

        try:
            self._net = cv2.dnn.readNet(str(model_file))
        except Exception as e:
            logger.error(f"Failed to load anti-spoof model: {e}")
            raise LivenessFailure(f"Failed to load anti-spoof model from {model_file}", e)

        logger.info(f"Loaded anti-spoof model from {model_file}")
        return self._net

    def preprocess(self, face_image: np.ndarray) -> np.ndarray:
        """Resize to the model input and scale pixels into [-1, 1]."""
        if face_image is None or face_image.size == 0:
            raise LivenessFailure("Empty face image")

        return cv2.dnn.blobFromImage(
            face_image,
            scalefactor=self.config.scale,
            size=tuple(self.config.input_size),
            mean=(self.config.mean, self.config.mean, self.config.mean),
            swapRB=self.config.swap_rb,
            crop=False,
        )

    def spoof_probability(self, face_image: np.ndarray) -> float:
        """Run the model and read the spoof class score.

        Raises:
            LivenessFailure: If the model is unavailable or inference fails
        """
        net = self._initialize()

        try:
            blob = self.preprocess(face_image)
            net.setInput(blob)
            output = net.forward()
        except LivenessFailure:
            raise
        except Exception as e:
            logger.error(f"Anti-spoof inference failed: {e}")
            raise LivenessFailure("Anti-spoof inference failed", e)

        scores = np.asarray(output, dtype=np.float32).flatten()
        if scores.shape[0] <= self.config.spoof_index:
            raise LivenessFailure(f"Anti-spoof model produced {scores.shape[0]} scores")

        probability = float(scores[self.config.spoof_index])
        logger.debug(f"Spoof probability: {probability:.4f}")
        return probability
