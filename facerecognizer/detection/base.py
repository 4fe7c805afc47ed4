"""Base face locator interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from .types import DetectedFace


class BaseFaceLocator(ABC):
    """Abstract base class for face localization."""

    @abstractmethod
    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        """Detect faces in an image.

        Args:
            image: BGR image as numpy array

        Returns:
            List of DetectedFace objects
        """
        pass

    @abstractmethod
    def locate(self, image: np.ndarray) -> Optional[np.ndarray]:
        """Return the face crop to embed, or None if there is no usable face."""
        pass
