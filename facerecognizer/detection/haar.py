"""Haar Cascade face locator."""

import logging
from typing import List, Optional

import cv2
import numpy as np

from ..constants import LocalizationConfig
from .base import BaseFaceLocator
from .types import DetectedFace

logger = logging.getLogger(__name__)


def center_crop(image: np.ndarray, output_size=(112, 112)) -> Optional[np.ndarray]:
    """Crop the centered square of an image and resize it.

    Assumes the face is roughly in the middle of the frame.
    """
    if image is None or image.size == 0:
        return None

    h, w = image.shape[:2]
    size = min(h, w)
    x = (w - size) // 2
    y = (h - size) // 2
    crop = image[y:y + size, x:x + size]
    return cv2.resize(crop, tuple(output_size))


class HaarFaceLocator(BaseFaceLocator):
    """Face locator using OpenCV Haar Cascades."""

    def __init__(self, config: Optional[LocalizationConfig] = None):
        """Initialize Haar Cascade locator.

        Args:
            config: Cascade parameters, padding and output size
        """
        self.config = config or LocalizationConfig()

        # Load pre-trained cascade
        cascade_path = cv2.data.haarcascades + "haarcascade_frontalface_default.xml"  # type: ignore
        self.cascade = cv2.CascadeClassifier(cascade_path)

        if self.cascade.empty():
            raise RuntimeError(f"Failed to load cascade from {cascade_path}")

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        """Detect faces using Haar Cascade."""
        if len(image.shape) == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image

        faces = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.config.scale_factor,
            minNeighbors=self.config.min_neighbors,
            minSize=tuple(self.config.min_size),
        )

        return [DetectedFace(x=int(x), y=int(y), width=int(w), height=int(h)) for (x, y, w, h) in faces]

    def crop(self, image: np.ndarray, face: DetectedFace) -> Optional[np.ndarray]:
        """Crop a padded face region, clamped to the image bounds."""
        h, w = image.shape[:2]
        padding = int(face.width * self.config.padding_ratio)

        left = max(0, face.x - padding)
        top = max(0, face.y - padding)
        right = min(w, face.x + face.width + padding)
        bottom = min(h, face.y + face.height + padding)

        if right - left <= 0 or bottom - top <= 0:
            logger.debug("Invalid face dimensions")
            return None

        logger.debug(f"Face detected at: ({left}, {top}, {right}, {bottom})")
        return cv2.resize(image[top:bottom, left:right], tuple(self.config.output_size))

    def locate(self, image: np.ndarray) -> Optional[np.ndarray]:
        """Return the largest face, or a center crop when none is found.

        Args:
            image: BGR image

        Returns:
            Face crop of ``output_size``, or None if no probe is available
        """
        if image is None or image.size == 0:
            return None

        faces = self.detect(image)
        logger.debug(f"Detected {len(faces)} faces")

        if faces:
            largest = max(faces, key=lambda f: f.area)
            face_crop = self.crop(image, largest)
            if face_crop is not None:
                return face_crop

        if self.config.center_crop_fallback:
            logger.debug("No face detected, using center crop")
            return center_crop(image, self.config.output_size)

        return None
