"""Face localization.

Finds the face region in a captured image and returns the crop handed to
the embedding model.
"""

from .types import DetectedFace
from .base import BaseFaceLocator
from .haar import HaarFaceLocator, center_crop

__all__ = [
    "DetectedFace",
    "BaseFaceLocator",
    "HaarFaceLocator",
    "center_crop",
]
