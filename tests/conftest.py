"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from facerecognizer.constants import MatchingConfig
from facerecognizer.detection import BaseFaceLocator, DetectedFace
from facerecognizer.errors import EmbeddingFailure, LivenessFailure
from facerecognizer.liveness import BaseLivenessChecker
from facerecognizer.recognition import BaseEmbeddingBackend


class FakeLocator(BaseFaceLocator):
    """Returns the image itself as the face crop, or None when told to."""

    def __init__(self, finds_face: bool = True):
        self.finds_face = finds_face

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        if not self.finds_face:
            return []
        h, w = image.shape[:2]
        return [DetectedFace(x=0, y=0, width=w, height=h)]

    def locate(self, image: np.ndarray) -> Optional[np.ndarray]:
        return image if self.finds_face else None


class FakeEmbedder(BaseEmbeddingBackend):
    """Embeds an image as its flattened first ``dim`` pixel values."""

    def __init__(self, dim: int = 4, fail: bool = False):
        self._dim = dim
        self.fail = fail
        self.calls = 0

    @property
    def name(self) -> str:
        return "fake"

    @property
    def embedding_dim(self) -> int:
        return self._dim

    def extract(self, face_image: np.ndarray) -> np.ndarray:
        self.calls += 1
        if self.fail:
            raise EmbeddingFailure("model unavailable")
        return np.asarray(face_image, dtype=np.float32).reshape(-1)[: self._dim]


class FakeLiveness(BaseLivenessChecker):
    def __init__(self, probability: float, fail: bool = False):
        super().__init__()
        self.probability = probability
        self.fail = fail

    def spoof_probability(self, face_image: np.ndarray) -> float:
        if self.fail:
            raise LivenessFailure("anti-spoof model unavailable")
        return self.probability


class FakeNet:
    """Stands in for a loaded cv2.dnn network."""

    def __init__(self, output):
        self.output = np.asarray(output, dtype=np.float32)
        self.blob = None

    def setInput(self, blob):
        self.blob = blob

    def forward(self):
        return self.output


@pytest.fixture
def matching_config():
    """Matching config for 2-D test vectors."""
    return MatchingConfig(cosine_threshold=0.6, euclidean_threshold=3.0, embedding_dim=2)


@pytest.fixture
def unit_vector_128():
    """A random normalized 128-D embedding."""
    rng = np.random.default_rng(7)
    vec = rng.standard_normal(128).astype(np.float32)
    return vec / np.linalg.norm(vec)
