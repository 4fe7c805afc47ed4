"""Distance metrics between face embeddings."""

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)


def _flatten(vec) -> np.ndarray:
    return np.asarray(vec, dtype=np.float64).reshape(-1)


def euclidean_distance(a, b) -> float:
    """Calculate Euclidean distance between two embeddings.

    Args:
        a: First embedding vector
        b: Second embedding vector

    Returns:
        Euclidean distance (lower means more similar), or +inf when the
        vectors have different lengths
    """
    a = _flatten(a)
    b = _flatten(b)

    if a.shape != b.shape:
        logger.error(f"Embedding size mismatch: {a.shape[0]} vs {b.shape[0]}")
        return math.inf

    return float(np.linalg.norm(a - b))


def cosine_similarity(a, b) -> float:
    """Calculate cosine similarity between two embeddings.

    Args:
        a: First embedding vector
        b: Second embedding vector

    Returns:
        Similarity in [-1, 1]. Returns 0.0 for vectors of different lengths
        and whenever the ratio is undefined (zero-magnitude vector).
    """
    a = _flatten(a)
    b = _flatten(b)

    if a.shape != b.shape:
        logger.error(f"Embedding size mismatch: {a.shape[0]} vs {b.shape[0]}")
        return 0.0

    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))

    if not np.isfinite(result):
        return 0.0

    return float(np.clip(result, -1.0, 1.0))
