"""Exceptions raised by the face recognizer."""

from typing import Optional


class FaceRecognizerError(Exception):
    """Base exception for face recognizer errors."""
    pass


class InvalidInput(FaceRecognizerError, ValueError):
    """Input violates a caller contract (wrong vector length, empty identity)."""
    pass


class CorruptRecord(FaceRecognizerError):
    """A persisted enrollment could not be parsed."""

    def __init__(self, identity: str, reason: str):
        self.identity = identity
        self.reason = reason
        super().__init__(f"Corrupt record for '{identity}': {reason}")


class EmbeddingFailure(FaceRecognizerError, RuntimeError):
    """The embedding model could not produce a vector."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class LivenessFailure(FaceRecognizerError, RuntimeError):
    """The anti-spoof model could not score a face."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
