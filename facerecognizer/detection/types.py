"""Detected face data type."""

from dataclasses import dataclass


@dataclass
class DetectedFace:
    """Bounding box of a detected face in image coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        """Return area of bounding box."""
        return self.width * self.height
