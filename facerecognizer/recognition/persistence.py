"""Key-value persistence for enrolled embeddings.

Each identity maps to one human-readable text entry holding the embedding
as comma-separated decimal values, e.g. ``0.0132,-0.2041,...``.
"""

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Sequence

from ..errors import CorruptRecord, InvalidInput

logger = logging.getLogger(__name__)


def format_embedding(embedding: Sequence[float]) -> str:
    """Serialize an embedding to its comma-separated text form."""
    return ",".join(repr(float(v)) for v in embedding)


def parse_embedding(identity: str, text: str, dim: int) -> List[float]:
    """Parse the comma-separated text form of an embedding.

    Args:
        identity: Identity the entry belongs to (for error reporting)
        text: Persisted text
        dim: Expected number of values

    Returns:
        List of floats of length ``dim``

    Raises:
        CorruptRecord: If a value is not a finite float or the count is wrong
    """
    parts = text.strip().split(",")
    values = []
    for position, part in enumerate(parts):
        try:
            value = float(part.strip())
        except ValueError:
            raise CorruptRecord(identity, f"value {position} is not a number: {part.strip()!r}")
        if not math.isfinite(value):
            raise CorruptRecord(identity, f"value {position} is not finite: {part.strip()!r}")
        values.append(value)

    if len(values) != dim:
        raise CorruptRecord(identity, f"expected {dim} values, found {len(values)}")

    return values


class BaseEmbeddingRepository(ABC):
    """Abstract key-value store mapping identity -> embedding text."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all stored identities."""
        pass

    @abstractmethod
    def read(self, key: str) -> str:
        """Return the raw text stored for an identity."""
        pass

    @abstractmethod
    def write(self, key: str, text: str) -> None:
        """Store text for an identity, replacing any previous entry."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete an identity. Returns False if it was not stored."""
        pass


class InMemoryEmbeddingRepository(BaseEmbeddingRepository):
    """Dict-backed repository for tests and throwaway sessions."""

    def __init__(self, entries: Dict[str, str] = None):
        self._entries: Dict[str, str] = dict(entries or {})

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def read(self, key: str) -> str:
        return self._entries[key]

    def write(self, key: str, text: str) -> None:
        self._entries[key] = text

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None


class DirectoryEmbeddingRepository(BaseEmbeddingRepository):
    """One ``<identity><suffix>`` text file per identity in a directory."""

    def __init__(self, directory, suffix: str = ".embedding"):
        """Initialize repository.

        Args:
            directory: Directory holding the embedding files. Created on
                       first write.
            suffix: File name suffix identifying embedding files
        """
        self.directory = Path(directory)
        self.suffix = suffix

    def _path(self, key: str) -> Path:
        if not key or key in (".", "..") or "/" in key or "\\" in key or "\x00" in key:
            raise InvalidInput(f"Identity cannot be used as a storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def keys(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            p.name[: -len(self.suffix)]
            for p in self.directory.iterdir()
            if p.is_file() and p.name.endswith(self.suffix) and len(p.name) > len(self.suffix)
        )

    def read(self, key: str) -> str:
        return self._path(key).read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote embedding file {path}")

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted embedding file {path}")
        return True

    def __repr__(self) -> str:
        return f"DirectoryEmbeddingRepository({str(self.directory)!r}, suffix={self.suffix!r})"
