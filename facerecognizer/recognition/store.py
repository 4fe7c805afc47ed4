"""Embedding store holding the enrolled identities."""

import logging
import threading
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..errors import CorruptRecord, InvalidInput
from .persistence import BaseEmbeddingRepository, format_embedding, parse_embedding
from .types import EnrollmentRecord

logger = logging.getLogger(__name__)


class EmbeddingStore:
    """Collection of enrolled (identity, embedding) records.

    Records are keyed by identity; adding an identity that already exists
    replaces its embedding. Readers get immutable snapshots, so an ``add``
    running during enrollment never races with a match in progress.
    """

    def __init__(
        self,
        repository: Optional[BaseEmbeddingRepository] = None,
        embedding_dim: int = 128,
    ):
        """Initialize embedding store.

        Args:
            repository: Persistence backend. If None, records live in memory only.
            embedding_dim: Length every embedding must have
        """
        self._repository = repository
        self._embedding_dim = int(embedding_dim)
        self._records: Dict[str, EnrollmentRecord] = {}
        self._lock = threading.Lock()

    @property
    def embedding_dim(self) -> int:
        return self._embedding_dim

    def add(self, identity: str, embedding) -> EnrollmentRecord:
        """Insert or replace the record for an identity.

        Args:
            identity: Non-empty identity key
            embedding: Vector of length ``embedding_dim``

        Returns:
            The stored record

        Raises:
            InvalidInput: If the identity is empty or the length is wrong
        """
        if not isinstance(identity, str) or not identity.strip():
            raise InvalidInput("Identity must be a non-empty string")

        vec = np.asarray(embedding, dtype=np.float32).reshape(-1)
        if vec.shape[0] != self._embedding_dim:
            raise InvalidInput(
                f"Embedding for '{identity}' has {vec.shape[0]} values, expected {self._embedding_dim}"
            )
        if not np.all(np.isfinite(vec)):
            raise InvalidInput(f"Embedding for '{identity}' contains non-finite values")

        record = EnrollmentRecord(identity, vec)

        with self._lock:
            if self._repository is not None:
                self._repository.write(identity, format_embedding(record.embedding))
            replaced = identity in self._records
            self._records[identity] = record

        if replaced:
            logger.info(f"Replaced enrollment for {identity}")
        else:
            logger.info(f"Enrolled {identity}")
        return record

    def load_all(self) -> Tuple[EnrollmentRecord, ...]:
        """Rebuild the store from the repository.

        Entries that cannot be read or parsed are logged and skipped; the
        remaining entries are still loaded.

        Returns:
            Snapshot of the loaded records
        """
        if self._repository is None:
            logger.debug("No repository attached, nothing to load")
            return self.snapshot()

        keys = self._repository.keys()
        logger.debug(f"Found {len(keys)} embedding entries")

        loaded: Dict[str, EnrollmentRecord] = {}
        for key in keys:
            try:
                text = self._repository.read(key)
                values = parse_embedding(key, text, self._embedding_dim)
            except CorruptRecord as e:
                logger.error(f"Skipping enrollment: {e}")
                continue
            except (OSError, UnicodeDecodeError, InvalidInput) as e:
                logger.error(f"Skipping unreadable enrollment '{key}': {e}")
                continue
            loaded[key] = EnrollmentRecord(key, values)

        with self._lock:
            self._records = loaded

        logger.info(f"Loaded {len(loaded)} of {len(keys)} enrolled faces")
        return self.snapshot()

    def snapshot(self) -> Tuple[EnrollmentRecord, ...]:
        """Return an immutable view of all records in insertion order."""
        with self._lock:
            return tuple(self._records.values())

    def remove(self, identity: str) -> bool:
        """Remove an identity.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            if identity not in self._records:
                return False
            del self._records[identity]
            if self._repository is not None:
                self._repository.delete(identity)
        logger.info(f"Removed identity: {identity}")
        return True

    def identities(self) -> List[str]:
        """Get list of all enrolled identities."""
        with self._lock:
            return list(self._records.keys())

    def get(self, identity: str) -> Optional[EnrollmentRecord]:
        with self._lock:
            return self._records.get(identity)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._records
