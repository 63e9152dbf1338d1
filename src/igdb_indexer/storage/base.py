"""Abstract base class for vector-store backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  The dispatcher only ever calls :meth:`VectorStoreBase.upsert`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from igdb_indexer.storage.models import SearchHit, VectorRecord


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, records: Sequence[VectorRecord]) -> int:
        """Insert or replace *records* keyed by id; return the number stored."""
        ...

    @abstractmethod
    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[SearchHit]:
        """Return the top-*k* hits for *query_embedding*, best first."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
