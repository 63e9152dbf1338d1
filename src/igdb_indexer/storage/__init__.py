"""
Storage — vector records and the vector-store abstraction.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`VectorRecord`, :class:`VectorMetadata`, :class:`SearchHit` — data models.
"""

from igdb_indexer.storage.base import VectorStoreBase
from igdb_indexer.storage.models import SearchHit, VectorMetadata, VectorRecord

__all__ = [
    "ChromaVectorStore",
    "SearchHit",
    "VectorMetadata",
    "VectorRecord",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from igdb_indexer.storage.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
