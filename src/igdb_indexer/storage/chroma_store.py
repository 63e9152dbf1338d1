"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import chromadb

from igdb_indexer.config import settings
from igdb_indexer.storage.base import VectorStoreBase
from igdb_indexer.storage.models import SearchHit, VectorRecord

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance_metric:
        Distance function for a newly created collection (``cosine`` | ``l2`` | ``ip``).
    upsert_batch_size:
        Max records per upsert call.
    client:
        Optional pre-built Chroma client (tests pass a fake).
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance_metric: str = "cosine",
        upsert_batch_size: int = 5000,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name)
        self.upsert_batch_size = upsert_batch_size
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": distance_metric},
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, records: Sequence[VectorRecord]) -> int:
        if not records:
            return 0

        ids = [r.id for r in records]
        embeddings = [r.values for r in records]
        documents = [r.metadata.text for r in records]
        # Chroma metadata values must be flat str/int/float/bool
        metadatas = [r.metadata.flat() for r in records]

        for start in range(0, len(ids), self.upsert_batch_size):
            end = start + self.upsert_batch_size
            self._collection.upsert(
                ids=ids[start:end],
                embeddings=embeddings[start:end],
                documents=documents[start:end],
                metadatas=metadatas[start:end],
            )
        logger.info("Upserted %d vectors into '%s'", len(ids), self.collection_name)
        return len(ids)

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[SearchHit]:
        results = self._collection.query(
            query_embeddings=[query_embedding],
            n_results=k,
            include=["documents", "metadatas", "distances"],
        )

        hits: list[SearchHit] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            # Convert the distance to a 0-1 similarity score.
            hits.append(
                SearchHit(
                    id=doc_id,
                    text=content or "",
                    score=1.0 / (1.0 + dist),
                    metadata=meta or {},
                )
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
