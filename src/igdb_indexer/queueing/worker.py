"""Dispatcher wiring for queue consumers, plus a local one-shot backfill."""

from __future__ import annotations

import logging
from functools import lru_cache

from igdb_indexer.config import settings
from igdb_indexer.ingestion.dispatcher import EmbeddingDispatcher

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def build_dispatcher() -> EmbeddingDispatcher:
    """Return the process-wide dispatcher built from settings."""
    from igdb_indexer.ingestion.embedder import HuggingFaceEmbedder
    from igdb_indexer.storage.chroma_store import ChromaVectorStore

    return EmbeddingDispatcher(HuggingFaceEmbedder(), ChromaVectorStore())


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    from igdb_indexer.ingestion.catalog import IGDBClient
    from igdb_indexer.ingestion.paginator import CatalogPaginator
    from igdb_indexer.queueing.celery_queue import CeleryQueue, celery_app

    # Run every embed_record task in-process as soon as it is sent.
    celery_app.conf.task_always_eager = True
    report = CatalogPaginator(IGDBClient(), CeleryQueue(), delay_seconds=0).run()
    logger.info("Local backfill processed %d records", report.records_sent)
