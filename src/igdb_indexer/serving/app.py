"""FastAPI application exposing the backfill trigger."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.responses import PlainTextResponse

from igdb_indexer.config import settings
from igdb_indexer.ingestion.catalog import IGDBClient
from igdb_indexer.ingestion.paginator import CatalogPaginator
from igdb_indexer.queueing.celery_queue import CeleryQueue

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="IGDB Indexer",
    version="0.1.0",
    description="Backfills IGDB game records into a vector index.",
)


# ── Dependencies ──────────────────────────────────────────────────────
def get_paginator() -> CatalogPaginator:
    """Build a paginator wired to IGDB and the Celery queue."""
    return CatalogPaginator(IGDBClient(), CeleryQueue())


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    """Greeting."""
    return "Hello Hono!"


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/init", response_class=PlainTextResponse)
def init(paginator: CatalogPaginator = Depends(get_paginator)) -> str:
    """Run the full backfill synchronously, then acknowledge."""
    report = paginator.run()
    logger.info("Backfill enqueued %d records from %d pages", report.records_sent, report.pages_sent)
    return "QUEUE"
