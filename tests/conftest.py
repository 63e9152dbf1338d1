"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from igdb_indexer.ingestion.embedder import EmbedderBase
from igdb_indexer.storage.base import VectorStoreBase
from igdb_indexer.storage.models import SearchHit, VectorRecord


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for the external collaborators ──────────────────────────────


class FakeEmbedder(EmbedderBase):
    """Deterministic embedder: vector ``[len(text), i]`` per input.

    Any input containing one of *fail_on* raises ``RuntimeError``.
    """

    def __init__(self, fail_on: Sequence[str] = ()) -> None:
        super().__init__("fake-model")
        self.fail_on = tuple(fail_on)
        self.calls: list[list[str]] = []

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if any(marker in text for text in texts for marker in self.fail_on):
            raise RuntimeError("inference backend unavailable")
        return [[float(len(text)), float(i)] for i, text in enumerate(texts)]


class FakeVectorStore(VectorStoreBase):
    """In-memory store keyed by vector id."""

    def __init__(self) -> None:
        super().__init__("test-collection")
        self.vectors: dict[str, VectorRecord] = {}
        self.upsert_calls: list[list[VectorRecord]] = []

    def upsert(self, records: Sequence[VectorRecord]) -> int:
        self.upsert_calls.append(list(records))
        for record in records:
            self.vectors[record.id] = record
        return len(records)

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[SearchHit]:
        return []

    def health_check(self) -> bool:
        return True


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def failing_embedder() -> FakeEmbedder:
    """Embedder that fails for any text containing ``FAIL``."""
    return FakeEmbedder(fail_on=("FAIL",))


@pytest.fixture()
def eager_celery():
    """Run Celery tasks in-process for the duration of a test."""
    from igdb_indexer.queueing.celery_queue import celery_app

    previous = celery_app.conf.task_always_eager
    celery_app.conf.task_always_eager = True
    yield celery_app
    celery_app.conf.task_always_eager = previous
