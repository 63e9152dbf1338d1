"""
Queueing — delivery of catalog records between the paginator and the
embedding dispatcher.

Public surface
--------------
- :class:`QueueBase` — abstract producer side (``send_batch``).
- :class:`QueueMessage`, :class:`MessageBatch`, :class:`MessageOutcome` — consumer side.
- :class:`CeleryQueue` — broker-backed backend (lazy import, needs celery).
"""

from igdb_indexer.queueing.base import MessageBatch, MessageOutcome, QueueBase, QueueMessage

__all__ = [
    "CeleryQueue",
    "MessageBatch",
    "MessageOutcome",
    "QueueBase",
    "QueueMessage",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import CeleryQueue to avoid pulling in celery at import time."""
    if name == "CeleryQueue":
        from igdb_indexer.queueing.celery_queue import CeleryQueue

        return CeleryQueue
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
