"""Celery-backed delivery queue.

Producer side sends one page of records as a single group of
``embed_record`` tasks; the worker side runs each task as a one-message
batch through the dispatcher.

Run a worker with::

    celery -A igdb_indexer.queueing.celery_queue worker --loglevel=INFO

For local runs set ``CELERY_BROKER_URL=memory://`` and
``CELERY_TASK_ALWAYS_EAGER=true`` to execute tasks in-process.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from celery import Celery, group

from igdb_indexer.config import settings
from igdb_indexer.queueing.base import MessageBatch, MessageOutcome, QueueBase, QueueMessage

logger = logging.getLogger(__name__)

celery_app = Celery("igdb_indexer", broker=settings.celery_broker_url)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_acks_late=True,
    task_ignore_result=True,
    task_always_eager=settings.celery_task_always_eager,
)


@celery_app.task(bind=True, max_retries=settings.queue_max_attempts - 1)
def embed_record(self, body: str) -> str:
    """Embed one serialised game record.

    Field failures and vector-store errors both schedule a redelivery;
    once retries are exhausted the last error is raised.
    """
    from igdb_indexer.queueing.worker import build_dispatcher

    message = QueueMessage(body=body, id=self.request.id or "", attempts=self.request.retries + 1)
    try:
        build_dispatcher().process_batch(MessageBatch([message]))
    except Exception as exc:
        logger.exception("Processing message %s failed (attempt %d)", message.id, message.attempts)
        raise self.retry(exc=exc, countdown=settings.queue_retry_delay_seconds)

    if message.outcome is MessageOutcome.RETRY:
        countdown = message.retry_delay_seconds
        if countdown is None:
            countdown = settings.queue_retry_delay_seconds
        raise self.retry(countdown=countdown)
    return message.outcome.value


class CeleryQueue(QueueBase):
    """Producer that sends each batch as one group of ``embed_record`` tasks."""

    def __init__(self, task=embed_record) -> None:  # noqa: ANN001
        self._task = task

    def send_batch(self, bodies: Sequence[str], *, delay_seconds: int = 0) -> int:
        if not bodies:
            return 0
        group([self._task.s(body) for body in bodies]).apply_async(countdown=delay_seconds)
        return len(bodies)
