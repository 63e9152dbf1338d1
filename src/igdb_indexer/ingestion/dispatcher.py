"""Embedding dispatcher — queued record → sentence chunks → vectors → upsert.

Each delivered message is processed on its own and settled with exactly
one outcome:

* every field embedded        → ``ack``
* any field failed inference  → ``retry`` (the other fields are still
  embedded and upserted; upserts are idempotent by vector id)
* payload is not a valid game → ``ack`` after logging, since it can
  never succeed on redelivery

Vector-store errors are not caught; they propagate to the caller and
leave the message unsettled.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from igdb_indexer.config import settings
from igdb_indexer.ingestion.catalog import GameRecord
from igdb_indexer.ingestion.chunker import chunk_by_sentences
from igdb_indexer.ingestion.embedder import EmbedderBase
from igdb_indexer.queueing.base import MessageBatch, MessageOutcome, QueueMessage
from igdb_indexer.storage.base import VectorStoreBase
from igdb_indexer.storage.models import VectorMetadata, VectorRecord, vector_id

logger = logging.getLogger(__name__)


def build_vector_records(
    record: GameRecord,
    field: str,
    chunks: Sequence[str],
    embeddings: Sequence[list[float]],
) -> list[VectorRecord]:
    """Pair each chunk of *field* with its embedding.

    Ids carry a ``[i]`` suffix only when the field produced more than one
    chunk, which keeps them unique per ``(record, field)``.
    """
    if len(chunks) != len(embeddings):
        raise ValueError(
            f"Got {len(embeddings)} embeddings for {len(chunks)} chunks "
            f"(record {record.id}, field {field!r})"
        )

    multi = len(chunks) > 1
    return [
        VectorRecord(
            id=vector_id(record.id, field, i if multi else None),
            values=list(values),
            metadata=VectorMetadata(
                text=chunk,
                id=record.id,
                name=record.name,
                url=record.url,
                type=field,
            ),
        )
        for i, (chunk, values) in enumerate(zip(chunks, embeddings))
    ]


class EmbeddingDispatcher:
    """Queue consumer that embeds the text fields of each game record.

    Parameters
    ----------
    embedder:
        Inference backend, called once per field with all of its chunks.
    store:
        Vector store receiving one upsert per message.
    fields:
        Text fields to embed, in processing order.
    max_sentences:
        Sentences per chunk.
    retry_delay_seconds:
        Redelivery delay requested when a field fails.
    """

    def __init__(
        self,
        embedder: EmbedderBase,
        store: VectorStoreBase,
        *,
        fields: Sequence[str] = tuple(settings.embedded_fields),
        max_sentences: int = settings.sentences_per_chunk,
        retry_delay_seconds: int | None = settings.queue_retry_delay_seconds,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.fields = tuple(fields)
        self.max_sentences = max_sentences
        self.retry_delay_seconds = retry_delay_seconds

    def process_batch(self, batch: MessageBatch) -> list[MessageOutcome]:
        """Process every message of *batch* in delivery order."""
        return [self.process_message(message) for message in batch]

    def process_message(self, message: QueueMessage) -> MessageOutcome:
        """Embed, upsert, and settle one message."""
        try:
            record = GameRecord.model_validate_json(message.body)
        except ValidationError as exc:
            logger.warning("Dropping malformed message %s: %s", message.id, exc)
            message.ack()
            return message.outcome

        vectors, failed = self.embed_record(record)

        if vectors:
            stored = self.store.upsert(vectors)
            logger.info("Upserted %d vectors for game %d", stored, record.id)

        if failed:
            logger.warning(
                "Game %d: fields %s failed (attempt %d); requesting retry",
                record.id,
                ", ".join(failed),
                message.attempts,
            )
            message.retry(self.retry_delay_seconds)
        else:
            message.ack()
        return message.outcome

    def embed_record(self, record: GameRecord) -> tuple[list[VectorRecord], list[str]]:
        """Embed every configured field of *record*.

        Returns
        -------
        tuple[list[VectorRecord], list[str]]
            Vectors for the fields that succeeded, and the names of the
            fields whose inference call failed.
        """
        vectors: list[VectorRecord] = []
        failed: list[str] = []
        for field, text in record.text_fields(self.fields):
            chunks = chunk_by_sentences(text, self.max_sentences)
            try:
                embeddings = self.embedder.embed(chunks)
                vectors.extend(build_vector_records(record, field, chunks, embeddings))
            except Exception:
                logger.exception("Embedding failed for game %d field %r", record.id, field)
                failed.append(field)
        return vectors, failed
