"""Catalog backfill — page through the metadata source and enqueue every page."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from igdb_indexer.config import settings
from igdb_indexer.queueing.base import QueueBase

logger = logging.getLogger(__name__)


class PageSource(Protocol):
    """Anything that can return one page of raw records."""

    def fetch_page(self, offset: int, limit: int) -> list[dict[str, Any]]: ...


@dataclass
class PaginationReport:
    """Summary of one backfill run.

    Attributes
    ----------
    pages_sent:
        Number of non-empty pages forwarded to the queue.
    records_sent:
        Total records enqueued.
    last_offset:
        Offset of the last page requested.
    exhausted:
        ``True`` when the run stopped on an empty page rather than at
        the offset ceiling.
    """

    pages_sent: int = 0
    records_sent: int = 0
    last_offset: int | None = None
    exhausted: bool = False


class CatalogPaginator:
    """Sequential offset paginator feeding a delivery queue.

    Pages are requested strictly one at a time in increasing offset
    order.  The run ends on the first empty page, or when the offset
    reaches *max_offset*, whichever comes first.  Any fetch error aborts
    the run; pages already sent stay sent.

    Parameters
    ----------
    source:
        Page source, normally an :class:`~igdb_indexer.ingestion.catalog.IGDBClient`.
    queue:
        Destination queue; each page becomes one ``send_batch`` call.
    page_size:
        Records per page and offset increment.
    max_offset:
        Exclusive ceiling for the offset cursor.
    delay_seconds:
        Delivery delay passed with every batch.
    """

    def __init__(
        self,
        source: PageSource,
        queue: QueueBase,
        *,
        page_size: int = settings.page_size,
        max_offset: int = settings.max_offset,
        delay_seconds: int = settings.queue_delay_seconds,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.source = source
        self.queue = queue
        self.page_size = page_size
        self.max_offset = max_offset
        self.delay_seconds = delay_seconds

    def run(self) -> PaginationReport:
        """Fetch and enqueue pages until exhaustion or the offset ceiling."""
        report = PaginationReport()
        offset = 0
        while offset < self.max_offset:
            page = self.source.fetch_page(offset=offset, limit=self.page_size)
            report.last_offset = offset
            if not page:
                logger.info("Empty page at offset %d; catalog exhausted", offset)
                report.exhausted = True
                break

            bodies = [json.dumps(record) for record in page]
            self.queue.send_batch(bodies, delay_seconds=self.delay_seconds)
            report.pages_sent += 1
            report.records_sent += len(bodies)
            logger.info("Sent batch of %d items (offset %d)", len(bodies), offset)

            offset += self.page_size

        logger.info(
            "Backfill finished: %d pages, %d records, exhausted=%s",
            report.pages_sent,
            report.records_sent,
            report.exhausted,
        )
        return report
