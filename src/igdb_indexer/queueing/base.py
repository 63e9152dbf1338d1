"""Abstract delivery-queue interface.

The producer side is a single operation, :meth:`QueueBase.send_batch`.
The consumer side is a :class:`MessageBatch` of :class:`QueueMessage`
objects, each settled with exactly one terminal outcome: acknowledged
or scheduled for redelivery.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from uuid import uuid4


class MessageOutcome(str, enum.Enum):
    """Terminal state of a delivered message."""

    PENDING = "pending"
    ACK = "ack"
    RETRY = "retry"


@dataclass
class QueueMessage:
    """One delivered message.

    Attributes
    ----------
    body:
        JSON-serialised payload as sent by the producer.
    id:
        Queue-assigned message identifier.
    attempts:
        Number of times this message has been delivered, starting at 1.
    outcome:
        Terminal signal recorded by :meth:`ack` or :meth:`retry`.
    retry_delay_seconds:
        Redelivery delay requested with the retry signal, if any.
    """

    body: str
    id: str = field(default_factory=lambda: uuid4().hex)
    attempts: int = 1
    outcome: MessageOutcome = MessageOutcome.PENDING
    retry_delay_seconds: int | None = None

    def ack(self) -> None:
        """Mark the message as successfully processed."""
        self._settle(MessageOutcome.ACK)

    def retry(self, delay_seconds: int | None = None) -> None:
        """Ask the delivery layer to redeliver the message."""
        self.retry_delay_seconds = delay_seconds
        self._settle(MessageOutcome.RETRY)

    @property
    def settled(self) -> bool:
        return self.outcome is not MessageOutcome.PENDING

    def _settle(self, outcome: MessageOutcome) -> None:
        if self.settled:
            raise RuntimeError(f"Message {self.id} already settled as {self.outcome.value}")
        self.outcome = outcome


@dataclass
class MessageBatch:
    """A group of messages delivered together to one consumer invocation."""

    messages: list[QueueMessage] = field(default_factory=list)

    def __iter__(self) -> Iterator[QueueMessage]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)


class QueueBase(ABC):
    """Backend-agnostic producer interface."""

    @abstractmethod
    def send_batch(self, bodies: Sequence[str], *, delay_seconds: int = 0) -> int:
        """Enqueue *bodies* as one batch and return how many were accepted.

        Parameters
        ----------
        bodies:
            JSON-serialised payloads.
        delay_seconds:
            Minimum time before any of the messages is delivered.
        """
        ...
