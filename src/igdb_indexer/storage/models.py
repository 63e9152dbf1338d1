"""Domain models for persisted vectors and search hits."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

ID_PREFIX = "igdb"


def vector_id(record_id: int, field: str, index: int | None = None) -> str:
    """Return the vector id for one chunk of *field* on record *record_id*.

    The ``[index]`` suffix is only used when the field produced more than
    one chunk, so ``index`` is ``None`` for single-chunk fields.
    """
    suffix = f"[{index}]" if index is not None else ""
    return f"{ID_PREFIX}:{record_id}:{field}{suffix}"


class VectorMetadata(BaseModel):
    """Metadata stored next to every vector.

    Attributes
    ----------
    text:
        The chunk text that was embedded.
    id:
        Source record id.
    name:
        Display name of the source record.
    url:
        Canonical URL of the source record, when known.
    type:
        Name of the text field the chunk came from.
    """

    text: str
    id: int
    name: str
    url: str | None = None
    type: str

    def flat(self) -> dict[str, str | int]:
        """Return metadata as a flat dict without ``None`` values."""
        return self.model_dump(exclude_none=True)


class VectorRecord(BaseModel):
    """One embedded chunk, ready for upsert."""

    id: str
    values: list[float]
    metadata: VectorMetadata


class SearchHit(BaseModel):
    """A single similarity-search result."""

    id: str
    text: str = ""
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)
