"""Domain models exchanged with the vector index."""

from __future__ import annotations

import hashlib
from typing import Any

from pydantic import BaseModel, Field


def record_id(source: str, chunk_index: int) -> str:
    """Deterministic id ``<sha256(source)[:16]>_<chunk_index>``.

    Re-upserting the same source overwrites its vectors instead of
    duplicating them.
    """
    digest = hashlib.sha256(source.encode("utf-8")).hexdigest()[:16]
    return f"{digest}_{chunk_index}"


class VectorRecord(BaseModel):
    """A chunk plus its embedding, ready to upsert.

    Attributes
    ----------
    id:
        Stable record identifier (see :func:`record_id`).
    text:
        The chunk text.
    embedding:
        Dense vector produced by the embedding model.
    metadata:
        Exactly ``{"source": <filename>}``.
    """

    id: str
    text: str
    embedding: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)


class Match(BaseModel):
    """One ranked hit returned by a vector-index query."""

    id: str
    text: str
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def source(self) -> str:
        return self.metadata.get("source", "unknown")

    def __str__(self) -> str:  # noqa: D105
        return f"[{self.source}] {self.text[:120]}…"
