"""Shared pytest configuration and fixtures.

Nothing here talks to a real service: the vector index, the embedding
model, the document parser and the LLMs are all in-process fakes.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from pdf_rag.errors import ParseError
from pdf_rag.ingestion.pipeline import UploadedFile
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import Match, VectorRecord


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class FakeEmbeddings(Embeddings):
    """Bag-of-words hashing embedder: same words → similar vectors."""

    def __init__(self, size: int = 64) -> None:
        self.size = size
        self.queries: list[str] = []

    def _embed(self, text: str) -> list[float]:
        vector = [0.0] * self.size
        for word in re.findall(r"\w+", text.lower()):
            vector[sum(map(ord, word)) % self.size] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        return self._embed(text)


class FakeVectorStore(VectorStoreBase):
    """In-memory index ranking records by cosine similarity."""

    def __init__(self) -> None:
        super().__init__("test-collection")
        self.records: dict[str, VectorRecord] = {}
        self.upsert_calls = 0
        self.fail_on_upsert = False
        self.fail_on_delete = False

    def upsert(self, records: Sequence[VectorRecord]) -> None:
        if self.fail_on_upsert:
            raise ConnectionError("index unavailable")
        self.upsert_calls += 1
        for record in records:
            self.records[record.id] = record

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[Match]:
        scored = [
            (_cosine(query_embedding, r.embedding), r)
            for r in self.records.values()
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            Match(id=r.id, text=r.text, score=score, metadata=dict(r.metadata))
            for score, r in scored[:k]
        ]

    def delete_all(self) -> None:
        if self.fail_on_delete:
            raise ConnectionError("index unavailable")
        self.records.clear()

    def count(self) -> int:
        return len(self.records)

    def health_check(self) -> bool:
        return True


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


def _text_loader(path: Path) -> list[Document]:
    """Stand-in for ``load_pdf``: one "page" per form-feed, with parser-style metadata."""
    raw = Path(path).read_text(encoding="utf-8")
    if raw.startswith("CORRUPT"):
        raise ParseError(f"Could not parse {Path(path).name}: EOF marker not found")
    return [
        Document(
            page_content=page,
            metadata={"source": str(path), "page": i, "total_pages": raw.count("\f") + 1, "producer": "fake"},
        )
        for i, page in enumerate(raw.split("\f"))
    ]


def fake_llm_response(content: str) -> MagicMock:
    """Create a mock LLM response with the given content."""
    resp = MagicMock()
    resp.content = content
    return resp


def _make_llm(*replies: str) -> MagicMock:
    """Mock chat model answering with *replies* in order (the last one repeats)."""
    llm = MagicMock()
    queue = list(replies)

    def _invoke(messages):  # noqa: ANN001, ANN202
        text = queue.pop(0) if len(queue) > 1 else queue[0]
        return fake_llm_response(text)

    llm.invoke.side_effect = _invoke
    return llm


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def make_upload(tmp_path: Path) -> Callable[..., UploadedFile]:
    """Factory writing a temp "PDF" (plain text for :func:`text_loader`)."""
    counter = iter(range(10_000))

    def _make(filename: str, text: str | None = None) -> UploadedFile:
        path = tmp_path / f"upload-{next(counter)}.pdf"
        path.write_text(text if text is not None else f"Contents of {filename}.", encoding="utf-8")
        return UploadedFile(filename=filename, path=path)

    return _make


@pytest.fixture()
def loader() -> Callable[[Path], list[Document]]:
    return _text_loader


@pytest.fixture()
def make_llm() -> Callable[..., MagicMock]:
    return _make_llm
