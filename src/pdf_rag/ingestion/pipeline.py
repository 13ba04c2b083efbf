"""Ingestion pipeline: uploaded PDFs into source-tagged vectors.

One call to :meth:`IngestionPipeline.ingest` handles one upload batch:

1. reject an empty batch;
2. reject the batch if its raw size would push the registry past its
   capacity (duplicates are *not* filtered out first);
3. for every file, in order: skip duplicates, otherwise
   load → tag → split → embed → upsert → register;
4. report what was added and skipped.

The batch is not transactional: the first failure aborts the remaining
files, and files fully processed before it stay registered and indexed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from pdf_rag.errors import EmptyBatchError, IngestionError
from pdf_rag.ingestion.chunker import chunk_documents, tag_with_source
from pdf_rag.ingestion.loader import load_pdf
from pdf_rag.retrieval.models import VectorRecord, record_id

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from pdf_rag.ingestion.registry import SourceRegistry
    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """A file waiting to be ingested.

    Attributes
    ----------
    filename:
        Original client-side filename; becomes the source id.
    path:
        Temporary on-disk copy.  The pipeline deletes it once consumed.
    """

    filename: str
    path: Path


@dataclass
class IngestionReport:
    """Per-batch outcome.

    Attributes
    ----------
    added:
        Filenames newly ingested by this batch, in batch order.
    skipped:
        Filenames skipped because they were already registered.
    total_sources:
        Registry size after the batch.
    chunk_count:
        Number of chunks upserted by this batch.
    """

    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    total_sources: int = 0
    chunk_count: int = 0

    @property
    def added_count(self) -> int:
        return len(self.added)


class IngestionPipeline:
    """Orchestrates a batch of uploads against the registry and vector index.

    Parameters
    ----------
    registry:
        Live source registry (dedup + capacity).
    store:
        Vector index receiving the chunk embeddings.
    embeddings:
        LangChain ``Embeddings`` used for ``embed_documents``.
    chunk_size / chunk_overlap:
        Splitter configuration.
    loader:
        ``path -> list[Document]`` parser; defaults to :func:`load_pdf`.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        chunk_size: int = 850,
        chunk_overlap: int = 150,
        loader: Callable[[Path], list[Document]] = load_pdf,
    ) -> None:
        self.registry = registry
        self.store = store
        self.embeddings = embeddings
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._loader = loader
        # Serialises whole batches (and resets, see RagService) against each other.
        self.lock = threading.RLock()

    def ingest(self, batch: Sequence[UploadedFile]) -> IngestionReport:
        """Ingest *batch* and return an :class:`IngestionReport`.

        Raises
        ------
        EmptyBatchError
            *batch* is empty.
        CapacityExceededError
            ``registry.count() + len(batch)`` exceeds the registry limit.
        IngestionError
            A file failed; carries the partial report and failing index.
        """
        if not batch:
            raise EmptyBatchError()

        with self.lock:
            self.registry.check_capacity(len(batch))
            logger.info("Processing %d files...", len(batch))

            report = IngestionReport(total_sources=self.registry.count())
            for index, upload in enumerate(batch):
                try:
                    if self.registry.contains(upload.filename):
                        logger.info("Skipping duplicate source %r", upload.filename)
                        report.skipped.append(upload.filename)
                        continue

                    report.chunk_count += self._ingest_one(upload)
                    report.added.append(upload.filename)
                except Exception as exc:
                    report.total_sources = self.registry.count()
                    raise IngestionError(
                        f"Failed to ingest {upload.filename!r}: {exc}",
                        failed_at=index,
                        filename=upload.filename,
                        report=report,
                    ) from exc
                finally:
                    _discard(upload.path)

            report.total_sources = self.registry.count()

        logger.info(
            "Batch done: %d added, %d skipped, %d/%d sources",
            report.added_count,
            len(report.skipped),
            report.total_sources,
            self.registry.max_sources,
        )
        return report

    # -- internals ------------------------------------------------------------

    def _ingest_one(self, upload: UploadedFile) -> int:
        pages = self._loader(upload.path)
        tagged = tag_with_source(pages, upload.filename)
        chunks = chunk_documents(tagged, chunk_size=self.chunk_size, chunk_overlap=self.chunk_overlap)

        texts = [chunk.page_content for chunk in chunks]
        vectors = self.embeddings.embed_documents(texts) if texts else []
        records = [
            VectorRecord(
                id=record_id(upload.filename, i),
                text=chunk.page_content,
                embedding=list(vector),
                metadata=dict(chunk.metadata),
            )
            for i, (chunk, vector) in enumerate(zip(chunks, vectors))
        ]
        if records:
            self.store.upsert(records)

        self.registry.register(upload.filename)
        logger.info("Ingested %r: %d pages, %d chunks", upload.filename, len(pages), len(records))
        return len(records)


def _discard(path: Path) -> None:
    Path(path).unlink(missing_ok=True)
