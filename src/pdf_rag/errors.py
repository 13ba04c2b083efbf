"""Exception taxonomy shared by the ingestion and conversation pipelines.

Two families matter to callers:

* :class:`ClientError`: the request itself is unacceptable (empty
  upload, capacity exceeded).  Reported as a 4xx, never retried.
* everything else derived from :class:`RagError`: a collaborator
  (parser, embedder, vector index, LLM) failed mid-request.  Reported
  as a 5xx carrying the underlying message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdf_rag.ingestion.pipeline import IngestionReport


class RagError(Exception):
    """Base class for every error raised by :mod:`pdf_rag`."""


class ClientError(RagError):
    """The caller sent a request that can never succeed as-is."""


class EmptyBatchError(ClientError):
    def __init__(self, message: str = "No files uploaded.") -> None:
        super().__init__(message)


class CapacityExceededError(ClientError):
    """Accepting the incoming files would push the source count past the limit.

    Attributes
    ----------
    current:
        Number of sources already registered.
    incoming:
        Number of files the caller tried to add.
    limit:
        Maximum number of live sources.
    """

    def __init__(self, current: int, incoming: int, limit: int) -> None:
        self.current = current
        self.incoming = incoming
        self.limit = limit
        super().__init__(
            f"Limit reached! You can only have {limit} files total. "
            f"You already have {current}."
        )


class ParseError(RagError):
    """The document parser could not read an uploaded file."""


class IngestionError(RagError):
    """A file failed mid-batch; earlier files of the batch stay ingested.

    Attributes
    ----------
    failed_at:
        Zero-based position of the failing file within the batch.
    filename:
        Name of the failing file.
    report:
        Partial :class:`~pdf_rag.ingestion.pipeline.IngestionReport`
        describing what was added / skipped before the failure.
    """

    def __init__(self, message: str, *, failed_at: int, filename: str, report: IngestionReport) -> None:
        self.failed_at = failed_at
        self.filename = filename
        self.report = report
        super().__init__(message)


class ChatError(RagError):
    """A stage of the chat pipeline failed; ``stage`` names which one."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage} failed: {message}")
