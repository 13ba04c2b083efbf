"""Composition root: wires stores, collaborators and both pipelines.

:class:`RagService` is what the transport layer talks to.  It owns the
two pieces of process-wide mutable state (the source registry and the
conversational memory) and hands them to the pipelines explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pdf_rag.config import Settings, settings as default_settings
from pdf_rag.conversation.chat import ChatPipeline, ChatResult
from pdf_rag.conversation.history import HistoryStore
from pdf_rag.ingestion.loader import load_pdf
from pdf_rag.ingestion.pipeline import IngestionPipeline, IngestionReport, UploadedFile
from pdf_rag.ingestion.registry import SourceRegistry

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)

RESET_MESSAGE = "Database completely cleared. You can now upload fresh files."


class RagService:
    """Ingest, answer, reset and report on one knowledge base.

    Parameters
    ----------
    store:
        Vector index shared by ingestion and chat.
    embeddings:
        Embedding model shared by ingestion and chat.
    rephrase_llm / answer_llm:
        Chat models for the two LLM calls of a chat turn.
    config:
        Tunables; defaults to the global :data:`~pdf_rag.config.settings`.
    registry / history:
        Pre-built stores; fresh ones are created from *config* otherwise.
    loader:
        Document parser; defaults to :func:`~pdf_rag.ingestion.loader.load_pdf`.
    """

    def __init__(
        self,
        *,
        store: VectorStoreBase,
        embeddings: Embeddings,
        rephrase_llm: BaseChatModel,
        answer_llm: BaseChatModel,
        config: Settings | None = None,
        registry: SourceRegistry | None = None,
        history: HistoryStore | None = None,
        loader: Callable[[Path], list[Document]] = load_pdf,
    ) -> None:
        self.config = config or default_settings
        self.store = store
        self.registry = registry or SourceRegistry(max_sources=self.config.max_sources)
        self.history = history or HistoryStore(max_turns=self.config.history_max_turns)
        self.clear_history_on_reset = self.config.clear_history_on_reset

        self.ingestion = IngestionPipeline(
            self.registry,
            store,
            embeddings,
            chunk_size=self.config.chunk_size,
            chunk_overlap=self.config.chunk_overlap,
            loader=loader,
        )
        self.chat = ChatPipeline(
            history=self.history,
            store=store,
            embeddings=embeddings,
            rephrase_llm=rephrase_llm,
            answer_llm=answer_llm,
            top_k=self.config.top_k,
        )

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> RagService:
        """Build the production service: Chroma, HuggingFace embeddings, ChatOpenAI."""
        from pdf_rag.conversation.llm import get_llm
        from pdf_rag.ingestion.embedder import get_embedding_function
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        config = config or default_settings
        store = ChromaVectorStore(
            config.chroma_collection,
            host=config.chroma_host,
            port=config.chroma_port,
            batch_size=config.upsert_batch_size,
        )
        return cls(
            store=store,
            embeddings=get_embedding_function(config.embedding_model),
            rephrase_llm=get_llm(temperature=config.rephrase_temperature, config=config),
            answer_llm=get_llm(temperature=config.answer_temperature, config=config),
            config=config,
        )

    # -- operations -----------------------------------------------------------

    def ingest(self, batch: Sequence[UploadedFile]) -> IngestionReport:
        return self.ingestion.ingest(batch)

    def answer(self, message: str) -> ChatResult:
        return self.chat.answer(message)

    def reset(self) -> str:
        """Wipe the vector index and forget every source.

        The registry is only cleared once the index wipe succeeded.
        Conversational memory is kept unless ``clear_history_on_reset``.
        """
        with self.ingestion.lock:
            logger.info("Wiping database..")
            self.store.delete_all()
            self.registry.clear()
            if self.clear_history_on_reset:
                self.history.clear()
        return RESET_MESSAGE

    def status(self) -> dict[str, Any]:
        """Client-facing capacity report."""
        sources = self.registry.sources()
        return {
            "sources": sources,
            "total_sources": len(sources),
            "max_sources": self.registry.max_sources,
            "capacity": f"{len(sources)}/{self.registry.max_sources}",
        }
