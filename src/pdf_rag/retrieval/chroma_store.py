"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import chromadb

from pdf_rag.config import settings
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import Match, VectorRecord

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Embeddings are always computed by the caller; the collection never
    embeds text itself.  The collection uses cosine space, and a match
    score is ``1 - distance``.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    batch_size:
        Max records per upsert call.
    client:
        Pre-built Chroma client (e.g. ``chromadb.EphemeralClient()``);
        when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        batch_size: int = settings.upsert_batch_size,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name)
        self._batch_size = batch_size
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection: Any = self._get_collection()

    def _get_collection(self) -> Any:
        return self._client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    @property
    def collection(self) -> Any:
        """Live collection handle, recreated if a previous wipe left none."""
        if self._collection is None:
            self._collection = self._get_collection()
        return self._collection

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, records: Sequence[VectorRecord]) -> None:
        batches = 0
        for start in range(0, len(records), self._batch_size):
            batch = records[start : start + self._batch_size]
            self.collection.upsert(
                ids=[r.id for r in batch],
                embeddings=[r.embedding for r in batch],
                documents=[r.text for r in batch],
                metadatas=[r.metadata for r in batch],
            )
            batches += 1
        logger.info("Upserted %d vectors into %r (%d batches)", len(records), self.collection_name, batches)

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[Match]:
        collection = self.collection
        available = collection.count()
        if available == 0:
            return []

        results = collection.query(
            query_embeddings=[query_embedding],
            n_results=min(k, available),
            include=["documents", "metadatas", "distances"],
        )

        ids = results.get("ids", [[]])[0]
        docs = (results.get("documents") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        matches: list[Match] = []
        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            matches.append(
                Match(
                    id=doc_id,
                    text=content or "",
                    score=None if dist is None else 1.0 - dist,
                    metadata=dict(meta or {}),
                )
            )
        return matches

    def delete_all(self) -> None:
        """Drop the collection and start a fresh one.

        Once the drop succeeds every vector is gone, so a failure to
        recreate the collection is not a failed wipe: it is logged and
        the collection is recreated on next use.
        """
        self._client.delete_collection(name=self.collection_name)
        self._collection = None
        logger.info("Deleted every vector in %r", self.collection_name)
        try:
            self._collection = self._get_collection()
        except Exception:
            logger.warning(
                "Collection %r dropped but not recreated; retrying on next use",
                self.collection_name,
                exc_info=True,
            )

    def count(self) -> int:
        return self.collection.count()

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
