"""
Retrieval: the vector index behind a small backend-agnostic interface.

Public surface
--------------
- :class:`VectorStoreBase`: abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore`: default Chroma backend.
- :class:`VectorRecord`, :class:`Match`: data models.
"""

from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import Match, VectorRecord, record_id

__all__ = [
    "ChromaVectorStore",
    "Match",
    "VectorRecord",
    "VectorStoreBase",
    "record_id",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
