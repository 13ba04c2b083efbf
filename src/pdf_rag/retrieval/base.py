"""Abstract base class for vector-store backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  The ingestion and conversation pipelines are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pdf_rag.retrieval.models import Match, VectorRecord


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, records: Sequence[VectorRecord]) -> None:
        """Insert or overwrite *records* (matched by ``id``)."""
        ...

    @abstractmethod
    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[Match]:
        """Return up to *k* matches for *query_embedding*, best first.

        Every match carries its stored metadata.  An empty index yields
        an empty list, not an error.
        """
        ...

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every record from the collection."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of records currently stored."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
