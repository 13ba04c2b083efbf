"""Registry of ingested sources: deduplication and hard capacity."""

from __future__ import annotations

import threading

from pdf_rag.errors import CapacityExceededError


class SourceRegistry:
    """Tracks the distinct source identifiers (original filenames) in the index.

    The registry knows nothing about the vector index: clearing it does
    not delete any vectors, callers wipe the index separately.

    Parameters
    ----------
    max_sources:
        Hard cap on the number of live sources.
    """

    def __init__(self, max_sources: int = 5) -> None:
        if max_sources < 1:
            raise ValueError(f"max_sources must be >= 1, got {max_sources}")
        self.max_sources = max_sources
        # dict keeps insertion order for listing
        self._sources: dict[str, None] = {}
        self._lock = threading.Lock()

    def contains(self, source_id: str) -> bool:
        with self._lock:
            return source_id in self._sources

    def count(self) -> int:
        with self._lock:
            return len(self._sources)

    def sources(self) -> list[str]:
        """Return the live source ids in registration order."""
        with self._lock:
            return list(self._sources)

    def check_capacity(self, incoming: int) -> None:
        """Raise :class:`CapacityExceededError` if *incoming* more sources would not fit.

        Duplicates are not filtered out first: the check is against the
        raw size of the incoming batch.
        """
        with self._lock:
            current = len(self._sources)
        if current + incoming > self.max_sources:
            raise CapacityExceededError(current, incoming, self.max_sources)

    def register(self, source_id: str) -> None:
        """Add *source_id*; re-registering a live id is a no-op."""
        with self._lock:
            if source_id in self._sources:
                return
            if len(self._sources) >= self.max_sources:
                raise CapacityExceededError(len(self._sources), 1, self.max_sources)
            self._sources[source_id] = None

    def clear(self) -> None:
        with self._lock:
            self._sources.clear()

    def __len__(self) -> int:
        return self.count()
