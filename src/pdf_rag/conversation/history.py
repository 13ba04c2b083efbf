"""Process-wide bounded conversational memory."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationTurn:
    """One message of the conversation."""

    role: Role
    content: str


class HistoryStore:
    """Append-only window of turns, trimmed from the oldest end.

    :meth:`trim` is called explicitly by the chat pipeline *before* a new
    user turn is appended, so the window holds at most ``max_turns``
    right after a trim and ``max_turns + 1`` when a prompt is built.

    Parameters
    ----------
    max_turns:
        Number of most recent turns kept by :meth:`trim`.
    """

    def __init__(self, max_turns: int = 8) -> None:
        if max_turns < 0:
            raise ValueError(f"max_turns must be >= 0, got {max_turns}")
        self.max_turns = max_turns
        self._turns: list[ConversationTurn] = []
        self._lock = threading.Lock()

    def append(self, turn: ConversationTurn) -> None:
        with self._lock:
            self._turns.append(turn)

    def trim(self) -> None:
        """Discard all but the most recent ``max_turns`` turns."""
        with self._lock:
            if len(self._turns) > self.max_turns:
                del self._turns[: len(self._turns) - self.max_turns]

    def snapshot(self) -> tuple[ConversationTurn, ...]:
        with self._lock:
            return tuple(self._turns)

    def clear(self) -> None:
        with self._lock:
            self._turns.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._turns)
