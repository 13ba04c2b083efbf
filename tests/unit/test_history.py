"""Unit tests for the conversational memory window."""

from __future__ import annotations

import pytest

from pdf_rag.conversation.history import ConversationTurn, HistoryStore


def _fill(store: HistoryStore, n: int) -> None:
    for i in range(n):
        role = "user" if i % 2 == 0 else "assistant"
        store.append(ConversationTurn(role=role, content=f"turn {i}"))


def test_append_and_snapshot_preserve_order() -> None:
    store = HistoryStore()
    _fill(store, 3)
    assert [t.content for t in store.snapshot()] == ["turn 0", "turn 1", "turn 2"]


def test_trim_keeps_most_recent_turns() -> None:
    store = HistoryStore(max_turns=8)
    _fill(store, 11)
    store.trim()
    assert len(store) == 8
    assert store.snapshot()[0].content == "turn 3"
    assert store.snapshot()[-1].content == "turn 10"


def test_trim_is_noop_at_or_below_limit() -> None:
    store = HistoryStore(max_turns=8)
    _fill(store, 8)
    store.trim()
    assert len(store) == 8
    assert store.snapshot()[0].content == "turn 0"


def test_snapshot_is_detached() -> None:
    store = HistoryStore()
    _fill(store, 1)
    snap = store.snapshot()
    store.append(ConversationTurn(role="assistant", content="later"))
    assert len(snap) == 1


def test_clear() -> None:
    store = HistoryStore()
    _fill(store, 4)
    store.clear()
    assert len(store) == 0
    assert store.snapshot() == ()


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        HistoryStore(max_turns=-1)
