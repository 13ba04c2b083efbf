"""Graph nodes: each method is one stage of a chat turn.

Node contract
-------------
* Accepts the full :class:`ChatState` dict.
* Returns a *partial* dict with **only the keys that changed**.
* Collaborators (LLMs, embeddings, vector index, history) are injected
  through :class:`ChatNodes`, never looked up from globals, so every
  node is independently testable.
* Any exception is re-raised as :class:`~pdf_rag.errors.ChatError`
  naming the stage.  Nothing is retried and nothing falls back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from pdf_rag.conversation.history import ConversationTurn
from pdf_rag.conversation.prompts import (
    build_answer_prompt,
    build_rephrase_prompt,
    format_context,
)
from pdf_rag.conversation.state import ChatState
from pdf_rag.errors import ChatError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.conversation.history import HistoryStore
    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
    try:
        yield
    except ChatError:
        raise
    except Exception as exc:
        logger.error("Chat stage %s failed: %s", name, exc)
        raise ChatError(name, str(exc)) from exc


class ChatNodes:
    """The seven stages of a chat turn, bound to their collaborators.

    Parameters
    ----------
    history:
        Process-wide conversational memory.
    store:
        Vector index to search.
    embeddings:
        Embedding model used for the standalone query.
    rephrase_llm:
        Chat model for query rephrasing (expected at temperature 0).
    answer_llm:
        Chat model for the grounded answer.
    top_k:
        Number of matches requested from the index.
    """

    def __init__(
        self,
        *,
        history: HistoryStore,
        store: VectorStoreBase,
        embeddings: Embeddings,
        rephrase_llm: BaseChatModel,
        answer_llm: BaseChatModel,
        top_k: int = 5,
    ) -> None:
        self.history = history
        self.store = store
        self.embeddings = embeddings
        self.rephrase_llm = rephrase_llm
        self.answer_llm = answer_llm
        self.top_k = top_k

    # ── 1. TRIM ───────────────────────────────────────────────────────

    def trim_history(self, state: ChatState) -> dict[str, Any]:
        """Trim memory *before* the new user turn is appended."""
        with _stage("trim_history"):
            self.history.trim()
        return {}

    # ── 2. REPHRASE ───────────────────────────────────────────────────

    def rephrase(self, state: ChatState) -> dict[str, Any]:
        """Turn the message into a standalone search query."""
        with _stage("rephrase"):
            prompt = build_rephrase_prompt(self.history.snapshot(), state["message"])
            response = self.rephrase_llm.invoke(prompt)
            query = str(response.content).strip()
        logger.info("Standalone query: %r", query)
        return {"standalone_query": query}

    # ── 3. EMBED ──────────────────────────────────────────────────────

    def embed_query(self, state: ChatState) -> dict[str, Any]:
        with _stage("embed_query"):
            vector = self.embeddings.embed_query(state["standalone_query"])
        return {"query_embedding": list(vector)}

    # ── 4. SEARCH ─────────────────────────────────────────────────────

    def search(self, state: ChatState) -> dict[str, Any]:
        with _stage("search"):
            matches = self.store.similarity_search(state["query_embedding"], k=self.top_k)
        logger.info("Retrieved %d matches", len(matches))
        return {"matches": matches}

    # ── 5. ASSEMBLE ───────────────────────────────────────────────────

    def assemble_context(self, state: ChatState) -> dict[str, Any]:
        """Render matches in ranking order; overlapping chunks are kept as-is."""
        with _stage("assemble_context"):
            context = format_context(state.get("matches", []))
        return {"context": context}

    # ── 6. GENERATE ───────────────────────────────────────────────────

    def generate(self, state: ChatState) -> dict[str, Any]:
        """Record the original message, then answer from the context.

        The user turn is appended before the LLM call, so it stays in
        memory even when generation fails.
        """
        with _stage("generate"):
            self.history.append(ConversationTurn(role="user", content=state["message"]))
            prompt = build_answer_prompt(self.history.snapshot(), state.get("context", ""))
            response = self.answer_llm.invoke(prompt)
            reply = str(response.content)
        return {"reply": reply}

    # ── 7. PERSIST ────────────────────────────────────────────────────

    def persist(self, state: ChatState) -> dict[str, Any]:
        with _stage("persist"):
            self.history.append(ConversationTurn(role="assistant", content=state["reply"]))
        return {}
