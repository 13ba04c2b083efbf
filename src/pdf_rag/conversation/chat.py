"""Chat pipeline: the public entry point for one conversational turn."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pdf_rag.conversation.graph import build_graph, create_initial_state
from pdf_rag.conversation.nodes import ChatNodes

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.conversation.history import HistoryStore
    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Outcome of one chat turn."""

    reply: str
    standalone_query: str = ""
    sources: list[str] = field(default_factory=list)


class ChatPipeline:
    """Answers user messages from the indexed documents.

    Turns are serialised with a lock: two concurrent turns would
    otherwise interleave their reads and writes of the shared history.
    See :class:`~pdf_rag.conversation.nodes.ChatNodes` for parameters.
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
        self.nodes = ChatNodes(
            history=history,
            store=store,
            embeddings=embeddings,
            rephrase_llm=rephrase_llm,
            answer_llm=answer_llm,
            top_k=top_k,
        )
        self.graph = build_graph(self.nodes)
        self._lock = threading.Lock()

    def answer(self, message: str) -> ChatResult:
        """Run the full turn and return the reply.

        Raises
        ------
        ChatError
            When any stage fails; the remaining stages are not run.
        """
        with self._lock:
            result = self.graph.invoke(create_initial_state(message))

        return ChatResult(
            reply=result["reply"],
            standalone_query=result.get("standalone_query", ""),
            sources=[m.source for m in result.get("matches", [])],
        )
