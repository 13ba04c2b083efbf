"""Chat state definition: shared across all graph nodes.

The state is the *single source of truth* that flows through every node
of one chat turn.  Conversational memory is **not** part of it: memory
outlives a turn and lives in :class:`~pdf_rag.conversation.history.HistoryStore`.
"""

from __future__ import annotations

from typing import TypedDict

from pdf_rag.retrieval.models import Match


class ChatState(TypedDict, total=False):
    """Typed state that flows through the chat graph.

    Attributes
    ----------
    message:
        The user's message, verbatim.
    standalone_query:
        History-independent rephrasing produced by ``rephrase``.
    query_embedding:
        Vector for ``standalone_query`` produced by ``embed_query``.
    matches:
        Ranked vector-index hits produced by ``search``.
    context:
        Rendered ``[Source: …]`` blocks produced by ``assemble_context``.
    reply:
        The assistant's answer produced by ``generate``.
    """

    message: str
    standalone_query: str
    query_embedding: list[float]
    matches: list[Match]
    context: str
    reply: str
