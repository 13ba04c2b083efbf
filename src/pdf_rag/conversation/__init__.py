"""
Conversation: grounded question answering with bounded memory.

A chat turn is a fixed, linear LangGraph workflow
(trim → rephrase → embed → search → assemble → generate → persist).
All collaborators are injected, so the whole turn can be tested locally
without a vector database or an LLM endpoint.

Public API
----------
- :class:`ChatPipeline`: run one turn, get a :class:`ChatResult`.
- :class:`HistoryStore` / :class:`ConversationTurn`: conversational memory.
- :func:`build_graph`: compile the chat workflow.
"""

from pdf_rag.conversation.chat import ChatPipeline, ChatResult
from pdf_rag.conversation.graph import build_graph, create_initial_state
from pdf_rag.conversation.history import ConversationTurn, HistoryStore

__all__ = [
    "ChatPipeline",
    "ChatResult",
    "ConversationTurn",
    "HistoryStore",
    "build_graph",
    "create_initial_state",
]
