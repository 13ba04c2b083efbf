"""LangGraph graph definition: one chat turn.

This module wires the stages of :class:`~pdf_rag.conversation.nodes.ChatNodes`
into a compiled :class:`StateGraph`.  The graph is strictly linear: the
only way to leave early is an exception from a stage.

1. **Trim** the conversational memory to its window.
2. **Rephrase** the message into a standalone search query.
3. **Embed** the standalone query.
4. **Search** the vector index.
5. **Assemble** the ``[Source: …]`` context.
6. **Generate** the grounded answer.
7. **Persist** the reply into memory.
"""

from __future__ import annotations

from typing import Any

from langgraph.graph import END, StateGraph

from pdf_rag.conversation.nodes import ChatNodes
from pdf_rag.conversation.state import ChatState

STAGES = (
    "trim_history",
    "rephrase",
    "embed_query",
    "search",
    "assemble_context",
    "generate",
    "persist",
)


def build_graph(nodes: ChatNodes) -> Any:
    """Construct and return the compiled chat graph.

    Graph topology::

        trim_history → rephrase → embed_query → search
            → assemble_context → generate → persist → END

    Returns
    -------
    CompiledGraph
        A compiled LangGraph workflow ready for ``.invoke()``.
    """
    workflow = StateGraph(ChatState)

    for name in STAGES:
        workflow.add_node(name, getattr(nodes, name))

    workflow.set_entry_point(STAGES[0])
    for current, following in zip(STAGES, STAGES[1:]):
        workflow.add_edge(current, following)
    workflow.add_edge(STAGES[-1], END)

    return workflow.compile()


def create_initial_state(message: str) -> dict[str, Any]:
    """Build a minimal initial state dict for ``graph.invoke()``.

    Usage::

        graph = build_graph(nodes)
        result = graph.invoke(create_initial_state("What is X?"))
        print(result["reply"])
    """
    return {
        "message": message,
        "standalone_query": "",
        "query_embedding": [],
        "matches": [],
        "context": "",
        "reply": "",
    }
