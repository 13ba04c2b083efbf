"""Prompt templates for the conversational retrieval workflow.

Both LLM calls of a chat turn use a dedicated prompt from this module.
Keeping prompts in one place makes them easy to audit and version.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from pdf_rag.conversation.history import ConversationTurn
    from pdf_rag.retrieval.models import Match

REFUSAL = "I could not find the answer in the provided document."

CONTEXT_DELIMITER = "\n\n---\n\n"

# ── 1. Standalone query ───────────────────────────────────────────────

REPHRASE_SYSTEM = "Rephrase user input into a standalone search query. Output ONLY the query."


def build_rephrase_prompt(history: Iterable[ConversationTurn], message: str) -> list[BaseMessage]:
    """Build the prompt for the ``rephrase`` node.

    The history gives the model what it needs to resolve pronouns and
    follow-ups ("what about the second one?") into a self-contained query.
    """
    return [
        SystemMessage(content=REPHRASE_SYSTEM),
        *history_to_messages(history),
        HumanMessage(content=message),
    ]


# ── 2. Grounded answer ────────────────────────────────────────────────

ANSWER_SYSTEM = f"""\
You have to behave like an Expert Teacher.
You will be given a context of relevant information and a user question.
Your task is to answer the user's question based ONLY on the provided context.
If the answer is not in the context, you must say "{REFUSAL}"
Keep your answers clear, concise, and educational.

<context>{{context}}</context>"""


def build_answer_prompt(history: Iterable[ConversationTurn], context: str) -> list[BaseMessage]:
    """Build the prompt for the ``generate`` node.

    *history* must already end with the user's current message.
    """
    return [
        SystemMessage(content=ANSWER_SYSTEM.format(context=context)),
        *history_to_messages(history),
    ]


# ── Helpers ────────────────────────────────────────────────────────────


def format_context(matches: Iterable[Match]) -> str:
    """Render matches as ``[Source: name]`` blocks, keeping the index ranking."""
    return CONTEXT_DELIMITER.join(f"[Source: {m.source}]\n{m.text}" for m in matches)


def history_to_messages(history: Iterable[ConversationTurn]) -> list[BaseMessage]:
    messages: list[BaseMessage] = []
    for turn in history:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.content))
        else:
            messages.append(AIMessage(content=turn.content))
    return messages
