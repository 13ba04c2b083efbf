"""LLM initialisation: single place to swap providers.

Any OpenAI-compatible ``/v1/chat/completions`` endpoint works because
the client is LangChain's ``ChatOpenAI`` pointed at
``settings.llm_base_url``:

1. **Groq** (default): ``https://api.groq.com/openai/v1``.
2. **OpenAI cloud**: set ``LLM_BASE_URL`` to an empty string.
3. **Self-hosted vLLM**: point ``LLM_BASE_URL`` at the server's ``/v1``.
"""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from pdf_rag.config import Settings, settings

logger = logging.getLogger(__name__)


def get_llm(temperature: float | None = None, *, config: Settings | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    Parameters
    ----------
    temperature:
        Sampling temperature.  ``None`` leaves it unset so the provider
        default applies.
    config:
        Settings to read the endpoint from; defaults to the global
        :data:`~pdf_rag.config.settings`.
    """
    config = config or settings
    kwargs: dict = {"model": config.llm_model_name}
    if temperature is not None:
        kwargs["temperature"] = temperature

    if config.llm_base_url:
        logger.info("Using chat endpoint: %s", config.llm_base_url)
        kwargs["base_url"] = config.llm_base_url
    # Self-hosted servers don't need a real key; LangChain requires a non-empty value.
    kwargs["api_key"] = config.llm_api_key or "EMPTY"

    return ChatOpenAI(**kwargs)
