"""Text chunking strategies."""

from __future__ import annotations

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

# Paragraph, line, sentence, word, then raw characters.
SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def tag_with_source(documents: list[Document], source: str) -> list[Document]:
    """Return copies of *documents* whose metadata is exactly ``{"source": source}``.

    Everything the parser attached (page numbers, producer, titles …) is
    dropped so that every chunk downstream carries a single field.
    """
    return [Document(page_content=doc.page_content, metadata={"source": source}) for doc in documents]


def chunk_documents(
    documents: list[Document],
    chunk_size: int = 850,
    chunk_overlap: int = 150,
) -> list[Document]:
    """Split *documents* into smaller chunks for embedding.

    Each document is split on its own, so overlap windows never span two
    documents, and the output keeps the input order.

    Parameters
    ----------
    documents:
        Source documents produced by a loader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[Document]
        Chunked documents ready for embedding.
    """
    if chunk_overlap >= chunk_size:
        raise ValueError(f"chunk_overlap ({chunk_overlap}) must be < chunk_size ({chunk_size})")

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        separators=SEPARATORS,
    )
    return splitter.split_documents(documents)
