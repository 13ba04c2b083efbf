"""Document loaders: thin wrappers around LangChain document loaders."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import PyPDFLoader

from pdf_rag.errors import ParseError

if TYPE_CHECKING:
    from langchain_core.documents import Document


def load_pdf(path: str | Path) -> list[Document]:
    """Load a single PDF file, one ``Document`` per page.

    Raises
    ------
    ParseError
        When the file is missing, corrupt or not a PDF.
    """
    try:
        return PyPDFLoader(str(path)).load()
    except Exception as exc:
        raise ParseError(f"Could not parse {Path(path).name}: {exc}") from exc
