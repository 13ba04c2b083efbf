"""Unit tests for the PDF loader wrapper."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from langchain_core.documents import Document

from pdf_rag.errors import ParseError
from pdf_rag.ingestion.loader import load_pdf


def test_load_pdf_returns_pages(tmp_path: Path) -> None:
    pages = [Document(page_content="page one", metadata={"page": 0})]
    with patch("pdf_rag.ingestion.loader.PyPDFLoader") as loader_cls:
        loader_cls.return_value.load.return_value = pages
        assert load_pdf(tmp_path / "doc.pdf") == pages
    loader_cls.assert_called_once_with(str(tmp_path / "doc.pdf"))


def test_parser_failure_becomes_parse_error(tmp_path: Path) -> None:
    with patch("pdf_rag.ingestion.loader.PyPDFLoader") as loader_cls:
        loader_cls.return_value.load.side_effect = RuntimeError("EOF marker not found")
        with pytest.raises(ParseError, match="doc.pdf") as excinfo:
            load_pdf(tmp_path / "doc.pdf")
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_missing_file_becomes_parse_error(tmp_path: Path) -> None:
    with pytest.raises(ParseError):
        load_pdf(tmp_path / "does-not-exist.pdf")
