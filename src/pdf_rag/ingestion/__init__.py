"""
Ingestion: PDF loading, chunking, embedding and source bookkeeping.

This module turns a batch of uploaded PDFs into source-tagged chunks in
the vector index while enforcing the source capacity and deduplication
rules held by :class:`SourceRegistry`.
"""

from pdf_rag.ingestion.pipeline import IngestionPipeline, IngestionReport, UploadedFile
from pdf_rag.ingestion.registry import SourceRegistry

__all__ = [
    "IngestionPipeline",
    "IngestionReport",
    "SourceRegistry",
    "UploadedFile",
]
