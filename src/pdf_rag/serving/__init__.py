"""
Serving: FastAPI application for the PDF RAG service.

Run locally with ``python -m pdf_rag.serving``.
"""
