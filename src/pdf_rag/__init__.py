"""
pdf_rag: retrieval-augmented chat over a small set of uploaded PDFs.

Subpackages
-----------
- :mod:`pdf_rag.ingestion`: PDFs into source-tagged vectors.
- :mod:`pdf_rag.retrieval`: vector-index abstraction.
- :mod:`pdf_rag.conversation`: grounded, memory-bounded chat.
- :mod:`pdf_rag.serving`: FastAPI transport.
"""
