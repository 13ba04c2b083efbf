"""Start the API server: ``python -m pdf_rag.serving``."""

from __future__ import annotations

import logging

import uvicorn

from pdf_rag.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("pdf_rag.serving.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
