"""FastAPI application exposing ingestion and chat as a REST API."""

from __future__ import annotations

import logging
import shutil
import tempfile
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from pdf_rag.config import settings
from pdf_rag.errors import CapacityExceededError, ClientError, RagError
from pdf_rag.ingestion.pipeline import UploadedFile
from pdf_rag.service import RagService

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF RAG API",
    version="0.1.0",
    description="Upload up to five PDFs and chat with an assistant grounded in them.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_service() -> RagService:
    """Process-wide service, built on first use."""
    return RagService.from_settings(settings)


# ── Request / Response schemas ────────────────────────────────────────
class ChatRequest(BaseModel):
    """Incoming message from the user."""

    message: str


class ChatResponse(BaseModel):
    reply: str


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    added: list[str] = []
    skipped: list[str] = []
    added_count: int
    file_count: int


class StatusResponse(BaseModel):
    sources: list[str]
    total_sources: int
    max_sources: int
    capacity: str


class MessageResponse(BaseModel):
    message: str


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/sources", response_model=StatusResponse)
def sources(service: RagService = Depends(get_service)) -> StatusResponse:
    """Report the ingested sources and the remaining capacity."""
    return StatusResponse(**service.status())


@app.post("/upload", response_model=UploadResponse)
def upload(
    files: list[UploadFile] | None = File(default=None),
    service: RagService = Depends(get_service),
) -> UploadResponse:
    """Ingest a batch of PDFs into the knowledge base."""
    files = files or []
    with tempfile.TemporaryDirectory(prefix="pdf-rag-") as tmpdir:
        batch = [_spool(upload, Path(tmpdir), i) for i, upload in enumerate(files)]
        try:
            report = service.ingest(batch)
        except CapacityExceededError as exc:
            raise HTTPException(status_code=403, detail=str(exc)) from exc
        except ClientError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RagError as exc:
            logger.exception("Upload Error")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    limit = service.registry.max_sources
    return UploadResponse(
        message=(
            "Successfully added. Total files in knowledge base: "
            f"{report.total_sources}/{limit}"
        ),
        added=report.added,
        skipped=report.skipped,
        added_count=report.added_count,
        file_count=report.total_sources,
    )


@app.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, service: RagService = Depends(get_service)) -> ChatResponse:
    """Answer a message from the uploaded documents only."""
    try:
        result = service.answer(request.message)
    except RagError as exc:
        logger.exception("Chat Error")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return ChatResponse(reply=result.reply)


@app.delete("/clear-index", response_model=MessageResponse)
def clear_index(service: RagService = Depends(get_service)) -> MessageResponse:
    """Delete every vector and forget every source."""
    try:
        message = service.reset()
    except Exception as exc:
        logger.exception("Clear Error")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return MessageResponse(message=message)


# ── Helpers ────────────────────────────────────────────────────────────
def _spool(upload: UploadFile, directory: Path, index: int) -> UploadedFile:
    """Copy an upload to *directory*; the original filename stays the source id."""
    path = directory / f"upload-{index}.pdf"
    with path.open("wb") as fh:
        shutil.copyfileobj(upload.file, fh)
    return UploadedFile(filename=upload.filename or path.name, path=path)
