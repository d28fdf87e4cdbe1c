"""FastAPI application exposing document ingestion and queries as a REST API."""

from __future__ import annotations

import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile, status
from pydantic import BaseModel, Field

from docrag.config import settings
from docrag.errors import EmptyQueryError, ExtractionError, UnsupportedFormatError
from docrag.ingestion.loader import SUPPORTED_EXTENSIONS
from docrag.retrieval.models import QueryResult
from docrag.service import RagService
from docrag.store.models import DocumentSummary, StoreStats

logger = logging.getLogger(__name__)


# ── Request / Response schemas ────────────────────────────────────────
class QueryRequest(BaseModel):
    """Incoming question from an administrator."""

    query: str
    max_results: int | None = Field(default=None, ge=1)


class UploadResponse(BaseModel):
    """Outcome of a successful upload."""

    document_id: str
    filename: str
    chunk_count: int


class ChunkView(BaseModel):
    index: int
    text: str
    has_embedding: bool


class DocumentView(DocumentSummary):
    """Full document without embedding vectors."""

    raw_text: str
    chunks: list[ChunkView] = []


class DeleteResponse(BaseModel):
    deleted: bool


# ── App factory ───────────────────────────────────────────────────────
def create_app(service: RagService | None = None) -> FastAPI:
    """Build the API around *service* (or one wired from settings)."""
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_directory:
            app.state.rag_service.ingest_directory(settings.seed_directory)
        yield

    app = FastAPI(
        title="Document RAG API",
        version="0.1.0",
        description="Upload documents and query them for relevant passages.",
        lifespan=lifespan,
    )
    app.state.rag_service = service or RagService.from_settings()
    _register_routes(app)
    return app


def get_service(request: Request) -> RagService:
    return request.app.state.rag_service


def _safe_filename(raw: str | None) -> str:
    """Reduce a client-supplied name to a bare, supported file name.

    Raises 400 for names with no usable final component and 415 for
    unsupported extensions, before anything is written to disk.
    """
    name = Path((raw or "").replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Invalid file name: {raw!r}")
    ext = Path(name).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, f"Unsupported file type: {ext or '<none>'}")
    return name


# ── Routes ────────────────────────────────────────────────────────────
def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    @app.post("/documents", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
    def upload_document(
        file: UploadFile = File(...),
        service: RagService = Depends(get_service),
    ) -> UploadResponse:
        """Store an uploaded ``.txt``, ``.pdf`` or ``.docx`` file."""
        filename = _safe_filename(file.filename)
        limit = settings.max_upload_bytes
        data = file.file.read(limit + 1)
        if len(data) > limit:
            raise HTTPException(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                f"File exceeds the {limit} byte upload limit",
            )

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / filename
            path.write_bytes(data)
            try:
                document_id = service.ingest_file(path, filename)
            except UnsupportedFormatError as exc:
                raise HTTPException(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, exc.message) from exc
            except ExtractionError as exc:
                raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message) from exc

        document = service.get_document(document_id)
        chunk_count = document.chunk_count if document is not None else 0
        return UploadResponse(document_id=document_id, filename=filename, chunk_count=chunk_count)

    @app.get("/documents", response_model=list[DocumentSummary])
    def list_documents(service: RagService = Depends(get_service)) -> list[DocumentSummary]:
        return service.get_all_documents()

    @app.get("/documents/{document_id}", response_model=DocumentView)
    def get_document(document_id: str, service: RagService = Depends(get_service)) -> DocumentView:
        document = service.get_document(document_id)
        if document is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"Document {document_id} not found")
        return DocumentView(
            **document.summary().model_dump(),
            raw_text=document.raw_text,
            chunks=[ChunkView(index=c.index, text=c.text, has_embedding=c.has_embedding) for c in document.chunks],
        )

    @app.delete("/documents/{document_id}", response_model=DeleteResponse)
    def delete_document(document_id: str, service: RagService = Depends(get_service)) -> DeleteResponse:
        if not service.delete_document(document_id):
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"Document {document_id} not found")
        return DeleteResponse(deleted=True)

    @app.get("/stats", response_model=StoreStats)
    def stats(service: RagService = Depends(get_service)) -> StoreStats:
        return service.get_stats()

    @app.post("/query", response_model=QueryResult)
    def query(request: QueryRequest, service: RagService = Depends(get_service)) -> QueryResult:
        """Rank stored chunks against the query."""
        try:
            return service.query_rag(request.query, request.max_results)
        except EmptyQueryError as exc:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, exc.message) from exc


app = create_app()
