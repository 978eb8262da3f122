"""FastAPI REST API for attendance sheet analysis and signature stamping."""

import json
import time
from contextlib import asynccontextmanager
from pathlib import PurePath
from uuid import uuid4

from fastapi import APIRouter, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError

from .config import Settings
from .layout import (
    HeaderDelta,
    NamePosition,
    PDFExtractionError,
    detect_header_deltas,
    extract_candidate_names,
    extract_page_text,
    locate_attendees,
)
from .logger import clear_context, configure, logger, set_context
from .signing import (
    CanvasPoint,
    StampingError,
    StampRequest,
    fallback_canvas_position,
    initial_canvas_position,
    stamp_signatures,
)

# Only the first page carries the attendee grid
ANALYZED_PAGE = 1


# --- Request/Response Models ---


class AttendeeResponse(BaseModel):
    name: str
    position: NamePosition | None = None
    canvas_position: CanvasPoint
    needs_manual_placement: bool


class AnalyzeResponse(BaseModel):
    page_width: float
    page_height: float
    scale: float
    header_deltas: list[HeaderDelta]
    attendees: list[AttendeeResponse]


class NamesResponse(BaseModel):
    names: list[str]
    count: int


class HealthResponse(BaseModel):
    status: str
    checks: dict[str, bool] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    code: str
    message: str


# --- Upload helpers ---


def _read_pdf_upload(file: UploadFile, settings: Settings) -> bytes:
    """Read an uploaded PDF, enforcing extension, size and magic bytes."""
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    data = file.file.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {settings.max_upload_size // (1024 * 1024)}MB",
        )

    if not data.startswith(b"%PDF-"):
        raise HTTPException(
            status_code=400,
            detail="Invalid PDF file. File does not have valid PDF header.",
        )
    return data


def _read_signature_upload(upload: UploadFile, settings: Settings) -> bytes:
    """Read a signature image, enforcing the same size limit as the PDF."""
    data = upload.file.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise HTTPException(
            status_code=413,
            detail=f"Signature {upload.filename!r} too large. "
            f"Maximum size is {settings.max_upload_size // (1024 * 1024)}MB",
        )
    return data


def parse_names_field(raw: str) -> list[str]:
    """Accept either a JSON list of names or one name per line."""
    raw = raw.strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            names = json.loads(raw)
        except json.JSONDecodeError as e:
            raise HTTPException(status_code=400, detail=f"Invalid names JSON: {e}") from e
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise HTTPException(status_code=400, detail="names must be a list of strings")
        return [n.strip() for n in names if n.strip()]
    return [line.strip() for line in raw.splitlines() if line.strip()]


def parse_positions_field(raw: str) -> dict[str, CanvasPoint]:
    """Parse ``{"name": {"x": .., "y": ..}}`` canvas positions set by the host."""
    raw = raw.strip()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("positions must be an object")
        return {name: CanvasPoint.model_validate(point) for name, point in data.items()}
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid positions: {e}") from e


def _signature_name(upload: UploadFile) -> str:
    return PurePath(upload.filename or "").stem


# --- Routes ---


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    """Liveness check."""
    return HealthResponse(status="healthy")


@router.post("/api/v1/names", response_model=NamesResponse)
def discover_names(request: Request, file: UploadFile = File(...)):
    """List the attendee names printed on page 1."""
    settings: Settings = request.app.state.settings
    data = _read_pdf_upload(file, settings)

    page = extract_page_text(data, ANALYZED_PAGE)
    names = extract_candidate_names(page.items)
    logger.info("names discovered", file_name=file.filename, count=len(names))
    return NamesResponse(names=names, count=len(names))


@router.post("/api/v1/analyze", response_model=AnalyzeResponse)
def analyze(request: Request, file: UploadFile = File(...), names: str = Form("")):
    """Locate each attendee's name and compute the initial signature boxes.

    If no names are given, names discovered on the page are used.
    """
    settings: Settings = request.app.state.settings
    data = _read_pdf_upload(file, settings)
    attendee_names = parse_names_field(names)

    page = extract_page_text(data, ANALYZED_PAGE)
    if not attendee_names:
        attendee_names = extract_candidate_names(page.items)

    analyzer = settings.analyzer
    header_deltas = detect_header_deltas(
        page.items,
        keywords=analyzer.keywords,
        y_tolerance=analyzer.header_y_tolerance,
        fallback_width=analyzer.header_fallback_width,
    )
    locations = locate_attendees(
        attendee_names, page.items, analyzer, header_deltas=header_deltas
    )

    attendees = []
    for index, location in enumerate(locations):
        if location.position is not None:
            canvas = initial_canvas_position(location.position, page.height, settings.render)
        else:
            canvas = fallback_canvas_position(index, settings.render)
        attendees.append(
            AttendeeResponse(
                name=location.name,
                position=location.position,
                canvas_position=canvas,
                needs_manual_placement=location.position is None,
            )
        )

    logger.info(
        "sheet analyzed",
        file_name=file.filename,
        attendees=len(attendees),
        located=sum(1 for a in attendees if not a.needs_manual_placement),
        header_pairs=len(header_deltas),
    )

    return AnalyzeResponse(
        page_width=page.width,
        page_height=page.height,
        scale=settings.render.scale,
        header_deltas=header_deltas,
        attendees=attendees,
    )


@router.post("/api/v1/stamp")
def stamp(
    request: Request,
    file: UploadFile = File(...),
    signatures: list[UploadFile] = File(...),
    positions: str = Form(""),
):
    """Composite signature PNGs onto page 1 and return the signed PDF.

    Each signature file is named after its attendee (``<name>.png``).
    """
    settings: Settings = request.app.state.settings
    data = _read_pdf_upload(file, settings)
    dragged = parse_positions_field(positions)

    requests = [
        StampRequest(
            name=_signature_name(upload),
            image=_read_signature_upload(upload, settings),
            canvas_position=dragged.get(_signature_name(upload)),
        )
        for upload in signatures
    ]

    page = extract_page_text(data, ANALYZED_PAGE)
    locations = locate_attendees([r.name for r in requests], page.items, settings.analyzer)
    signed = stamp_signatures(data, requests, locations, settings.render)

    return Response(
        content=signed.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": 'attachment; filename="signed.pdf"',
            "X-Document-SHA256": signed.sha256,
            "X-Stamped-Count": str(len(signed.stamped)),
        },
    )


# --- App factory ---


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around an explicit settings object."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting server", scale=settings.render.scale)
        yield
        logger.info("server shutdown")

    app = FastAPI(
        title="Signsheet API",
        description="Attendance sheet analysis and signature stamping API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    configure(settings.log_level)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        set_context(request_id=request.headers.get("X-Request-ID") or uuid4().hex)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            logger.debug(
                "request handled",
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return response
        finally:
            clear_context()

    @app.exception_handler(PDFExtractionError)
    async def extraction_error_handler(request, exc: PDFExtractionError):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(code="UNREADABLE_PDF", message=str(exc)).model_dump(),
        )

    @app.exception_handler(StampingError)
    async def stamping_error_handler(request, exc: StampingError):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(code="STAMPING_FAILED", message=str(exc)).model_dump(),
        )

    app.include_router(router)
    return app


app = create_app()
