"""Document upload, segment review and export endpoints."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse

from ..schemas.documents import (
    DocumentStateResponse,
    DocumentUploadResponse,
    ReviewStats,
    SegmentEditRequest,
    SegmentListResponse,
    SegmentView,
)
from ..models.model_router import get_model_router
from ..config import get_settings
from ..review.prioritizer import prioritize
from ..review.export import export_filename, export_text
from ..utils.review_helpers import build_segment_views, build_stats
from ..workflows.controller import (
    DocumentProcessingError,
    UnsupportedDocumentError,
    WorkflowController,
    WorkspaceSession,
)
from ..workflows.document_translation import DocumentTranslator
from ..api.dependencies import get_controller, get_session, router_limiter

router = APIRouter(tags=["Documents"])
settings = get_settings()

PROCESSING_FAILED_MESSAGE = (
    "Failed to process document. Please try again. Ensure your API key is set in the environment."
)


@router.post(
    "/documents",
    response_model=DocumentUploadResponse,
    dependencies=[Depends(router_limiter)],
    responses={
        400: {"description": "Unsupported model or empty file."},
        409: {"description": "A newer upload started before this one finished; its result was discarded."},
        413: {"description": "File too large."},
        415: {"description": "Only PDF documents are accepted."},
        502: {"description": "The translation service failed; the previous document is kept."},
    }
)
async def upload_document(
    file: UploadFile = File(..., description="Patent document (PDF)"),
    target_language: Optional[str] = Form(None),
    model_name: Optional[str] = Form(None),
    controller: WorkflowController = Depends(get_controller),
):
    """
    Upload a patent PDF, translate it, and load its segments into the workspace.

    The whole segment collection is replaced on success. On failure the
    previously loaded document stays in place.
    """
    model_name = model_name or settings.default_model
    model_router = get_model_router()
    if not model_router.is_supported(model_name):
        raise HTTPException(
            status_code=400,
            detail=f"Model '{model_name}' is not supported. Available models: {list(model_router.get_available_models().keys())}"
        )

    filename = file.filename or ""
    try:
        controller.check_upload(filename, file.content_type, file.size)
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    # One byte past the limit is enough to reject a body whose size was not declared
    limit = controller.max_upload_bytes
    content = await file.read(limit + 1) if limit is not None else await file.read()
    translator = DocumentTranslator(model_name, source_language=settings.source_language)
    try:
        result = await controller.process_document(
            filename=filename,
            content=content,
            mime_type=file.content_type,
            target_language=target_language or settings.default_target_language,
            translate=translator,
        )
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except DocumentProcessingError as e:
        raise HTTPException(status_code=502, detail=f"{PROCESSING_FAILED_MESSAGE} ({e})")

    if not result.applied:
        raise HTTPException(
            status_code=409,
            detail="A newer document was uploaded while this one was processing; its result was discarded."
        )

    segments = controller.session.segments.get_all()
    return DocumentUploadResponse(
        document=result.document,
        generation=result.generation,
        segments=build_segment_views(segments),
        stats=build_stats(segments),
    )


@router.get("/documents/current", response_model=DocumentStateResponse)
async def current_document(session: WorkspaceSession = Depends(get_session)):
    """
    The installed document, the outcome of the latest upload, and whether a
    translation is in flight.

    A failed upload shows up in `latest_upload` and `last_error` only;
    `document` keeps describing the segments being served.
    """
    return DocumentStateResponse(
        document=session.document,
        latest_upload=session.latest_upload,
        last_error=session.last_error,
        is_processing=session.is_processing,
    )


@router.get("/documents/export", response_class=PlainTextResponse)
async def export_document(session: WorkspaceSession = Depends(get_session)):
    """Download the translation as plain text, segments in original document order."""
    text = export_text(session.segments.get_all())
    filename = export_filename(session.installed_filename)
    return PlainTextResponse(
        content=text,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.get("/segments", response_model=SegmentListResponse)
async def list_segments(
    prioritize_review: bool = Query(False, alias="prioritize", description="Order by descending risk score"),
    session: WorkspaceSession = Depends(get_session),
):
    """
    List segments of the active document.

    With `prioritize=true` the riskiest segments come first. Stats are always
    computed from the original order.
    """
    canonical = session.segments.get_all()
    return SegmentListResponse(
        prioritized=prioritize_review,
        segments=build_segment_views(prioritize(canonical, prioritize_review)),
        stats=build_stats(canonical),
    )


@router.get("/segments/stats", response_model=ReviewStats)
async def segment_stats(session: WorkspaceSession = Depends(get_session)):
    return build_stats(session.segments.get_all())


@router.put("/segments/{segment_id}", response_model=Optional[SegmentView])
async def edit_segment(
    segment_id: str,
    request: SegmentEditRequest,
    controller: WorkflowController = Depends(get_controller),
):
    """
    Save a reviewed translation for one segment.

    The segment's uncertainty score and flagged terms are cleared. Unknown ids
    are ignored and answered with `null`.
    """
    edited = controller.edit_segment(segment_id, request.translated_text)
    if edited is None:
        return None
    return build_segment_views([edited])[0]
