"""Session state and the orchestration of uploads, edits and glossary requests."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence

from pydantic import BaseModel

from ..models.document import DocumentInfo, DocumentStatus
from ..models.glossary import GlossaryTerm, GlossaryTermCandidate, TermCategory
from ..models.segment import RawSegment, TranslationSegment
from ..stores.glossary_store import GlossaryStore, create_glossary_store
from ..stores.segment_store import SegmentStore


logger = logging.getLogger("patent_review_api.workflow")


PDF_MIME_TYPE = "application/pdf"
GENERIC_MIME_TYPES = {"", "application/octet-stream"}

DocumentTranslatorFn = Callable[[bytes, str, Sequence[GlossaryTerm], str], Awaitable[List[RawSegment]]]


class UnsupportedDocumentError(ValueError):
    """Upload rejected before any processing started."""

    def __init__(self, message: str, status_code: int = 415):
        super().__init__(message)
        self.status_code = status_code


class DocumentProcessingError(RuntimeError):
    """The translation call failed; session state is unchanged."""


class DocumentProcessingResult(BaseModel):
    applied: bool
    generation: int
    document: DocumentInfo


class WorkspaceSession:
    """Explicit application state for one review session."""

    def __init__(self, glossary: Optional[GlossaryStore] = None, segments: Optional[SegmentStore] = None):
        self.glossary = glossary if glossary is not None else create_glossary_store()
        self.segments = segments if segments is not None else SegmentStore()
        # Document whose segments are installed
        self.document: Optional[DocumentInfo] = None
        # Most recent upload, whatever its outcome
        self.latest_upload: Optional[DocumentInfo] = None
        self.last_error: Optional[str] = None
        self.generation = 0
        self.in_flight = 0

    @property
    def is_processing(self) -> bool:
        return self.in_flight > 0

    @property
    def installed_filename(self) -> Optional[str]:
        return self.document.filename if self.document is not None else None


class WorkflowController:
    """Relays requests to the stores; holds no state of its own."""

    def __init__(self, session: WorkspaceSession, max_upload_bytes: Optional[int] = None):
        self.session = session
        self.max_upload_bytes = max_upload_bytes

    def check_upload(self, filename: str, mime_type: Optional[str], size: Optional[int]) -> str:
        """Check an upload from its metadata and return the MIME type to send to the model.

        ``size`` may be unknown (None); only the type is checked then.

        Raises:
            UnsupportedDocumentError: For non-PDF, empty or oversized files
        """
        mime = (mime_type or "").lower()
        if mime != PDF_MIME_TYPE:
            if mime in GENERIC_MIME_TYPES and (filename or "").lower().endswith(".pdf"):
                mime = PDF_MIME_TYPE
            else:
                raise UnsupportedDocumentError(f"Only PDF documents are supported, got '{mime_type or 'unknown'}'")
        if size is None:
            return mime
        if size == 0:
            raise UnsupportedDocumentError("Uploaded file is empty", status_code=400)
        if self.max_upload_bytes is not None and size > self.max_upload_bytes:
            raise UnsupportedDocumentError(
                f"File exceeds maximum size of {self.max_upload_bytes} bytes", status_code=413
            )
        return mime

    def validate_upload(self, filename: str, mime_type: Optional[str], content: bytes) -> str:
        """Check a fully read upload.

        Raises:
            UnsupportedDocumentError: For non-PDF, empty or oversized files
        """
        return self.check_upload(filename, mime_type, len(content))

    async def process_document(
        self,
        filename: str,
        content: bytes,
        mime_type: Optional[str],
        target_language: str,
        translate: DocumentTranslatorFn,
    ) -> DocumentProcessingResult:
        """Translate an uploaded document and install its segments.

        Only the most recently started request may install its result; an older
        one finishing later is dropped and reported with ``applied=False``.

        Raises:
            UnsupportedDocumentError: Before any state changes
            DocumentProcessingError: When the translation call fails
        """
        mime = self.validate_upload(filename, mime_type, content)

        session = self.session
        session.generation += 1
        generation = session.generation
        document = DocumentInfo(
            id=uuid.uuid4().hex,
            filename=filename,
            upload_date=datetime.now(timezone.utc),
            status=DocumentStatus.PROCESSING,
            target_language=target_language,
        )
        session.latest_upload = document
        session.in_flight += 1
        logger.info("Processing %s (generation %d)", filename, generation)
        try:
            raw_segments = await translate(content, mime, session.glossary.all(), target_language)
            segments = session.segments.assign_ids(raw_segments)
        except Exception as e:
            logger.exception("Processing %s failed (generation %d)", filename, generation)
            if generation == session.generation:
                session.latest_upload = document.model_copy(update={"status": DocumentStatus.ERROR})
                session.last_error = str(e)
            raise DocumentProcessingError(str(e)) from e
        finally:
            session.in_flight -= 1

        if generation != session.generation:
            logger.warning(
                "Dropping result of %s (generation %d superseded by %d)",
                filename, generation, session.generation,
            )
            return DocumentProcessingResult(applied=False, generation=generation, document=document)

        session.segments.replace_all(segments)
        session.document = document.model_copy(update={
            "status": DocumentStatus.READY,
            "segment_count": len(segments),
        })
        session.latest_upload = session.document
        session.last_error = None
        logger.info("Processed %s: %d segments (generation %d)", filename, len(segments), generation)
        return DocumentProcessingResult(applied=True, generation=generation, document=session.document)

    def edit_segment(self, segment_id: str, new_text: str) -> Optional[TranslationSegment]:
        self.session.segments.edit(segment_id, new_text)
        return self.session.segments.get(segment_id)

    def add_glossary_term(self, candidate: GlossaryTermCandidate) -> GlossaryTerm:
        return self.session.glossary.add(candidate)

    def promote_flagged_term(self, term: str, suggestion: str) -> GlossaryTerm:
        """Add a flagged term's suggestion to the glossary as a technical term."""
        return self.session.glossary.add(
            GlossaryTermCandidate(source=term, target=suggestion, category=TermCategory.TECHNICAL)
        )

    def remove_glossary_term(self, term_id: str) -> None:
        self.session.glossary.remove(term_id)
