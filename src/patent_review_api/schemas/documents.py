"""Document, segment and term suggestion API schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field
from ..models.document import DocumentInfo
from ..models.segment import FlaggedTerm


class ReviewStats(BaseModel):
    """Progress figures computed from the canonical segment order."""
    total: int = Field(..., description="Number of segments in the document")
    uncertain_count: int = Field(..., description="Segments with uncertainty above 0.3 or any flagged term")
    progress: int = Field(..., description="Percentage of segments not counted as uncertain")


class SegmentView(BaseModel):
    """A segment as displayed in the review workspace."""
    id: str
    source_text: str
    translated_text: str
    uncertainty_score: float
    flagged_terms: List[FlaggedTerm]
    risk_score: float
    needs_review: bool


class SegmentListResponse(BaseModel):
    prioritized: bool
    segments: List[SegmentView]
    stats: ReviewStats


class SegmentEditRequest(BaseModel):
    translated_text: str = Field(..., description="Reviewer-confirmed translation")


class DocumentStateResponse(BaseModel):
    document: Optional[DocumentInfo] = Field(None, description="Document whose segments are installed")
    latest_upload: Optional[DocumentInfo] = Field(None, description="Most recent upload, including failed ones")
    last_error: Optional[str] = Field(None, description="Why the most recent upload failed, if it did")
    is_processing: bool = False


class DocumentUploadResponse(BaseModel):
    document: DocumentInfo
    generation: int
    segments: List[SegmentView]
    stats: ReviewStats


class TermSuggestionRequest(BaseModel):
    term: str = Field(..., min_length=1, description="Term to find alternatives for")
    context: str = Field("", description="Sentence or segment the term appears in")
    target_language: Optional[str] = Field(None, description="Defaults to the configured target language")
    model_name: Optional[str] = Field(None, description="Defaults to the configured model")


class TermSuggestionResponse(BaseModel):
    term: str
    suggestions: List[str]
