"""Translation segment models shared by the stores and the AI call."""

from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlaggedTerm(BaseModel):
    """A span the model is unsure about, with a proposed alternative."""
    model_config = ConfigDict(frozen=True)

    term: str = Field(..., description="The specific word or phrase in the source text that is uncertain.")
    suggestion: str = Field(..., description="The proposed translation.")
    reason: str = Field("", description="Why this term is flagged (e.g., ambiguous, neologism, complex syntax).")


class RawSegment(BaseModel):
    """One segment as returned by the AI call, before an id is assigned."""
    source_text: str = Field(..., description="The original text segment (sentence or paragraph).")
    translated_text: str = Field(..., description="The translated text.")
    uncertainty_score: float = Field(..., description="A score from 0.0 (certain) to 1.0 (highly uncertain).")
    flagged_terms: List[FlaggedTerm] = Field(
        default_factory=list,
        description="List of specific terms that might be inaccurate or require review.",
    )


class DocumentTranslation(BaseModel):
    """Structured output of the document translation call, in document order."""
    segments: List[RawSegment] = Field(..., description="Translated segments in the order they appear in the document.")


class TranslationSegment(BaseModel):
    """A translated unit of the active document, paired with its source text."""
    model_config = ConfigDict(frozen=True)

    id: str
    source_text: str
    translated_text: str
    uncertainty_score: float = 0.0
    flagged_terms: Tuple[FlaggedTerm, ...] = ()

    @field_validator("uncertainty_score", mode="before")
    @classmethod
    def clamp_uncertainty(cls, value):
        if value is None:
            return 0.0
        return min(1.0, max(0.0, float(value)))

    @classmethod
    def from_raw(cls, segment_id: str, raw: RawSegment) -> "TranslationSegment":
        return cls(
            id=segment_id,
            source_text=raw.source_text,
            translated_text=raw.translated_text,
            uncertainty_score=raw.uncertainty_score,
            flagged_terms=tuple(raw.flagged_terms),
        )
