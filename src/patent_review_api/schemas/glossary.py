"""Glossary API schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field
from ..models.glossary import GlossaryTerm, TermCategory


class GlossaryAddRequest(BaseModel):
    """Manual glossary addition; both sides of the pair are required."""
    source: str = Field(..., min_length=1, description="Source-language term")
    target: str = Field(..., min_length=1, description="Approved translation")
    category: TermCategory = Field(TermCategory.GENERAL, description="Term category")
    context: Optional[str] = Field(None, description="Optional usage note")


class GlossaryPromoteRequest(BaseModel):
    """Promotion of a flagged term's suggestion into the glossary."""
    term: str = Field(..., description="Flagged source term")
    suggestion: str = Field(..., description="Suggested translation to approve")


class GlossaryListResponse(BaseModel):
    query: str = ""
    terms: List[GlossaryTerm]
