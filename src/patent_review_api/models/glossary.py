from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TermCategory(str, Enum):
    """Category of an approved glossary term."""
    TECHNICAL = "technical"
    LEGAL = "legal"
    GENERAL = "general"


class GlossaryTermCandidate(BaseModel):
    """A term pair submitted for addition to the glossary."""
    source: str = Field(..., description="Term as it appears in the source document.")
    target: str = Field(..., description="Approved translation of the term.")
    category: TermCategory = Field(TermCategory.GENERAL, description="Term category.")
    context: Optional[str] = Field(None, description="Optional usage note or example context.")


class GlossaryTerm(BaseModel):
    """An approved source/target term pair. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Store-generated unique identifier.")
    source: str
    target: str
    category: TermCategory = TermCategory.GENERAL
    added_at: datetime
    context: Optional[str] = None
