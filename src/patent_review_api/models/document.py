from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class DocumentInfo(BaseModel):
    """Metadata of the document currently loaded in the workspace."""
    id: str
    filename: str
    upload_date: datetime
    status: DocumentStatus = DocumentStatus.PROCESSING
    target_language: str
    segment_count: int = Field(0, ge=0)
