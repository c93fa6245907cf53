"""Plain-text export of the translated document."""

from typing import Optional, Sequence

from ..models.segment import TranslationSegment


SEGMENT_SEPARATOR = "\n\n"
UNTITLED_DOCUMENT = "Untitled Patent"


def export_text(segments: Sequence[TranslationSegment]) -> str:
    """Join translations in the order given, one blank line between segments.

    Callers pass the canonical sequence from the segment store, never a
    prioritized view.
    """
    return SEGMENT_SEPARATOR.join(s.translated_text for s in segments)


def export_filename(original_filename: Optional[str]) -> str:
    return f"translated_{original_filename or UNTITLED_DOCUMENT}.txt"
