"""Helper functions for turning segments into workspace views."""

from typing import List, Sequence

from ..models.segment import TranslationSegment
from ..review.prioritizer import needs_review, progress, risk_score, uncertain_count
from ..schemas.documents import ReviewStats, SegmentView


def build_segment_views(segments: Sequence[TranslationSegment]) -> List[SegmentView]:
    """Annotate segments with risk score and review flag, keeping the given order."""
    return [
        SegmentView(
            id=s.id,
            source_text=s.source_text,
            translated_text=s.translated_text,
            uncertainty_score=s.uncertainty_score,
            flagged_terms=list(s.flagged_terms),
            risk_score=risk_score(s),
            needs_review=needs_review(s),
        )
        for s in segments
    ]


def build_stats(canonical: Sequence[TranslationSegment]) -> ReviewStats:
    return ReviewStats(
        total=len(canonical),
        uncertain_count=uncertain_count(canonical),
        progress=progress(canonical),
    )
