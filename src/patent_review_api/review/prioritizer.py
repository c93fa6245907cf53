"""Review ordering and progress metrics derived from segment annotations.

Everything here is a pure function of the canonical segment sequence. The
prioritized view is a new list; the input is never reordered.
"""

from typing import Sequence

from ..models.segment import TranslationSegment


FLAGGED_TERM_WEIGHT = 0.5
# Aggregate counting and per-segment highlighting use different thresholds.
UNCERTAIN_THRESHOLD = 0.3
NEEDS_REVIEW_THRESHOLD = 0.4


def risk_score(segment: TranslationSegment) -> float:
    return segment.uncertainty_score + FLAGGED_TERM_WEIGHT * len(segment.flagged_terms)


def prioritize(segments: Sequence[TranslationSegment], enabled: bool) -> Sequence[TranslationSegment]:
    """Return the review view of ``segments``.

    With ``enabled`` false the input is returned as is. Otherwise a new list is
    sorted by descending risk score; ``sorted`` is stable, so equal scores keep
    their canonical relative order.
    """
    if not enabled:
        return segments
    return sorted(segments, key=risk_score, reverse=True)


def is_uncertain(segment: TranslationSegment) -> bool:
    return segment.uncertainty_score > UNCERTAIN_THRESHOLD or len(segment.flagged_terms) > 0


def needs_review(segment: TranslationSegment) -> bool:
    return segment.uncertainty_score > NEEDS_REVIEW_THRESHOLD or len(segment.flagged_terms) > 0


def uncertain_count(segments: Sequence[TranslationSegment]) -> int:
    return sum(1 for s in segments if is_uncertain(s))


def progress(segments: Sequence[TranslationSegment]) -> int:
    """Percentage of segments not counted as uncertain; 0 for an empty document."""
    total = len(segments)
    if total == 0:
        return 0
    return round_half_up(100 * (total - uncertain_count(segments)) / total)


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; progress rounds .5 up.
    return int(value + 0.5)
