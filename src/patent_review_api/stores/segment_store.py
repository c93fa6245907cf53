"""Canonical segment collection for the active document."""

import itertools
import logging
from typing import Iterable, List, Tuple

from ..models.segment import RawSegment, TranslationSegment


logger = logging.getLogger("patent_review_api.segments")


class SegmentStore:
    """Owns the segments of the active document in canonical order.

    The collection is replaced wholesale by ``replace_all``; ``edit`` is the
    only way a single segment changes afterwards.
    """

    def __init__(self):
        self._segments: Tuple[TranslationSegment, ...] = ()
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._segments)

    def next_id(self) -> str:
        """Return a segment id never handed out before by this store."""
        return f"seg-{next(self._ids)}"

    def assign_ids(self, raw_segments: Iterable[RawSegment]) -> List[TranslationSegment]:
        """Turn AI output into segments with fresh ids, keeping the received order."""
        return [TranslationSegment.from_raw(self.next_id(), raw) for raw in raw_segments]

    def replace_all(self, segments: Iterable[TranslationSegment]) -> None:
        new_segments = tuple(segments)
        ids = [s.id for s in new_segments]
        if len(set(ids)) != len(ids):
            raise ValueError("Segment ids must be unique within a document")
        self._segments = new_segments
        logger.info("Installed %d segments", len(new_segments))

    def edit(self, segment_id: str, new_text: str) -> None:
        """Replace a segment's translation and clear its AI annotations.

        Unknown ids are ignored.
        """
        for index, segment in enumerate(self._segments):
            if segment.id == segment_id:
                edited = segment.model_copy(update={
                    "translated_text": new_text,
                    "uncertainty_score": 0.0,
                    "flagged_terms": (),
                })
                self._segments = self._segments[:index] + (edited,) + self._segments[index + 1:]
                return
        logger.debug("Edit ignored, unknown segment id %s", segment_id)

    def get(self, segment_id: str):
        for segment in self._segments:
            if segment.id == segment_id:
                return segment
        return None

    def get_all(self) -> Tuple[TranslationSegment, ...]:
        return self._segments
