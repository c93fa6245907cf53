"""Session-level glossary of approved term pairs."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional

from ..models.glossary import GlossaryTerm, GlossaryTermCandidate, TermCategory


logger = logging.getLogger("patent_review_api.glossary")


SEED_TERMS = [
    GlossaryTermCandidate(source="embodiment", target="Ausführungsform", category=TermCategory.TECHNICAL),
    GlossaryTermCandidate(source="plurality", target="Mehrzahl", category=TermCategory.LEGAL),
    GlossaryTermCandidate(source="substantially", target="im Wesentlichen", category=TermCategory.LEGAL),
]


class GlossarySearch:
    """Restartable view over the entries matching a query.

    Each iteration scans the store afresh, so the view reflects additions and
    removals made after it was created.
    """

    def __init__(self, store: "GlossaryStore", query: str):
        self._store = store
        self._needle = (query or "").lower()

    def __iter__(self) -> Iterator[GlossaryTerm]:
        for term in self._store.all():
            if self._needle in term.source.lower() or self._needle in term.target.lower():
                yield term


class GlossaryStore:
    """Owns the glossary entries for the session, in insertion order."""

    def __init__(self, seed: Optional[Iterable[GlossaryTermCandidate]] = None):
        self._terms: List[GlossaryTerm] = []
        for candidate in seed or ():
            self.add(candidate)

    def __len__(self) -> int:
        return len(self._terms)

    def add(self, candidate: GlossaryTermCandidate) -> GlossaryTerm:
        """Create a term with a fresh id and timestamp and append it."""
        term = GlossaryTerm(
            id=uuid.uuid4().hex,
            source=candidate.source,
            target=candidate.target,
            category=candidate.category,
            added_at=datetime.now(timezone.utc),
            context=candidate.context,
        )
        self._terms.append(term)
        logger.info("Glossary term added: %s -> %s (%s)", term.source, term.target, term.category.value)
        return term

    def remove(self, term_id: str) -> None:
        """Remove the entry with ``term_id``; unknown ids are ignored."""
        remaining = [t for t in self._terms if t.id != term_id]
        if len(remaining) == len(self._terms):
            logger.debug("Glossary remove ignored, unknown id %s", term_id)
            return
        self._terms = remaining
        logger.info("Glossary term removed: %s", term_id)

    def search(self, query: str = "") -> GlossarySearch:
        return GlossarySearch(self, query)

    def all(self) -> List[GlossaryTerm]:
        return list(self._terms)


def create_glossary_store(seed: bool = True) -> GlossaryStore:
    """Build a store, optionally pre-populated with the example entries."""
    return GlossaryStore(SEED_TERMS if seed else None)
