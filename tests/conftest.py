"""Shared fixtures for the patent review API tests."""

import pytest
from fastapi.testclient import TestClient

from patent_review_api.api.main import create_app
from patent_review_api.api.dependencies import router_limiter
from patent_review_api.models.segment import FlaggedTerm, RawSegment, TranslationSegment


@pytest.fixture
def app():
    """Fresh app with its own session and rate limiting disabled."""
    application = create_app()
    application.dependency_overrides[router_limiter] = lambda: None
    return application


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def session(app):
    return app.state.session


@pytest.fixture
def flag():
    return FlaggedTerm(term="embodiment", suggestion="Ausführungsform", reason="ambiguous in claims")


@pytest.fixture
def raw_segments(flag):
    """AI output for a three-paragraph patent excerpt."""
    return [
        RawSegment(
            source_text="[0001] The invention relates to a fastening device.",
            translated_text="[0001] Die Erfindung betrifft eine Befestigungsvorrichtung.",
            uncertainty_score=0.5,
            flagged_terms=[],
        ),
        RawSegment(
            source_text="[0002] In one embodiment, the clip is substantially flat.",
            translated_text="[0002] In einer Ausführungsform ist die Klammer im Wesentlichen flach.",
            uncertainty_score=0.1,
            flagged_terms=[flag],
        ),
        RawSegment(
            source_text="[0003] A plurality of clips may be provided.",
            translated_text="[0003] Es kann eine Mehrzahl von Klammern vorgesehen sein.",
            uncertainty_score=0.0,
            flagged_terms=[],
        ),
    ]


@pytest.fixture
def segments(raw_segments):
    """Canonical segments with ids seg-1..seg-3."""
    return [TranslationSegment.from_raw(f"seg-{i}", raw) for i, raw in enumerate(raw_segments, start=1)]


def make_segment(segment_id, uncertainty=0.0, flags=0, text=None):
    """Build a segment with ``flags`` placeholder flagged terms."""
    return TranslationSegment(
        id=segment_id,
        source_text=f"source {segment_id}",
        translated_text=text if text is not None else f"translated {segment_id}",
        uncertainty_score=uncertainty,
        flagged_terms=[FlaggedTerm(term=f"t{i}", suggestion=f"s{i}", reason="") for i in range(flags)],
    )
