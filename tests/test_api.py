"""Tests for the review API endpoints."""

import pytest
from unittest.mock import patch, AsyncMock, MagicMock

from patent_review_api.api.dependencies import get_controller
from patent_review_api.models.segment import RawSegment
from patent_review_api.workflows.controller import WorkflowController


PDF_BYTES = b"%PDF-1.4 fake patent"
TRANSLATOR = 'patent_review_api.routers.documents.DocumentTranslator'
UPLOAD_READ = "starlette.datastructures.UploadFile.read"


def upload(client, filename="EP1234567.pdf", content=PDF_BYTES, content_type="application/pdf", **data):
    return client.post("/documents", files={"file": (filename, content, content_type)}, data=data)


@pytest.fixture
def small_limit(app):
    """App whose uploads are capped at 16 bytes."""
    app.dependency_overrides[get_controller] = lambda: WorkflowController(app.state.session, max_upload_bytes=16)
    yield app
    app.dependency_overrides.pop(get_controller, None)


@pytest.fixture
def loaded(client, raw_segments):
    """Client with the sample document already processed."""
    with patch(TRANSLATOR) as mock_translator:
        mock_translator.return_value = AsyncMock(return_value=raw_segments)
        response = upload(client)
    assert response.status_code == 200
    return client


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert "available_models" in data

    def test_get_models(self, client):
        response = client.get("/models")
        assert response.status_code == 200
        assert isinstance(response.json(), dict)


class TestDocumentUpload:
    """Test document upload and processing."""

    @patch(TRANSLATOR)
    def test_upload_success(self, mock_translator, client, raw_segments):
        translate = AsyncMock(return_value=raw_segments)
        mock_translator.return_value = translate

        response = upload(client, target_language="French")
        assert response.status_code == 200

        data = response.json()
        assert data["document"]["filename"] == "EP1234567.pdf"
        assert data["document"]["status"] == "ready"
        assert data["document"]["target_language"] == "French"
        assert [s["source_text"] for s in data["segments"]] == [r.source_text for r in raw_segments]
        assert data["stats"] == {"total": 3, "uncertain_count": 2, "progress": 33}
        assert translate.call_args[0][3] == "French"

    @patch(TRANSLATOR)
    def test_default_model_and_language(self, mock_translator, client):
        mock_translator.return_value = AsyncMock(return_value=[])

        response = upload(client)

        assert response.status_code == 200
        assert response.json()["document"]["target_language"] == "German"
        assert mock_translator.call_args[0][0] == "gemini-2.5-flash"

    def test_unsupported_model(self, client):
        response = upload(client, model_name="gpt-4")
        assert response.status_code == 400
        assert "not supported" in response.json()["detail"]

    @patch(TRANSLATOR)
    def test_wrong_file_type_rejected(self, mock_translator, client, session):
        response = upload(client, filename="notes.txt", content=b"hello", content_type="text/plain")

        assert response.status_code == 415
        mock_translator.return_value.assert_not_called()
        assert session.document is None
        assert session.is_processing is False

    def test_empty_file_rejected(self, client):
        response = upload(client, content=b"")
        assert response.status_code == 400

    @patch(TRANSLATOR)
    def test_wrong_file_type_rejected_before_reading(self, mock_translator, client):
        with patch(UPLOAD_READ, new_callable=AsyncMock) as mock_read:
            response = upload(client, filename="scan.png", content=b"\x89PNG", content_type="image/png")

        assert response.status_code == 415
        mock_read.assert_not_awaited()
        mock_translator.assert_not_called()

    @patch(TRANSLATOR)
    def test_oversized_file_rejected_before_reading(self, mock_translator, small_limit, client, session):
        with patch(UPLOAD_READ, new_callable=AsyncMock) as mock_read:
            response = upload(client, content=b"%PDF-1.4" + b"x" * 64)

        assert response.status_code == 413
        assert "16 bytes" in response.json()["detail"]
        mock_read.assert_not_awaited()
        mock_translator.assert_not_called()
        assert session.generation == 0

    @patch(TRANSLATOR)
    def test_upload_within_limit_read_up_to_one_byte_past_it(self, mock_translator, small_limit, client):
        mock_translator.return_value = AsyncMock(return_value=[])
        with patch(UPLOAD_READ, new_callable=AsyncMock, return_value=PDF_BYTES[:16]) as mock_read:
            response = upload(client, content=PDF_BYTES[:16])

        assert response.status_code == 200
        mock_read.assert_awaited_once_with(17)

    @patch(TRANSLATOR)
    def test_translation_failure_keeps_previous_document(self, mock_translator, loaded, session):
        before = session.segments.get_all()
        mock_translator.return_value = AsyncMock(side_effect=RuntimeError("503 Service Unavailable"))

        response = upload(loaded, filename="other.pdf")

        assert response.status_code == 502
        assert "Failed to process document" in response.json()["detail"]
        assert session.segments.get_all() == before
        assert session.is_processing is False

        state = loaded.get("/documents/current").json()
        assert state["document"]["filename"] == "EP1234567.pdf"
        assert state["document"]["status"] == "ready"
        assert state["latest_upload"]["filename"] == "other.pdf"
        assert state["latest_upload"]["status"] == "error"
        assert "503 Service Unavailable" in state["last_error"]
        assert state["is_processing"] is False

    @patch(TRANSLATOR)
    def test_current_document_matches_served_segments_after_failure(self, mock_translator, loaded):
        mock_translator.return_value = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        assert upload(loaded, filename="other.pdf").status_code == 502

        state = loaded.get("/documents/current").json()
        segments = loaded.get("/segments").json()["segments"]
        assert state["document"]["segment_count"] == len(segments)
        export = loaded.get("/documents/export")
        assert state["document"]["filename"].rsplit(".", 1)[0] in export.headers["content-disposition"]

    @patch(TRANSLATOR)
    def test_missing_credential_reported(self, mock_translator, client):
        mock_translator.return_value = AsyncMock(side_effect=ValueError("GEMINI_API_KEY is required for Gemini models"))

        response = upload(client)

        assert response.status_code == 502
        assert "GEMINI_API_KEY" in response.json()["detail"]

    def test_current_document_before_upload(self, client):
        response = client.get("/documents/current")
        assert response.json() == {
            "document": None,
            "latest_upload": None,
            "last_error": None,
            "is_processing": False,
        }


class TestSegments:
    """Test segment listing, prioritization and editing."""

    def test_original_order(self, loaded):
        data = loaded.get("/segments").json()
        assert data["prioritized"] is False
        assert [s["source_text"][:6] for s in data["segments"]] == ["[0001]", "[0002]", "[0003]"]

    def test_prioritized_order(self, loaded):
        data = loaded.get("/segments", params={"prioritize": "true"}).json()
        assert data["prioritized"] is True
        assert [s["source_text"][:6] for s in data["segments"]] == ["[0002]", "[0001]", "[0003]"]
        assert [s["risk_score"] for s in data["segments"]] == pytest.approx([0.6, 0.5, 0.0])
        # Stats do not depend on the view
        assert data["stats"] == loaded.get("/segments/stats").json()

    def test_needs_review_flags(self, loaded):
        data = loaded.get("/segments").json()
        assert [s["needs_review"] for s in data["segments"]] == [True, True, False]

    def test_edit_segment(self, loaded, session):
        segment_id = session.segments.get_all()[1].id

        response = loaded.put(f"/segments/{segment_id}", json={"translated_text": "Überarbeitet."})

        assert response.status_code == 200
        data = response.json()
        assert data["translated_text"] == "Überarbeitet."
        assert data["uncertainty_score"] == 0
        assert data["flagged_terms"] == []
        assert data["needs_review"] is False
        assert loaded.get("/segments/stats").json()["uncertain_count"] == 1

    def test_edit_unknown_segment_is_ignored(self, loaded, session):
        before = session.segments.get_all()

        response = loaded.put("/segments/seg-missing", json={"translated_text": "x"})

        assert response.status_code == 200
        assert response.json() is None
        assert session.segments.get_all() == before

    def test_empty_workspace(self, client):
        data = client.get("/segments").json()
        assert data["segments"] == []
        assert data["stats"] == {"total": 0, "uncertain_count": 0, "progress": 0}


class TestExport:
    """Test plain-text export."""

    def test_export_in_original_order(self, loaded, raw_segments):
        loaded.get("/segments", params={"prioritize": "true"})

        response = loaded.get("/documents/export")

        assert response.status_code == 200
        assert response.text == "\n\n".join(r.translated_text for r in raw_segments)
        assert response.headers["content-type"].startswith("text/plain")
        assert "translated_EP1234567.pdf.txt" in response.headers["content-disposition"]

    def test_export_includes_edits(self, loaded, session):
        first_id = session.segments.get_all()[0].id
        loaded.put(f"/segments/{first_id}", json={"translated_text": "Erster Absatz."})

        response = loaded.get("/documents/export")

        assert response.text.split("\n\n")[0] == "Erster Absatz."

    def test_export_without_document(self, client):
        response = client.get("/documents/export")
        assert response.text == ""
        assert "translated_Untitled%20Patent.txt" in response.headers["content-disposition"]


class TestGlossaryEndpoints:
    """Test glossary management endpoints."""

    def test_seeded_glossary(self, client):
        terms = client.get("/glossary").json()["terms"]
        assert [t["source"] for t in terms] == ["embodiment", "plurality", "substantially"]

    def test_search_case_insensitive(self, client):
        client.post("/glossary", json={"source": "fastener", "target": "Befestigungselement"})
        terms = client.get("/glossary", params={"q": "BEFESTIGUNG"}).json()["terms"]
        assert [t["source"] for t in terms] == ["fastener"]

    def test_search_umlaut(self, client):
        terms = client.get("/glossary", params={"q": "ausfü"}).json()["terms"]
        assert [t["target"] for t in terms] == ["Ausführungsform"]

    def test_add_term(self, client):
        response = client.post("/glossary", json={"source": "claim", "target": "Anspruch"})

        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "general"
        assert data["id"]
        assert client.get("/glossary").json()["terms"][-1]["id"] == data["id"]

    def test_add_term_with_category(self, client):
        response = client.post("/glossary", json={"source": "prior art", "target": "Stand der Technik", "category": "legal"})
        assert response.json()["category"] == "legal"

    def test_add_rejects_empty_fields(self, client):
        response = client.post("/glossary", json={"source": "", "target": "Anspruch"})
        assert response.status_code == 422
        assert len(client.get("/glossary").json()["terms"]) == 3

    def test_promote_flagged_term(self, loaded):
        response = loaded.post("/glossary/promote", json={"term": "embodiment", "suggestion": "Ausführungsbeispiel"})

        assert response.status_code == 201
        assert response.json()["category"] == "technical"
        assert loaded.get("/glossary").json()["terms"][-1]["target"] == "Ausführungsbeispiel"

    def test_remove_term(self, client):
        term_id = client.get("/glossary").json()["terms"][0]["id"]

        response = client.delete(f"/glossary/{term_id}")

        assert response.status_code == 204
        assert term_id not in [t["id"] for t in client.get("/glossary").json()["terms"]]

    def test_remove_unknown_term(self, client):
        response = client.delete("/glossary/does-not-exist")
        assert response.status_code == 204
        assert len(client.get("/glossary").json()["terms"]) == 3

    @patch(TRANSLATOR)
    def test_glossary_sent_with_next_upload(self, mock_translator, client):
        client.post("/glossary/promote", json={"term": "clip", "suggestion": "Klammer"})
        translate = AsyncMock(return_value=[])
        mock_translator.return_value = translate

        upload(client)

        glossary = translate.call_args[0][2]
        assert ("clip", "Klammer") in [(t.source, t.target) for t in glossary]


class TestTermSuggestions:
    """Test the term suggestion endpoint."""

    @patch('patent_review_api.routers.terms.suggest_term_improvement', new_callable=AsyncMock)
    @patch('patent_review_api.routers.terms.get_model_router')
    def test_suggest(self, mock_router, mock_suggest, client):
        mock_router.return_value.validate_model_availability.return_value = True
        mock_suggest.return_value = ["Mehrzahl", "Vielzahl", "Anzahl"]

        response = client.post("/terms/suggest", json={"term": "plurality", "context": "a plurality of clips"})

        assert response.status_code == 200
        assert response.json() == {"term": "plurality", "suggestions": ["Mehrzahl", "Vielzahl", "Anzahl"]}
        assert mock_suggest.call_args[0][1:] == ("plurality", "a plurality of clips", "German")

    @patch('patent_review_api.routers.terms.get_model_router')
    def test_suggest_unavailable_model(self, mock_router, client):
        mock_router.return_value.validate_model_availability.return_value = False
        mock_router.return_value.get_available_models.return_value = {}

        response = client.post("/terms/suggest", json={"term": "plurality"})

        assert response.status_code == 400
        assert "not available" in response.json()["detail"]
