"""Error handling tests.

Validates that every failure path returns the right HTTP status code and the
flat ``{"error": "..."}`` body, and that internal details never leak from
unexpected exceptions.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from seo_extractor.exceptions import ExportGenerationError
from seo_extractor.services.export.markdown import MarkdownExporter
from seo_extractor.services.extractors import ExtractionPipeline

MINIMAL_RESULT = {
    "inputUrl": "https://example.com/",
    "finalUrl": "https://example.com/",
    "wordCount": 0,
    "source": "local",
    "qualityScore": 25,
}


# ------------------------------------------------------------------
# 400 tests
# ------------------------------------------------------------------


class TestBadRequestErrors:
    def test_non_json_body_returns_400(self, client: TestClient):
        resp = client.post(
            "/api/extract",
            content="url=https://example.com",
            headers={"Content-Type": "text/plain"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid request.")

    def test_wrong_type_returns_400(self, client: TestClient):
        resp = client.post("/api/extract", json={"url": 42})
        assert resp.status_code == 400

    def test_invalid_heading_tag_returns_400(self, client: TestClient):
        body = {**MINIMAL_RESULT, "headings": [{"tag": "h7", "text": "Nope"}]}
        resp = client.post("/api/export/markdown", json=body)
        assert resp.status_code == 400

    def test_score_out_of_range_returns_400(self, client: TestClient):
        body = {**MINIMAL_RESULT, "qualityScore": 101}
        resp = client.post("/api/export/docx", json=body)
        assert resp.status_code == 400


# ------------------------------------------------------------------
# 500 tests
# ------------------------------------------------------------------


class TestServerErrors:
    def test_unexpected_exception_returns_generic_500(
        self, client: TestClient, use_pipeline
    ):
        pipeline = AsyncMock(spec=ExtractionPipeline)
        pipeline.extract.side_effect = RuntimeError("secret internal detail")
        use_pipeline(pipeline)

        resp = client.post("/api/extract", json={"url": "https://example.com/"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "An unexpected error occurred."}
        assert "secret" not in resp.text

    def test_export_generation_failure_returns_500(self, client: TestClient):
        with patch.object(
            MarkdownExporter,
            "export",
            side_effect=ExportGenerationError("Markdown conversion failed"),
        ):
            resp = client.post("/api/export/markdown", json=MINIMAL_RESULT)

        assert resp.status_code == 500
        assert "Markdown conversion failed" in resp.json()["error"]
