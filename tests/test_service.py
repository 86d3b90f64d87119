"""Service tests: health endpoints and configuration loading."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from seo_extractor import SERVICE_NAME, __version__
from seo_extractor.core.config import Settings
from seo_extractor.routes.health import get_git_sha
from seo_extractor.services.extractors.base import (
    DEFAULT_CHROME_SELECTORS,
    ExtractionConfig,
)


# ---------------------------------------------------------------------------
# Health endpoint tests
# ---------------------------------------------------------------------------


class TestHealthEndpoints:
    def test_root_health(self, client: TestClient) -> None:
        """GET /health returns 200 with status ok."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["name"] == SERVICE_NAME
        assert "git_sha" in data

    def test_api_v1_health(self, client: TestClient) -> None:
        """GET /api/v1/health returns 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__

    def test_version(self, client: TestClient) -> None:
        response = client.get("/api/v1/version")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == SERVICE_NAME
        assert data["version"] == __version__

    def test_git_sha_unknown_outside_repo(self) -> None:
        with patch(
            "subprocess.check_output",
            side_effect=subprocess.CalledProcessError(128, ["git"]),
        ):
            assert get_git_sha() == "unknown"

    def test_git_sha_is_shortened(self) -> None:
        with patch("subprocess.check_output", return_value=b"0123456789abcdef\n"):
            assert get_git_sha() == "0123456"


# ---------------------------------------------------------------------------
# Configuration tests
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FIRECRAWL_API_KEY", raising=False)
        s = Settings(_env_file=None)
        assert s.port == 15020
        assert s.firecrawl_api_key is None
        assert s.remote_timeout_seconds == 60.0
        assert s.min_accept_score == 50
        assert s.min_accept_text_length == 400

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-env-key")
        monkeypatch.setenv("MAX_REDIRECTS", "3")
        s = Settings(_env_file=None)
        assert s.firecrawl_api_key == "fc-env-key"
        assert s.max_redirects == 3

    @pytest.mark.parametrize(("raw", "expected"), [("debug", "DEBUG"), (" warning ", "WARNING")])
    def test_log_level_normalized(self, raw: str, expected: str) -> None:
        assert Settings(_env_file=None, log_level=raw).log_level == expected

    def test_invalid_log_level_falls_back_to_info(self) -> None:
        s = Settings(_env_file=None, log_level="chatty")
        assert s.log_level == "INFO"
        assert s.get_log_level_int() == 20

    @pytest.mark.parametrize(
        "raw",
        ['[".promo", "#newsletter"]', ".promo, #newsletter", ".promo,,#newsletter,"],
    )
    def test_chrome_selectors_parsing(self, raw: str) -> None:
        s = Settings(_env_file=None, chrome_selectors=raw)
        assert s.get_chrome_selectors() == [".promo", "#newsletter"]

    def test_cors_origins(self) -> None:
        s = Settings(_env_file=None, cors_origins="http://a.test,http://b.test")
        assert s.get_cors_origins() == ["http://a.test", "http://b.test"]


class TestExtractionConfigFromSettings:
    def test_maps_settings(self) -> None:
        s = Settings(
            _env_file=None,
            firecrawl_api_key="fc-key",
            local_fetch_timeout_seconds=15,
            min_accept_score=70,
            chrome_selectors=".promo",
        )
        config = ExtractionConfig.from_settings(s)
        assert config.firecrawl_api_key == "fc-key"
        assert config.local_fetch_timeout_seconds == 15
        assert config.min_accept_score == 70
        assert config.chrome_selectors == (".promo",)

    def test_empty_key_disables_remote(self) -> None:
        config = ExtractionConfig.from_settings(Settings(_env_file=None, firecrawl_api_key=""))
        assert config.firecrawl_api_key is None

    def test_default_chrome_selectors(self) -> None:
        config = ExtractionConfig.from_settings(Settings(_env_file=None))
        assert config.chrome_selectors == DEFAULT_CHROME_SELECTORS
        assert ".cookie-banner" in config.chrome_selectors
