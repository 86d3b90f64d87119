"""Shared pytest fixtures for unit and API tests.

No test in this suite touches the network or real DNS: HTTP calls are
patched on ``httpx.AsyncClient`` (or served by ``httpx.MockTransport``) and
hostname resolution is patched on ``UrlGuard._resolve``.

Usage in new test files:
    async def test_something(pipeline_factory):
        pipeline = pipeline_factory(remote_page=page, local_page=FetchError("boom"))
        result = await pipeline.extract("https://example.com/")
"""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from seo_extractor.main import app
from seo_extractor.routes.extract import get_pipeline
from seo_extractor.services.extractors import (
    ExtractionConfig,
    ExtractionPipeline,
    LocalExtractor,
    RawPage,
    RemoteExtractor,
    UrlGuard,
)

TEST_URL = "https://example.com/article"


# ------------------------------------------------------------------
# Pipeline fixtures
# ------------------------------------------------------------------


@pytest.fixture()
def config() -> ExtractionConfig:
    """Extraction config with a dummy API key so the remote tier is enabled."""
    return ExtractionConfig(firecrawl_api_key="fc-test-key")


@pytest.fixture()
def fake_guard() -> AsyncMock:
    """UrlGuard stand-in that accepts and returns TEST_URL."""
    guard = AsyncMock(spec=UrlGuard)
    guard.validate.return_value = TEST_URL
    return guard


@pytest.fixture()
def pipeline_factory(config, fake_guard) -> Callable[..., ExtractionPipeline]:
    """Return a helper that builds a pipeline around mocked tiers.

    Pass a RawPage or an exception for each tier; the mocks are available on
    the returned pipeline as ``pipeline.remote`` / ``pipeline.local``.
    """

    def _build(
        remote_page: RawPage | Exception | None = None,
        local_page: RawPage | Exception | None = None,
        guard: UrlGuard | AsyncMock | None = None,
    ) -> ExtractionPipeline:
        remote = AsyncMock(spec=RemoteExtractor)
        if isinstance(remote_page, Exception):
            remote.scrape.side_effect = remote_page
        else:
            remote.scrape.return_value = remote_page

        local = AsyncMock(spec=LocalExtractor)
        if isinstance(local_page, Exception):
            local.fetch_and_extract.side_effect = local_page
        else:
            local.fetch_and_extract.return_value = local_page

        return ExtractionPipeline(
            config,
            guard=guard or fake_guard,
            remote=remote,
            local=local,
        )

    return _build


# ------------------------------------------------------------------
# API fixtures
# ------------------------------------------------------------------


@pytest.fixture()
def client() -> TestClient:
    """TestClient that does not re-raise server exceptions."""
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture()
def use_pipeline() -> Callable[[ExtractionPipeline], None]:
    """Return a helper that makes the API use the given pipeline."""

    def _use(pipeline: ExtractionPipeline) -> None:
        app.dependency_overrides[get_pipeline] = lambda: pipeline

    yield _use
    app.dependency_overrides.clear()
