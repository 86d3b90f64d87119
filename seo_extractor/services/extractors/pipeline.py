"""Extraction pipeline orchestrating the remote and local tiers."""

from __future__ import annotations

import logging

from seo_extractor.services.extractors.base import (
    ExtractionConfig,
    ExtractionResult,
    ExtractionSource,
    RawPage,
)
from seo_extractor.services.extractors.exceptions import (
    AggregateExtractionFailure,
    ExtractionError,
)
from seo_extractor.services.extractors.local import LocalExtractor
from seo_extractor.services.extractors.postprocess import post_process
from seo_extractor.services.extractors.remote import RemoteExtractor
from seo_extractor.services.extractors.sanitizer import sanitize
from seo_extractor.services.extractors.url_guard import UrlGuard

logger = logging.getLogger(__name__)

REMOTE_FAILED_WARNING = "Remote scrape failed; used local extraction."


class ExtractionPipeline:
    """Orchestrates single-URL extraction.

    Flow:
    1. Validate the URL (no fallback on failure)
    2. Remote scrape, accepted only if it passes the quality gate
    3. Local fetch + readability, returned unconditionally on success
    4. Both failed: AggregateExtractionFailure naming both causes

    The tiers run strictly one after another and never concurrently; all
    state is local to a single extract() call.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        *,
        guard: UrlGuard | None = None,
        remote: RemoteExtractor | None = None,
        local: LocalExtractor | None = None,
    ) -> None:
        self.config = config or ExtractionConfig()
        self.guard = guard or UrlGuard(self.config)
        self.remote = remote or RemoteExtractor(self.config)
        self.local = local or LocalExtractor(self.config, guard=self.guard)

    async def extract(self, raw_url: str) -> ExtractionResult:
        """Extract SEO content from a URL.

        Args:
            raw_url: User-supplied URL string.

        Returns:
            ExtractionResult from whichever tier produced the final content.

        Raises:
            InvalidUrlError: If the URL is malformed or unsafe.
            AggregateExtractionFailure: If both tiers failed.
        """
        url = await self.guard.validate(raw_url)

        remote_error: str | None = None
        fallback_warning: str | None = None

        # Tier 1: remote
        try:
            page = await self.remote.scrape(url)
            result = self._build_result(url, page, "remote")
        except ExtractionError as e:
            remote_error = str(e)
            fallback_warning = REMOTE_FAILED_WARNING
            logger.warning("Remote extraction failed for %s: %s", url, remote_error)
        except Exception as e:
            remote_error = _describe(e)
            fallback_warning = REMOTE_FAILED_WARNING
            logger.exception("Unexpected error in remote tier for %s", url)
        else:
            if self._is_acceptable(result):
                logger.info(
                    "Remote extraction accepted for %s (score=%d, words=%d)",
                    url,
                    result.quality_score,
                    result.word_count,
                )
                return result
            fallback_warning = (
                f"Remote scrape returned low-quality content (score "
                f"{result.quality_score}, {len(result.content_text)} chars); "
                "used local extraction."
            )
            logger.info(
                "Remote result for %s below quality gate (score=%d, chars=%d), "
                "falling back to local extraction",
                url,
                result.quality_score,
                len(result.content_text),
            )

        # Tier 2: local
        try:
            page = await self.local.fetch_and_extract(url)
            result = self._build_result(url, page, "local")
        except ExtractionError as e:
            local_error = str(e)
            logger.warning("Local extraction failed for %s: %s", url, local_error)
            raise AggregateExtractionFailure(remote_error, local_error) from e
        except Exception as e:
            logger.exception("Unexpected error in local tier for %s", url)
            raise AggregateExtractionFailure(remote_error, _describe(e)) from e

        if fallback_warning:
            result.warnings.append(fallback_warning)
        logger.info(
            "Local extraction returned for %s (score=%d, words=%d)",
            url,
            result.quality_score,
            result.word_count,
        )
        return result

    def _is_acceptable(self, result: ExtractionResult) -> bool:
        """Quality gate for remote results."""
        return (
            result.quality_score >= self.config.min_accept_score
            and len(result.content_text) > self.config.min_accept_text_length
        )

    def _build_result(
        self, input_url: str, page: RawPage, source: ExtractionSource
    ) -> ExtractionResult:
        """Sanitize one tier's page and derive the uniform result from it."""
        content_html = sanitize(page.html)
        processed = post_process(content_html)
        metadata = page.metadata

        return ExtractionResult(
            input_url=input_url,
            final_url=page.final_url or input_url,
            meta_title=metadata.title,
            meta_description=metadata.description,
            canonical_url=metadata.canonical_url or None,
            robots_meta=metadata.robots or None,
            headings=list(processed.headings),
            content_html=content_html,
            content_text=processed.content_text,
            word_count=processed.word_count,
            source=source,
            quality_score=processed.quality_score,
            warnings=list(processed.warnings),
        )


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"
