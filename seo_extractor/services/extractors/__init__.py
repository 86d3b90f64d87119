"""Content extraction module for SEO page analysis.

This module provides a two-tier extraction pipeline:
1. Firecrawl (remote) - Rendered HTML and metadata from the scraping API
2. Local fetch + readability - Direct fetch, chrome stripping, article isolation

Both tiers feed the same sanitizer and post-processor, so every result has
the same shape, the same security guarantees and the same quality scoring.

Usage:
    from seo_extractor.services.extractors import ExtractionPipeline

    pipeline = ExtractionPipeline(config)
    result = await pipeline.extract("https://example.com")
    print(result.quality_score, result.word_count)
"""

from seo_extractor.services.extractors.base import (
    ExtractionConfig,
    ExtractionResult,
    Heading,
    PageMetadata,
    RawPage,
)
from seo_extractor.services.extractors.exceptions import (
    AggregateExtractionFailure,
    ExtractionError,
    FetchError,
    InvalidUrlError,
    ParseError,
    RemoteExtractionError,
)
from seo_extractor.services.extractors.local import LocalExtractor
from seo_extractor.services.extractors.pipeline import ExtractionPipeline
from seo_extractor.services.extractors.postprocess import post_process, score_content
from seo_extractor.services.extractors.remote import RemoteExtractor
from seo_extractor.services.extractors.sanitizer import sanitize
from seo_extractor.services.extractors.url_guard import UrlGuard

__all__ = [
    # Base classes
    "ExtractionConfig",
    "ExtractionResult",
    "Heading",
    "PageMetadata",
    "RawPage",
    # Components
    "UrlGuard",
    "RemoteExtractor",
    "LocalExtractor",
    "ExtractionPipeline",
    "sanitize",
    "post_process",
    "score_content",
    # Exceptions
    "ExtractionError",
    "InvalidUrlError",
    "RemoteExtractionError",
    "FetchError",
    "ParseError",
    "AggregateExtractionFailure",
]
