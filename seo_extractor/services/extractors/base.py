"""Base types for content extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from seo_extractor.core.config import Settings

ExtractionSource = Literal["remote", "local"]

# Class/id selectors for page chrome removed before readability scoring
DEFAULT_CHROME_SELECTORS: tuple[str, ...] = (
    ".header",
    "#header",
    ".site-header",
    ".nav",
    ".navbar",
    ".menu",
    "#menu",
    ".footer",
    "#footer",
    ".site-footer",
    ".cookie",
    ".cookies",
    ".cookie-banner",
    ".consent",
    ".gdpr",
    ".modal",
    ".popup",
)


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for the extraction pipeline."""

    firecrawl_api_key: str | None = None
    firecrawl_api_url: str = "https://api.firecrawl.dev"
    remote_timeout_seconds: float = 60.0
    local_fetch_timeout_seconds: float = 60.0
    max_redirects: int = 10
    max_response_bytes: int = 20 * 1024 * 1024
    max_url_length: int = 2048
    min_accept_score: int = 50
    min_accept_text_length: int = 400
    user_agent: str = "Mozilla/5.0 (compatible; SEOExtractor/1.0)"
    chrome_selectors: tuple[str, ...] = DEFAULT_CHROME_SELECTORS

    @classmethod
    def from_settings(cls, settings: Settings) -> ExtractionConfig:
        """Build an immutable extraction config from service settings."""
        return cls(
            firecrawl_api_key=settings.firecrawl_api_key or None,
            firecrawl_api_url=settings.firecrawl_api_url,
            remote_timeout_seconds=settings.remote_timeout_seconds,
            local_fetch_timeout_seconds=settings.local_fetch_timeout_seconds,
            max_redirects=settings.max_redirects,
            max_response_bytes=settings.max_response_bytes,
            max_url_length=settings.max_url_length,
            min_accept_score=settings.min_accept_score,
            min_accept_text_length=settings.min_accept_text_length,
            user_agent=settings.user_agent,
            chrome_selectors=tuple(settings.get_chrome_selectors())
            or DEFAULT_CHROME_SELECTORS,
        )


@dataclass(frozen=True)
class PageMetadata:
    """SEO metadata captured by an extractor tier."""

    title: str = ""
    description: str = ""
    canonical_url: str = ""
    robots: str = ""


@dataclass(frozen=True)
class RawPage:
    """Unsanitized output of one extractor tier."""

    html: str
    final_url: str
    metadata: PageMetadata = field(default_factory=PageMetadata)


@dataclass(frozen=True)
class Heading:
    """A heading from the extracted content, in document order."""

    tag: str  # h1..h6
    text: str

    @property
    def level(self) -> int:
        return int(self.tag[1:])


@dataclass
class ExtractionResult:
    """Uniform result of a single-URL extraction."""

    input_url: str
    final_url: str
    meta_title: str
    meta_description: str
    headings: list[Heading]
    content_html: str
    content_text: str
    word_count: int
    source: ExtractionSource
    quality_score: int
    canonical_url: str | None = None
    robots_meta: str | None = None
    warnings: list[str] = field(default_factory=list)
