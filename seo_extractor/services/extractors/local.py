"""Local extraction tier: direct fetch, chrome stripping, readability.

Order matters here:
1. metadata is read from the untouched DOM,
2. page chrome is removed,
3. readability scores what is left.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable
from soupsieve import SelectorSyntaxError

from seo_extractor.services.extractors.base import (
    ExtractionConfig,
    PageMetadata,
    RawPage,
)
from seo_extractor.services.extractors.exceptions import (
    FetchError,
    InvalidUrlError,
    ParseError,
)

if TYPE_CHECKING:
    from seo_extractor.services.extractors.url_guard import UrlGuard

logger = logging.getLogger(__name__)

CHROME_TAGS = ("script", "style", "noscript", "iframe", "header", "nav", "footer", "aside")
CHROME_ROLES = ("navigation", "banner", "contentinfo")


class LocalExtractor:
    """Fetch a page directly and reduce it to its main article HTML.

    When a UrlGuard is supplied, every redirect hop is re-validated so a
    public URL cannot bounce the fetch onto a private address.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        guard: UrlGuard | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ExtractionConfig()
        self.guard = guard
        self._transport = transport

    async def fetch_and_extract(self, url: str) -> RawPage:
        """Fetch a validated URL and extract its main content.

        Args:
            url: URL already accepted by UrlGuard.

        Returns:
            RawPage with unsanitized article HTML (possibly empty when no
            article could be isolated) and metadata from the raw DOM.

        Raises:
            FetchError: If the fetch fails or returns a non-2xx status.
        """
        html, final_url = await self._fetch(url)

        soup = BeautifulSoup(html, "lxml")
        metadata = extract_metadata(soup)
        strip_chrome(soup, self.config.chrome_selectors)

        try:
            content_html = extract_article(str(soup), final_url)
        except ParseError as e:
            logger.info("No article isolated for %s: %s", final_url, e)
            content_html = ""

        return RawPage(html=content_html, final_url=final_url, metadata=metadata)

    async def _fetch(self, url: str) -> tuple[str, str]:
        """GET the URL following redirects.

        Returns:
            Tuple of (html, final_url).

        Raises:
            FetchError: On non-2xx status, timeout, transport error, disallowed
                redirect target, or oversized body.
        """
        event_hooks = {"request": [self._check_hop]} if self.guard else None

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.local_fetch_timeout_seconds),
                follow_redirects=True,
                max_redirects=self.config.max_redirects,
                event_hooks=event_hooks,
                transport=self._transport,
            ) as client:
                async with client.stream(
                    "GET",
                    url,
                    headers={"User-Agent": self.config.user_agent},
                ) as response:
                    if not response.is_success:
                        raise FetchError(f"Fetch failed ({response.status_code})")

                    body = await self._read_limited(response)
                    return _decode(body, response.charset_encoding), str(response.url)

        except httpx.TimeoutException as e:
            raise FetchError(
                f"Fetch timeout after {self.config.local_fetch_timeout_seconds:g}s"
            ) from e
        except httpx.TooManyRedirects as e:
            raise FetchError(
                f"Too many redirects (max {self.config.max_redirects})"
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"Fetch error: {e}") from e
        except InvalidUrlError as e:
            raise FetchError(f"Redirect to disallowed target: {e}") from e

    async def _read_limited(self, response: httpx.Response) -> bytes:
        """Read the body, aborting as soon as it exceeds max_response_bytes.

        Raises:
            FetchError: If Content-Length or the bytes read so far exceed
                the limit.
        """
        limit = self.config.max_response_bytes

        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            raise FetchError(f"Response size {declared} exceeds maximum {limit}")

        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > limit:
                raise FetchError(
                    f"Response size exceeds maximum {limit} (read {len(body)} bytes)"
                )
        return bytes(body)

    async def _check_hop(self, request: httpx.Request) -> None:
        await self.guard.validate(str(request.url))


def _decode(body: bytes, charset: str | None) -> str:
    try:
        return body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        # unknown charset label in Content-Type
        return body.decode("utf-8", errors="replace")


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    content = tag.get("content") or ""
    return content.strip() if isinstance(content, str) else ""


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Read title, description, canonical and robots from the raw DOM."""
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    description = _meta_content(soup, name="description") or _meta_content(
        soup, property="og:description"
    )

    canonical = ""
    link = soup.find("link", rel="canonical")
    if link is not None:
        href = link.get("href") or ""
        canonical = href.strip() if isinstance(href, str) else ""

    return PageMetadata(
        title=title,
        description=description,
        canonical_url=canonical,
        robots=_meta_content(soup, name="robots"),
    )


def _remove(elements) -> None:
    for element in elements:
        # nested matches are already gone with their ancestor
        if not element.decomposed:
            element.decompose()


def strip_chrome(soup: BeautifulSoup, selectors: tuple[str, ...]) -> None:
    """Remove scripts, landmarks, ARIA chrome roles and denylisted selectors."""
    _remove(soup.find_all(list(CHROME_TAGS)))
    _remove(soup.find_all(attrs={"role": list(CHROME_ROLES)}))

    for selector in selectors:
        try:
            matches = soup.select(selector)
        except SelectorSyntaxError:
            logger.warning("Skipping invalid chrome selector: %r", selector)
            continue
        _remove(matches)


def extract_article(html: str, url: str) -> str:
    """Isolate the main article HTML with readability.

    Raises:
        ParseError: If the document cannot be parsed or holds no article text.
    """
    try:
        summary = Document(html, url=url).summary(html_partial=True)
    except Unparseable as e:
        raise ParseError(f"Unparseable document: {e}") from e

    if not BeautifulSoup(summary, "lxml").get_text(strip=True):
        raise ParseError("No article content found")
    return summary
