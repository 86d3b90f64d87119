"""Remote extraction tier backed by the Firecrawl scraping API.

The service is treated as unreliable: any failure (missing credential,
transport error, error payload, empty HTML) surfaces as a
RemoteExtractionError so the pipeline can fall back to local extraction.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from seo_extractor.services.extractors.base import (
    ExtractionConfig,
    PageMetadata,
    RawPage,
)
from seo_extractor.services.extractors.exceptions import RemoteExtractionError

logger = logging.getLogger(__name__)

# Metadata keys tried in order for the canonical URL; first non-empty wins
CANONICAL_KEYS = ("ogUrl", "canonicalUrl", "canonical", "sourceURL")


def get_string(mapping: Any, key: str) -> str:
    """Read ``mapping[key]`` as a trimmed string.

    Missing keys, non-mapping containers and non-string values all read as "".
    """
    if not isinstance(mapping, dict):
        return ""
    value = mapping.get(key)
    if isinstance(value, str):
        return value.strip()
    return ""


def first_string(mapping: Any, keys: tuple[str, ...]) -> str:
    """Return the first non-empty string among ``keys``."""
    for key in keys:
        value = get_string(mapping, key)
        if value:
            return value
    return ""


class RemoteExtractor:
    """Fetch rendered page HTML and metadata from Firecrawl.

    The API key comes from the ExtractionConfig handed to the constructor;
    the extractor never reads the environment itself.
    """

    SCRAPE_PATH = "/v1/scrape"

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()

    async def scrape(self, url: str) -> RawPage:
        """Scrape a validated URL through the remote service.

        Args:
            url: URL already accepted by UrlGuard.

        Returns:
            RawPage with the service's HTML and coerced metadata.

        Raises:
            RemoteExtractionError: If the API key is missing, the service is
                unreachable or times out, returns an error, or returns no HTML.
        """
        if not self.config.firecrawl_api_key:
            raise RemoteExtractionError("Missing FIRECRAWL_API_KEY")

        payload = await self._request(url)

        if payload.get("success") is False:
            error = get_string(payload, "error") or "unknown error"
            raise RemoteExtractionError(f"Firecrawl error: {error}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RemoteExtractionError("Firecrawl returned empty content")

        html = get_string(data, "html")
        if not html:
            raise RemoteExtractionError("Firecrawl returned empty content")

        metadata = data.get("metadata")
        final_url = (
            get_string(metadata, "url") or get_string(metadata, "sourceURL") or url
        )

        logger.debug("Firecrawl returned %d chars of HTML for %s", len(html), url)

        return RawPage(
            html=html,
            final_url=final_url,
            metadata=PageMetadata(
                title=get_string(metadata, "title"),
                description=get_string(metadata, "description"),
                canonical_url=first_string(metadata, CANONICAL_KEYS),
                robots=get_string(metadata, "robots"),
            ),
        )

    async def _request(self, url: str) -> dict:
        """POST the scrape request and return the decoded JSON body.

        Raises:
            RemoteExtractionError: On timeout, transport, HTTP or JSON errors.
        """
        endpoint = self.config.firecrawl_api_url.rstrip("/") + self.SCRAPE_PATH
        body = {
            "url": url,
            "formats": ["html", "markdown"],
            "blockAds": True,
            "removeBase64Images": True,
            "timeout": int(self.config.remote_timeout_seconds * 1000),
        }
        # Client-side bound sits slightly above the service-side timeout
        timeout = httpx.Timeout(self.config.remote_timeout_seconds + 5.0)

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(
                    endpoint,
                    json=body,
                    headers={
                        "Authorization": f"Bearer {self.config.firecrawl_api_key}",
                        "Content-Type": "application/json",
                    },
                )

                if response.status_code == 429:
                    raise RemoteExtractionError("Firecrawl rate limit (429)")

                response.raise_for_status()
                payload = response.json()

        except httpx.TimeoutException as e:
            raise RemoteExtractionError(
                f"Firecrawl timeout after {self.config.remote_timeout_seconds:g}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise RemoteExtractionError(
                f"Firecrawl HTTP {e.response.status_code}: {e.response.reason_phrase}"
            ) from e
        except httpx.RequestError as e:
            raise RemoteExtractionError(f"Firecrawl request failed: {e}") from e
        except ValueError as e:
            raise RemoteExtractionError("Firecrawl returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise RemoteExtractionError("Firecrawl returned an unexpected payload")
        return payload
