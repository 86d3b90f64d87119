"""Abstract base class for extraction result exporters.

Defines the interface that all exporter implementations must follow.
Exporters only format a finished ExtractionResult; they never recompute
word counts or quality scores.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from seo_extractor.services.extractors.base import ExtractionResult

REPORT_TITLE = "SEO Content Extraction Report"
NOT_SET = "(not set)"


@dataclass(frozen=True)
class ExportOptions:
    """Optional proposed metadata shown next to the current values."""

    optimized_title: str = ""
    optimized_description: str = ""


class ResultExporter(ABC):
    """Abstract base class for extraction result exporters."""

    @property
    @abstractmethod
    def content_type(self) -> str:
        """MIME type for the export format."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension for the export format."""
        pass

    @abstractmethod
    def export(
        self,
        result: ExtractionResult,
        options: ExportOptions | None = None,
    ) -> bytes:
        """Generate export content from an extraction result.

        Args:
            result: The extraction result to export (read-only)
            options: Optional proposed title/description

        Returns:
            Binary content of the export file

        Raises:
            ExportGenerationError: If export generation fails
        """
        pass

    def generate_filename(self, url: str) -> str:
        """Generate filename for the export.

        Args:
            url: The extracted page URL, used to name the file by host

        Returns:
            Filename with host, timestamp and proper extension
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        host = urlsplit(url).hostname or "page"
        slug = re.sub(r"[^a-z0-9]+", "-", host.lower()).strip("-") or "page"
        return f"seo-extract-{slug}-{timestamp}.{self.file_extension}"
