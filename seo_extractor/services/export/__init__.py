"""Extraction result export module.

Provides exporters for converting an ExtractionResult to documents (DOCX, Markdown).
"""

from __future__ import annotations

from seo_extractor.exceptions import InvalidExportFormatError
from seo_extractor.schemas.extraction import ExportFormat
from seo_extractor.services.export.base import ExportOptions, ResultExporter
from seo_extractor.services.export.docx import DocxExporter
from seo_extractor.services.export.markdown import MarkdownExporter

_EXPORTERS: dict[ExportFormat, type[ResultExporter]] = {
    ExportFormat.DOCX: DocxExporter,
    ExportFormat.MARKDOWN: MarkdownExporter,
}


def get_exporter(format: ExportFormat | str) -> ResultExporter:
    """Factory function to get the appropriate exporter for a format.

    Args:
        format: The export format (docx or markdown)

    Returns:
        An instance of the appropriate ResultExporter

    Raises:
        InvalidExportFormatError: If format is not supported
    """
    try:
        exporter_class = _EXPORTERS.get(ExportFormat(format))
    except ValueError:
        exporter_class = None
    if exporter_class is None:
        raise InvalidExportFormatError(str(format))
    return exporter_class()


__all__ = [
    "DocxExporter",
    "ExportOptions",
    "get_exporter",
    "MarkdownExporter",
    "ResultExporter",
]
