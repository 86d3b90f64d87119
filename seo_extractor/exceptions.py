"""Custom exceptions for the seo-extractor service.

Extraction errors live in ``seo_extractor.services.extractors.exceptions``;
this module holds the document export errors.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base exception for export-related errors."""

    pass


class InvalidExportFormatError(ExportError):
    """Raised when an invalid export format is specified.

    Error Code: INVALID_FORMAT
    """

    def __init__(self, format_value: str) -> None:
        self.format_value = format_value
        super().__init__(
            f"Invalid export format: {format_value}. Must be 'docx' or 'markdown'."
        )


class ExportGenerationError(ExportError):
    """Raised when export file generation fails.

    Error Code: EXPORT_GENERATION_FAILED
    """

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = "Failed to generate export file"
        if detail:
            message = f"{message}. {detail}"
        super().__init__(message)
