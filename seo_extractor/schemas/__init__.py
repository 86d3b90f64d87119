"""Pydantic schemas package."""

from seo_extractor.schemas.common import HealthResponse, VersionResponse  # noqa: F401
from seo_extractor.schemas.extraction import (  # noqa: F401
    ErrorResponse,
    ExportFormat,
    ExportRequest,
    ExtractionResultSchema,
    ExtractRequest,
    HeadingSchema,
)
