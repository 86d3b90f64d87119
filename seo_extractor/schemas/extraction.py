"""Pydantic v2 schemas for extraction and export endpoints.

Field names are serialized in camelCase (``inputUrl``, ``wordCount``...) to
match what front-end consumers of the extraction API expect.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from seo_extractor.services.extractors.base import ExtractionResult, Heading


class CamelModel(BaseModel):
    """Base model accepting snake_case or camelCase, emitting camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Request Schemas
# -----------------------------------------------------------------------------


class ExtractRequest(BaseModel):
    """Request body for POST /api/extract."""

    url: str = Field(..., min_length=1, description="Public http(s) URL to extract")


class ExportFormat(str, Enum):
    """Supported document export formats."""

    DOCX = "docx"
    MARKDOWN = "markdown"


# -----------------------------------------------------------------------------
# Response Schemas
# -----------------------------------------------------------------------------


class HeadingSchema(BaseModel):
    """A heading in the extracted content."""

    tag: Literal["h1", "h2", "h3", "h4", "h5", "h6"]
    text: str = Field(..., min_length=1)


class ExtractionResultSchema(CamelModel):
    """Uniform extraction result returned by POST /api/extract."""

    input_url: str = Field(..., description="Validated input URL")
    final_url: str = Field(..., description="URL after redirects")
    meta_title: str = ""
    meta_description: str = ""
    canonical_url: str | None = None
    robots_meta: str | None = None
    headings: list[HeadingSchema] = Field(default_factory=list)
    content_html: str = Field("", description="Sanitized main content HTML")
    content_text: str = Field("", description="Whitespace-normalized plain text")
    word_count: int = Field(..., ge=0)
    source: Literal["remote", "local"]
    quality_score: int = Field(..., ge=0, le=100)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ExtractionResult) -> ExtractionResultSchema:
        """Convert a service-layer result into the response schema."""
        return cls(
            input_url=result.input_url,
            final_url=result.final_url,
            meta_title=result.meta_title,
            meta_description=result.meta_description,
            canonical_url=result.canonical_url,
            robots_meta=result.robots_meta,
            headings=[HeadingSchema(tag=h.tag, text=h.text) for h in result.headings],
            content_html=result.content_html,
            content_text=result.content_text,
            word_count=result.word_count,
            source=result.source,
            quality_score=result.quality_score,
            warnings=list(result.warnings),
        )

    def to_result(self) -> ExtractionResult:
        """Convert back to the service-layer dataclass (for exporters)."""
        return ExtractionResult(
            input_url=self.input_url,
            final_url=self.final_url,
            meta_title=self.meta_title,
            meta_description=self.meta_description,
            canonical_url=self.canonical_url,
            robots_meta=self.robots_meta,
            headings=[Heading(tag=h.tag, text=h.text) for h in self.headings],
            content_html=self.content_html,
            content_text=self.content_text,
            word_count=self.word_count,
            source=self.source,
            quality_score=self.quality_score,
            warnings=list(self.warnings),
        )


class ExportRequest(ExtractionResultSchema):
    """Request body for POST /api/export/{format}: a result plus overrides."""

    optimized_title: str | None = Field(
        default=None, max_length=512, description="Proposed meta title"
    )
    optimized_description: str | None = Field(
        default=None, max_length=1024, description="Proposed meta description"
    )


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str
