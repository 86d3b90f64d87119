"""Markdown exporter for extraction results.

Exports the report to GitHub-flavored Markdown, converting the sanitized
content HTML with markdownify.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markdownify import markdownify as md

from seo_extractor.services.export.base import (
    NOT_SET,
    REPORT_TITLE,
    ExportOptions,
    ResultExporter,
)

if TYPE_CHECKING:
    from seo_extractor.services.extractors.base import ExtractionResult


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


class MarkdownExporter(ResultExporter):
    """Export an extraction result to Markdown format."""

    @property
    def content_type(self) -> str:
        """MIME type for Markdown."""
        return "text/markdown"

    @property
    def file_extension(self) -> str:
        """File extension for Markdown."""
        return "md"

    def export(
        self,
        result: ExtractionResult,
        options: ExportOptions | None = None,
    ) -> bytes:
        """Generate Markdown export content.

        Returns:
            UTF-8 encoded Markdown content
        """
        options = options or ExportOptions()
        lines: list[str] = [f"# {REPORT_TITLE}", ""]

        lines.append(f"**Source URL**: {result.input_url}  ")
        if result.final_url and result.final_url != result.input_url:
            lines.append(f"**Final URL**: {result.final_url}  ")
        lines.append("")

        lines.extend(
            [
                "## Meta Information",
                "",
                "| Field | Current | Optimized |",
                "| --- | --- | --- |",
                f"| Meta Title | {_cell(result.meta_title or NOT_SET)} "
                f"| {_cell(options.optimized_title)} |",
                f"| Meta Description | {_cell(result.meta_description or NOT_SET)} "
                f"| {_cell(options.optimized_description)} |",
                "",
                "## Content Statistics",
                "",
                f"- Word Count: {result.word_count}",
                f"- Quality Score: {result.quality_score}/100",
                f"- Extraction Source: {result.source}",
                "",
            ]
        )

        if result.headings:
            lines.extend(["## Heading Structure", ""])
            for heading in result.headings:
                indent = "  " * (heading.level - 1)
                lines.append(f"{indent}- [{heading.tag.upper()}] {heading.text}")
            lines.append("")

        lines.extend(["## Page Content", ""])
        if result.content_html:
            body = md(result.content_html, heading_style="ATX", bullets="-")
        else:
            body = result.content_text
        lines.append(body.strip())
        lines.append("")

        if result.warnings:
            lines.extend(["## Warnings", ""])
            lines.extend(f"- \u26a0 {warning}" for warning in result.warnings)
            lines.append("")

        content = "\n".join(lines)
        return content.encode("utf-8")
