"""DOCX exporter for extraction results.

Uses python-docx to build a Word report: URL info, a meta information table
(current vs. optimized), content statistics, the heading outline, the page
content and any warnings.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from seo_extractor.exceptions import ExportGenerationError
from seo_extractor.services.export.base import (
    NOT_SET,
    REPORT_TITLE,
    ExportOptions,
    ResultExporter,
)
from seo_extractor.services.extractors.postprocess import block_soup, element_text

if TYPE_CHECKING:
    from docx.document import Document as DocumentObject
    from docx.text.paragraph import Paragraph

    from seo_extractor.services.extractors.base import ExtractionResult

FONT_NAME = "Poppins"
FONT_SIZES = {
    "h1": Pt(24),
    "h2": Pt(20),
    "body": Pt(12),
}
HEADER_FILL = "E5E7EB"
WARNING_COLOR = RGBColor(0xB4, 0x53, 0x09)
# Left indent per heading level in the outline
OUTLINE_INDENT_PT = 20

# Block elements whose text becomes one report paragraph
PARAGRAPH_TAGS = ["p", "li", "blockquote", "pre", "figcaption", "h1", "h2", "h3", "h4", "h5", "h6"]


def content_paragraphs(result: ExtractionResult) -> list[str]:
    """Split the page content into paragraphs for the report body.

    Innermost block elements of the sanitized HTML become paragraphs; when
    the HTML has no block structure the whole plain text is one paragraph.
    """
    paragraphs: list[str] = []
    if result.content_html:
        soup = block_soup(result.content_html)
        for element in soup.find_all(PARAGRAPH_TAGS):
            if element.find(PARAGRAPH_TAGS) is not None:
                continue
            text = element_text(element)
            if text:
                paragraphs.append(text)
    if not paragraphs and result.content_text.strip():
        paragraphs.append(result.content_text.strip())
    return paragraphs


class DocxExporter(ResultExporter):
    """Export an extraction result to a Word document."""

    @property
    def content_type(self) -> str:
        """MIME type for DOCX."""
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    @property
    def file_extension(self) -> str:
        """File extension for DOCX."""
        return "docx"

    def export(
        self,
        result: ExtractionResult,
        options: ExportOptions | None = None,
    ) -> bytes:
        """Generate DOCX export content.

        Raises:
            ExportGenerationError: If python-docx fails to build the document
        """
        options = options or ExportOptions()
        try:
            doc = self._build(result, options)
            buffer = io.BytesIO()
            doc.save(buffer)
            return buffer.getvalue()
        except ExportGenerationError:
            raise
        except Exception as e:
            raise ExportGenerationError(f"DOCX generation failed: {e!s}") from e

    def _build(self, result: ExtractionResult, options: ExportOptions) -> DocumentObject:
        doc = Document()
        normal = doc.styles["Normal"]
        normal.font.name = FONT_NAME
        normal.font.size = FONT_SIZES["body"]

        self._heading(doc, REPORT_TITLE, level=1)

        self._labeled(doc, "Source URL: ", result.input_url)
        if result.final_url and result.final_url != result.input_url:
            self._labeled(doc, "Final URL: ", result.final_url)

        self._heading(doc, "Meta Information", level=2)
        self._meta_table(doc, result, options)

        self._heading(doc, "Content Statistics", level=2)
        self._text(doc, f"Word Count: {result.word_count}")
        self._text(doc, f"Quality Score: {result.quality_score}/100")
        self._text(doc, f"Extraction Source: {result.source}")

        if result.headings:
            self._heading(doc, "Heading Structure", level=2)
            for heading in result.headings:
                paragraph = self._text(doc, f"[{heading.tag.upper()}] {heading.text}")
                indent = OUTLINE_INDENT_PT * (heading.level - 1)
                paragraph.paragraph_format.left_indent = Pt(indent)

        self._heading(doc, "Page Content", level=2)
        for text in content_paragraphs(result):
            paragraph = self._text(doc, text)
            paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY

        if result.warnings:
            self._heading(doc, "Warnings", level=2)
            for warning in result.warnings:
                paragraph = self._text(doc, f"\u26a0 {warning}")
                paragraph.runs[0].font.color.rgb = WARNING_COLOR

        return doc

    def _heading(self, doc: DocumentObject, text: str, level: int) -> Paragraph:
        paragraph = doc.add_heading(level=level)
        run = paragraph.add_run(text)
        run.bold = True
        run.font.name = FONT_NAME
        run.font.size = FONT_SIZES["h1" if level == 1 else "h2"]
        return paragraph

    def _text(self, doc: DocumentObject, text: str) -> Paragraph:
        paragraph = doc.add_paragraph()
        run = paragraph.add_run(text)
        run.font.name = FONT_NAME
        run.font.size = FONT_SIZES["body"]
        return paragraph

    def _labeled(self, doc: DocumentObject, label: str, value: str) -> Paragraph:
        paragraph = doc.add_paragraph()
        label_run = paragraph.add_run(label)
        label_run.bold = True
        paragraph.add_run(value)
        return paragraph

    def _meta_table(
        self, doc: DocumentObject, result: ExtractionResult, options: ExportOptions
    ) -> None:
        rows = [
            ("Field", "Current", "Optimized"),
            ("Meta Title", result.meta_title or NOT_SET, options.optimized_title),
            (
                "Meta Description",
                result.meta_description or NOT_SET,
                options.optimized_description,
            ),
        ]
        table = doc.add_table(rows=len(rows), cols=3)
        table.style = "Table Grid"

        for row_index, values in enumerate(rows):
            for col_index, value in enumerate(values):
                cell = table.cell(row_index, col_index)
                run = cell.paragraphs[0].add_run(value)
                # header row and field-name column are bold
                run.bold = row_index == 0 or col_index == 0
                if row_index == 0:
                    _shade(cell, HEADER_FILL)


def _shade(cell, fill: str) -> None:
    """Set a table cell's background colour."""
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)
