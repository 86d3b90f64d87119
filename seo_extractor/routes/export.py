"""Document export REST endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from seo_extractor.exceptions import ExportGenerationError, InvalidExportFormatError
from seo_extractor.schemas.extraction import ErrorResponse, ExportRequest
from seo_extractor.services.export import ExportOptions, get_exporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["export"])


@router.post(
    "/export/{format}",
    response_class=Response,
    responses={
        200: {"description": "The exported document as an attachment"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def export_result(format: str, request: ExportRequest) -> Response:
    """Export an extraction result as a DOCX or Markdown document."""
    try:
        exporter = get_exporter(format)
    except InvalidExportFormatError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    options = ExportOptions(
        optimized_title=request.optimized_title or "",
        optimized_description=request.optimized_description or "",
    )

    try:
        content = exporter.export(request.to_result(), options)
    except ExportGenerationError as e:
        logger.error("Export to %s failed for %s: %s", format, request.input_url, e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    filename = exporter.generate_filename(request.input_url)
    return Response(
        content=content,
        media_type=exporter.content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
