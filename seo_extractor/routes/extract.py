"""Extraction REST endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from seo_extractor.core.config import settings
from seo_extractor.schemas.extraction import (
    ErrorResponse,
    ExtractionResultSchema,
    ExtractRequest,
)
from seo_extractor.services.extractors import (
    AggregateExtractionFailure,
    ExtractionConfig,
    ExtractionPipeline,
    InvalidUrlError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["extract"])


def get_pipeline() -> ExtractionPipeline:
    """Build a request-scoped pipeline from the current settings."""
    return ExtractionPipeline(ExtractionConfig.from_settings(settings))


@router.post(
    "/extract",
    response_model=ExtractionResultSchema,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract(
    request: ExtractRequest,
    pipeline: ExtractionPipeline = Depends(get_pipeline),
):
    """Extract SEO content (meta, headings, main text) from a public URL.

    Tries the remote scraping service first and falls back to local
    extraction. Returns 400 for invalid or unsafe URLs and 500 when both
    extraction tiers fail.
    """
    try:
        result = await pipeline.extract(request.url)
    except InvalidUrlError as e:
        logger.warning("Rejected URL %r: %s", request.url, e)
        return JSONResponse(status_code=400, content={"error": str(e)})
    except AggregateExtractionFailure as e:
        logger.error("Extraction failed for %s: %s", request.url, e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return ExtractionResultSchema.from_result(result)
