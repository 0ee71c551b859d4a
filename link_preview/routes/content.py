"""Link content REST endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from link_preview.core.config import settings
from link_preview.schemas.content import LinkContentRequest, LinkContentResponse
from link_preview.services.content import (
    ExtractionError,
    FetchLinkContentOptions,
    LinkContentPipeline,
    NoUsableContentError,
    build_link_preview_deps,
    build_resolver_config,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["content"])


def get_link_content_pipeline(request: Request) -> LinkContentPipeline:
    """Build a pipeline around the application's shared HTTP client."""
    return LinkContentPipeline(
        build_link_preview_deps(request.app.state.http_client, settings),
        build_resolver_config(settings),
    )


@router.post("/link-content", response_model=LinkContentResponse)
async def fetch_link_content(
    body: LinkContentRequest,
    pipeline: LinkContentPipeline = Depends(get_link_content_pipeline),
) -> LinkContentResponse:
    """Extract readable content and metadata for a URL.

    Raises:
        HTTPException: 422 if no usable content was found, 502 if the page
            could not be fetched.
    """
    url = str(body.url)
    options = FetchLinkContentOptions(
        max_characters=body.max_characters,
        timeout_ms=body.timeout_ms,
        youtube_transcript=body.youtube_transcript,
    )

    try:
        result = await pipeline.fetch_link_content(url, options)
    except NoUsableContentError as e:
        logger.warning("No usable content for %s: %s", url, e)
        raise HTTPException(
            status_code=422,
            detail={"error": {"code": "NO_USABLE_CONTENT", "message": str(e)}},
        )
    except ExtractionError as e:
        logger.warning("Link fetch failed for %s: %s", url, e)
        raise HTTPException(
            status_code=502,
            detail={"error": {"code": "FETCH_FAILED", "message": str(e)}},
        )

    logger.info(
        "Resolved %s via %s (%d chars)",
        url,
        result.diagnostics.strategy,
        len(result.content),
    )
    return LinkContentResponse.from_result(result)
