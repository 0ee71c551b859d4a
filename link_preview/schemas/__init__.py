"""Pydantic schemas package."""

from link_preview.schemas.content import (  # noqa: F401
    FirecrawlDiagnosticsSchema,
    LinkContentDiagnosticsSchema,
    LinkContentRequest,
    LinkContentResponse,
    TranscriptDiagnosticsSchema,
)
