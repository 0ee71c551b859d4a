"""Pydantic v2 schemas for the link content endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl

from link_preview.services.content.types import ExtractedLinkContent

# -----------------------------------------------------------------------------
# Request Schemas
# -----------------------------------------------------------------------------


class LinkContentRequest(BaseModel):
    """Request body for POST /api/v1/link-content."""

    url: HttpUrl = Field(..., description="Page or video URL to extract")
    max_characters: int | None = Field(
        default=None, gt=0, description="Character budget for the returned content"
    )
    timeout_ms: int | None = Field(
        default=None, gt=0, le=600_000, description="Per-request network timeout"
    )
    youtube_transcript: Literal["auto", "web", "apify"] = Field(
        default="auto", description="Which transcript backends may be used"
    )


# -----------------------------------------------------------------------------
# Response Schemas
# -----------------------------------------------------------------------------


class FirecrawlDiagnosticsSchema(BaseModel):
    attempted: bool
    used: bool
    notes: str | None = None


class TranscriptDiagnosticsSchema(BaseModel):
    provider: str | None = None
    attempted_providers: list[str] = Field(default_factory=list)
    text_provided: bool = False
    notes: str | None = None


class LinkContentDiagnosticsSchema(BaseModel):
    strategy: Literal["firecrawl", "html"] = Field(
        ..., description="Which source produced the content"
    )
    firecrawl: FirecrawlDiagnosticsSchema
    transcript: TranscriptDiagnosticsSchema


class LinkContentResponse(BaseModel):
    """Response for POST /api/v1/link-content."""

    url: str
    title: str | None = None
    description: str | None = None
    site_name: str | None = None
    content: str = Field(..., description="Normalized, budget-bounded text")
    truncated: bool
    total_characters: int = Field(..., ge=0)
    word_count: int = Field(..., ge=0)
    transcript_characters: int | None = None
    transcript_source: str | None = None
    diagnostics: LinkContentDiagnosticsSchema

    @classmethod
    def from_result(cls, result: ExtractedLinkContent) -> LinkContentResponse:
        diagnostics = result.diagnostics
        return cls(
            url=result.url,
            title=result.title,
            description=result.description,
            site_name=result.site_name,
            content=result.content,
            truncated=result.truncated,
            total_characters=result.total_characters,
            word_count=result.word_count,
            transcript_characters=result.transcript_characters,
            transcript_source=result.transcript_source,
            diagnostics=LinkContentDiagnosticsSchema(
                strategy=diagnostics.strategy,
                firecrawl=FirecrawlDiagnosticsSchema(
                    attempted=diagnostics.firecrawl.attempted,
                    used=diagnostics.firecrawl.used,
                    notes=diagnostics.firecrawl.notes,
                ),
                transcript=TranscriptDiagnosticsSchema(
                    provider=diagnostics.transcript.provider,
                    attempted_providers=list(diagnostics.transcript.attempted_providers),
                    text_provided=diagnostics.transcript.text_provided,
                    notes=diagnostics.transcript.notes,
                ),
            ),
        )
