"""Pydantic v2 models for cached slide extraction results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SlideSourceKind = Literal["youtube", "direct"]


class SlideSource(BaseModel):
    """The video a set of slides was extracted from."""

    url: str
    kind: SlideSourceKind
    source_id: str


class SlideSettings(BaseModel):
    output_dir: str
    scene_threshold: float = 0.3
    max_slides: int = 100
    min_duration_seconds: float = 2.0
    ocr: bool = False


class SlideImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    timestamp: float
    image_path: str = Field(alias="imagePath")
    ocr_text: str | None = Field(default=None, alias="ocrText")


class SlideExtractionResult(BaseModel):
    """Payload persisted as ``slides.json``; keys are camelCase on disk."""

    model_config = ConfigDict(populate_by_name=True)

    source_url: str = Field(alias="sourceUrl")
    source_kind: SlideSourceKind = Field(alias="sourceKind")
    source_id: str = Field(alias="sourceId")
    slides_dir: str = Field(alias="slidesDir")
    scene_threshold: float = Field(alias="sceneThreshold")
    max_slides: int = Field(alias="maxSlides")
    min_slide_duration: float = Field(alias="minSlideDuration")
    ocr_requested: bool = Field(alias="ocrRequested")
    slides: list[SlideImage] = Field(default_factory=list)
