"""On-disk cache of extracted video slides and its validation."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from link_preview.slides.models import SlideExtractionResult, SlideSettings, SlideSource

logger = logging.getLogger(__name__)

SLIDES_PAYLOAD_FILENAME = "slides.json"


def resolve_slides_dir(output_dir: str | Path, source_id: str) -> Path:
    return Path(output_dir) / source_id


def _same_path(left: str | Path, right: str | Path) -> bool:
    return Path(left).resolve() == Path(right).resolve()


def validate_slides_cache(
    cached: SlideExtractionResult | None,
    source: SlideSource,
    settings: SlideSettings,
) -> SlideExtractionResult | None:
    """Return cached only if it was produced for this source with these settings.

    Every slide image must still exist on disk; a single missing file
    invalidates the whole entry.
    """
    if not isinstance(cached, SlideExtractionResult):
        return None
    if cached.source_id != source.source_id:
        return None
    if cached.source_kind != source.kind:
        return None
    if cached.source_url != source.url:
        return None

    expected_dir = resolve_slides_dir(settings.output_dir, source.source_id)
    if not cached.slides_dir or not _same_path(cached.slides_dir, expected_dir):
        return None

    if cached.scene_threshold != settings.scene_threshold:
        return None
    if cached.max_slides != settings.max_slides:
        return None
    if cached.min_slide_duration != settings.min_duration_seconds:
        return None
    if cached.ocr_requested != settings.ocr:
        return None
    if not cached.slides:
        return None

    for slide in cached.slides:
        if not slide.image_path or not Path(slide.image_path).is_file():
            return None

    return cached


def read_slides_cache_if_valid(
    source: SlideSource,
    settings: SlideSettings,
) -> SlideExtractionResult | None:
    """Load ``slides.json`` for source and validate it; None on any problem."""
    payload_path = resolve_slides_dir(settings.output_dir, source.source_id) / SLIDES_PAYLOAD_FILENAME
    try:
        raw = payload_path.read_text(encoding="utf-8")
    except OSError:
        return None

    try:
        parsed = SlideExtractionResult.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Ignoring unreadable slides cache %s: %s", payload_path, e)
        return None

    return validate_slides_cache(parsed, source, settings)
