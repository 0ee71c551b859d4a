"""Slide extraction cache models and validation."""

from link_preview.slides.models import (
    SlideExtractionResult,
    SlideImage,
    SlideSettings,
    SlideSource,
)
from link_preview.slides.store import (
    read_slides_cache_if_valid,
    resolve_slides_dir,
    validate_slides_cache,
)

__all__ = [
    "SlideExtractionResult",
    "SlideImage",
    "SlideSettings",
    "SlideSource",
    "read_slides_cache_if_valid",
    "resolve_slides_dir",
    "validate_slides_cache",
]
