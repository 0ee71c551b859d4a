"""Tests for slide cache validation."""

from pathlib import Path

import pytest

from link_preview.slides import (
    SlideExtractionResult,
    SlideImage,
    SlideSettings,
    SlideSource,
    read_slides_cache_if_valid,
    resolve_slides_dir,
    validate_slides_cache,
)

SOURCE = SlideSource(url="https://www.youtube.com/watch?v=abc123def45", kind="youtube", source_id="abc123def45")


@pytest.fixture
def slide_settings(tmp_path):
    return SlideSettings(output_dir=str(tmp_path))


@pytest.fixture
def cached(slide_settings):
    slides_dir = resolve_slides_dir(slide_settings.output_dir, SOURCE.source_id)
    slides_dir.mkdir(parents=True)
    image = slides_dir / "slide_0001.png"
    image.write_bytes(b"png")
    return SlideExtractionResult(
        source_url=SOURCE.url,
        source_kind=SOURCE.kind,
        source_id=SOURCE.source_id,
        slides_dir=str(slides_dir),
        scene_threshold=slide_settings.scene_threshold,
        max_slides=slide_settings.max_slides,
        min_slide_duration=slide_settings.min_duration_seconds,
        ocr_requested=slide_settings.ocr,
        slides=[SlideImage(index=1, timestamp=12.5, image_path=str(image))],
    )


class TestValidateSlidesCache:
    def test_matching_cache_is_returned(self, cached, slide_settings):
        assert validate_slides_cache(cached, SOURCE, slide_settings) is cached

    def test_none_is_rejected(self, slide_settings):
        assert validate_slides_cache(None, SOURCE, slide_settings) is None

    def test_different_settings_invalidate(self, cached, slide_settings):
        changed = slide_settings.model_copy(update={"scene_threshold": 0.5})
        assert validate_slides_cache(cached, SOURCE, changed) is None

        changed = slide_settings.model_copy(update={"ocr": True})
        assert validate_slides_cache(cached, SOURCE, changed) is None

    def test_different_source_invalidates(self, cached, slide_settings):
        other = SOURCE.model_copy(update={"url": "https://example.com/video.mp4", "kind": "direct"})
        assert validate_slides_cache(cached, other, slide_settings) is None

    def test_missing_image_invalidates(self, cached, slide_settings):
        Path(cached.slides[0].image_path).unlink()
        assert validate_slides_cache(cached, SOURCE, slide_settings) is None

    def test_empty_slides_invalidate(self, cached, slide_settings):
        empty = cached.model_copy(update={"slides": []})
        assert validate_slides_cache(empty, SOURCE, slide_settings) is None


class TestReadSlidesCache:
    def test_round_trip_through_disk(self, cached, slide_settings):
        payload = Path(cached.slides_dir) / "slides.json"
        payload.write_text(cached.model_dump_json(by_alias=True), encoding="utf-8")

        loaded = read_slides_cache_if_valid(SOURCE, slide_settings)

        assert loaded is not None
        assert loaded.slides[0].timestamp == 12.5
        assert '"sourceUrl"' in payload.read_text(encoding="utf-8")

    def test_missing_file(self, slide_settings):
        assert read_slides_cache_if_valid(SOURCE, slide_settings) is None

    def test_corrupt_file(self, cached, slide_settings):
        (Path(cached.slides_dir) / "slides.json").write_text("{not json", encoding="utf-8")
        assert read_slides_cache_if_valid(SOURCE, slide_settings) is None
