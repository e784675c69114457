"""
Tests for font resolution and caching.
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from flyerkit.errors import FontUnavailableError
from flyerkit.services import fonts
from flyerkit.services.fonts import (
    FontBook,
    candidate_paths,
    clear_font_cache,
    load_fonts,
    read_first,
    resolve_fonts,
)

NO_SYSTEM_FONTS = {"Body": [], "Display": [], "Script": []}


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_font_cache()
    yield
    clear_font_cache()


class TestCandidates:

    def test_configured_paths_come_first(self, settings, tmp_path):
        settings.body_font_paths = [str(tmp_path / "custom.ttf")]
        paths = candidate_paths("Body", settings)
        assert paths[0] == str(tmp_path / "custom.ttf")
        assert paths[1].endswith("Montserrat-Regular.ttf")

    def test_read_first_skips_missing(self, tmp_path):
        real = tmp_path / "b.ttf"
        real.write_bytes(b"font")
        assert read_first([str(tmp_path / "a.ttf"), str(real)]) == (str(real), b"font")
        assert read_first([str(tmp_path / "a.ttf")]) is None


class TestResolveFonts:
    """Local files first, then the webfont fallback for Body."""

    def test_configured_files(self, settings, tmp_path):
        for name in ("body", "display", "script"):
            (tmp_path / f"{name}.ttf").write_bytes(name.encode())
        settings.body_font_paths = [str(tmp_path / "body.ttf")]
        settings.display_font_paths = [str(tmp_path / "display.ttf")]
        settings.script_font_paths = [str(tmp_path / "script.ttf")]

        font_set = asyncio.run(resolve_fonts(settings))

        assert font_set.body.data == b"body"
        assert font_set.display.data == b"display"
        assert font_set.script.data == b"script"
        assert font_set.display.weight == 800
        assert font_set.script.style == "italic"

    def test_display_and_script_fall_back_to_body(self, settings, tmp_path):
        (tmp_path / "body.ttf").write_bytes(b"body")
        settings.body_font_paths = [str(tmp_path / "body.ttf")]
        with patch.dict(fonts.SYSTEM_FONTS, NO_SYSTEM_FONTS):
            font_set = asyncio.run(resolve_fonts(settings))
        assert font_set.display.data == b"body"
        assert font_set.script.data == b"body"

    def test_webfont_fallback(self, settings):
        settings.font_urls = ["https://fonts.example/a.ttf"]
        with patch.dict(fonts.SYSTEM_FONTS, NO_SYSTEM_FONTS), \
                patch("flyerkit.services.fonts.fetch_webfont", AsyncMock(return_value=b"web")) as fetch:
            font_set = asyncio.run(resolve_fonts(settings))
        fetch.assert_awaited_once_with(["https://fonts.example/a.ttf"], settings.font_fetch_timeout_seconds)
        assert font_set.body.data == b"web"
        assert font_set.display.data == b"web"

    def test_no_font_anywhere(self, settings):
        with patch.dict(fonts.SYSTEM_FONTS, NO_SYSTEM_FONTS), \
                patch("flyerkit.services.fonts.fetch_webfont", AsyncMock(return_value=None)):
            with pytest.raises(FontUnavailableError):
                asyncio.run(resolve_fonts(settings))


class TestLoadFonts:

    def test_cached_after_first_load(self, settings, tmp_path):
        (tmp_path / "body.ttf").write_bytes(b"body")
        settings.body_font_paths = [str(tmp_path / "body.ttf")]
        first = asyncio.run(load_fonts(settings))
        (tmp_path / "body.ttf").write_bytes(b"changed")
        second = asyncio.run(load_fonts(settings))
        assert second is first

    def test_each_configuration_cached_separately(self, settings, tmp_path):
        (tmp_path / "first.ttf").write_bytes(b"first")
        (tmp_path / "second.ttf").write_bytes(b"second")
        other = settings.model_copy(update={
            "body_font_paths": [str(tmp_path / "second.ttf")],
            "font_dir": str(tmp_path / "other-fonts"),
        })
        settings.body_font_paths = [str(tmp_path / "first.ttf")]

        first = asyncio.run(load_fonts(settings))
        second = asyncio.run(load_fonts(other))

        assert first.body.data == b"first"
        assert second.body.data == b"second"
        assert asyncio.run(load_fonts(settings)) is first
        assert asyncio.run(load_fonts(other)) is second

    def test_failure_is_not_cached(self, settings):
        with patch.dict(fonts.SYSTEM_FONTS, NO_SYSTEM_FONTS), \
                patch("flyerkit.services.fonts.fetch_webfont", AsyncMock(return_value=None)):
            with pytest.raises(FontUnavailableError):
                asyncio.run(load_fonts(settings))
        assert fonts._font_cache == {}


class TestFontBook:

    def test_faces_are_cached(self, font_set):
        book = FontBook(font_set)
        assert book.face("Body", 30, 400) is book.face("Body", 30.2, 400)
        assert book.face("Body", 30, 400) is not book.face("Body", 40, 400)

    def test_stroke_for_static_fonts(self, font_set):
        book = FontBook(font_set)
        book._variable["Display"] = False
        assert book.stroke("Display", 900) == 2
        assert book.stroke("Display", 700) == 1
        assert book.stroke("Display", 400) == 0
