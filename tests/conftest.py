"""
Pytest fixtures for flyer engine tests.

Rendering tests need one real TrueType font. A system font is preferred;
Pillow's bundled default font is the fallback. Tests that render skip when
neither is available.
"""
import io
from pathlib import Path

import pytest
from PIL import Image, ImageFont, features

from flyerkit.config import Settings
from flyerkit.models import FlyerInput
from flyerkit.services.fonts import FontSet, LoadedFont, SYSTEM_FONTS


def _find_font_bytes():
    for paths in SYSTEM_FONTS.values():
        for path in paths:
            p = Path(path)
            if p.is_file():
                return p.read_bytes()
    if not features.check("freetype2"):
        return None
    try:
        default = ImageFont.load_default(size=20)
    except (OSError, TypeError):
        return None
    return getattr(default, "font_bytes", None)


FONT_BYTES = _find_font_bytes()


@pytest.fixture(scope="session")
def font_bytes():
    if not FONT_BYTES:
        pytest.skip("No TrueType font available for rendering")
    return FONT_BYTES


@pytest.fixture(scope="session")
def font_set(font_bytes):
    return FontSet(
        body=LoadedFont("Body", font_bytes, 400, "normal"),
        display=LoadedFont("Display", font_bytes, 800, "normal"),
        script=LoadedFont("Script", font_bytes, 400, "italic"),
    )


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every asset path into a temp directory."""
    return Settings(
        openai_api_key="",
        logo_image_path=str(tmp_path / "logo.png"),
        preset_assets_dir=str(tmp_path / "flyer-assets"),
        font_dir=str(tmp_path / "fonts"),
        body_font_paths=[],
        display_font_paths=[],
        script_font_paths=[],
        font_urls=[],
        output_dir=str(tmp_path / "out"),
        supplier_timeout_seconds=2.0,
    )


@pytest.fixture
def make_png():
    """Factory for small solid PNG images."""
    def _make(size=(64, 48), color=(200, 40, 90, 255)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGBA", size, color).save(buffer, "PNG")
        return buffer.getvalue()
    return _make


@pytest.fixture
def winter_flyer():
    return FlyerInput(
        theme="Winter Wonderland Gala",
        date_time_text="Sat, Dec 20 * 7:00 PM",
        location="Grand Hall",
        dress_code="Formal",
        note="",
        description="Step into a winter evening with friends.",
        tagline="Winter Wonderland: Cozy Vibes",
        palette=("#0E7490", "#155E75", "#E0F2FE"),
    )
