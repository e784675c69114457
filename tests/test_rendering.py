"""
Tests for the rasterizer and PDF packaging.
"""
import io
import re
from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from flyerkit.layout_profiles import REFERENCE_CONFIGS
from flyerkit.nodes import LinearGradient, RadialGradient, box, text
from flyerkit.services.flyer_builder import ReferencePlan, build_tree, plan_render
from flyerkit.services.image_renderer import (
    HEIGHT,
    WIDTH,
    BackgroundPainter,
    DocumentRenderer,
    ShapeMasks,
    normalize_artwork,
    rasterize,
    render_image,
)
from flyerkit.services.layout_engine import BoxOp, Document, GroupOp
from flyerkit.services.pdf_packager import package_pdf


def _open(png):
    return Image.open(io.BytesIO(png))


class TestShapeMasks:

    def test_fit_radii_scales_proportionally(self):
        assert ShapeMasks.fit_radii(100, 50, (40, 40, 40, 40)) == (25, 25, 25, 25)

    def test_fit_radii_untouched_when_room(self):
        assert ShapeMasks.fit_radii(100, 100, (10, 20, 30, 40)) == (10, 20, 30, 40)

    def test_rounded_corners_are_clear(self):
        mask = ShapeMasks.rounded(100, 60, (20, 20, 20, 20))
        assert mask.size == (100, 60)
        assert mask.getpixel((0, 0)) == 0
        assert mask.getpixel((99, 59)) == 0
        assert mask.getpixel((50, 30)) == 255

    def test_square_mask(self):
        mask = ShapeMasks.rounded(10, 10, (0, 0, 0, 0))
        assert mask.getextrema() == (255, 255)

    def test_ring_is_hollow(self):
        ring = ShapeMasks.ring(100, 100, 4, (0, 0, 0, 0))
        assert ring.getpixel((1, 50)) == 255
        assert ring.getpixel((50, 50)) == 0


class TestBackgrounds:

    def test_linear_top_to_bottom(self):
        img = BackgroundPainter.linear((10, 100), LinearGradient(180, ("#000000", "#FFFFFF")))
        assert img.getpixel((5, 0))[0] < 40
        assert img.getpixel((5, 99))[0] > 215

    def test_linear_left_to_right(self):
        img = BackgroundPainter.linear((100, 10), LinearGradient(90, ("#000000", "#FFFFFF")))
        assert img.getpixel((0, 5))[0] < 40
        assert img.getpixel((99, 5))[0] > 215

    def test_radial_fades_out(self):
        img = BackgroundPainter.radial((100, 100), RadialGradient(50, 50, "rgba(255,0,0,1)", 50))
        assert img.getpixel((50, 50))[3] > 200
        assert img.getpixel((0, 0))[3] == 0

    def test_first_layer_on_top(self):
        img = BackgroundPainter.paint((4, 4), ("#FF0000", "#0000FF"))
        assert img.getpixel((1, 1)) == (255, 0, 0, 255)


class TestDocumentRenderer:

    def test_box_fill(self):
        op = BoxOp(0, 0, 10, 10, "#FF0000", 0, None, False, (0, 0, 0, 0))
        img = DocumentRenderer(MagicMock()).render(Document(10, 10, (op,)))
        assert img.getpixel((5, 5)) == (255, 0, 0, 255)

    def test_group_opacity(self):
        op = BoxOp(0, 0, 10, 10, "#FF0000", 0, None, False, (0, 0, 0, 0))
        group = GroupOp(0, 0, 10, 10, (op,), rotate=0, opacity=0.5, clip_radius=None)
        img = DocumentRenderer(MagicMock()).render(Document(10, 10, (group,)))
        assert 120 <= img.getpixel((5, 5))[3] <= 135

    def test_offcanvas_box_is_clipped(self):
        op = BoxOp(-20, -20, 30, 30, "#00FF00", 0, None, False, (0, 0, 0, 0))
        img = DocumentRenderer(MagicMock()).render(Document(20, 20, (op,)))
        assert img.getpixel((5, 5)) == (0, 255, 0, 255)
        assert img.getpixel((15, 15)) == (0, 0, 0, 0)

    def test_text_is_drawn(self, font_set):
        tree = box(
            text("HELLO", "Display", 800, size=60, color="#FF0000"),
            width=400, height=200, background="#FFFFFF", padding=(20, 20, 20, 20),
        )
        img = render_image(tree, font_set, 400, 200)
        green_min, _ = img.getextrema()[1]
        assert green_min < 100


class TestRasterize:

    def test_generative_flyer(self, font_set, settings, winter_flyer):
        tree = build_tree(winter_flyer, plan_render(winter_flyer, settings), settings=settings)
        png = rasterize(tree, font_set)
        img = _open(png)
        assert img.size == (WIDTH, HEIGHT)
        assert img.mode == "RGBA"
        # Rounded, clipped outer frame
        assert img.getpixel((0, 0))[3] == 0
        assert img.getpixel((WIDTH // 2, HEIGHT // 2))[3] == 255

    def test_deterministic(self, font_set, settings, winter_flyer):
        plan = plan_render(winter_flyer, settings)
        first = rasterize(build_tree(winter_flyer, plan, settings=settings), font_set)
        second = rasterize(build_tree(winter_flyer, plan, settings=settings), font_set)
        assert first == second

    def test_palette_changes_generative_output(self, font_set, settings, winter_flyer):
        other = replace(winter_flyer, palette=("#FDE68A", "#FB7185", "#111827"))
        first = render_image(build_tree(winter_flyer, plan_render(winter_flyer, settings), settings=settings), font_set)
        second = render_image(build_tree(other, plan_render(other, settings), settings=settings), font_set)
        # Gradient stops sit in the rounded frame's interior corners
        assert first.getpixel((60, 60)) != second.getpixel((60, 60))
        assert first.getpixel((WIDTH - 60, HEIGHT - 60)) != second.getpixel((WIDTH - 60, HEIGHT - 60))

    def test_palette_ignored_with_preset(self, font_set, settings, winter_flyer):
        flyer = replace(winter_flyer, preset_id="black-gold-night")
        other = replace(flyer, palette=("#FDE68A", "#FB7185", "#111827"))
        first = rasterize(build_tree(flyer, plan_render(flyer, settings), settings=settings), font_set)
        second = rasterize(build_tree(other, plan_render(other, settings), settings=settings), font_set)
        assert first == second


class TestReferenceRasterize:
    """Catalog presets render over their background; the palette has no say."""

    OTHER_PALETTE = ("#FFFFFF", "#000000", "#FF0000")

    @pytest.fixture
    def backgrounds(self, settings, make_png):
        directory = Path(settings.preset_assets_dir)
        directory.mkdir(parents=True)
        png = make_png((WIDTH, HEIGHT), (40, 90, 160, 255))
        for config in REFERENCE_CONFIGS.values():
            (directory / config.background).write_bytes(png)
        return directory

    def _render(self, flyer, settings, font_set):
        plan = plan_render(flyer, settings)
        assert isinstance(plan, ReferencePlan)
        return rasterize(build_tree(flyer, plan, settings=settings), font_set)

    @pytest.mark.parametrize("preset_id", sorted(REFERENCE_CONFIGS))
    def test_palette_ignored(self, preset_id, backgrounds, font_set, settings, winter_flyer):
        flyer = replace(winter_flyer, preset_id=preset_id)
        first = self._render(flyer, settings, font_set)
        second = self._render(replace(flyer, palette=self.OTHER_PALETTE), settings, font_set)
        assert first == second
        assert _open(first).size == (WIDTH, HEIGHT)

    def test_variant_matches_base(self, backgrounds, font_set, settings, winter_flyer):
        base = replace(winter_flyer, preset_id="red-gold-luxe")
        variant = replace(winter_flyer, preset_id="red-gold-luxe-2", palette=self.OTHER_PALETTE)
        assert self._render(base, settings, font_set) == self._render(variant, settings, font_set)

    def test_background_shows_through(self, backgrounds, font_set, settings, winter_flyer):
        flyer = replace(winter_flyer, preset_id="red-gold-luxe")
        img = _open(self._render(flyer, settings, font_set))
        assert img.getpixel((5, 5))[:3] == (40, 90, 160)


class TestNormalizeArtwork:

    def test_cover_fit(self, make_png):
        result = normalize_artwork(make_png((1024, 1536)))
        assert _open(result).size == (WIDTH, HEIGHT)

    def test_wide_image(self, make_png):
        assert _open(normalize_artwork(make_png((300, 100)))).size == (WIDTH, HEIGHT)

    def test_undecodable(self):
        assert normalize_artwork(b"definitely not an image") is None


class TestPackagePdf:

    def test_single_full_bleed_page(self, make_png):
        pdf = package_pdf(make_png((WIDTH, HEIGHT)))
        assert pdf.startswith(b"%PDF")
        assert len(re.findall(rb"/Type /Page\b", pdf)) == 1
        assert re.search(rb"/MediaBox \[\s*0 0 1080 1350\s*\]", pdf)

    def test_same_input_same_bytes(self, make_png):
        png = make_png((WIDTH, HEIGHT))
        assert package_pdf(png) == package_pdf(png)
