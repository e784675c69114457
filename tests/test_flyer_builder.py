"""
Tests for render planning and flyer tree assembly.
"""
import logging
from dataclasses import replace
from pathlib import Path

import pytest

from flyerkit.layout_profiles import REFERENCE_CONFIGS
from flyerkit.models import FlyerInput
from flyerkit.nodes import Box, Picture, Text, walk
from flyerkit.services.flyer_builder import (
    HEIGHT,
    WIDTH,
    GenerativePlan,
    ReferencePlan,
    _panel_style,
    build_tree,
    load_logo,
    plan_render,
    split_title,
)


def _texts(tree):
    return [n.text for n in walk(tree) if isinstance(n, Text)]


@pytest.fixture
def preset_dir(settings):
    path = Path(settings.preset_assets_dir)
    path.mkdir(parents=True)
    return path


class TestSplitTitle:
    """Themes of up to two words stay on the top line."""

    def test_single_word(self):
        assert split_title("Gala") == ("Gala", "")

    def test_two_words(self):
        assert split_title("Eid   Dinner") == ("Eid Dinner", "")

    def test_four_words(self):
        assert split_title("Winter Wonderland Gala Night") == ("Winter Wonderland", "Gala Night")

    def test_empty(self):
        assert split_title("   ") == ("EVENT", "")


class TestPlanRender:

    def test_no_preset_is_generative(self, settings, winter_flyer):
        plan = plan_render(winter_flyer, settings)
        assert isinstance(plan, GenerativePlan)
        assert plan.style.decor_kind == "winter"
        assert plan.banner == "WINTER WONDERLAND"

    def test_preset_with_background(self, settings, preset_dir, winter_flyer, make_png):
        png = make_png()
        (preset_dir / "red-gold-flower.png").write_bytes(png)
        plan = plan_render(replace(winter_flyer, preset_id="red-gold-luxe"), settings)
        assert isinstance(plan, ReferencePlan)
        assert plan.config is REFERENCE_CONFIGS["red-gold-luxe"]
        assert plan.background == png

    def test_variant_preset_uses_base_background(self, settings, preset_dir, winter_flyer, make_png):
        (preset_dir / "red-gold-flower.png").write_bytes(make_png())
        plan = plan_render(replace(winter_flyer, preset_id="red-gold-luxe-2"), settings)
        assert isinstance(plan, ReferencePlan)

    def test_missing_background_falls_back(self, settings, winter_flyer, caplog):
        flyer = replace(winter_flyer, preset_id="red-gold-luxe")
        with caplog.at_level(logging.WARNING, logger="flyerkit.services.flyer_builder"):
            plan = plan_render(flyer, settings)
        assert isinstance(plan, GenerativePlan)
        assert plan.style.decor_kind == "carpet"
        assert plan.banner == ""
        assert "red-gold-luxe" in caplog.text

    def test_unknown_preset_is_generative(self, settings, winter_flyer):
        plan = plan_render(replace(winter_flyer, preset_id="does-not-exist"), settings)
        assert isinstance(plan, GenerativePlan)
        assert plan.style.decor_kind == "winter"


class TestGenerativeTree:

    def test_canvas_root(self, settings, winter_flyer):
        tree = build_tree(winter_flyer, plan_render(winter_flyer, settings), settings=settings)
        assert isinstance(tree, Box)
        assert (tree.style.width, tree.style.height) == (WIDTH, HEIGHT)
        assert tree.style.clip

    def test_every_text_has_font_and_weight(self, settings, winter_flyer):
        tree = build_tree(winter_flyer, plan_render(winter_flyer, settings), settings=settings)
        for node in walk(tree):
            if isinstance(node, Text):
                assert node.font in ("Body", "Display", "Script")
                assert 100 <= node.weight <= 1000

    def test_content_lines(self, settings, winter_flyer):
        tree = build_tree(winter_flyer, plan_render(winter_flyer, settings), settings=settings)
        texts = _texts(tree)
        assert "Winter Wonderland" in texts
        assert "Gala" in texts
        assert winter_flyer.tagline in texts
        assert winter_flyer.date_time_text in texts
        assert "Grand Hall" in texts
        assert "Dress Code" in texts
        assert "WINTER WONDERLAND" in texts
        assert settings.closing_line in texts
        assert settings.brand_label in texts

    def test_optional_rows_omitted(self, settings):
        flyer = FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM")
        texts = _texts(build_tree(flyer, plan_render(flyer, settings), settings=settings))
        assert "Dress Code" not in texts
        assert "Note" not in texts
        assert "TBD" in texts

    def test_note_row(self, settings):
        flyer = FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM", note="Bring a dish")
        texts = _texts(build_tree(flyer, plan_render(flyer, settings), settings=settings))
        assert "Note" in texts
        assert "Bring a dish" in texts

    def test_logo_in_header(self, settings, winter_flyer, make_png):
        Path(settings.logo_image_path).write_bytes(make_png())
        logo = load_logo(settings)
        tree = build_tree(winter_flyer, plan_render(winter_flyer, settings), logo, settings)
        pictures = [n for n in walk(tree) if isinstance(n, Picture)]
        assert len(pictures) == 1
        assert pictures[0].data == logo

    def test_missing_logo(self, settings):
        assert load_logo(settings) is None


class TestReferenceTree:

    def test_background_and_panel(self, settings, preset_dir, winter_flyer, make_png):
        (preset_dir / "eid-lantern-gold (2).png").write_bytes(make_png())
        flyer = replace(winter_flyer, preset_id="eid-lantern-gold")
        tree = build_tree(flyer, plan_render(flyer, settings), settings=settings)

        background, panel = tree.children
        assert isinstance(background, Picture)
        assert background.fit == "cover"
        assert background.focus == "left top"
        assert panel.style.background == "rgba(255,255,255,0.18)"

        texts = _texts(tree)
        assert flyer.tagline in texts
        assert "Winter Wonderland Gala" in texts
        assert "Dress Code: Formal" in texts

    def test_defaults_for_empty_fields(self, settings, preset_dir, make_png):
        (preset_dir / "blue-green.png").write_bytes(make_png())
        flyer = FlyerInput(theme="Beach Brunch", date_time_text="Sun 11 AM", preset_id="aqua-watercolor-gold")
        texts = _texts(build_tree(flyer, plan_render(flyer, settings), settings=settings))
        assert "You are invited" in texts
        assert "Location TBD" in texts

    def test_panel_limited_by_inset(self):
        geometry = _panel_style(REFERENCE_CONFIGS["ruby-ornate-invitation"])
        assert geometry["width"] == WIDTH - 270 - 270
        assert geometry["center_x"] and geometry["center_y"]

    def test_bottom_anchored_panel(self):
        geometry = _panel_style(REFERENCE_CONFIGS["eid-lantern-gold"])
        assert geometry["bottom"] == 0
        assert geometry["width"] == WIDTH - 80 - 80
        assert "top" not in geometry

    def test_right_anchored_panel(self):
        geometry = _panel_style(REFERENCE_CONFIGS["pink-brunch-bouquet"])
        assert geometry["right"] == pytest.approx(WIDTH * 0.06)
        assert geometry["width"] == pytest.approx(WIDTH * 0.42)
