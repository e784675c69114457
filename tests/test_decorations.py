"""
Tests for the decoration layer.
"""
from flyerkit.design_templates import KEYWORD_STYLES, generic_style
from flyerkit.models import DECOR_KINDS
from flyerkit.nodes import Box, Text
from flyerkit.services.decorations import (
    BACKDROPS,
    MOTIF_SPOTS,
    SPARKLE_COUNT,
    build_decorations,
    sparkle_positions,
    themed_backdrop,
)

WINTER = dict(KEYWORD_STYLES)[("winter", "snow", "frost", "ice")]


class TestSparkles:

    def test_count(self):
        assert len(sparkle_positions(1080, 1350)) == SPARKLE_COUNT == 80

    def test_formula(self):
        spots = sparkle_positions(1080, 1350)
        assert spots[0] == (67, 49, 8)
        assert spots[1] == (198, 138, 4)
        assert spots[3][2] == 6

    def test_inside_canvas(self):
        for x, y, size in sparkle_positions(1080, 1350):
            assert 20 <= x < 1060
            assert 20 <= y < 1330
            assert size in (4, 6, 8)


class TestBuildDecorations:

    def test_deterministic(self):
        for kind in DECOR_KINDS:
            first = build_decorations(kind, 1080, 1350, WINTER)
            second = build_decorations(kind, 1080, 1350, WINTER)
            assert first == second

    def test_every_kind_except_generic_has_backdrop(self):
        assert set(BACKDROPS) == set(DECOR_KINDS) - {"generic"}
        assert themed_backdrop("generic", 1080, 1350, WINTER) == []

    def test_all_nodes_are_absolute(self):
        for node in build_decorations("carpet", 1080, 1350, WINTER):
            assert node.style.is_absolute

    def test_motifs_use_style_glyph_and_accent(self):
        style = generic_style("fun")
        motifs = [
            n for n in build_decorations("generic", 1080, 1350, style)
            if isinstance(n, Text) and n.text == style.motif
        ]
        assert len(motifs) == len(MOTIF_SPOTS)
        assert all(m.style.color == style.accent for m in motifs)

    def test_generic_layer_is_orbs_sparkles_and_motifs(self):
        nodes = build_decorations("generic", 1080, 1350, generic_style("elegant"))
        boxes = [n for n in nodes if isinstance(n, Box)]
        assert len(boxes) == 2 + SPARKLE_COUNT
        assert len(nodes) == 2 + SPARKLE_COUNT + len(MOTIF_SPOTS)

    def test_eid_crescent_uses_background_color(self):
        style = generic_style("ramadan")
        moon = build_decorations("eid", 1080, 1350, style)[2]
        assert moon.children[0].style.background == style.to_color
