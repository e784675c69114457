"""
Decoration generator for the generative flyer template.

Builds the ornamental layer that sits behind the text: two ambient orbs, a
themed backdrop per decor kind, a sparkle field and the motif glyphs.

Placement is pure arithmetic on the loop index, never random, so the same
arguments always produce an identical node list.
"""

from typing import List, Tuple

from flyerkit.models import VisualStyle
from flyerkit.nodes import (
    PILL,
    Box,
    LinearGradient,
    Node,
    RadialGradient,
    Text,
    absolute,
    corners,
)

SPARKLE_COUNT = 80
SPARKLE_COLOR = "rgba(255,255,255,0.50)"

# (top, left, size, rotate)
MOTIF_SPOTS: Tuple[Tuple[int, int, int, int], ...] = (
    (84, 68, 52, -16),
    (110, 930, 58, 18),
    (328, 88, 50, -10),
    (382, 936, 50, 9),
    (1030, 92, 46, -18),
    (1080, 942, 56, 10),
)

# Glyph scatter per decor kind: (left, top, glyph, size, color)
GLYPH_SETS = {
    "winter": [
        (120, 210, "*", 56, "rgba(255,255,255,0.75)"),
        (860, 270, "*", 62, "rgba(255,255,255,0.75)"),
        (150, 980, "*", 58, "rgba(255,255,255,0.75)"),
        (910, 1020, "*", 52, "rgba(255,255,255,0.75)"),
    ],
    "garden": [
        (70, 210, "o", 34, "rgba(255,255,255,0.86)"),
        (980, 230, "o", 30, "rgba(255,255,255,0.86)"),
        (90, 1120, "o", 32, "rgba(255,255,255,0.86)"),
        (960, 1110, "o", 34, "rgba(255,255,255,0.86)"),
    ],
    "tropical": [
        (80, 220, "❀", 34, "rgba(255,255,255,0.82)"),
        (940, 250, "❀", 32, "rgba(255,255,255,0.82)"),
        (120, 1040, "❀", 30, "rgba(255,255,255,0.82)"),
        (920, 1080, "❀", 34, "rgba(255,255,255,0.82)"),
        (220, 140, "☼", 30, "rgba(255,255,255,0.82)"),
    ],
    "celestial": [
        (90, 170, "✦", 28, "rgba(224,231,255,0.88)"),
        (980, 180, "✦", 26, "rgba(224,231,255,0.88)"),
        (180, 1040, "✶", 30, "rgba(224,231,255,0.88)"),
        (900, 1090, "✶", 28, "rgba(224,231,255,0.88)"),
        (860, 120, "☾", 34, "rgba(224,231,255,0.88)"),
    ],
    "neon": [
        (120, 170, "◇", 30, "rgba(34,211,238,0.9)"),
        (930, 180, "◇", 30, "rgba(244,114,182,0.9)"),
        (150, 1050, "◆", 28, "rgba(244,114,182,0.9)"),
        (900, 1030, "◆", 28, "rgba(34,211,238,0.9)"),
    ],
    "royal": [
        (150, 140, "✶", 24, "rgba(252,211,77,0.84)"),
        (930, 140, "✶", 24, "rgba(252,211,77,0.84)"),
        (120, 1060, "✦", 24, "rgba(252,211,77,0.84)"),
        (960, 1060, "✦", 24, "rgba(252,211,77,0.84)"),
    ],
    "autumn": [
        (90, 240, "❧", 30, "rgba(251,146,60,0.9)"),
        (970, 260, "❧", 28, "rgba(251,146,60,0.9)"),
        (150, 1070, "❧", 28, "rgba(251,146,60,0.9)"),
        (900, 1100, "❧", 30, "rgba(251,146,60,0.9)"),
    ],
    "spooky": [
        (130, 210, "✶", 24, "rgba(251,146,60,0.88)"),
        (960, 210, "✶", 24, "rgba(251,146,60,0.88)"),
        (190, 1050, "✦", 24, "rgba(251,146,60,0.88)"),
        (860, 1040, "✦", 24, "rgba(251,146,60,0.88)"),
    ],
}

# Glyph scripts; the remaining kinds draw their glyphs with Display
GLYPH_FONTS = {"garden": "Script"}
GLYPH_ROTATION = {"winter": 8}


def _shape(**style) -> Box:
    return Box(absolute(**style))


def sparkle_positions(width: int, height: int, count: int = SPARKLE_COUNT) -> List[Tuple[int, int, int]]:
    """(x, y, size) for the sparkle field."""
    spots = []
    for i in range(count):
        x = (i * 131 + 47) % (width - 40) + 20
        y = (i * 89 + 29) % (height - 40) + 20
        size = 8 if i % 5 == 0 else 6 if i % 3 == 0 else 4
        spots.append((x, y, size))
    return spots


def base_orbs() -> List[Node]:
    return [
        _shape(top=-120, left=-120, width=420, height=420, radius=corners(PILL),
               background="rgba(255,255,255,0.10)"),
        _shape(bottom=-180, right=-80, width=520, height=520, radius=corners(PILL),
               background="rgba(0,0,0,0.18)"),
    ]


# ============================================
# THEMED BACKDROPS
# ============================================

def _winter(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(bottom=-40, left=-20, width=width + 40, height=220, radius=corners(PILL),
               background="rgba(255,255,255,0.22)"),
        _shape(bottom=90, left=120, width=320, height=120, radius=corners(PILL),
               background="rgba(255,255,255,0.16)"),
        _shape(bottom=70, right=90, width=280, height=110, radius=corners(PILL),
               background="rgba(255,255,255,0.14)"),
    ]


def _carpet(style: VisualStyle, width: int, height: int) -> List[Node]:
    nodes: List[Node] = [
        _shape(bottom=-10, left=120, width=840, height=340, radius=(120, 120, 0, 0),
               background=LinearGradient(180, ("rgba(190,18,60,0.18)", "rgba(127,29,29,0.72)"))),
        _shape(top=-40, left=140, width=280, height=560, rotate=-16,
               background="rgba(255,255,255,0.14)"),
        _shape(top=-40, right=140, width=280, height=560, rotate=16,
               background="rgba(255,255,255,0.14)"),
    ]
    # Footlights
    for i in range(6):
        nodes.append(_shape(bottom=110 + i * 18, left=140 + i * 72, width=22, height=22,
                            radius=corners(PILL), background="rgba(255,215,140,0.9)"))
    return nodes


def _eid(style: VisualStyle, width: int, height: int) -> List[Node]:
    # Crescent: a lit disc partly covered by a disc in the background color
    moon = Box(
        absolute(top=140, right=130, width=150, height=150, radius=corners(PILL),
                 background="rgba(255,255,255,0.16)"),
        (_shape(top=18, left=40, width=120, height=120, radius=corners(PILL),
                background=style.to_color),),
    )
    nodes: List[Node] = [
        moon,
        _shape(bottom=40, left=130, width=820, height=210, radius=(420, 420, 0, 0),
               border_width=2, border_color="rgba(255,255,255,0.20)",
               background="rgba(255,255,255,0.05)"),
    ]
    for i in range(4):
        lantern = _shape(top=110, left=-18, width=36, height=44, radius=corners(10),
                         border_width=2, border_color=style.accent,
                         background="rgba(255,255,255,0.10)")
        nodes.append(Box(
            absolute(top=0, left=180 + i * 190, width=2, height=120,
                     background="rgba(255,255,255,0.45)"),
            (lantern,),
        ))
    return nodes


def _desi(style: VisualStyle, width: int, height: int) -> List[Node]:
    nodes: List[Node] = [
        _shape(bottom=-30, left=290, width=500, height=500, radius=corners(PILL),
               border_width=2, border_color="rgba(255,255,255,0.28)", border_dashed=True),
        _shape(bottom=70, left=390, width=300, height=300, radius=corners(PILL),
               border_width=2, border_color=style.accent, opacity=0.55),
    ]
    for i in range(14):
        nodes.append(_shape(left=58 + i * 68, bottom=90 + (i % 2) * 8, width=16, height=16,
                            radius=corners(PILL), opacity=0.85,
                            background=style.accent if i % 3 == 0 else style.accent2))
    return nodes


def _garden(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=-30, left=-20, width=320, height=500, radius=corners(180),
               background="rgba(255,255,255,0.10)", rotate=-18),
        _shape(top=-30, right=-20, width=320, height=500, radius=corners(180),
               background="rgba(255,255,255,0.10)", rotate=18),
    ]


def _tropical(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(left=-40, top=250, width=240, height=520, radius=corners(180),
               background="rgba(16,185,129,0.22)", rotate=-14),
        _shape(right=-30, top=220, width=250, height=560, radius=corners(180),
               background="rgba(251,191,36,0.22)", rotate=12),
    ]


def _celestial(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=-80, left=250, width=620, height=260, radius=(0, 0, 320, 320),
               background="rgba(255,255,255,0.08)"),
        _shape(bottom=30, right=80, width=190, height=190, radius=corners(PILL),
               border_width=2, border_color="rgba(196,181,253,0.40)"),
    ]


def _neon(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=140, right=90, bottom=120, left=90, radius=corners(36),
               border_width=3, border_color="rgba(34,211,238,0.45)"),
        _shape(top=190, right=140, bottom=170, left=140, radius=corners(28),
               border_width=3, border_color="rgba(244,114,182,0.40)"),
    ]


def _royal(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=110, left=120, right=120, height=2, background="rgba(252,211,77,0.45)"),
        _shape(top=124, left=180, right=180, height=1, background="rgba(252,211,77,0.35)"),
    ]


def _autumn(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(bottom=-20, left=0, width=width, height=170, background="rgba(120,53,15,0.45)"),
        _shape(bottom=120, left=80, width=220, height=80, radius=corners(PILL),
               background="rgba(251,146,60,0.22)"),
    ]


def _spooky(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(bottom=0, left=80, width=920, height=260, radius=(460, 460, 0, 0),
               background="rgba(0,0,0,0.40)"),
        _shape(top=130, right=120, width=140, height=140, radius=corners(PILL),
               background="rgba(251,146,60,0.24)"),
    ]


def _floral_lilac(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=40, right=40, bottom=40, left=40, radius=corners(30),
               border_width=2, border_color="rgba(255,255,255,0.35)"),
        _shape(top=70, left=70, width=260, height=260, radius=corners(PILL),
               background="rgba(255,255,255,0.15)"),
        _shape(bottom=70, right=70, width=280, height=280, radius=corners(PILL),
               background="rgba(255,255,255,0.12)"),
    ]


def _marble_geo(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=80, right=120, bottom=80, left=120, radius=corners(36),
               border_width=4, border_color=style.accent, background="rgba(255,255,255,0.35)"),
        _shape(top=140, right=120, width=260, height=260, rotate=20,
               border_width=3, border_color=style.accent2),
    ]


def _black_gold(style: VisualStyle, width: int, height: int) -> List[Node]:
    glow = (
        RadialGradient(20, 12, "rgba(230,195,106,0.16)", 36),
        RadialGradient(85, 90, "rgba(230,195,106,0.16)", 34),
    )
    return [
        _shape(top=0, left=0, width=width, height=height, background=glow),
        _shape(top=38, right=38, bottom=38, left=38, radius=corners(30),
               border_width=2, border_color=style.accent),
    ]


def _blue_arch(style: VisualStyle, width: int, height: int) -> List[Node]:
    return [
        _shape(top=86, left=170, width=740, height=1060, radius=(420, 420, 24, 24),
               background="rgba(255,255,255,0.74)", border_width=3, border_color=style.accent),
    ]


def _mint_vintage(style: VisualStyle, width: int, height: int) -> List[Node]:
    glow = (
        RadialGradient(18, 22, "rgba(255,255,255,0.18)", 30),
        RadialGradient(90, 75, "rgba(255,255,255,0.16)", 28),
    )
    return [
        _shape(top=0, left=0, width=width, height=height, background=glow),
        _shape(top=74, right=90, bottom=74, left=90, radius=corners(28),
               border_width=2, border_color="rgba(255,255,255,0.4)"),
    ]


BACKDROPS = {
    "winter": _winter,
    "carpet": _carpet,
    "eid": _eid,
    "desi": _desi,
    "garden": _garden,
    "tropical": _tropical,
    "celestial": _celestial,
    "neon": _neon,
    "royal": _royal,
    "autumn": _autumn,
    "spooky": _spooky,
    "floral_lilac": _floral_lilac,
    "marble_geo": _marble_geo,
    "black_gold": _black_gold,
    "blue_arch": _blue_arch,
    "mint_vintage": _mint_vintage,
}


def themed_backdrop(decor_kind: str, width: int, height: int, style: VisualStyle) -> List[Node]:
    recipe = BACKDROPS.get(decor_kind)
    return recipe(style, width, height) if recipe else []


def sparkle_field(width: int, height: int) -> List[Node]:
    return [
        _shape(left=x, top=y, width=s, height=s, radius=corners(PILL), background=SPARKLE_COLOR)
        for x, y, s in sparkle_positions(width, height)
    ]


def motif_glyphs(style: VisualStyle) -> List[Node]:
    return [
        Text(style.motif, "Body", 400,
             absolute(left=left, top=top, size=size, rotate=rotate, opacity=0.92, color=style.accent))
        for top, left, size, rotate in MOTIF_SPOTS
    ]


def glyph_scatter(decor_kind: str) -> List[Node]:
    font = GLYPH_FONTS.get(decor_kind, "Display")
    rotate = GLYPH_ROTATION.get(decor_kind, 0)
    return [
        Text(glyph, font, 400, absolute(left=left, top=top, size=size, color=color, rotate=rotate))
        for left, top, glyph, size, color in GLYPH_SETS.get(decor_kind, [])
    ]


def build_decorations(decor_kind: str, width: int, height: int, style: VisualStyle) -> List[Node]:
    """Ornamental layer for one decor kind, back to front."""
    return [
        *base_orbs(),
        *themed_backdrop(decor_kind, width, height, style),
        *sparkle_field(width, height),
        *motif_glyphs(style),
        *glyph_scatter(decor_kind),
    ]
