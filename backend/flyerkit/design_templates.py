"""
Style selection for generative flyers.

Three ordered tables drive the decision:
1. PRESET STYLES - substring aliases on the preset id (first match wins)
2. KEYWORD STYLES - keyword groups on theme + dress code + note (first match wins)
3. TEMPLATE DEFAULTS - the template key's colors wrapped into a generic style

An explicit palette then overrides the gradient and accent colors when no
preset is active.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from flyerkit.colors import is_hex_color, is_light
from flyerkit.models import FlyerInput, VisualStyle
from flyerkit.templates import event_haystack, template_defaults

logger = logging.getLogger(__name__)


# ============================================
# PRESET STYLES
# ============================================
PRESET_STYLES: Tuple[Tuple[Tuple[str, ...], VisualStyle], ...] = (
    (("eid-lantern-gold",), VisualStyle(
        "#F1E1C9", "#D5BC98", "#F9F5E8", "rgba(255,255,255,0.14)",
        "#0A3A8A", "#E0B75C", "*", ".", "you are warmly invited", "eid",
    )),
    (("pink-brunch-bouquet",), VisualStyle(
        "#F9C3D6", "#E989AF", "#FFF7FA", "rgba(255,255,255,0.18)",
        "#FFFFFF", "#FCE7F3", "o", ".", "join us for a special brunch", "floral_lilac",
    )),
    (("blue-floral-side-card",), VisualStyle(
        "#F6F8FB", "#DCE8F7", "#1B2940", "rgba(255,255,255,0.72)",
        "#1C3D6E", "#CDAA6A", "o", ".", "kindly join us", "blue_arch",
    )),
    (("red-gold-luxe",), VisualStyle(
        "#7E0E1E", "#5A0814", "#FFF5E6", "rgba(255,210,130,0.08)",
        "#E4BD67", "#BA8E37", "*", ".", "", "carpet",
    )),
    (("marble-geo-leaf",), VisualStyle(
        "#F1EFEB", "#D9D4CD", "#2F2A25", "rgba(255,255,255,0.65)",
        "#CDA64E", "#A68135", ".", ".", "cordially invites you", "marble_geo",
    )),
    (("golden-floral-save-date",), VisualStyle(
        "#F3EBC7", "#E2CF8E", "#3E3728", "rgba(255,255,255,0.44)",
        "#A58A3A", "#C0A251", "o", ".", "save the date", "floral_lilac",
    )),
    (("teal-mandala-invite",), VisualStyle(
        "#063E3F", "#032D2E", "#F8F2DD", "rgba(255,255,255,0.10)",
        "#E2C673", "#BC9D4D", "*", ".", "invitation design", "royal",
    )),
    (("mint-vintage-floral",), VisualStyle(
        "#CAE1C8", "#9DBA98", "#24462A", "rgba(255,255,255,0.24)",
        "#2D5C35", "#6A8F65", "o", ".", "you are invited", "mint_vintage",
    )),
    (("blue-arch-floral",), VisualStyle(
        "#D6EEFF", "#B5DDF6", "#1E2E40", "rgba(255,255,255,0.62)",
        "#2C5E97", "#7BA9CC", "o", ".", "save the date", "blue_arch",
    )),
    (("ruby-ornate-invitation",), VisualStyle(
        "#8E001A", "#680013", "#FCEFC7", "rgba(255,220,160,0.08)",
        "#E0BE5F", "#B99233", "*", ".", "invitation", "carpet",
    )),
    (("aqua-watercolor-gold",), VisualStyle(
        "#D2F7FA", "#9DEAF0", "#1E5C65", "rgba(255,255,255,0.60)",
        "#D9BA63", "#B08D35", ".", ".", "wedding invitation", "marble_geo",
    )),
    (("lilac-hex-floral",), VisualStyle(
        "#EADCF3", "#D3BFE6", "#3E2E58", "rgba(255,255,255,0.56)",
        "#B89445", "#9B7A2F", "o", ".", "the wedding of", "floral_lilac",
    )),
    (("black-gold",), VisualStyle(
        "#05070F", "#000000", "#FAFAF9", "rgba(255,255,255,0.08)",
        "#E6C36A", "#B38F3A", ".", ".", "exclusive invitation", "black_gold",
    )),
    (("red-gold", "ruby"), VisualStyle(
        "#7F0F1F", "#520915", "#FFF7ED", "rgba(255,240,200,0.10)",
        "#E8C86A", "#C89B3C", "*", ".", "roll out the red carpet", "carpet",
    )),
    (("lilac", "floral", "blush"), VisualStyle(
        "#7B5EA7", "#5A3E83", "#F8F5FF", "rgba(255,255,255,0.15)",
        "#E6D7FF", "#D7C26B", "o", ".", "please join us to celebrate", "floral_lilac",
    )),
    (("blue-floral-arch",), VisualStyle(
        "#8CBFE1", "#5D90B5", "#F7FBFF", "rgba(255,255,255,0.18)",
        "#E8C87A", "#D3A953", "o", ".", "save the date", "blue_arch",
    )),
    (("mint-floral-vintage",), VisualStyle(
        "#9FBF9E", "#6C8F73", "#F6FFF6", "rgba(255,255,255,0.16)",
        "#F5D69A", "#D2B173", "o", ".", "you are invited to the celebration", "mint_vintage",
    )),
    (("marble",), VisualStyle(
        "#EDEBE8", "#C9C6C1", "#1F2937", "rgba(255,255,255,0.60)",
        "#D8B05F", "#B68C3D", ".", ".", "cordially invites you", "marble_geo",
    )),
)


# ============================================
# KEYWORD STYLES
# ============================================
# Winter sits ahead of royal so "gala"/"formal" don't swallow winter themes.
KEYWORD_STYLES: Tuple[Tuple[Tuple[str, ...], VisualStyle], ...] = (
    (("summer", "sun", "sunset", "beach", "tropical", "pool", "hawaii", "island", "vacation"), VisualStyle(
        "#0EA5E9", "#0369A1", "#F0F9FF", "rgba(255,255,255,0.14)",
        "#FDE68A", "#FB7185", "✦", ".", "join us for a summer celebration", "tropical",
    )),
    (("galaxy", "space", "cosmic", "moonlight", "starlight", "nebula", "constellation"), VisualStyle(
        "#1E1B4B", "#312E81", "#EDE9FE", "rgba(255,255,255,0.12)",
        "#C4B5FD", "#A78BFA", "✶", "✦", "step into a night among the stars", "celestial",
    )),
    (("neon", "retro", "80s", "dance", "club", "electric", "glow", "dj", "disco"), VisualStyle(
        "#3B0764", "#0F172A", "#F5F3FF", "rgba(255,255,255,0.12)",
        "#22D3EE", "#F472B6", "✹", "•", "turn up the vibe and celebrate", "neon",
    )),
    (("winter", "snow", "frost", "ice"), VisualStyle(
        "#0E7490", "#155E75", "#ECFEFF", "rgba(255,255,255,0.14)",
        "#E0F2FE", "#7DD3FC", "*", ".", "you are invited to our", "winter",
    )),
    (("royal", "elegant", "black tie", "gala", "formal", "classic", "luxury"), VisualStyle(
        "#1F2937", "#111827", "#F9FAFB", "rgba(255,255,255,0.10)",
        "#FCD34D", "#F59E0B", "✶", "✦", "you are cordially invited", "royal",
    )),
    (("halloween", "spooky", "haunted", "pumpkin night", "boo"), VisualStyle(
        "#111827", "#3F3F46", "#FAFAF9", "rgba(255,255,255,0.10)",
        "#FB923C", "#F97316", "✶", "•", "join us for a spooky night", "spooky",
    )),
    (("red carpet", "hollywood", "glam", "awards", "star"), VisualStyle(
        "#7F1D1D", "#3F0000", "#FFF7ED", "rgba(255,215,140,0.14)",
        "#FDE68A", "#FB923C", "*", "+", "join us for the", "carpet",
    )),
    (("ramadan", "eid", "iftar", "moon"), VisualStyle(
        "#064E3B", "#022C22", "#ECFDF5", "rgba(167,243,208,0.16)",
        "#A7F3D0", "#34D399", "o", "+", "you are warmly invited", "eid",
    )),
    (("desi", "mehndi", "bollywood", "sangeet", "wedding"), VisualStyle(
        "#7C2D12", "#4A1A00", "#FFF7ED", "rgba(255,186,120,0.15)",
        "#FDBA74", "#EA580C", "*", ".", "come celebrate with us", "desi",
    )),
    (("spring", "garden", "floral", "bloom", "picnic", "botanical", "blossom"), VisualStyle(
        "#166534", "#14532D", "#F0FDF4", "rgba(134,239,172,0.14)",
        "#BBF7D0", "#84CC16", "o", ".", "come celebrate with us", "garden",
    )),
    (("autumn", "fall", "harvest", "maple", "pumpkin"), VisualStyle(
        "#9A3412", "#78350F", "#FFF7ED", "rgba(255,237,213,0.14)",
        "#F59E0B", "#FDBA74", "*", ".", "you're invited to our autumn gathering", "autumn",
    )),
)


BANNER_LABELS = {
    "winter": "WINTER WONDERLAND",
    "carpet": "RED CARPET CELEBRATION",
    "eid": "EID NIGHT",
    "desi": "DESI GLAM",
    "garden": "GARDEN PARTY",
    "tropical": "SUMMER VIBES",
    "celestial": "STARLIGHT NIGHT",
    "neon": "NEON PARTY",
    "royal": "ROYAL GALA",
    "autumn": "AUTUMN SOCIAL",
    "spooky": "SPOOKY NIGHT",
    "floral_lilac": "FLORAL ELEGANCE",
    "marble_geo": "MARBLE CLASSIC",
    "black_gold": "GOLDEN SOIREE",
    "blue_arch": "SAVE THE DATE",
    "mint_vintage": "VINTAGE BLOOM",
    "generic": "SPECIAL EVENT",
}


def generic_style(template_key: str) -> VisualStyle:
    """Template key colors wrapped into the generic decor kind."""
    d = template_defaults(template_key)
    return VisualStyle(
        from_color=d["bg"],
        to_color="#1F2937",
        text=d["text"],
        soft_panel="rgba(255,255,255,0.12)",
        accent=d["accent"],
        accent2="#F59E0B",
        motif="*",
        sparkle=".",
        invite_line="you are invited",
        decor_kind="generic",
    )


def match_preset_style(preset_id: Optional[str]) -> Optional[VisualStyle]:
    """First preset alias whose needle occurs in the preset id."""
    preset = (preset_id or "").lower()
    if not preset:
        return None
    for needles, style in PRESET_STYLES:
        if any(n in preset for n in needles):
            return style
    return None


def match_keyword_style(haystack: str) -> Optional[VisualStyle]:
    """First keyword group with any keyword in the haystack."""
    for keywords, style in KEYWORD_STYLES:
        if any(kw in haystack for kw in keywords):
            return style
    return None


def apply_palette(style: VisualStyle, palette: Sequence[str]) -> VisualStyle:
    """Override gradient stops and accent with palette[0..2]."""
    p0, p1, p2 = palette[0], palette[1], palette[2]
    return replace(
        style,
        from_color=p0,
        to_color=p1,
        accent=p2,
        accent2=p1,
        text="#111827" if is_light(p0) and is_light(p1) else "#F9FAFB",
        soft_panel="rgba(17,24,39,0.08)" if is_light(p0) else "rgba(255,255,255,0.14)",
    )


def select_style(flyer: FlyerInput) -> VisualStyle:
    """Resolve the visual style for a generative render."""
    style = None
    if flyer.has_preset:
        style = match_preset_style(flyer.preset_id)

    if style is None:
        haystack = event_haystack(flyer.theme, flyer.dress_code, flyer.note)
        style = match_keyword_style(haystack)

    if style is None:
        style = generic_style(flyer.template_key)

    palette = flyer.palette
    if not flyer.has_preset and len(palette) >= 3:
        if all(is_hex_color(c) for c in palette[:3]):
            style = apply_palette(style, palette)
        else:
            logger.debug(f"Ignoring palette with non-hex colors: {list(palette[:3])}")

    return style


def banner_label(flyer: FlyerInput, style: VisualStyle) -> str:
    """All-caps themed label, only shown when no preset is active."""
    if flyer.has_preset:
        return ""
    return BANNER_LABELS.get(style.decor_kind, BANNER_LABELS["generic"])
