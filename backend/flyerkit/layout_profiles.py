"""
Layout profile tables.

One LayoutProfile per decor kind drives the generative template. One
ReferenceConfig per catalog preset drives the background-overlay template.
"""

from dataclasses import replace
from typing import Dict, Optional

from flyerkit.models import LayoutProfile, PanelPlacement, ReferenceConfig
from flyerkit.templates import normalize_preset_id

BASE_PROFILE = LayoutProfile()


# ============================================
# GENERATIVE LAYOUT PROFILES
# ============================================
LAYOUT_PROFILES: Dict[str, LayoutProfile] = {
    "winter": replace(
        BASE_PROFILE,
        title_top_size=140,
        title_bottom_size=94,
        invite_size=46,
        tagline_size=46,
        tagline_color_mode="text",
        closing_size=52,
        logo_size=66,
    ),
    "carpet": replace(
        BASE_PROFILE,
        title_top_size=148,
        title_bottom_size=86,
        invite_size=38,
        tagline_size=42,
        date_ribbon_style="banner",
        closing_size=50,
        invite_font="Display",
        tagline_font="Display",
        logo_size=74,
    ),
    "eid": replace(
        BASE_PROFILE,
        title_top_size=124,
        title_bottom_size=94,
        title_top_uppercase=False,
        invite_size=44,
        tagline_size=44,
        tagline_color_mode="text",
        closing_size=50,
        detail_value_font="Script",
        logo_size=70,
    ),
    "desi": replace(
        BASE_PROFILE,
        title_align="left",
        title_top_size=126,
        title_bottom_size=84,
        invite_size=38,
        tagline_size=40,
        date_ribbon_style="banner",
        detail_align="left",
        closing_size=46,
        invite_font="Display",
        detail_value_font="Script",
        logo_size=68,
    ),
    "garden": replace(
        BASE_PROFILE,
        title_align="left",
        title_top_size=116,
        title_bottom_size=80,
        title_top_uppercase=False,
        invite_size=36,
        tagline_size=40,
        tagline_color_mode="text",
        detail_align="left",
        closing_size=44,
        title_top_font="Script",
        title_bottom_font="Display",
        detail_label_font="Body",
        logo_size=62,
    ),
    "tropical": replace(
        BASE_PROFILE,
        title_top_size=138,
        title_bottom_size=84,
        invite_size=36,
        tagline_size=42,
        tagline_color_mode="text",
        date_ribbon_style="banner",
        invite_font="Display",
        logo_size=70,
    ),
    "celestial": replace(
        BASE_PROFILE,
        title_top_size=126,
        title_bottom_size=82,
        title_top_uppercase=False,
        invite_size=34,
        tagline_size=38,
        tagline_color_mode="text",
        detail_label_font="Body",
        logo_size=60,
    ),
    "neon": replace(
        BASE_PROFILE,
        title_align="left",
        title_top_size=142,
        title_bottom_size=78,
        invite_size=34,
        tagline_size=36,
        date_ribbon_style="banner",
        detail_align="left",
        invite_font="Display",
        title_bottom_font="Display",
        tagline_font="Display",
        closing_font="Display",
        logo_size=68,
    ),
    "royal": replace(
        BASE_PROFILE,
        title_top_size=120,
        title_bottom_size=86,
        title_top_uppercase=False,
        invite_size=34,
        tagline_size=38,
        tagline_color_mode="text",
        tagline_font="Body",
        logo_size=76,
    ),
    "autumn": replace(
        BASE_PROFILE,
        title_align="left",
        title_top_size=122,
        title_bottom_size=80,
        invite_size=34,
        tagline_size=36,
        detail_align="left",
        date_ribbon_style="banner",
        tagline_font="Body",
        logo_size=64,
    ),
    "spooky": replace(
        BASE_PROFILE,
        title_top_size=134,
        title_bottom_size=74,
        invite_size=34,
        tagline_size=36,
        date_ribbon_style="banner",
        invite_font="Display",
        title_bottom_font="Display",
        tagline_font="Body",
        closing_font="Display",
        logo_size=72,
    ),
    "floral_lilac": replace(
        BASE_PROFILE,
        title_top_size=116,
        title_bottom_size=84,
        title_top_uppercase=False,
        invite_size=34,
        tagline_size=40,
        title_top_font="Script",
        title_bottom_font="Display",
        detail_label_font="Body",
        logo_size=66,
    ),
    "marble_geo": replace(
        BASE_PROFILE,
        title_top_size=112,
        title_bottom_size=80,
        title_top_uppercase=False,
        invite_size=32,
        tagline_size=36,
        tagline_color_mode="text",
        tagline_font="Body",
        logo_size=60,
    ),
    "black_gold": replace(
        BASE_PROFILE,
        title_top_size=130,
        title_bottom_size=80,
        invite_size=34,
        tagline_size=36,
        tagline_color_mode="text",
        date_ribbon_style="banner",
        invite_font="Display",
        tagline_font="Display",
        logo_size=70,
    ),
    "blue_arch": replace(
        BASE_PROFILE,
        title_top_size=108,
        title_bottom_size=76,
        title_top_uppercase=False,
        invite_size=30,
        tagline_size=34,
        tagline_color_mode="text",
        tagline_font="Body",
        logo_size=60,
    ),
    "mint_vintage": replace(
        BASE_PROFILE,
        title_top_size=110,
        title_bottom_size=76,
        title_top_uppercase=False,
        invite_size=32,
        tagline_size=34,
        title_top_font="Script",
        title_bottom_font="Display",
        tagline_font="Body",
        logo_size=62,
    ),
    "generic": BASE_PROFILE,
}


# ============================================
# REFERENCE TEMPLATE CONFIGS
# ============================================
REFERENCE_CONFIGS: Dict[str, ReferenceConfig] = {
    "eid-lantern-gold": ReferenceConfig(
        preset_id="eid-lantern-gold",
        background="eid-lantern-gold (2).png",
        panel_inset=(390, 80, 140, 80),
        ink="#1F3557",
        accent="#0A3A8A",
        title_size=84,
        script_size=52,
        card_tint="rgba(255,255,255,0.18)",
        title_font="Display",
        tagline_font="Script",
        info_font="Display",
        tagline_weight=800,
        title_upper=True,
        tagline_upper=True,
        title_letter_spacing=0.03,
        tagline_letter_spacing=0.07,
        tagline_size=44,
        background_position="left top",
        placement=PanelPlacement(width_pct=92, min_height_pct=36, y_anchor="bottom", y_pct=0),
    ),
    "pink-brunch-bouquet": ReferenceConfig(
        preset_id="pink-brunch-bouquet",
        background="pink-brunch-bouquet.png",
        panel_inset=(160, 120, 160, 120),
        ink="#7A1D43",
        accent="#8D1F4C",
        title_size=74,
        script_size=50,
        card_tint="rgba(255,255,255,0.08)",
        title_font="Display",
        tagline_font="Script",
        info_font="Body",
        title_weight=950,
        tagline_weight=800,
        info_weight=900,
        location_weight=800,
        meta_weight=800,
        title_upper=True,
        title_letter_spacing=0.01,
        text_shadow=True,
        placement=PanelPlacement(width_pct=42, min_height_pct=62, x_anchor="right", x_pct=6),
    ),
    "blue-floral-side-card": ReferenceConfig(
        preset_id="blue-floral-side-card",
        background="blue-floral.png",
        panel_inset=(150, 120, 140, 120),
        ink="#1F2F47",
        accent="#1C3D6E",
        title_size=68,
        script_size=48,
        card_tint="rgba(255,255,255,0.76)",
        title_font="Script",
        tagline_font="Body",
        info_font="Display",
        title_weight=700,
        title_letter_spacing=0.0,
    ),
    "red-gold-luxe": ReferenceConfig(
        preset_id="red-gold-luxe",
        background="red-gold-flower.png",
        panel_inset=(170, 140, 180, 140),
        ink="#F8E8C3",
        accent="#E2BF68",
        title_size=88,
        script_size=58,
        card_tint="rgba(90,8,20,0.35)",
        title_font="Script",
        tagline_font="Script",
        info_font="Display",
        title_weight=800,
    ),
    "marble-geo-leaf": ReferenceConfig(
        preset_id="marble-geo-leaf",
        background="marble-green-white-floral.png",
        panel_inset=(220, 170, 190, 170),
        ink="#3A3125",
        accent="#C79E48",
        title_size=74,
        script_size=46,
        card_tint="rgba(255,255,255,0.5)",
        tagline_weight=600,
        title_letter_spacing=0.04,
        placement=PanelPlacement(y_pct=40),
    ),
    "golden-floral-save-date": ReferenceConfig(
        preset_id="golden-floral-save-date",
        background="light-yellow-floral.png",
        panel_inset=(190, 140, 190, 140),
        ink="#564727",
        accent="#A6883F",
        title_size=74,
        script_size=52,
        card_tint="rgba(255,255,255,0.46)",
        title_font="Script",
        tagline_font="Script",
    ),
    "teal-mandala-invite": ReferenceConfig(
        preset_id="teal-mandala-invite",
        background="nacy-blue-golden-floral.png",
        panel_inset=(210, 180, 180, 180),
        ink="#E4CC92",
        accent="#C8AA5A",
        title_size=76,
        script_size=48,
        card_tint="rgba(3,45,46,0.35)",
        info_font="Display",
        title_upper=True,
        title_letter_spacing=0.05,
        placement=PanelPlacement(y_pct=40),
    ),
    "mint-vintage-floral": ReferenceConfig(
        preset_id="mint-vintage-floral",
        background="pastel-green-floral.png",
        panel_inset=(180, 145, 185, 145),
        ink="#28512F",
        accent="#2F6338",
        title_size=72,
        script_size=54,
        card_tint="rgba(255,255,255,0.22)",
        title_font="Script",
        tagline_font="Script",
    ),
    "blue-arch-floral": ReferenceConfig(
        preset_id="blue-arch-floral",
        background="cyan-white-floral.png",
        panel_inset=(170, 170, 185, 170),
        ink="#192D44",
        accent="#2C5E97",
        title_size=78,
        script_size=54,
        card_tint="rgba(255,255,255,0.6)",
        title_font="Script",
        tagline_font="Display",
        info_font="Display",
    ),
    "ruby-ornate-invitation": ReferenceConfig(
        preset_id="ruby-ornate-invitation",
        background="red-floral-gold.png",
        panel_inset=(150, 270, 180, 270),
        ink="#F8E8C3",
        accent="#E0BE5F",
        title_size=76,
        script_size=56,
        card_tint="rgba(104,0,19,0.38)",
        title_font="Script",
        tagline_font="Display",
        info_font="Display",
        title_weight=800,
        tagline_upper=True,
        tagline_letter_spacing=0.08,
    ),
    "aqua-watercolor-gold": ReferenceConfig(
        preset_id="aqua-watercolor-gold",
        background="blue-green.png",
        panel_inset=(180, 150, 180, 150),
        ink="#FFF6DC",
        accent="#F4CD76",
        title_size=76,
        script_size=50,
        card_tint="rgba(15,87,95,0.46)",
    ),
    "lilac-hex-floral": ReferenceConfig(
        preset_id="lilac-hex-floral",
        background="purple-floral.png",
        panel_inset=(210, 180, 200, 180),
        ink="#4A3B63",
        accent="#B89445",
        title_size=70,
        script_size=48,
        card_tint="rgba(255,255,255,0.56)",
        title_font="Script",
        tagline_font="Display",
    ),
}


def layout_profile_for(decor_kind: str) -> LayoutProfile:
    """Get the generative layout profile (base profile for unknown kinds)."""
    return LAYOUT_PROFILES.get(decor_kind, BASE_PROFILE)


def reference_config_for(preset_id: Optional[str]) -> Optional[ReferenceConfig]:
    """Get the reference template config, or None for unknown presets.

    Ids ending in "-2" share their base preset's config.
    """
    return REFERENCE_CONFIGS.get(normalize_preset_id(preset_id))

