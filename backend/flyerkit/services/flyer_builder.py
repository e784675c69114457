"""
Flyer layout tree builder.

Decides once per call whether a flyer renders from a reference preset
(background artwork plus a content panel) or from the generative template
(gradient, decorations and a stacked text layout), then assembles the
matching node tree for the rasterizer.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from flyerkit.config import Settings, get_settings
from flyerkit.design_templates import banner_label, select_style
from flyerkit.errors import ReferenceAssetMissingError
from flyerkit.layout_profiles import layout_profile_for, reference_config_for
from flyerkit.models import FlyerInput, LayoutProfile, ReferenceConfig, VisualStyle
from flyerkit.nodes import (
    PILL,
    Box,
    LinearGradient,
    Picture,
    Style,
    absolute,
    box,
    corners,
    pad,
    text,
)
from flyerkit.services.decorations import build_decorations

logger = logging.getLogger(__name__)

WIDTH = 1080
HEIGHT = 1350

RIBBON_INK = "#1F2937"
REFERENCE_BACKDROP = ("#F8F4EE", "#E9E0D3")


# ============================================
# RENDER PLANS
# ============================================

@dataclass(frozen=True)
class ReferencePlan:
    config: ReferenceConfig
    background: bytes


@dataclass(frozen=True)
class GenerativePlan:
    style: VisualStyle
    profile: LayoutProfile
    banner: str


RenderPlan = Union[ReferencePlan, GenerativePlan]


def load_reference_background(config: ReferenceConfig, settings: Optional[Settings] = None) -> bytes:
    settings = settings or get_settings()
    path = Path(settings.preset_assets_dir) / config.background
    try:
        return path.read_bytes()
    except OSError:
        raise ReferenceAssetMissingError(config.preset_id, str(path))


def load_logo(settings: Optional[Settings] = None) -> Optional[bytes]:
    """Brand mark bytes, or None when no logo is installed."""
    settings = settings or get_settings()
    path = Path(settings.logo_image_path)
    try:
        return path.read_bytes()
    except OSError:
        logger.debug(f"No logo at {path}, header renders without brand mark")
        return None


def plan_render(flyer: FlyerInput, settings: Optional[Settings] = None) -> RenderPlan:
    """Pick the render path for a flyer.

    A known preset with a readable background renders as a reference
    template. Anything else (no preset, unknown preset or a missing
    background) renders generatively.
    """
    config = reference_config_for(flyer.preset_id) if flyer.has_preset else None
    if config is not None:
        try:
            return ReferencePlan(config, load_reference_background(config, settings))
        except ReferenceAssetMissingError as e:
            logger.warning(f"{e}; using the generative template")

    style = select_style(flyer)
    return GenerativePlan(
        style=style,
        profile=layout_profile_for(style.decor_kind),
        banner=banner_label(flyer, style),
    )


# ============================================
# TEXT HELPERS
# ============================================

def normalize_theme(theme: str) -> str:
    return " ".join((theme or "").split())


def split_title(theme: str) -> Tuple[str, str]:
    """Split a theme into the two title lines.

    Up to two words stay together on the top line; longer themes put the
    first two words on top and the rest below.
    """
    words = normalize_theme(theme).split()
    if len(words) <= 2:
        return (" ".join(words) or "EVENT"), ""
    return " ".join(words[:2]), " ".join(words[2:])


def _align(mode: str) -> str:
    return "start" if mode == "left" else "center"


# ============================================
# GENERATIVE TEMPLATE
# ============================================

def _header(plan: GenerativePlan, logo: Optional[bytes], brand: str) -> Box:
    style, profile = plan.style, plan.profile
    logo_box = None
    if logo:
        inner = profile.logo_size - 2 * (6 + 3)
        logo_box = box(
            Picture(logo, Style(width=inner, height=inner), fit="contain"),
            width=profile.logo_size,
            height=profile.logo_size,
            radius=corners(PILL),
            border_width=3,
            border_color="rgba(255,255,255,0.72)",
            background="rgba(255,255,255,0.92)",
            padding=pad(6),
        )

    brand_mark = box(
        logo_box,
        text(brand, "Display", 700, size=28, letter_spacing=0.04, uppercase=True, opacity=0.96),
        direction="row",
        align_items="center",
        gap=12,
    )
    sparkles = box(
        *(text(style.sparkle, "Display", 700, size=26) for _ in range(3)),
        direction="row",
        align_items="center",
        gap=12,
    )
    return box(brand_mark, sparkles, direction="row", justify="space-between", align_items="center")


def _banner(plan: GenerativePlan) -> Optional[Box]:
    if not plan.banner:
        return None
    return box(
        text(plan.banner, "Display", 700, size=21, letter_spacing=0.09),
        align_self=_align(plan.profile.title_align),
        margin_top=6,
        radius=corners(PILL),
        padding=pad(8, 22),
        border_width=2,
        border_color=plan.style.accent,
        background="rgba(255,255,255,0.10)",
    )


def _title_block(flyer: FlyerInput, plan: GenerativePlan) -> Box:
    style, profile = plan.style, plan.profile
    align = _align(profile.title_align)
    top, bottom = split_title(flyer.theme)
    tagline = flyer.tagline.strip()
    tagline_color = "rgba(255,255,255,0.95)" if profile.tagline_color_mode == "text" else style.accent

    return box(
        text(
            style.invite_line,
            profile.invite_font,
            700,
            size=max(profile.invite_size - 6, 28),
            opacity=0.95,
            letter_spacing=0.06,
            uppercase=True,
            text_align=profile.title_align,
        ),
        text(
            top,
            profile.title_top_font,
            900,
            size=profile.title_top_size,
            margin_top=6,
            letter_spacing=-0.03,
            line_height=0.95,
            uppercase=profile.title_top_uppercase,
            text_align=profile.title_align,
        ),
        text(
            bottom,
            profile.title_bottom_font,
            600,
            size=profile.title_bottom_size,
            margin_top=-6,
            line_height=0.98,
            letter_spacing=0.01,
            text_align=profile.title_align,
        ) if bottom else None,
        text(
            tagline,
            profile.tagline_font,
            500,
            size=profile.tagline_size,
            margin_top=16,
            letter_spacing=0.01,
            color=tagline_color,
            max_width=890,
            text_align=profile.title_align,
        ) if tagline else None,
        align_items=align,
        gap=10,
        margin_top=30 if profile.title_align == "left" else 24,
    )


def _date_ribbon(flyer: FlyerInput, plan: GenerativePlan) -> Box:
    profile = plan.profile
    banner = profile.date_ribbon_style == "banner"
    return box(
        text(
            flyer.date_time_text,
            "Display",
            800,
            size=36 if banner else 40,
            letter_spacing=0.01,
            uppercase=banner,
        ),
        align_self=_align(profile.detail_align),
        margin_top=10,
        radius=corners(14 if banner else PILL),
        background="rgba(255,255,255,0.88)" if banner else "rgba(255,255,255,0.92)",
        color=RIBBON_INK,
        padding=pad(12, 26) if banner else pad(14, 34),
        border_width=4,
        border_color=plan.style.accent2,
    )


def _detail_row(label: str, value: str, color: str, profile: LayoutProfile) -> Box:
    value_font = profile.detail_value_font
    return box(
        text("*", "Body", 400, size=30, line_height=1.0, color=color),
        box(
            text(label, profile.detail_label_font, 700, size=30, letter_spacing=0.02, opacity=0.96),
            text(
                value or "TBD",
                value_font,
                400,
                size=34 if value_font == "Script" else 30,
                opacity=0.98,
                line_height=1.1,
            ),
            direction="row",
            align_items="center",
            gap=10,
        ),
        direction="row",
        align_items="center",
        gap=12,
    )


def _details(flyer: FlyerInput, plan: GenerativePlan) -> Box:
    style, profile = plan.style, plan.profile
    left = profile.detail_align == "left"
    description = flyer.description.strip()
    return box(
        _detail_row("Location", flyer.location or "TBD", style.accent2, profile),
        _detail_row("Dress Code", flyer.dress_code, style.accent, profile) if flyer.dress_code else None,
        _detail_row("Note", flyer.note, style.accent, profile) if flyer.note else None,
        text(
            description,
            "Script",
            400,
            size=34,
            line_height=1.22,
            max_width=940,
            opacity=0.96,
            margin_top=8,
            text_align=profile.detail_align,
        ) if description else None,
        align_items="start" if left else "center",
        gap=10 if left else 12,
        margin_top=14,
        padding=pad(0, 20),
    )


def build_generative_tree(
    flyer: FlyerInput,
    plan: GenerativePlan,
    logo: Optional[bytes] = None,
    settings: Optional[Settings] = None,
) -> Box:
    settings = settings or get_settings()
    style, profile = plan.style, plan.profile

    decorations = Box(
        absolute(left=0, top=0, width=WIDTH, height=HEIGHT),
        tuple(build_decorations(style.decor_kind, WIDTH, HEIGHT, style)),
    )
    closing = text(
        settings.closing_line,
        profile.closing_font,
        400,
        size=profile.closing_size,
        italic=True,
        color=style.accent,
        margin_top=18,
        text_align=profile.detail_align,
    )

    return box(
        decorations,
        _header(plan, logo, settings.brand_label),
        _banner(plan),
        _title_block(flyer, plan),
        _date_ribbon(flyer, plan),
        _details(flyer, plan),
        closing,
        width=WIDTH,
        height=HEIGHT,
        radius=corners(36),
        clip=True,
        justify="space-between",
        padding=pad(56, 62),
        background=LinearGradient(160, (style.from_color, style.to_color)),
        color=style.text,
    )


# ============================================
# REFERENCE TEMPLATE
# ============================================

def _panel_style(config: ReferenceConfig) -> dict:
    placement = config.placement
    _, inset_right, _, inset_left = config.panel_inset
    geometry = {
        "width": min(WIDTH * placement.width_pct / 100, WIDTH - inset_left - inset_right),
        "min_height": HEIGHT * placement.min_height_pct / 100,
    }
    if placement.x_anchor == "right":
        geometry["right"] = WIDTH * placement.x_pct / 100
    else:
        geometry["left"] = WIDTH * placement.x_pct / 100
        geometry["center_x"] = True
    if placement.y_anchor == "bottom":
        geometry["bottom"] = HEIGHT * placement.y_pct / 100
    else:
        geometry["top"] = HEIGHT * placement.y_pct / 100
        geometry["center_y"] = True
    return geometry


def build_reference_tree(flyer: FlyerInput, plan: ReferencePlan) -> Box:
    cfg = plan.config
    geometry = _panel_style(cfg)
    inner_width = geometry["width"] - 2 * 46
    shadow = cfg.text_shadow

    tagline = flyer.tagline.strip() or "You are invited"
    title = normalize_theme(flyer.theme) or "Special Event"
    description = flyer.description.strip()
    dress = flyer.dress_code.strip()
    note = flyer.note.strip()

    panel = Box(
        Style(
            position="absolute",
            direction="column",
            justify="center",
            align_items="center",
            radius=corners(18),
            background=cfg.card_tint,
            padding=pad(40, 46),
            gap=14,
            text_align="center",
            **geometry,
        ),
        tuple(n for n in (
            text(
                tagline,
                cfg.tagline_font,
                cfg.tagline_weight,
                size=cfg.tagline_size or round(cfg.script_size * 1.22),
                color=cfg.accent,
                line_height=1.0,
                letter_spacing=cfg.tagline_letter_spacing,
                uppercase=cfg.tagline_upper,
                text_align="center",
            ),
            text(
                title,
                cfg.title_font,
                cfg.title_weight,
                size=round(cfg.title_size * 1.2),
                line_height=0.95,
                letter_spacing=cfg.title_letter_spacing,
                max_width=inner_width * 0.92,
                color=cfg.ink,
                uppercase=cfg.title_upper,
                shadow="rgba(0,0,0,0.35)" if shadow else None,
                text_align="center",
            ),
            text(
                flyer.date_time_text,
                cfg.info_font,
                cfg.info_weight,
                size=50,
                color=cfg.accent,
                margin_top=6,
                shadow="rgba(0,0,0,0.28)" if shadow else None,
                text_align="center",
            ),
            text(
                flyer.location or "Location TBD",
                cfg.info_font,
                cfg.location_weight,
                size=36,
                max_width=inner_width * 0.95,
                color=cfg.ink,
                shadow="rgba(0,0,0,0.22)" if shadow else None,
                text_align="center",
            ),
            text(
                description,
                cfg.tagline_font,
                400,
                size=30,
                line_height=1.24,
                opacity=0.96,
                max_width=inner_width * 0.95,
                margin_top=4,
                color=cfg.ink,
                text_align="center",
            ) if description else None,
            text(
                f"Dress Code: {dress}",
                cfg.info_font,
                cfg.meta_weight,
                size=30,
                opacity=0.95,
                color=cfg.ink,
                text_align="center",
            ) if dress else None,
            text(
                note,
                cfg.info_font,
                cfg.meta_weight,
                size=26,
                opacity=0.92,
                color=cfg.ink,
                text_align="center",
            ) if note else None,
        ) if n is not None),
    )

    background = Picture(
        plan.background,
        absolute(left=0, top=0, width=WIDTH, height=HEIGHT),
        fit="cover",
        focus=cfg.background_position,
    )

    return box(
        background,
        panel,
        width=WIDTH,
        height=HEIGHT,
        clip=True,
        background=LinearGradient(150, REFERENCE_BACKDROP),
        color=cfg.ink,
    )


def build_tree(
    flyer: FlyerInput,
    plan: RenderPlan,
    logo: Optional[bytes] = None,
    settings: Optional[Settings] = None,
) -> Box:
    """Assemble the full flyer tree for an already chosen render plan."""
    if isinstance(plan, ReferencePlan):
        return build_reference_tree(flyer, plan)
    return build_generative_tree(flyer, plan, logo, settings)
