"""
Value objects for the flyer engine.

Everything here is created fresh for one generation call and never mutated.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Literal, Optional, Tuple

TemplateKey = Literal["elegant", "fun", "minimal", "desi", "ramadan"]
TEMPLATE_KEYS: Tuple[str, ...] = ("elegant", "fun", "minimal", "desi", "ramadan")

FontRole = Literal["Body", "Display", "Script"]
FONT_ROLES: Tuple[str, ...] = ("Body", "Display", "Script")

DecorKind = Literal[
    "winter",
    "carpet",
    "eid",
    "desi",
    "garden",
    "tropical",
    "celestial",
    "neon",
    "royal",
    "autumn",
    "spooky",
    "floral_lilac",
    "marble_geo",
    "black_gold",
    "blue_arch",
    "mint_vintage",
    "generic",
]
DECOR_KINDS: Tuple[str, ...] = (
    "winter",
    "carpet",
    "eid",
    "desi",
    "garden",
    "tropical",
    "celestial",
    "neon",
    "royal",
    "autumn",
    "spooky",
    "floral_lilac",
    "marble_geo",
    "black_gold",
    "blue_arch",
    "mint_vintage",
    "generic",
)


class FlyerMode(str, Enum):
    CLASSIC = "classic"
    AI_POSTER = "ai_poster"


@dataclass(frozen=True)
class FlyerInput:
    """Event metadata for one flyer render."""

    theme: str
    date_time_text: str
    location: str = ""
    template_key: str = "elegant"
    preset_id: Optional[str] = None
    dress_code: str = ""
    note: str = ""
    description: str = ""
    tagline: str = ""
    palette: Tuple[str, ...] = ()

    def __post_init__(self):
        # Optional fields default to empty rather than failing on None
        for name in ("location", "dress_code", "note", "description", "tagline"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")
        if self.palette is None:
            object.__setattr__(self, "palette", ())
        elif not isinstance(self.palette, tuple):
            object.__setattr__(self, "palette", tuple(self.palette))
        if self.template_key not in TEMPLATE_KEYS:
            object.__setattr__(self, "template_key", "elegant")
        if self.preset_id is not None and not self.preset_id.strip():
            object.__setattr__(self, "preset_id", None)

    @property
    def has_preset(self) -> bool:
        return bool(self.preset_id)

    @property
    def needs_copy(self) -> bool:
        return not (self.description.strip() and self.tagline.strip() and self.palette)

    def with_copy(self, description: str, tagline: str, palette) -> "FlyerInput":
        return replace(self, description=description, tagline=tagline, palette=tuple(palette))


@dataclass(frozen=True)
class FlyerCopy:
    """Generated flyer copy: body text, tagline options and a palette."""

    description: str
    descriptions: Tuple[str, ...]
    taglines: Tuple[str, ...]
    palette: Tuple[str, str, str]

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "descriptions": list(self.descriptions),
            "taglines": list(self.taglines),
            "palette": list(self.palette),
        }


@dataclass(frozen=True)
class VisualStyle:
    from_color: str
    to_color: str
    text: str
    soft_panel: str
    accent: str
    accent2: str
    motif: str
    sparkle: str
    invite_line: str
    decor_kind: str


@dataclass(frozen=True)
class LayoutProfile:
    title_align: Literal["left", "center"] = "center"
    title_top_size: int = 132
    title_bottom_size: int = 88
    title_top_uppercase: bool = True
    invite_size: int = 40
    tagline_size: int = 44
    tagline_color_mode: Literal["accent", "text"] = "accent"
    date_ribbon_style: Literal["capsule", "banner"] = "capsule"
    detail_align: Literal["left", "center"] = "center"
    closing_size: int = 48
    invite_font: str = "Body"
    title_top_font: str = "Display"
    title_bottom_font: str = "Script"
    tagline_font: str = "Script"
    detail_label_font: str = "Display"
    detail_value_font: str = "Body"
    closing_font: str = "Script"
    logo_size: int = 64


@dataclass(frozen=True)
class PanelPlacement:
    """Where the reference-template content panel sits, in canvas percentages.

    Horizontal anchor "center" centers the panel on `x_pct`; "right" keeps its
    right edge `x_pct` percent from the canvas edge. Vertical anchor "center"
    centers it on `y_pct`; "bottom" keeps its bottom edge `y_pct` from the edge.
    """

    width_pct: float = 74
    min_height_pct: float = 58
    x_anchor: Literal["center", "right"] = "center"
    x_pct: float = 50
    y_anchor: Literal["center", "bottom"] = "center"
    y_pct: float = 50


@dataclass(frozen=True)
class ReferenceConfig:
    """Typography and panel geometry for one reference preset.

    `panel_inset` (top, right, bottom, left) is the safe area of the
    background artwork; the content panel never grows wider than it.
    `info_weight` is the weight of the date line.
    """

    preset_id: str
    background: str
    panel_inset: Tuple[int, int, int, int]
    ink: str
    accent: str
    title_size: int
    script_size: int
    card_tint: str
    title_font: str = "Display"
    tagline_font: str = "Script"
    info_font: str = "Body"
    title_weight: int = 900
    tagline_weight: int = 700
    info_weight: int = 700
    location_weight: int = 600
    meta_weight: int = 500
    title_upper: bool = False
    tagline_upper: bool = False
    title_letter_spacing: float = -0.02
    tagline_letter_spacing: float = 0.0
    tagline_size: Optional[int] = None
    text_shadow: bool = False
    background_position: Literal["center", "left top"] = "center"
    placement: PanelPlacement = field(default_factory=PanelPlacement)


@dataclass(frozen=True)
class RenderedFlyer:
    png: bytes
    pdf: bytes
    mode: FlyerMode = FlyerMode.CLASSIC
