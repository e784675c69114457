"""
Flyer template keys and the reference preset catalog.

Template keys are the coarse fallback styles used when nothing in the event
text matches a themed style. Presets are fixed reference templates (a
background image plus palette and typography rules) selectable by id.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from flyerkit.models import TEMPLATE_KEYS

TEMPLATE_DEFAULTS = {
    "elegant": {"bg": "#111827", "accent": "#A78BFA", "text": "#F9FAFB"},
    "fun": {"bg": "#0B1020", "accent": "#FF4D8D", "text": "#F8FAFC"},
    "minimal": {"bg": "#FFFFFF", "accent": "#111827", "text": "#111827"},
    "desi": {"bg": "#0F172A", "accent": "#F59E0B", "text": "#F8FAFC"},
    "ramadan": {"bg": "#031B16", "accent": "#34D399", "text": "#ECFDF5"},
}


def template_defaults(template_key: str) -> dict:
    """Get default colors for a template key (elegant when unknown)."""
    return TEMPLATE_DEFAULTS.get(template_key, TEMPLATE_DEFAULTS["elegant"])


@dataclass(frozen=True)
class Preset:
    id: str
    label: str
    subtitle: str
    asset_file: str
    template_key: str
    palette: Tuple[str, str, str]
    keywords: Tuple[str, ...]


# ============================================
# PRESET CATALOG (order matters for tie-breaks)
# ============================================
PRESETS: Tuple[Preset, ...] = (
    Preset(
        "eid-lantern-gold",
        "Eid Lantern Gold",
        "Crescent + lantern + beige floor pattern",
        "eid-lantern-gold (2).png",
        "ramadan",
        ("#F1E1C9", "#D5BC98", "#0A3A8A"),
        ("eid", "ramadan", "iftar", "moon", "lantern"),
    ),
    Preset(
        "pink-brunch-bouquet",
        "Pink Brunch Bouquet",
        "Torn pink panel + bouquet side composition",
        "pink-brunch-bouquet.png",
        "fun",
        ("#F9C3D6", "#E989AF", "#FFFFFF"),
        ("mothers day", "brunch", "pink", "bouquet", "flowers"),
    ),
    Preset(
        "blue-floral-side-card",
        "Blue Floral Side Card",
        "White card with large blue floral side",
        "blue-floral.png",
        "minimal",
        ("#F6F8FB", "#DCE8F7", "#1C3D6E"),
        ("bridal", "shower", "blue", "floral", "card"),
    ),
    Preset(
        "red-gold-luxe",
        "Red Gold Luxe",
        "Red velvet style with gold floral corners",
        "red-gold-flower.png",
        "elegant",
        ("#7E0E1E", "#5A0814", "#E4BD67"),
        ("save the date", "red", "gold", "luxury", "wedding"),
    ),
    Preset(
        "marble-geo-leaf",
        "Marble Geo Leaf",
        "Marble background + gold geo frame + leaf cluster",
        "marble-green-white-floral.png",
        "minimal",
        ("#F1EFEB", "#D9D4CD", "#CDA64E"),
        ("marble", "geometric", "leaf", "minimal"),
    ),
    Preset(
        "golden-floral-save-date",
        "Golden Floral",
        "Soft cream base with yellow floral corners",
        "light-yellow-floral.png",
        "minimal",
        ("#F3EBC7", "#E2CF8E", "#A58A3A"),
        ("save the date", "gold", "yellow", "floral"),
    ),
    Preset(
        "teal-mandala-invite",
        "Teal Mandala Invite",
        "Dark teal invitation with ornate mandala top",
        "nacy-blue-golden-floral.png",
        "desi",
        ("#063E3F", "#032D2E", "#E2C673"),
        ("mandala", "teal", "indian", "desi", "wedding", "invite"),
    ),
    Preset(
        "mint-vintage-floral",
        "Mint Vintage Floral",
        "Vintage mint floral all-over pattern",
        "pastel-green-floral.png",
        "fun",
        ("#CAE1C8", "#9DBA98", "#2D5C35"),
        ("mint", "vintage", "floral", "wedding", "spring"),
    ),
    Preset(
        "blue-arch-floral",
        "Blue Arch Floral",
        "Sky blue floral with central white arch",
        "cyan-white-floral.png",
        "minimal",
        ("#D6EEFF", "#B5DDF6", "#2C5E97"),
        ("blue", "arch", "floral", "save the date"),
    ),
    Preset(
        "ruby-ornate-invitation",
        "Ruby Ornate Invitation",
        "Dark ruby patterned columns + center panel",
        "red-floral-gold.png",
        "elegant",
        ("#8E001A", "#680013", "#E0BE5F"),
        ("ruby", "ornate", "invitation", "classic", "wedding"),
    ),
    Preset(
        "aqua-watercolor-gold",
        "Aqua Watercolor Gold",
        "Aqua watercolor wash with delicate gold lines",
        "blue-green.png",
        "minimal",
        ("#D2F7FA", "#9DEAF0", "#D9BA63"),
        ("aqua", "watercolor", "gold", "menu", "coastal"),
    ),
    Preset(
        "lilac-hex-floral",
        "Lilac Hex Floral",
        "Soft lilac card with geometric gold hex frame",
        "purple-floral.png",
        "minimal",
        ("#EADCF3", "#D3BFE6", "#B89445"),
        ("lilac", "purple", "hex", "floral"),
    ),
)

_PRESETS_BY_ID = {p.id: p for p in PRESETS}


def event_haystack(theme: str, dress_code: Optional[str] = None, note: Optional[str] = None) -> str:
    """Lowercase text that keyword matching runs against."""
    return f"{theme or ''} {dress_code or ''} {note or ''}".lower()


def normalize_preset_id(preset_id: Optional[str]) -> str:
    """Lowercase a preset id and map "-2" variants onto their base id."""
    raw = (preset_id or "").strip().lower()
    return raw[:-2] if raw.endswith("-2") else raw


def get_preset(preset_id: Optional[str]) -> Optional[Preset]:
    return _PRESETS_BY_ID.get(normalize_preset_id(preset_id))


def score_preset(preset: Preset, haystack: str) -> int:
    return sum(1 for kw in preset.keywords if kw in haystack)


def suggest_preset(theme: str, dress_code: Optional[str] = None, note: Optional[str] = None) -> Preset:
    """Pick the preset whose keywords best match the event text.

    Highest keyword count wins, ties go to the earlier catalog entry, and the
    first entry is the default when nothing matches.
    """
    haystack = event_haystack(theme, dress_code, note)
    best = PRESETS[0]
    best_score = -1
    for preset in PRESETS:
        score = score_preset(preset, haystack)
        if score > best_score:
            best = preset
            best_score = score
    return best


def list_presets():
    """List presets for pickers."""
    return [
        {
            "id": p.id,
            "label": p.label,
            "subtitle": p.subtitle,
            "template": p.template_key,
            "palette": list(p.palette),
        }
        for p in PRESETS
    ]


def list_template_keys():
    return list(TEMPLATE_KEYS)
