"""
Color helpers shared by the style selector and the rasterizer.

Colors travel through the layout tree as CSS-style strings:
"#RRGGBB", "#RRGGBBAA", "rgba(r,g,b,a)" or "transparent".
"""

import re
from typing import Tuple

RGBA = Tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})([0-9a-fA-F]{2})?$")
_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9.]+)\s*)?\)$"
)

# Luminance threshold above which a background counts as light
LIGHT_LUMA = 165


def is_hex_color(value: str) -> bool:
    v = (value or "").strip()
    return v.startswith("#") and len(v) == 7 and bool(_HEX_RE.match(v))


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"Not a hex color: {value!r}")
    v = match.group(1)
    return int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16)


def parse_color(value: str) -> RGBA:
    """Parse a color string into an RGBA tuple."""
    v = value.strip()
    if v == "transparent":
        return TRANSPARENT

    match = _HEX_RE.match(v)
    if match:
        r, g, b = hex_to_rgb(v[:7] if v.startswith("#") else v[:6])
        a = int(match.group(2), 16) if match.group(2) else 255
        return r, g, b, a

    match = _RGBA_RE.match(v)
    if match:
        r, g, b = (min(255, int(match.group(i))) for i in (1, 2, 3))
        alpha = float(match.group(4)) if match.group(4) is not None else 1.0
        return r, g, b, round(max(0.0, min(1.0, alpha)) * 255)

    raise ValueError(f"Unsupported color: {value!r}")


def scale_alpha(color: RGBA, factor: float) -> RGBA:
    r, g, b, a = color
    return r, g, b, round(a * max(0.0, min(1.0, factor)))


def luminance(value: str) -> float:
    r, g, b = hex_to_rgb(value)
    return 0.299 * r + 0.587 * g + 0.114 * b


def is_light(value: str) -> bool:
    """Luminance test used to pick dark text on light backgrounds."""
    if not is_hex_color(value):
        return False
    return luminance(value) > LIGHT_LUMA
