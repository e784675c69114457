"""
Font loader for the three flyer font roles.

Body, Display and Script are each resolved from an ordered list of local
font files. Body falls back to a webfont download (primary URL, then a
mirror); Display and Script fall back to Body. Loaded fonts are cached per
font configuration for the lifetime of the process.
"""

import logging
import os
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import httpx
from PIL import ImageFont

from flyerkit.config import Settings, get_settings
from flyerkit.errors import FontUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedFont:
    name: str
    data: bytes
    weight: int
    style: str  # "normal" | "italic"


@dataclass(frozen=True)
class FontSet:
    body: LoadedFont
    display: LoadedFont
    script: LoadedFont

    def for_role(self, role: str) -> LoadedFont:
        return {"Body": self.body, "Display": self.display, "Script": self.script}[role]


# ============================================
# LOCAL CANDIDATES
# ============================================
ROLE_FILES = {
    "Body": ["Montserrat-Regular.ttf", "Montserrat[wght].ttf"],
    "Display": ["Montserrat-ExtraBold.ttf", "Montserrat-Bold.ttf"],
    "Script": ["DancingScript-Regular.ttf", "DancingScript[wght].ttf"],
}

SYSTEM_FONTS = {
    "Body": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "C:\\Windows\\Fonts\\segoeui.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
    ],
    "Display": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "C:\\Windows\\Fonts\\arialbd.ttf",
        "C:\\Windows\\Fonts\\georgiab.ttf",
        "C:\\Windows\\Fonts\\timesbd.ttf",
    ],
    "Script": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Italic.ttf",
        "/usr/share/fonts/dejavu/DejaVuSerif-Italic.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSerif-Italic.ttf",
        "/System/Library/Fonts/Supplemental/Georgia Italic.ttf",
        "C:\\Windows\\Fonts\\segoesc.ttf",
        "C:\\Windows\\Fonts\\gabriola.ttf",
        "C:\\Windows\\Fonts\\georgiai.ttf",
    ],
}

ROLE_WEIGHTS = {"Body": (400, "normal"), "Display": (800, "normal"), "Script": (400, "italic")}


def candidate_paths(role: str, settings: Settings) -> List[str]:
    """Ordered local candidates: configured paths, font_dir, then system fonts."""
    extra = {
        "Body": settings.body_font_paths,
        "Display": settings.display_font_paths,
        "Script": settings.script_font_paths,
    }[role]
    font_dir = Path(settings.font_dir)
    bundled = [str(font_dir / name) for name in ROLE_FILES[role]]
    return [*extra, *bundled, *SYSTEM_FONTS[role]]


def read_first(paths: Iterable[str]) -> Optional[Tuple[str, bytes]]:
    """Return (path, bytes) of the first readable font file."""
    for path in paths:
        if not os.path.isfile(path):
            continue
        try:
            return path, Path(path).read_bytes()
        except OSError as e:
            logger.debug(f"Could not read font {path}: {e}")
    return None


async def fetch_webfont(urls: List[str], timeout: float) -> Optional[bytes]:
    """Download the first webfont that responds; None when all fail."""
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        for url in urls:
            try:
                response = await client.get(url)
                response.raise_for_status()
                logger.info(f"Fetched fallback font from {url}")
                return response.content
            except httpx.HTTPError as e:
                logger.warning(f"Font download failed from {url}: {e}")
    return None


async def resolve_fonts(settings: Optional[Settings] = None) -> FontSet:
    """Resolve all three roles without consulting the cache."""
    settings = settings or get_settings()

    body = read_first(candidate_paths("Body", settings))
    if body:
        body_data = body[1]
        logger.info(f"Body font: {body[0]}")
    else:
        body_data = await fetch_webfont(settings.font_urls, settings.font_fetch_timeout_seconds)
    if not body_data:
        logger.error("Base flyer font could not be loaded from disk or network")
        raise FontUnavailableError("Failed to load base flyer font.")

    fonts = {}
    for role in ("Display", "Script"):
        found = read_first(candidate_paths(role, settings))
        if found:
            logger.info(f"{role} font: {found[0]}")
        else:
            logger.info(f"{role} font unavailable, using Body")
        fonts[role] = found[1] if found else body_data

    def loaded(role: str, data: bytes) -> LoadedFont:
        weight, style = ROLE_WEIGHTS[role]
        return LoadedFont(role, data, weight, style)

    return FontSet(
        body=loaded("Body", body_data),
        display=loaded("Display", fonts["Display"]),
        script=loaded("Script", fonts["Script"]),
    )


_font_cache: Dict[Tuple, FontSet] = {}


def font_cache_key(settings: Settings) -> Tuple:
    """Every input that can change which fonts resolve."""
    return (
        *(tuple(candidate_paths(role, settings)) for role in ("Body", "Display", "Script")),
        tuple(settings.font_urls),
    )


async def load_fonts(settings: Optional[Settings] = None) -> FontSet:
    """Cached font resolution, one entry per font configuration.

    Concurrent first loads are harmless.
    """
    settings = settings or get_settings()
    key = font_cache_key(settings)
    cached = _font_cache.get(key)
    if cached:
        return cached
    fonts = await resolve_fonts(settings)
    _font_cache[key] = fonts
    return fonts


def clear_font_cache():
    _font_cache.clear()


class FontBook:
    """Sized FreeType faces for a FontSet.

    Variable fonts are set to the requested weight; static fonts get a
    synthetic bold stroke for heavy weights instead.
    """

    def __init__(self, fonts: FontSet):
        self.fonts = fonts
        self._faces: Dict[Tuple[str, int, int], ImageFont.FreeTypeFont] = {}
        self._variable: Dict[str, bool] = {}

    def face(self, role: str, size: float, weight: int = 400) -> ImageFont.FreeTypeFont:
        px = max(1, int(round(size)))
        key = (role, px, weight)
        face = self._faces.get(key)
        if face is None:
            face = ImageFont.truetype(BytesIO(self.fonts.for_role(role).data), px)
            if self._set_weight(role, face, weight):
                self._variable[role] = True
            self._faces[key] = face
        return face

    def _set_weight(self, role: str, face: ImageFont.FreeTypeFont, weight: int) -> bool:
        if self._variable.get(role) is False:
            return False
        try:
            axes = face.get_variation_axes()
        except (OSError, NotImplementedError):
            self._variable[role] = False
            return False
        values = []
        for axis in axes:
            name = axis.get("name")
            if name in (b"Weight", "Weight"):
                values.append(max(axis["minimum"], min(axis["maximum"], weight)))
            else:
                values.append(axis.get("default", axis["minimum"]))
        try:
            face.set_variation_by_axes(values)
        except (OSError, NotImplementedError):
            self._variable[role] = False
            return False
        return True

    def stroke(self, role: str, weight: int) -> int:
        """Synthetic bold stroke width in pixels."""
        if self._variable.get(role):
            return 0
        if weight >= 800:
            return 2
        if weight >= 700:
            return 1
        return 0
