"""
Local flyer copy generator.

Keyword packs supply lead phrases, moods, actions, palettes and a stock
description. Taglines are built by pairing them and shuffled with a seeded
linear-congruential permutation. This path has no external dependency and
never fails.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from flyerkit.models import FlyerCopy

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_WORDS = 11
MAX_TAGLINE_WORDS = 8
MAX_TAGLINES = 9
MAX_DESCRIPTIONS = 6

FALLBACK_DESCRIPTION = (
    "Join us for a beautiful community evening with great company, "
    "delicious food, and memorable moments."
)


@dataclass(frozen=True)
class CopyPack:
    keywords: Tuple[str, ...]
    leads: Tuple[str, ...]
    moods: Tuple[str, ...]
    actions: Tuple[str, ...]
    palettes: Tuple[Tuple[str, str, str], ...]
    description: str


# ============================================
# COPY PACKS (first keyword match wins)
# ============================================
COPY_PACKS: Tuple[CopyPack, ...] = (
    CopyPack(
        keywords=("galaxy", "space", "cosmic", "moonlight", "starlight", "nebula"),
        leads=("Starlight Soiree", "Cosmic Night", "Moonlight Celebration"),
        moods=("Dreamy", "Mystical", "Luminous", "Elegant"),
        actions=("Gather", "Shine", "Celebrate", "Connect"),
        palettes=(
            ("#1E1B4B", "#312E81", "#C4B5FD"),
            ("#0F172A", "#1E293B", "#A78BFA"),
            ("#312E81", "#4C1D95", "#DDD6FE"),
        ),
        description="Step into a celestial evening with glowing details, dreamy ambiance, and unforgettable moments.",
    ),
    CopyPack(
        keywords=("neon", "retro", "80s", "dance", "club", "electric", "dj", "disco"),
        leads=("Neon Nights", "Retro Glow Party", "Electric Celebration"),
        moods=("Bold", "Electric", "High-Energy", "Vibrant"),
        actions=("Dance", "Glow", "Celebrate", "Turn Up"),
        palettes=(
            ("#3B0764", "#0F172A", "#22D3EE"),
            ("#581C87", "#1D4ED8", "#F472B6"),
            ("#0C4A6E", "#312E81", "#F0ABFC"),
        ),
        description="Bring the energy with a vibrant night of music, glowing style, and fun memories.",
    ),
    CopyPack(
        keywords=("royal", "gala", "black tie", "formal", "elegant", "luxury", "classic"),
        leads=("Royal Gala", "Elegant Evening", "Black Tie Celebration"),
        moods=("Refined", "Luxurious", "Timeless", "Sophisticated"),
        actions=("Join", "Celebrate", "Toast", "Gather"),
        palettes=(
            ("#111827", "#1F2937", "#FCD34D"),
            ("#1E293B", "#334155", "#EAB308"),
            ("#0F172A", "#1E1B4B", "#FDE68A"),
        ),
        description="An elegant, upscale gathering with timeless style and graceful celebration.",
    ),
    CopyPack(
        keywords=("halloween", "spooky", "haunted", "boo", "costume"),
        leads=("Spooky Soiree", "Haunted Night", "Costume Celebration"),
        moods=("Moody", "Playful", "Mysterious", "Thrilling"),
        actions=("Gather", "Celebrate", "Enjoy", "Glow"),
        palettes=(
            ("#111827", "#3F3F46", "#FB923C"),
            ("#1F2937", "#374151", "#F97316"),
            ("#0F172A", "#27272A", "#FDBA74"),
        ),
        description="A moody, festive night with bold decor, playful energy, and unforgettable vibes.",
    ),
    CopyPack(
        keywords=("summer", "sun", "sunset", "beach", "tropical", "pool", "hawaii"),
        leads=("Summer Soiree", "Sunset Celebration", "Tropical Night"),
        moods=("Bright", "Vibrant", "Sunny", "Energetic"),
        actions=("Celebrate", "Glow", "Gather", "Dance"),
        palettes=(
            ("#0EA5E9", "#0369A1", "#FDE68A"),
            ("#F97316", "#FB7185", "#FDE047"),
            ("#06B6D4", "#22C55E", "#FACC15"),
        ),
        description="Bring summer energy with bright vibes, cheerful colors, and a fun celebration everyone will enjoy.",
    ),
    CopyPack(
        keywords=("winter", "snow", "ice", "frost", "holiday"),
        leads=("Winter Wonderland", "Frosty Night", "Snowfall Soiree"),
        moods=("Cozy", "Sparkling", "Magical", "Glittering"),
        actions=("Celebrate", "Gather", "Shine", "Toast"),
        palettes=(
            ("#0E7490", "#155E75", "#E0F2FE"),
            ("#1D4ED8", "#2563EB", "#DBEAFE"),
            ("#0F766E", "#0D9488", "#CCFBF1"),
        ),
        description="Step into a winter-inspired evening full of warmth, elegance, and joyful company.",
    ),
    CopyPack(
        keywords=("red carpet", "hollywood", "glam", "awards", "star"),
        leads=("Red Carpet Night", "Hollywood Glam", "Starry Celebration"),
        moods=("Luxurious", "Dazzling", "Grand", "Glamorous"),
        actions=("Arrive", "Pose", "Celebrate", "Sparkle"),
        palettes=(
            ("#7F1D1D", "#991B1B", "#FDE68A"),
            ("#881337", "#BE123C", "#FBCFE8"),
            ("#7C2D12", "#B45309", "#FDE68A"),
        ),
        description="Roll out the red carpet for a glamorous evening of style, laughter, and unforgettable moments.",
    ),
    CopyPack(
        keywords=("ramadan", "eid", "iftar", "moon", "crescent"),
        leads=("Moonlit Gathering", "Eid Celebration", "Blessed Evening"),
        moods=("Warm", "Graceful", "Joyful", "Meaningful"),
        actions=("Gather", "Celebrate", "Connect", "Rejoice"),
        palettes=(
            ("#064E3B", "#065F46", "#A7F3D0"),
            ("#0F766E", "#115E59", "#99F6E4"),
            ("#14532D", "#166534", "#BBF7D0"),
        ),
        description="Join us for a beautiful gathering of community, gratitude, and festive joy.",
    ),
    CopyPack(
        keywords=("desi", "mehndi", "bollywood", "sangeet", "henna"),
        leads=("Desi Glam Night", "Mehndi Celebration", "Bollywood Bash"),
        moods=("Vibrant", "Lively", "Colorful", "Radiant"),
        actions=("Dance", "Celebrate", "Gather", "Shine"),
        palettes=(
            ("#7C2D12", "#EA580C", "#FDBA74"),
            ("#6B21A8", "#9333EA", "#E9D5FF"),
            ("#9A3412", "#D97706", "#FCD34D"),
        ),
        description="Celebrate with color, rhythm, and joyful desi vibes in a night to remember.",
    ),
    CopyPack(
        keywords=("spring", "garden", "floral", "bloom", "picnic"),
        leads=("Garden Party", "Spring Bloom", "Floral Evening"),
        moods=("Fresh", "Charming", "Bright", "Elegant"),
        actions=("Gather", "Bloom", "Celebrate", "Enjoy"),
        palettes=(
            ("#166534", "#22C55E", "#DCFCE7"),
            ("#9D174D", "#EC4899", "#FBCFE8"),
            ("#365314", "#84CC16", "#ECFCCB"),
        ),
        description="A fresh and cheerful gathering inspired by blooms, color, and community spirit.",
    ),
    CopyPack(
        keywords=("autumn", "fall", "harvest", "pumpkin", "maple"),
        leads=("Autumn Gathering", "Harvest Evening", "Golden Fall Night"),
        moods=("Warm", "Cozy", "Rich", "Elegant"),
        actions=("Gather", "Celebrate", "Toast", "Enjoy"),
        palettes=(
            ("#9A3412", "#C2410C", "#FED7AA"),
            ("#7C2D12", "#B45309", "#FDE68A"),
            ("#78350F", "#D97706", "#F59E0B"),
        ),
        description="Celebrate the season with cozy tones, warm moments, and a welcoming community vibe.",
    ),
)

GENERIC_MOODS = ("Beautiful", "Warm", "Festive", "Joyful")
GENERIC_ACTIONS = ("Celebrate", "Gather", "Connect", "Enjoy")
GENERIC_PALETTES = (
    ("#0EA5E9", "#0284C7", "#FDE68A"),
    ("#16A34A", "#0D9488", "#A7F3D0"),
    ("#7C3AED", "#EC4899", "#FBCFE8"),
)


# ============================================
# TEXT HELPERS
# ============================================

def normalize_text(value: str) -> str:
    return " ".join((value or "").split())


def word_count(value: str) -> int:
    return len(normalize_text(value).split())


def within_word_limit(value: str, max_words: int) -> bool:
    clean = normalize_text(value)
    return bool(clean) and word_count(clean) <= max_words


def unique(values) -> List[str]:
    """Deduplicate, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


def short_fallback_description(theme: str) -> str:
    clean = normalize_text(theme) or "our event"
    candidates = [
        f"Join us for {clean}.",
        f"Celebrate {clean} with us.",
        f"{clean}: a beautiful evening together.",
        f"See you at {clean}!",
    ]
    for candidate in candidates:
        if within_word_limit(candidate, MAX_DESCRIPTION_WORDS):
            return candidate
    return "Join us for a beautiful evening."


# ============================================
# SEEDED SHUFFLE
# ============================================

def theme_hash(text: str) -> int:
    h = 0
    for ch in text:
        h = (h * 33 + ord(ch)) & 0xFFFFFFFF
    return h


def lcg_shuffle(items: List[str], seed: int) -> List[str]:
    """Fisher-Yates driven by a 32-bit linear congruential generator."""
    out = list(items)
    s = seed or 1
    for i in range(len(out) - 1, 0, -1):
        s = (s * 1664525 + 1013904223) & 0xFFFFFFFF
        j = s % (i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def pick_pack(theme: str, dress_code: str = "", note: str = "") -> Optional[CopyPack]:
    haystack = f"{theme} {dress_code or ''} {note or ''}".lower()
    for pack in COPY_PACKS:
        if any(keyword in haystack for keyword in pack.keywords):
            return pack
    return None


def copy_seed(theme: str, seed: Optional[int] = None) -> int:
    """Seed for tagline order and palette choice.

    Without an explicit seed the wall clock is mixed in, so regenerating the
    same theme gives varied taglines.
    """
    if seed is None:
        seed = int(time.time() * 1000)
    return theme_hash(theme) ^ (seed & 0xFFFFFFFF)


# ============================================
# GENERATOR
# ============================================

def generate_local_copy(
    theme: str,
    dress_code: str = "",
    note: str = "",
    seed: Optional[int] = None,
) -> FlyerCopy:
    """Generate description, taglines and palette without any network call."""
    theme = normalize_text(theme) or "Community Event"
    pack = pick_pack(theme, dress_code, note)
    mixed = copy_seed(theme, seed)

    leads = pack.leads if pack else (theme, f"{theme} Night", "Community Celebration")
    moods = pack.moods if pack else GENERIC_MOODS
    actions = pack.actions if pack else GENERIC_ACTIONS
    palettes = pack.palettes if pack else GENERIC_PALETTES

    combinations = [f"{lead}: {mood} Vibes" for lead in leads for mood in moods]
    combinations += [f"{mood} Night to {action}" for mood in moods for action in actions]
    shuffled = lcg_shuffle(combinations, mixed)
    taglines = [t for t in unique(shuffled) if within_word_limit(t, MAX_TAGLINE_WORDS)]

    pack_description = pack.description if pack else ""
    short = short_fallback_description(theme)
    candidates = [
        normalize_text(c)
        for c in (pack_description, f"Join us for {theme}.", f"Celebrate {theme} with us.", FALLBACK_DESCRIPTION, short)
        if within_word_limit(c, MAX_DESCRIPTION_WORDS)
    ]
    descriptions = [
        normalize_text(d)
        for d in (pack_description, f"Join us for {theme}.", f"Celebrate {theme} with us.",
                  f"{theme}: beautiful evening together.", short)
        if within_word_limit(d, MAX_DESCRIPTION_WORDS)
    ]

    copy = FlyerCopy(
        description=candidates[0] if candidates else short,
        descriptions=tuple(unique(descriptions)[:MAX_DESCRIPTIONS]),
        taglines=tuple(taglines[:MAX_TAGLINES]),
        palette=tuple(palettes[mixed % len(palettes)]),
    )
    logger.debug(f"Local copy for '{theme}' ({'pack' if pack else 'generic'}), seed {mixed}")
    return copy
