"""
Flyer copy generation using OpenAI.

Asks the chat model for a short description, alternatives, taglines and a
three-color palette. Any malformed answer is a total failure; the caller
falls back to the local copy generator.
"""

import json
import logging
from typing import Optional

from openai import AsyncOpenAI

from flyerkit.colors import is_hex_color
from flyerkit.config import get_settings
from flyerkit.errors import CopySupplierError
from flyerkit.models import FlyerCopy
from flyerkit.services.local_copy import (
    MAX_DESCRIPTION_WORDS,
    MAX_DESCRIPTIONS,
    MAX_TAGLINE_WORDS,
    MAX_TAGLINES,
    normalize_text,
    unique,
    within_word_limit,
)

logger = logging.getLogger(__name__)


def build_copy_prompt(theme: str, dress_code: str = "", note: str = "") -> str:
    """Build the user prompt for flyer copy."""
    return f"""
You are writing short, WhatsApp-friendly flyer text for a women's community event.
Return JSON ONLY with keys:
description (single phrase, max 11 words),
descriptions (array of 4 alternative phrases, each max 11 words),
taglines (array of 3 short taglines, each <= 8 words),
palette (array of 3 hex colors).
Theme: {theme}
Dress code: {dress_code or "none"}
Note: {note or "none"}
Keep it warm, respectful, and not cheesy.
"""


def short_fallback_description(theme: str) -> str:
    clean = normalize_text(theme) or "our event"
    candidates = [
        f"Join us for {clean}.",
        f"{clean}: join us for a beautiful evening.",
        f"Celebrate {clean} with us.",
        f"See you at {clean}!",
    ]
    for candidate in candidates:
        if within_word_limit(candidate, MAX_DESCRIPTION_WORDS):
            return candidate
    return "Join us for a beautiful evening."


def _strings(value) -> list:
    if not isinstance(value, list):
        return []
    return [normalize_text(x) for x in value if isinstance(x, str) and x.strip()]


def parse_copy_response(content: Optional[str], theme: str) -> FlyerCopy:
    """Validate and clean a JSON copy response.

    Raises CopySupplierError on anything unusable; partial answers are not
    patched up.
    """
    try:
        result = json.loads(content or "")
    except json.JSONDecodeError as e:
        raise CopySupplierError(f"Failed to parse OpenAI response as JSON: {e}")
    if not isinstance(result, dict):
        raise CopySupplierError("OpenAI copy response is not a JSON object")

    raw_descriptions = _strings(result.get("descriptions"))
    descriptions = unique(d for d in raw_descriptions if within_word_limit(d, MAX_DESCRIPTION_WORDS))
    taglines = unique(t for t in _strings(result.get("taglines")) if within_word_limit(t, MAX_TAGLINE_WORDS))
    palette = [c.upper() for c in _strings(result.get("palette"))]

    if not taglines:
        raise CopySupplierError("OpenAI copy response has no usable tagline")
    if len(palette) != 3 or not all(is_hex_color(c) for c in palette):
        raise CopySupplierError(f"OpenAI copy response has an invalid palette: {palette}")

    parsed_description = result.get("description")
    parsed_description = normalize_text(parsed_description) if isinstance(parsed_description, str) else ""
    candidates = [
        d for d in [parsed_description, *raw_descriptions, short_fallback_description(theme)]
        if within_word_limit(d, MAX_DESCRIPTION_WORDS)
    ]
    description = candidates[0] if candidates else short_fallback_description(theme)

    return FlyerCopy(
        description=description,
        descriptions=tuple((descriptions or [description])[:MAX_DESCRIPTIONS]),
        taglines=tuple(taglines[:MAX_TAGLINES]),
        palette=tuple(palette),
    )


async def generate_flyer_copy(
    theme: str,
    dress_code: str = "",
    note: str = "",
    client: Optional[AsyncOpenAI] = None,
) -> FlyerCopy:
    """
    Generate flyer copy using OpenAI.

    Args:
        theme: Event theme
        dress_code: Optional dress code, mentioned in the prompt
        note: Optional extra note, mentioned in the prompt
        client: Optional preconfigured client

    Returns:
        FlyerCopy with description, alternatives, taglines and palette
    """
    settings = get_settings()
    if client is None:
        if not settings.openai_api_key:
            raise CopySupplierError("OPENAI_API_KEY is not configured")
        client = AsyncOpenAI(api_key=settings.openai_api_key)

    try:
        response = await client.chat.completions.create(
            model=settings.openai_copy_model,
            messages=[{"role": "user", "content": build_copy_prompt(theme, dress_code, note)}],
            temperature=0.8,
            response_format={"type": "json_object"},
        )
    except Exception as e:
        raise CopySupplierError(f"OpenAI copy request failed: {e}") from e

    content = response.choices[0].message.content
    copy = parse_copy_response(content, theme)
    logger.info(f"Generated copy for '{theme}': {len(copy.taglines)} taglines")
    return copy
