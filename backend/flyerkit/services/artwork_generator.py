"""
Flyer artwork generation using the OpenAI image API.

Returns raw image bytes; the orchestrator normalizes them to the flyer
canvas and falls back to the classic render when anything goes wrong.
"""

import base64
import binascii
import logging
from typing import Optional

from openai import AsyncOpenAI

from flyerkit.config import get_settings
from flyerkit.errors import ArtworkSupplierError
from flyerkit.models import FlyerInput

logger = logging.getLogger(__name__)


def build_artwork_prompt(flyer: FlyerInput) -> str:
    return "\n".join([
        "Design a single, polished, high-end party flyer poster.",
        "Make it visually rich and extravagant, not minimal.",
        "Use cinematic lighting, layered decorations, elegant typography hierarchy, and balanced spacing.",
        "Keep text fully readable and professionally laid out.",
        "Do not add random gibberish text.",
        "Poster details:",
        f"Theme: {flyer.theme}",
        f"Date/Time: {flyer.date_time_text}",
        f"Location: {flyer.location or 'TBD'}",
        f"Dress code: {flyer.dress_code or 'Not specified'}",
        f"Tagline: {flyer.tagline}",
        f"Description: {flyer.description}",
        f"Extra note: {flyer.note}",
        "Include all event details in the design as clean readable text.",
        "Output should be a vertical event flyer poster.",
    ])


async def generate_flyer_artwork(flyer: FlyerInput, client: Optional[AsyncOpenAI] = None) -> bytes:
    """Generate a complete poster image and return its encoded bytes."""
    settings = get_settings()
    if client is None:
        if not settings.openai_api_key:
            raise ArtworkSupplierError("OPENAI_API_KEY is not configured")
        client = AsyncOpenAI(api_key=settings.openai_api_key)

    try:
        response = await client.images.generate(
            model=settings.openai_image_model,
            prompt=build_artwork_prompt(flyer),
            size=settings.openai_image_size,
        )
    except Exception as e:
        raise ArtworkSupplierError(f"OpenAI image request failed: {e}") from e

    b64 = response.data[0].b64_json if response.data else None
    if not b64:
        raise ArtworkSupplierError("OpenAI image response missing image bytes.")
    try:
        data = base64.b64decode(b64)
    except (binascii.Error, ValueError) as e:
        raise ArtworkSupplierError(f"OpenAI image payload is not valid base64: {e}")

    logger.info(f"Generated artwork for '{flyer.theme}' ({len(data)} bytes)")
    return data
