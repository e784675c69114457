"""
Flyer generation orchestrator.

Pipeline for one call:
1. Resolve copy (supplier, then local generator on any failure)
2. ai_poster mode: try supplier artwork, fall back to the classic render
3. Classic render: plan -> tree -> fonts -> rasterize
4. Package the PNG as a one-page PDF

Calls share nothing but the font cache, so concurrent generations need no
coordination.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from flyerkit.config import Settings, get_settings
from flyerkit.models import FlyerCopy, FlyerInput, FlyerMode, RenderedFlyer
from flyerkit.services.artwork_generator import generate_flyer_artwork
from flyerkit.services.content_generator import generate_flyer_copy
from flyerkit.services.flyer_builder import build_tree, load_logo, plan_render
from flyerkit.services.fonts import FontSet, load_fonts
from flyerkit.services.image_renderer import ensure_rasterizer, normalize_artwork, rasterize
from flyerkit.services.local_copy import generate_local_copy
from flyerkit.services.pdf_packager import package_pdf

logger = logging.getLogger(__name__)

CopySupplier = Callable[[str, str, str], Awaitable[FlyerCopy]]
ArtworkSupplier = Callable[[FlyerInput], Awaitable[bytes]]
FontLoader = Callable[[Settings], Awaitable[FontSet]]


class FlyerGenerator:
    """Turns FlyerInput into PNG and PDF bytes."""

    def __init__(
        self,
        copy_supplier: Optional[CopySupplier] = None,
        artwork_supplier: Optional[ArtworkSupplier] = None,
        font_loader: Optional[FontLoader] = None,
        settings: Optional[Settings] = None,
    ):
        self.copy_supplier = copy_supplier or generate_flyer_copy
        self.artwork_supplier = artwork_supplier or generate_flyer_artwork
        self.font_loader = font_loader or load_fonts
        self.settings = settings or get_settings()

    # ============================================
    # COPY
    # ============================================

    async def suggest_copy(self, theme: str, dress_code: str = "", note: str = "") -> FlyerCopy:
        """Supplier copy, or local copy when the supplier fails in any way."""
        try:
            return await asyncio.wait_for(
                self.copy_supplier(theme, dress_code, note),
                timeout=self.settings.supplier_timeout_seconds,
            )
        except Exception as e:
            logger.warning(f"Copy supplier failed, using local copy: {e}")
            return generate_local_copy(theme, dress_code, note)

    async def resolve_copy(self, flyer: FlyerInput) -> FlyerInput:
        """Fill in description, tagline and palette where the caller left them empty."""
        if not flyer.needs_copy:
            return flyer
        copy = await self.suggest_copy(flyer.theme, flyer.dress_code, flyer.note)
        return flyer.with_copy(
            description=flyer.description.strip() or copy.description,
            tagline=flyer.tagline.strip() or (copy.taglines[0] if copy.taglines else ""),
            palette=flyer.palette or copy.palette,
        )

    # ============================================
    # RENDERING
    # ============================================

    def _render_sync(self, flyer: FlyerInput, fonts: FontSet) -> bytes:
        plan = plan_render(flyer, self.settings)
        tree = build_tree(flyer, plan, load_logo(self.settings), self.settings)
        return rasterize(tree, fonts)

    async def render_classic(self, flyer: FlyerInput) -> bytes:
        ensure_rasterizer()
        fonts = await self.font_loader(self.settings)
        png = await asyncio.to_thread(self._render_sync, flyer, fonts)
        logger.info(f"Rendered classic flyer for '{flyer.theme}'")
        return png

    async def render_artwork(self, flyer: FlyerInput) -> Optional[bytes]:
        """Supplier artwork fitted to the flyer canvas, or None on any failure."""
        try:
            data = await asyncio.wait_for(
                self.artwork_supplier(flyer),
                timeout=self.settings.supplier_timeout_seconds,
            )
        except Exception as e:
            logger.warning(f"Artwork supplier failed, falling back to classic render: {e}")
            return None
        return await asyncio.to_thread(normalize_artwork, data)

    async def generate(self, flyer: FlyerInput, mode: FlyerMode = FlyerMode.CLASSIC) -> RenderedFlyer:
        """
        Generate a flyer.

        Args:
            flyer: Event metadata
            mode: classic, or ai_poster to try supplier artwork first

        Returns:
            RenderedFlyer with PNG, PDF and the mode that produced the PNG

        Raises:
            FlyerConfigurationError: fonts or the rasterizer are unavailable
        """
        mode = FlyerMode(mode)
        flyer = await self.resolve_copy(flyer)

        png = None
        if mode == FlyerMode.AI_POSTER:
            png = await self.render_artwork(flyer)
            if png is None:
                mode = FlyerMode.CLASSIC
        if png is None:
            png = await self.render_classic(flyer)

        pdf = await asyncio.to_thread(package_pdf, png)
        return RenderedFlyer(png=png, pdf=pdf, mode=mode)


def get_flyer_generator() -> FlyerGenerator:
    """Get a generator wired to the OpenAI suppliers and cached fonts."""
    return FlyerGenerator()
