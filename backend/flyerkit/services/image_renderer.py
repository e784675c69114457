"""
Flyer Rasterizer.

Paints a laid-out document onto a 1080x1350 RGBA canvas with Pillow:
- ShapeMasks: rounded rectangles, pills, circles and (dashed) borders
- BackgroundPainter: solid colors, linear and radial gradients
- DocumentRenderer: boxes, text, pictures and composited groups

Every operation is deterministic, so the same tree and fonts always yield
the same PNG bytes.
"""

import logging
import math
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageChops, ImageDraw, ImageFilter, ImageOps, features

from flyerkit.colors import RGBA, parse_color
from flyerkit.errors import RasterizerUnavailableError
from flyerkit.nodes import Background, LinearGradient, Node, RadialGradient
from flyerkit.services.fonts import FontBook, FontSet
from flyerkit.services.layout_engine import (
    BoxOp,
    Document,
    GroupOp,
    ImageOp,
    LayoutEngine,
    TextOp,
)

logger = logging.getLogger(__name__)

# Image dimensions
WIDTH = 1080
HEIGHT = 1350

SUPERSAMPLE = 2  # anti-aliasing factor for shape masks
GRADIENT_GRID = 96  # gradient samples along the longer side before upscaling
GROUP_PAD = 48  # room for glyph overhang around composited groups
ITALIC_SHEAR = 0.2
SHADOW_OFFSET = (0, 2)
SHADOW_BLUR = 3

Radii = Tuple[float, float, float, float]


def ensure_rasterizer():
    """Raise when Pillow cannot render TrueType text."""
    if not features.check("freetype2"):
        raise RasterizerUnavailableError("Pillow was built without FreeType support.")


def _px(value: float) -> int:
    return max(1, int(math.ceil(value - 1e-6)))


def composite(canvas: Image.Image, layer: Image.Image, x: float, y: float):
    """Alpha-composite a layer at (x, y), clipping whatever falls off the canvas."""
    x, y = int(round(x)), int(round(y))
    lw, lh = layer.size
    left, top = max(0, -x), max(0, -y)
    right, bottom = min(lw, canvas.width - x), min(lh, canvas.height - y)
    if right <= left or bottom <= top:
        return
    canvas.alpha_composite(layer, dest=(x + left, y + top), source=(left, top, right, bottom))


def tint(mask: Image.Image, color: RGBA) -> Image.Image:
    """Solid color layer whose alpha is the mask scaled by the color alpha."""
    r, g, b, a = color
    layer = Image.new("RGBA", mask.size, (r, g, b, 0))
    layer.putalpha(mask if a == 255 else mask.point(lambda v: v * a // 255))
    return layer


def apply_mask(layer: Image.Image, mask: Image.Image):
    layer.putalpha(ImageChops.multiply(layer.getchannel("A"), mask))


# ============================================
# SHAPES
# ============================================

class ShapeMasks:
    """Anti-aliased L masks for rounded boxes and borders."""

    @staticmethod
    def fit_radii(w: float, h: float, radius: Radii) -> Radii:
        """Scale corner radii down proportionally when adjacent corners overlap."""
        tl, tr, br, bl = (max(0.0, r) for r in radius)
        factor = 1.0
        for side, a, b in ((w, tl, tr), (w, bl, br), (h, tl, bl), (h, tr, br)):
            if a + b > side > 0:
                factor = min(factor, side / (a + b))
        return tl * factor, tr * factor, br * factor, bl * factor

    @staticmethod
    def is_round(w: float, h: float, radius: Radii) -> bool:
        return all(r >= min(w, h) / 2 for r in radius)

    @staticmethod
    def rounded(w: float, h: float, radius: Radii) -> Image.Image:
        size = (_px(w), _px(h))
        if not any(radius):
            return Image.new("L", size, 255)

        ss = SUPERSAMPLE
        big_w, big_h = size[0] * ss, size[1] * ss
        mask = Image.new("L", (big_w, big_h), 255)
        draw = ImageDraw.Draw(mask)
        tl, tr, br, bl = (r * ss for r in ShapeMasks.fit_radii(size[0], size[1], radius))

        # Clear each corner square, then put back its quarter circle
        corners = (
            (tl, (0, 0), 180),
            (tr, (big_w - 2 * tr, 0), 270),
            (br, (big_w - 2 * br, big_h - 2 * br), 0),
            (bl, (0, big_h - 2 * bl), 90),
        )
        for r, (ox, oy), start in corners:
            if r <= 0:
                continue
            cx = ox + (r if start in (270, 0) else 0)
            cy = oy + (r if start in (0, 90) else 0)
            draw.rectangle([cx, cy, cx + r, cy + r], fill=0)
            draw.pieslice([ox, oy, ox + 2 * r, oy + 2 * r], start, start + 90, fill=255)

        return mask.resize(size, Image.Resampling.LANCZOS)

    @staticmethod
    def ring(w: float, h: float, border: float, radius: Radii) -> Image.Image:
        outer = ShapeMasks.rounded(w, h, radius)
        inner_w, inner_h = w - 2 * border, h - 2 * border
        if inner_w <= 0 or inner_h <= 0:
            return outer
        fitted = ShapeMasks.fit_radii(w, h, radius)
        inner_radius = tuple(max(0.0, r - border) for r in fitted)
        hole = Image.new("L", outer.size, 0)
        hole.paste(ShapeMasks.rounded(inner_w, inner_h, inner_radius), (int(round(border)), int(round(border))))
        return ImageChops.subtract(outer, hole)

    @staticmethod
    def dashed_ring(w: float, h: float, border: float, radius: Radii) -> Image.Image:
        size = (_px(w), _px(h))
        ss = SUPERSAMPLE
        big_w, big_h = size[0] * ss, size[1] * ss
        stroke = max(1, int(round(border * ss)))
        dash = max(border * 3, 8) * ss
        half = stroke / 2

        mask = Image.new("L", (big_w, big_h), 0)
        draw = ImageDraw.Draw(mask)

        if ShapeMasks.is_round(w, h, radius):
            perimeter = math.pi * (big_w + big_h) / 2
            count = max(4, int(perimeter / (2 * dash)))
            step = 360 / count
            bbox = [half, half, big_w - half, big_h - half]
            for i in range(count):
                draw.arc(bbox, i * step, i * step + step / 2, fill=255, width=stroke)
        else:
            edges = (
                ((0, half), (big_w, half)),
                ((big_w - half, 0), (big_w - half, big_h)),
                ((big_w, big_h - half), (0, big_h - half)),
                ((half, big_h), (half, 0)),
            )
            for (x0, y0), (x1, y1) in edges:
                length = math.hypot(x1 - x0, y1 - y0)
                count = max(1, int(length / (2 * dash)))
                for i in range(count):
                    t0, t1 = (2 * i) / (2 * count), (2 * i + 1) / (2 * count)
                    draw.line(
                        [(x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0),
                         (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1)],
                        fill=255,
                        width=stroke,
                    )

        mask = mask.resize(size, Image.Resampling.LANCZOS)
        if any(radius):
            mask = ImageChops.multiply(mask, ShapeMasks.rounded(w, h, radius))
        return mask


# ============================================
# BACKGROUNDS
# ============================================

class BackgroundPainter:
    """Paints solid and gradient backgrounds into RGBA layers."""

    @staticmethod
    def _lerp(a: RGBA, b: RGBA, t: float) -> RGBA:
        return tuple(int(round(a[i] + (b[i] - a[i]) * t)) for i in range(4))

    @staticmethod
    def _grid(size: Tuple[int, int]) -> Tuple[int, int]:
        w, h = size
        scale = min(1.0, GRADIENT_GRID / max(w, h))
        return max(2, int(round(w * scale))), max(2, int(round(h * scale)))

    @staticmethod
    def linear(size: Tuple[int, int], gradient: LinearGradient) -> Image.Image:
        stops = [parse_color(c) for c in gradient.stops]
        if len(stops) == 1:
            return Image.new("RGBA", size, stops[0])

        w, h = size
        theta = math.radians(gradient.angle)
        dx, dy = math.sin(theta), -math.cos(theta)
        length = abs(w * dx) + abs(h * dy) or 1.0

        gw, gh = BackgroundPainter._grid(size)
        pixels = []
        for gy in range(gh):
            py = (gy + 0.5) * h / gh
            for gx in range(gw):
                px = (gx + 0.5) * w / gw
                t = ((px - w / 2) * dx + (py - h / 2) * dy) / length + 0.5
                t = max(0.0, min(1.0, t))
                pos = t * (len(stops) - 1)
                i = min(int(pos), len(stops) - 2)
                pixels.append(BackgroundPainter._lerp(stops[i], stops[i + 1], pos - i))

        small = Image.new("RGBA", (gw, gh))
        small.putdata(pixels)
        return small.resize(size, Image.Resampling.BILINEAR)

    @staticmethod
    def radial(size: Tuple[int, int], gradient: RadialGradient) -> Image.Image:
        w, h = size
        cx, cy = w * gradient.cx_pct / 100, h * gradient.cy_pct / 100
        farthest = max(math.hypot(cx - x, cy - y) for x in (0, w) for y in (0, h))
        extent = max(farthest * gradient.extent_pct / 100, 1.0)
        r, g, b, a = parse_color(gradient.color)

        gw, gh = BackgroundPainter._grid(size)
        pixels = []
        for gy in range(gh):
            py = (gy + 0.5) * h / gh
            for gx in range(gw):
                px = (gx + 0.5) * w / gw
                t = min(1.0, math.hypot(px - cx, py - cy) / extent)
                pixels.append((r, g, b, int(round(a * (1 - t)))))

        small = Image.new("RGBA", (gw, gh))
        small.putdata(pixels)
        return small.resize(size, Image.Resampling.BILINEAR)

    @staticmethod
    def paint(size: Tuple[int, int], background: Background) -> Image.Image:
        """Layered backgrounds paint last-to-first, so the first layer ends on top."""
        layers = background if isinstance(background, tuple) else (background,)
        out = Image.new("RGBA", size, (0, 0, 0, 0))
        for paint in reversed(layers):
            if isinstance(paint, LinearGradient):
                out.alpha_composite(BackgroundPainter.linear(size, paint))
            elif isinstance(paint, RadialGradient):
                out.alpha_composite(BackgroundPainter.radial(size, paint))
            else:
                out.alpha_composite(Image.new("RGBA", size, parse_color(paint)))
        return out


# ============================================
# DOCUMENT RENDERER
# ============================================

class DocumentRenderer:
    """Paints document operations; coordinates are offset into the current layer."""

    def __init__(self, book: FontBook):
        self.book = book

    def render(self, document: Document) -> Image.Image:
        canvas = Image.new("RGBA", (document.width, document.height), (0, 0, 0, 0))
        self._paint(canvas, document.ops, 0, 0)
        return canvas

    def _paint(self, canvas: Image.Image, ops, ox: float, oy: float):
        for op in ops:
            if isinstance(op, BoxOp):
                self._paint_box(canvas, op, ox, oy)
            elif isinstance(op, TextOp):
                self._paint_text(canvas, op, ox, oy)
            elif isinstance(op, ImageOp):
                self._paint_image(canvas, op, ox, oy)
            elif isinstance(op, GroupOp):
                self._paint_group(canvas, op, ox, oy)

    def _paint_box(self, canvas: Image.Image, op: BoxOp, ox: float, oy: float):
        if op.w <= 0 or op.h <= 0:
            return
        size = (_px(op.w), _px(op.h))

        if op.background is not None:
            fill = BackgroundPainter.paint(size, op.background)
            if any(op.radius):
                apply_mask(fill, ShapeMasks.rounded(op.w, op.h, op.radius))
            composite(canvas, fill, op.x + ox, op.y + oy)

        if op.border_width > 0 and op.border_color:
            if op.border_dashed:
                ring = ShapeMasks.dashed_ring(op.w, op.h, op.border_width, op.radius)
            else:
                ring = ShapeMasks.ring(op.w, op.h, op.border_width, op.radius)
            composite(canvas, tint(ring, parse_color(op.border_color)), op.x + ox, op.y + oy)

    def _text_mask(self, op: TextOp) -> Tuple[Image.Image, float, float]:
        """Draw all lines into one L mask; returns (mask, left, top) in document space."""
        face = self.book.face(op.font, op.size, op.weight)
        stroke = self.book.stroke(op.font, op.weight)

        x0 = min([op.x] + [line.x for line in op.lines])
        x1 = max([op.x + op.w] + [line.x + line.width for line in op.lines])
        margin = int(math.ceil(op.size * 0.6)) + stroke
        height = max(op.h, op.line_height * len(op.lines))
        shear_room = int(math.ceil(ITALIC_SHEAR * (height + 2 * margin) / 2)) if op.italic else 0
        pad_x = margin + shear_room

        mask = Image.new("L", (_px(x1 - x0) + 2 * pad_x, _px(height) + 2 * margin), 0)
        draw = ImageDraw.Draw(mask)

        for line in op.lines:
            cx = line.x - x0 + pad_x + stroke
            cy = line.y - op.y + margin + op.line_height / 2
            if op.letter_spacing:
                for ch in line.text:
                    draw.text((cx, cy), ch, font=face, fill=255, anchor="lm",
                              stroke_width=stroke, stroke_fill=255)
                    cx += face.getlength(ch) + op.letter_spacing
            else:
                draw.text((cx, cy), line.text, font=face, fill=255, anchor="lm",
                          stroke_width=stroke, stroke_fill=255)

        if op.italic:
            k = ITALIC_SHEAR
            mask = mask.transform(
                mask.size,
                Image.Transform.AFFINE,
                (1, k, -k * mask.height / 2, 0, 1, 0),
                resample=Image.Resampling.BICUBIC,
            )
        return mask, x0 - pad_x, op.y - margin

    def _paint_text(self, canvas: Image.Image, op: TextOp, ox: float, oy: float):
        if not op.lines:
            return
        mask, left, top = self._text_mask(op)

        if op.shadow:
            blurred = mask.filter(ImageFilter.GaussianBlur(SHADOW_BLUR))
            composite(
                canvas,
                tint(blurred, parse_color(op.shadow)),
                left + ox + SHADOW_OFFSET[0],
                top + oy + SHADOW_OFFSET[1],
            )
        composite(canvas, tint(mask, parse_color(op.color)), left + ox, top + oy)

    def _paint_image(self, canvas: Image.Image, op: ImageOp, ox: float, oy: float):
        if op.w <= 0 or op.h <= 0:
            return
        size = (_px(op.w), _px(op.h))
        with Image.open(BytesIO(op.data)) as source:
            img = source.convert("RGBA")

        if op.fit == "cover":
            centering = (0.0, 0.0) if op.focus == "left top" else (0.5, 0.5)
            layer = ImageOps.fit(img, size, Image.Resampling.LANCZOS, centering=centering)
        else:
            fitted = ImageOps.contain(img, size, Image.Resampling.LANCZOS)
            layer = Image.new("RGBA", size, (0, 0, 0, 0))
            layer.paste(fitted, ((size[0] - fitted.width) // 2, (size[1] - fitted.height) // 2))

        if any(op.radius):
            apply_mask(layer, ShapeMasks.rounded(op.w, op.h, op.radius))
        composite(canvas, layer, op.x + ox, op.y + oy)

    def _paint_group(self, canvas: Image.Image, op: GroupOp, ox: float, oy: float):
        margin = GROUP_PAD
        if op.rotate:
            margin += int(math.ceil(max(op.w, op.h) / 2))
        if op.clip_radius is not None:
            margin = 0

        left, top = op.x - margin, op.y - margin
        layer = Image.new("RGBA", (_px(op.w) + 2 * margin, _px(op.h) + 2 * margin), (0, 0, 0, 0))
        self._paint(layer, op.ops, -left, -top)

        if op.clip_radius is not None:
            apply_mask(layer, ShapeMasks.rounded(op.w, op.h, op.clip_radius))
        if op.opacity < 1.0:
            factor = max(0.0, op.opacity)
            layer.putalpha(layer.getchannel("A").point(lambda v: int(round(v * factor))))
        if op.rotate:
            # Pillow rotates counter-clockwise
            layer = layer.rotate(
                -op.rotate,
                resample=Image.Resampling.BICUBIC,
                center=(margin + op.w / 2, margin + op.h / 2),
            )
        composite(canvas, layer, left + ox, top + oy)


# ============================================
# ENTRY POINTS
# ============================================

def encode_png(img: Image.Image) -> bytes:
    buffer = BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


def render_image(tree: Node, fonts: FontSet, width: int = WIDTH, height: int = HEIGHT) -> Image.Image:
    ensure_rasterizer()
    book = FontBook(fonts)
    document = LayoutEngine(book).layout(tree, width, height)
    return DocumentRenderer(book).render(document)


def rasterize(tree: Node, fonts: FontSet, width: int = WIDTH, height: int = HEIGHT) -> bytes:
    """Lay out and rasterize a flyer tree into PNG bytes."""
    img = render_image(tree, fonts, width, height)
    logger.debug(f"Rasterized flyer {width}x{height}")
    return encode_png(img)


def normalize_artwork(data: bytes, width: int = WIDTH, height: int = HEIGHT) -> Optional[bytes]:
    """Cover-fit supplier artwork to the flyer canvas; None if it cannot be decoded."""
    try:
        with Image.open(BytesIO(data)) as source:
            img = source.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning(f"Artwork could not be decoded: {e}")
        return None
    fitted = ImageOps.fit(img, (width, height), Image.Resampling.LANCZOS)
    return encode_png(fitted)
