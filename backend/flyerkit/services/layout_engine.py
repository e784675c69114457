"""
Layout engine: turns a node tree into a vector document.

Two passes over the tree:
1. measure - natural size of a node for a given available width
2. place   - final boxes, emitted as a flat list of paint operations

Flow children stack in a column or row with gap, justify and cross-axis
alignment. Absolute children are positioned against their parent's box.
Rotated, translucent or clipping boxes become groups so the rasterizer can
composite them as one layer.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image

from flyerkit.nodes import Background, Box, Node, Picture, Style, Text
from flyerkit.services.fonts import FontBook

DEFAULT_INK = "#000000"


# ============================================
# PAINT OPERATIONS
# ============================================

@dataclass(frozen=True)
class BoxOp:
    x: float
    y: float
    w: float
    h: float
    background: Optional[Background]
    border_width: float
    border_color: Optional[str]
    border_dashed: bool
    radius: Tuple[float, float, float, float]


@dataclass(frozen=True)
class TextLine:
    x: float
    y: float
    text: str
    width: float


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    w: float
    h: float
    lines: Tuple[TextLine, ...]
    font: str
    weight: int
    size: float
    color: str
    italic: bool
    letter_spacing: float  # pixels
    line_height: float  # pixels
    shadow: Optional[str]


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    w: float
    h: float
    data: bytes
    fit: str
    focus: str
    radius: Tuple[float, float, float, float]


@dataclass(frozen=True)
class GroupOp:
    x: float
    y: float
    w: float
    h: float
    ops: tuple
    rotate: float
    opacity: float
    clip_radius: Optional[Tuple[float, float, float, float]]


@dataclass(frozen=True)
class Document:
    width: int
    height: int
    ops: tuple


def _insets(style: Style) -> Tuple[float, float, float, float]:
    """Padding plus border on each side: top, right, bottom, left."""
    t, r, b, l = style.padding
    bw = style.border_width
    return t + bw, r + bw, b + bw, l + bw


def _needs_group(style: Style) -> bool:
    return bool(style.rotate) or style.opacity < 1.0 or style.clip


class LayoutEngine:
    """Measures and places a node tree using a FontBook for text metrics."""

    def __init__(self, book: FontBook):
        self.book = book

    def layout(self, root: Node, width: int, height: int) -> Document:
        ops: List = []
        self._place(root, 0, 0, width, height, DEFAULT_INK, ops)
        return Document(width, height, tuple(ops))

    # ============================================
    # TEXT
    # ============================================

    def _content(self, node: Text) -> str:
        value = " ".join(node.text.split())
        return value.upper() if node.style.uppercase else value

    def _line_width(self, node: Text, line: str) -> float:
        st = node.style
        face = self.book.face(node.font, st.size, node.weight)
        stroke = self.book.stroke(node.font, node.weight)
        spacing = st.letter_spacing * st.size * max(len(line) - 1, 0)
        return face.getlength(line) + spacing + 2 * stroke

    def _wrap(self, node: Text, max_width: float) -> List[Tuple[str, float]]:
        """Greedy word wrap; a single word wider than the limit keeps its own line."""
        words = self._content(node).split(" ")
        lines: List[Tuple[str, float]] = []
        current: List[str] = []

        for word in words:
            if not word:
                continue
            test_line = " ".join(current + [word])
            width = self._line_width(node, test_line)
            if width <= max_width or not current:
                current.append(word)
            else:
                line = " ".join(current)
                lines.append((line, self._line_width(node, line)))
                current = [word]

        if current:
            line = " ".join(current)
            lines.append((line, self._line_width(node, line)))
        return lines

    def _text_limit(self, node: Text, avail_w: float) -> float:
        st = node.style
        if st.width is not None:
            return st.width
        limit = avail_w
        if st.max_width is not None:
            limit = min(limit, st.max_width)
        return max(limit, 1)

    def _measure_text(self, node: Text, avail_w: float) -> Tuple[float, float]:
        st = node.style
        lines = self._wrap(node, self._text_limit(node, avail_w))
        width = st.width if st.width is not None else max((w for _, w in lines), default=0)
        height = st.height if st.height is not None else st.size * st.line_height * len(lines)
        return width, height

    # ============================================
    # MEASURE
    # ============================================

    def measure(self, node: Node, avail_w: float) -> Tuple[float, float]:
        if isinstance(node, Text):
            return self._measure_text(node, avail_w)
        if isinstance(node, Picture):
            return self._measure_picture(node)
        return self._measure_box(node, avail_w)

    def _measure_picture(self, node: Picture) -> Tuple[float, float]:
        st = node.style
        if st.width is not None and st.height is not None:
            return st.width, st.height
        with Image.open(BytesIO(node.data)) as img:
            nat_w, nat_h = img.size
        if st.width is not None:
            return st.width, st.width * nat_h / nat_w
        if st.height is not None:
            return st.height * nat_w / nat_h, st.height
        return nat_w, nat_h

    def _measure_box(self, node: Box, avail_w: float) -> Tuple[float, float]:
        st = node.style
        top, right, bottom, left = _insets(st)
        outer_w = st.width if st.width is not None else avail_w
        inner_avail = max(outer_w - left - right, 0)

        flow = [c for c in node.children if not c.style.is_absolute]
        sizes = self._measure_flow(flow, inner_avail, st.direction, st.gap)
        gaps = st.gap * max(len(flow) - 1, 0)
        if st.direction == "row":
            content_w = sum(w for w, _ in sizes) + gaps
            content_h = max((h + c.style.margin_top for c, (_, h) in zip(flow, sizes)), default=0)
        else:
            content_w = max((w for w, _ in sizes), default=0)
            content_h = sum(h + c.style.margin_top for c, (_, h) in zip(flow, sizes)) + gaps

        width = st.width if st.width is not None else content_w + left + right
        height = st.height if st.height is not None else content_h + top + bottom
        if st.min_height is not None:
            height = max(height, st.min_height)
        return width, height

    def _measure_flow(self, flow: List[Node], inner_w: float, direction: str, gap: float):
        if direction != "row":
            return [self.measure(child, inner_w) for child in flow]
        sizes = []
        remaining = inner_w
        for child in flow:
            w, h = self.measure(child, max(remaining, 0))
            sizes.append((w, h))
            remaining -= w + gap
        return sizes

    # ============================================
    # PLACE
    # ============================================

    def _place(self, node: Node, x: float, y: float, w: float, h: float, ink: str, ops: List):
        st = node.style
        target = [] if _needs_group(st) else ops

        if isinstance(node, Text):
            target.append(self._text_op(node, x, y, w, h, st.color or ink))
        elif isinstance(node, Picture):
            target.append(ImageOp(x, y, w, h, node.data, node.fit, node.focus, st.radius))
        else:
            self._place_box(node, x, y, w, h, st.color or ink, target)

        if target is not ops:
            ops.append(GroupOp(
                x, y, w, h,
                ops=tuple(target),
                rotate=st.rotate,
                opacity=st.opacity,
                clip_radius=st.radius if st.clip else None,
            ))

    def _text_op(self, node: Text, x: float, y: float, w: float, h: float, color: str) -> TextOp:
        st = node.style
        line_h = st.size * st.line_height
        limit = min(w, st.max_width) if st.max_width is not None else w
        lines = []
        for i, (line, line_w) in enumerate(self._wrap(node, max(limit, 1))):
            if st.text_align == "center":
                lx = x + (w - line_w) / 2
            elif st.text_align == "right":
                lx = x + w - line_w
            else:
                lx = x
            lines.append(TextLine(lx, y + i * line_h, line, line_w))
        return TextOp(
            x, y, w, h,
            lines=tuple(lines),
            font=node.font,
            weight=node.weight,
            size=st.size,
            color=color,
            italic=st.italic,
            letter_spacing=st.letter_spacing * st.size,
            line_height=line_h,
            shadow=st.shadow,
        )

    def _place_box(self, node: Box, x: float, y: float, w: float, h: float, ink: str, ops: List):
        st = node.style
        if st.background is not None or (st.border_width and st.border_color):
            ops.append(BoxOp(
                x, y, w, h,
                background=st.background,
                border_width=st.border_width,
                border_color=st.border_color,
                border_dashed=st.border_dashed,
                radius=st.radius,
            ))

        top, right, bottom, left = _insets(st)
        inner = (x + left, y + top, max(w - left - right, 0), max(h - top - bottom, 0))

        flow = [c for c in node.children if not c.style.is_absolute]
        if st.direction == "row":
            self._place_row(flow, inner, st, ink, ops)
        else:
            self._place_column(flow, inner, st, ink, ops)

        for child in node.children:
            if child.style.is_absolute:
                self._place_absolute(child, x, y, w, h, ink, ops)

    def _main_axis(self, free: float, count: int, st: Style) -> Tuple[float, float]:
        """(leading offset, spacing between items) along the main axis."""
        if st.justify == "center":
            return free / 2, st.gap
        if st.justify == "end":
            return free, st.gap
        if st.justify == "space-between" and count > 1 and free > 0:
            return 0, st.gap + free / (count - 1)
        return 0, st.gap

    def _place_column(self, flow: List[Node], inner, st: Style, ink: str, ops: List):
        ix, iy, iw, ih = inner
        sizes = self._measure_flow(flow, iw, "column", st.gap)
        used = sum(h + c.style.margin_top for c, (_, h) in zip(flow, sizes))
        used += st.gap * max(len(flow) - 1, 0)
        lead, spacing = self._main_axis(ih - used, len(flow), st)

        cursor = iy + lead
        for child, (cw, ch) in zip(flow, sizes):
            cursor += child.style.margin_top
            align = child.style.align_self or st.align_items
            if align == "stretch" and child.style.width is None:
                cw = iw
            if align == "center":
                cx = ix + (iw - cw) / 2
            elif align == "end":
                cx = ix + iw - cw
            else:
                cx = ix
            self._place(child, cx, cursor, cw, ch, ink, ops)
            cursor += ch + spacing

    def _place_row(self, flow: List[Node], inner, st: Style, ink: str, ops: List):
        ix, iy, iw, ih = inner
        sizes = self._measure_flow(flow, iw, "row", st.gap)
        used = sum(w for w, _ in sizes) + st.gap * max(len(flow) - 1, 0)
        lead, spacing = self._main_axis(iw - used, len(flow), st)

        cursor = ix + lead
        for child, (cw, ch) in zip(flow, sizes):
            align = child.style.align_self or st.align_items
            offset = child.style.margin_top
            if align == "stretch" and child.style.height is None and isinstance(child, Box):
                ch = ih - offset
            if align == "center":
                cy = iy + (ih - ch) / 2
            elif align == "end":
                cy = iy + ih - ch
            else:
                cy = iy + offset
            self._place(child, cursor, cy, cw, ch, ink, ops)
            cursor += cw + spacing

    def _place_absolute(self, child: Node, x: float, y: float, w: float, h: float, ink: str, ops: List):
        st = child.style
        if st.width is not None:
            cw = st.width
        elif st.left is not None and st.right is not None:
            cw = w - st.left - st.right
        else:
            cw = self.measure(child, w)[0]

        if st.height is not None:
            ch = st.height
        elif st.top is not None and st.bottom is not None:
            ch = h - st.top - st.bottom
        else:
            ch = self.measure(child, cw)[1]
        if st.min_height is not None:
            ch = max(ch, st.min_height)

        if st.left is not None:
            cx = x + st.left
        elif st.right is not None:
            cx = x + w - st.right - cw
        else:
            cx = x
        if st.top is not None:
            cy = y + st.top
        elif st.bottom is not None:
            cy = y + h - st.bottom - ch
        else:
            cy = y

        if st.center_x:
            cx -= cw / 2
        if st.center_y:
            cy -= ch / 2
        self._place(child, cx, cy, cw, ch, ink, ops)


def layout_document(root: Node, book: FontBook, width: int, height: int) -> Document:
    return LayoutEngine(book).layout(root, width, height)


def iter_ops(ops):
    """Flatten groups, yielding every leaf operation."""
    for op in ops:
        if isinstance(op, GroupOp):
            yield from iter_ops(op.ops)
        else:
            yield op
