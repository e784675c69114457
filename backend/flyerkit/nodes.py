"""
Declarative layout tree.

A flyer is a tree of three node kinds:
- Box: a styled container with children
- Text: a string with a mandatory font role and weight
- Picture: embedded image bytes

All sizes are pixels on the 1080x1350 canvas. The tree is the only input to
the layout engine, which turns it into a flat list of paint operations.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from flyerkit.models import FONT_ROLES

PILL = 999


@dataclass(frozen=True)
class LinearGradient:
    """CSS-style linear gradient; 0deg points up, 90deg points right."""

    angle: float
    stops: Tuple[str, ...]


@dataclass(frozen=True)
class RadialGradient:
    """Circle at (cx_pct, cy_pct) fading from `color` to transparent at `extent_pct`."""

    cx_pct: float
    cy_pct: float
    color: str
    extent_pct: float


Paint = Union[str, LinearGradient, RadialGradient]
Background = Union[Paint, Tuple[Paint, ...]]


@dataclass(frozen=True)
class Style:
    # Positioning
    position: str = "flow"  # "flow" | "absolute"
    left: Optional[float] = None
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    min_height: Optional[float] = None
    max_width: Optional[float] = None
    center_x: bool = False  # translate by -50% of own width
    center_y: bool = False

    # Flow layout
    padding: Tuple[float, float, float, float] = (0, 0, 0, 0)
    margin_top: float = 0
    direction: str = "column"  # "column" | "row"
    align_items: str = "stretch"  # "stretch" | "start" | "center" | "end"
    align_self: Optional[str] = None
    justify: str = "start"  # "start" | "center" | "end" | "space-between"
    gap: float = 0

    # Paint
    background: Optional[Background] = None
    border_width: float = 0
    border_color: Optional[str] = None
    border_dashed: bool = False
    radius: Tuple[float, float, float, float] = (0, 0, 0, 0)  # tl, tr, br, bl
    rotate: float = 0  # degrees, clockwise
    opacity: float = 1.0
    clip: bool = False

    # Text
    size: float = 30
    color: Optional[str] = None  # inherited when None
    italic: bool = False
    uppercase: bool = False
    letter_spacing: float = 0.0  # em
    line_height: float = 1.2
    text_align: str = "left"
    shadow: Optional[str] = None

    @property
    def is_absolute(self) -> bool:
        return self.position == "absolute"


@dataclass(frozen=True)
class Box:
    style: Style = field(default_factory=Style)
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Text:
    text: str
    font: str
    weight: int
    style: Style = field(default_factory=Style)

    def __post_init__(self):
        if self.font not in FONT_ROLES:
            raise ValueError(f"Unknown font role: {self.font!r}")
        if not isinstance(self.weight, int) or not 100 <= self.weight <= 1000:
            raise ValueError(f"Invalid font weight: {self.weight!r}")


@dataclass(frozen=True)
class Picture:
    data: bytes
    style: Style = field(default_factory=Style)
    fit: str = "contain"  # "contain" | "cover"
    focus: str = "center"  # "center" | "left top"


Node = Union[Box, Text, Picture]


def corners(r: float) -> Tuple[float, float, float, float]:
    return (r, r, r, r)


def pad(vertical: float, horizontal: Optional[float] = None) -> Tuple[float, float, float, float]:
    """CSS shorthand: pad(v) or pad(v, h)."""
    h = vertical if horizontal is None else horizontal
    return (vertical, h, vertical, h)


def box(*children: "Node", **style) -> Box:
    return Box(Style(**style), tuple(c for c in children if c is not None))


def text(value: str, font: str, weight: int, **style) -> Text:
    return Text(value, font, weight, Style(**style))


def absolute(**style) -> Style:
    return Style(position="absolute", **style)


def walk(node: "Node"):
    """Yield every node in the tree, depth first."""
    yield node
    if isinstance(node, Box):
        for child in node.children:
            yield from walk(child)


def count_nodes(node: "Node") -> int:
    return sum(1 for _ in walk(node))
