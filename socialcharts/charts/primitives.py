"""
Renderer-agnostic draw primitives and the ChartSpec container that holds them.

Builders produce a ChartSpec: resolved pixel coordinates (relative to the
plot area, i.e. inside the margins) plus style. The rendering layer paints
it; nothing here knows about matplotlib.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Iterator, Union

from socialcharts.charts.layout import Layout

Point = tuple[float, float]


@dataclass(frozen=True)
class Style:
    """Paint attributes shared by every primitive type."""

    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 1.0
    opacity: float = 1.0
    # Opacity while the pointer is over the shape; None = no hover feedback
    hover_opacity: float | None = None
    font_size: float = 12.0
    font_weight: str = "normal"
    text_anchor: str = "start"  # "start", "middle", "end"
    baseline: str = "auto"  # "auto", "middle", "hanging"
    rotation: float = 0.0  # degrees, SVG convention (positive = clockwise)


@dataclass(frozen=True)
class LinePrimitive:
    """Straight segment from (x1, y1) to (x2, y2)."""

    kind: ClassVar[str] = "line"

    x1: float
    y1: float
    x2: float
    y2: float
    style: Style = field(default_factory=Style)
    role: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class RectPrimitive:
    """Axis-aligned rectangle; (x, y) is the top-left corner."""

    kind: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float
    style: Style = field(default_factory=Style)
    role: str = ""
    # Data the rectangle encodes, for tooltips/JSON consumers
    datum: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class CirclePrimitive:
    """Circle centered at (cx, cy)."""

    kind: ClassVar[str] = "circle"

    cx: float
    cy: float
    r: float
    style: Style = field(default_factory=Style)
    role: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class TextPrimitive:
    """Text label anchored at (x, y)."""

    kind: ClassVar[str] = "text"

    x: float
    y: float
    text: str
    style: Style = field(default_factory=Style)
    role: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class BezierSegment:
    """Cubic Bezier segment; the start point is the previous segment's end."""

    c1: Point
    c2: Point
    end: Point


def svg_path_data(start: Point | None, segments: tuple[BezierSegment, ...]) -> str:
    """SVG path data for a start point followed by cubic segments."""
    if start is None:
        return ""
    parts = [f"M{start[0]:g},{start[1]:g}"]
    for seg in segments:
        parts.append(
            f"C{seg.c1[0]:g},{seg.c1[1]:g},{seg.c2[0]:g},{seg.c2[1]:g},"
            f"{seg.end[0]:g},{seg.end[1]:g}"
        )
    return "".join(parts)


@dataclass(frozen=True)
class PathPrimitive:
    """Open path: a start point followed by cubic Bezier segments."""

    kind: ClassVar[str] = "path"

    start: Point | None
    segments: tuple[BezierSegment, ...] = ()
    style: Style = field(default_factory=Style)
    role: str = ""

    @property
    def is_degenerate(self) -> bool:
        """True when the path has no visible segment."""
        return not self.segments

    def to_svg(self) -> str:
        """SVG path data ("M x,y C ...")."""
        return svg_path_data(self.start, self.segments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "start": self.start,
            "segments": [asdict(s) for s in self.segments],
            "d": self.to_svg(),
            "style": asdict(self.style),
            "role": self.role,
        }


DrawPrimitive = Union[LinePrimitive, RectPrimitive, CirclePrimitive, TextPrimitive, PathPrimitive]


# =============================================================================
# CHART SPEC
# =============================================================================


@dataclass
class ChartSpec:
    """Everything needed to paint one chart.

    Contains every primitive needed to paint the chart plus the layout that
    places the plot area inside the canvas. Painting is done by the
    rendering layer; this just holds the primitives.
    """

    chart_id: str
    chart_type: str  # "boxplot", "grouped_bar", "line"
    layout: Layout

    # Primitives in paint order
    primitives: list[DrawPrimitive] = field(default_factory=list)

    # Derived values worth keeping next to the picture (summaries, domains)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __iter__(self) -> Iterator[DrawPrimitive]:
        return iter(self.primitives)

    def __len__(self) -> int:
        return len(self.primitives)

    def add(self, *primitives: DrawPrimitive) -> None:
        self.primitives.extend(primitives)

    def by_role(self, role: str) -> list[DrawPrimitive]:
        """Primitives tagged with a role, in paint order."""
        return [p for p in self.primitives if p.role == role]

    def by_kind(self, kind: str) -> list[DrawPrimitive]:
        return [p for p in self.primitives if p.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "chart_id": self.chart_id,
            "chart_type": self.chart_type,
            "layout": self.layout.to_dict(),
            "primitives": [p.to_dict() for p in self.primitives],
            "metadata": self.metadata,
        }
