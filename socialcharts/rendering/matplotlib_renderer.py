"""
Module: matplotlib_renderer

Purpose: Paint ChartSpecs with matplotlib.

Key Functions:
- render_chart: Paint a ChartSpec onto a new Figure
- HoverHighlighter: Pointer-over opacity feedback for primitives that ask for it
- save_figure / render_to_file: Write PNG or SVG output

Architecture Notes:
- One axes covers the whole figure with a 1:1 pixel data space and the
  y axis inverted, so primitive coordinates are used as-is after adding
  the layout margin
- Sizes in primitives are pixels; matplotlib wants points (px * 72 / dpi)
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.backend_bases import MouseEvent
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, PathPatch, Rectangle
from matplotlib.path import Path as MplPath

from socialcharts.charts.primitives import (
    ChartSpec,
    CirclePrimitive,
    DrawPrimitive,
    LinePrimitive,
    PathPrimitive,
    RectPrimitive,
    Style,
    TextPrimitive,
)
from socialcharts.exceptions import RenderError

logger = logging.getLogger(__name__)

SAVE_FORMATS = ("png", "svg")

_HORIZONTAL_ALIGNMENT = {"start": "left", "middle": "center", "end": "right"}
_VERTICAL_ALIGNMENT = {"auto": "baseline", "middle": "center", "hanging": "top"}


# =============================================================================
# CONFIGURATION
# =============================================================================


def set_style(style: str = "white") -> None:
    """Set the default plotting style."""
    sns.set_style(style)
    plt.rcParams["font.family"] = "sans-serif"


def px_to_pt(px: float, dpi: float) -> float:
    """Convert a pixel size to points at the given resolution."""
    return px * 72.0 / dpi


# =============================================================================
# PAINTING
# =============================================================================


def _line(ax: Axes, p: LinePrimitive, ox: float, oy: float, dpi: float) -> Artist:
    line = Line2D(
        [p.x1 + ox, p.x2 + ox],
        [p.y1 + oy, p.y2 + oy],
        color=p.style.stroke or "black",
        linewidth=px_to_pt(p.style.stroke_width, dpi),
        alpha=p.style.opacity,
        solid_capstyle="butt",
    )
    ax.add_line(line)
    return line


def _patch_kwargs(style: Style, dpi: float) -> dict:
    return {
        "facecolor": style.fill or "none",
        "edgecolor": style.stroke or "none",
        "linewidth": px_to_pt(style.stroke_width, dpi) if style.stroke else 0.0,
        "alpha": style.opacity,
    }


def _rect(ax: Axes, p: RectPrimitive, ox: float, oy: float, dpi: float) -> Artist:
    patch = Rectangle((p.x + ox, p.y + oy), p.width, p.height, **_patch_kwargs(p.style, dpi))
    ax.add_patch(patch)
    return patch


def _circle(ax: Axes, p: CirclePrimitive, ox: float, oy: float, dpi: float) -> Artist:
    patch = Circle((p.cx + ox, p.cy + oy), p.r, **_patch_kwargs(p.style, dpi))
    ax.add_patch(patch)
    return patch


def _text(ax: Axes, p: TextPrimitive, ox: float, oy: float, dpi: float) -> Artist:
    return ax.text(
        p.x + ox,
        p.y + oy,
        p.text,
        color=p.style.fill or "black",
        alpha=p.style.opacity,
        fontsize=px_to_pt(p.style.font_size, dpi),
        fontweight=p.style.font_weight,
        ha=_HORIZONTAL_ALIGNMENT.get(p.style.text_anchor, "left"),
        va=_VERTICAL_ALIGNMENT.get(p.style.baseline, "baseline"),
        # SVG rotates clockwise on a y-down canvas; matplotlib counter-clockwise
        rotation=-p.style.rotation,
        rotation_mode="anchor",
    )


def _path(ax: Axes, p: PathPrimitive, ox: float, oy: float, dpi: float) -> Artist | None:
    if p.start is None or p.is_degenerate:
        return None

    vertices = [(p.start[0] + ox, p.start[1] + oy)]
    codes = [MplPath.MOVETO]
    for seg in p.segments:
        for x, y in (seg.c1, seg.c2, seg.end):
            vertices.append((x + ox, y + oy))
            codes.append(MplPath.CURVE4)

    patch = PathPatch(
        MplPath(vertices, codes),
        facecolor="none",
        edgecolor=p.style.stroke or "black",
        linewidth=px_to_pt(p.style.stroke_width, dpi),
        alpha=p.style.opacity,
    )
    ax.add_patch(patch)
    return patch


_PAINTERS = {
    LinePrimitive: _line,
    RectPrimitive: _rect,
    CirclePrimitive: _circle,
    TextPrimitive: _text,
    PathPrimitive: _path,
}


def paint_primitives(
    ax: Axes,
    spec: ChartSpec,
    *,
    dpi: float,
) -> list[tuple[Artist, DrawPrimitive]]:
    """
    Paint every primitive of a spec onto an axes, in order.

    Args:
        ax: Axes whose data space is canvas pixels, y pointing down
        spec: Chart to paint
        dpi: Figure resolution, for pixel to point conversion

    Returns:
        (artist, primitive) pairs for everything that produced an artist
    """
    ox, oy = spec.layout.margin.left, spec.layout.margin.top
    painted: list[tuple[Artist, DrawPrimitive]] = []

    for zorder, primitive in enumerate(spec.primitives):
        painter = _PAINTERS.get(type(primitive))
        if painter is None:
            raise RenderError(
                f"No painter for primitive {type(primitive).__name__}",
                chart_id=spec.chart_id,
            )
        artist = painter(ax, primitive, ox, oy, dpi)
        if artist is not None:
            artist.set_zorder(zorder)
            painted.append((artist, primitive))

    return painted


# =============================================================================
# HOVER FEEDBACK
# =============================================================================


class HoverHighlighter:
    """Raises a primitive's opacity while the pointer is over it.

    Only primitives with a hover_opacity take part. Leaving the shape
    restores its resting opacity.
    """

    def __init__(self, figure: Figure, painted: list[tuple[Artist, DrawPrimitive]]) -> None:
        self.figure = figure
        self.targets = [
            (artist, primitive.style.opacity, primitive.style.hover_opacity)
            for artist, primitive in painted
            if primitive.style.hover_opacity is not None
        ]
        self._cid: int | None = None

    def on_move(self, event: MouseEvent) -> bool:
        """Update opacities for a pointer position; returns True if anything changed."""
        changed = False
        for artist, resting, hover in self.targets:
            inside = event.inaxes is not None and artist.contains(event)[0]
            target = hover if inside else resting
            if artist.get_alpha() != target:
                artist.set_alpha(target)
                changed = True

        if changed:
            self.figure.canvas.draw_idle()
        return changed

    def connect(self) -> None:
        if self._cid is None and self.targets:
            # A lambda is held strongly by the callback registry; bound methods are not
            self._cid = self.figure.canvas.mpl_connect(
                "motion_notify_event", lambda event: self.on_move(event)
            )

    def disconnect(self) -> None:
        if self._cid is not None:
            self.figure.canvas.mpl_disconnect(self._cid)
            self._cid = None


# =============================================================================
# FIGURES
# =============================================================================


def render_chart(spec: ChartSpec, *, dpi: int = 100, interactive: bool = True) -> Figure:
    """
    Paint a chart spec onto a new figure.

    Args:
        spec: Chart to paint
        dpi: Figure resolution; the canvas is layout.width x layout.height pixels
        interactive: Connect hover feedback for primitives with a hover_opacity

    Returns:
        matplotlib Figure

    Raises:
        RenderError: If painting fails
    """
    layout = spec.layout
    fig = plt.figure(figsize=(layout.width / dpi, layout.height / dpi), dpi=dpi)
    try:
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_xlim(0, layout.width)
        ax.set_ylim(layout.height, 0)
        ax.axis("off")

        painted = paint_primitives(ax, spec, dpi=dpi)
        if interactive:
            HoverHighlighter(fig, painted).connect()
    except RenderError:
        plt.close(fig)
        raise
    except Exception as e:
        plt.close(fig)
        raise RenderError(f"Failed to paint chart {spec.chart_id}: {e}", chart_id=spec.chart_id) from e

    logger.debug(f"Painted {len(painted)} artists for {spec.chart_id}")
    return fig


def save_figure(
    fig: Figure,
    filepath: str | Path,
    *,
    dpi: int | None = None,
    chart_id: str | None = None,
) -> Path:
    """
    Save figure to file.

    The format follows the file suffix (.png or .svg).

    Args:
        fig: Figure to save
        filepath: Path to save to
        dpi: Resolution (defaults to the figure's own)
        chart_id: Chart identifier for error context

    Returns:
        Path written

    Raises:
        RenderError: If the suffix is unsupported or writing fails
    """
    path = Path(filepath)
    fmt = path.suffix.lstrip(".").lower()
    if fmt not in SAVE_FORMATS:
        raise RenderError(
            f"Unsupported output format {path.suffix!r}; expected one of {SAVE_FORMATS}",
            chart_id=chart_id,
            context={"path": str(path)},
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, format=fmt, dpi=dpi or fig.dpi)
    except Exception as e:
        raise RenderError(f"Failed to save {path}: {e}", chart_id=chart_id) from e

    logger.info(f"Saved {path}")
    return path


def render_to_file(spec: ChartSpec, filepath: str | Path, *, dpi: int = 100) -> Path:
    """Paint a spec, save it and close the figure."""
    fig = render_chart(spec, dpi=dpi, interactive=False)
    try:
        return save_figure(fig, filepath, dpi=dpi, chart_id=spec.chart_id)
    finally:
        close_figure(fig)


def close_figure(fig: Figure) -> None:
    """Close a figure to free memory."""
    plt.close(fig)


def show_figure(fig: Figure) -> None:
    """Display figure in an interactive window."""
    plt.show()
