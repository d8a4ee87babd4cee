"""
Tests for socialcharts/rendering/matplotlib_renderer.py

Painting, hover feedback and file output. Uses the non-interactive Agg backend.
"""

from pathlib import Path
from unittest.mock import MagicMock

import matplotlib
import matplotlib.pyplot as plt
import pytest

# Use non-interactive backend for tests
matplotlib.use("Agg")

from matplotlib.backend_bases import MouseEvent
from matplotlib.patches import PathPatch, Rectangle

from socialcharts.charts.grouped_bar import build_grouped_bar
from socialcharts.charts.line import build_line_chart
from socialcharts.charts.primitives import ChartSpec
from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.exceptions import RenderError
from socialcharts.rendering.matplotlib_renderer import (
    HoverHighlighter,
    close_figure,
    paint_primitives,
    px_to_pt,
    render_chart,
    render_to_file,
    save_figure,
    set_style,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def bar_spec() -> ChartSpec:
    records = [
        {"Platform": p, "PostType": t, "AvgLikes": v}
        for p, t, v in [
            ("Instagram", "Image", 200),
            ("Instagram", "Video", 260),
            ("Facebook", "Image", 150),
            ("Facebook", "Video", 120),
        ]
    ]
    return build_grouped_bar(Dataset.from_records(ChartKind.GROUPED_BAR, records))


@pytest.fixture
def line_spec() -> ChartSpec:
    records = [{"Date": f"3/{i}/2024", "AvgLikes": v} for i, v in enumerate([210, 180, 260, 240], 1)]
    return build_line_chart(Dataset.from_records(ChartKind.LINE, records))


@pytest.fixture(autouse=True)
def close_all():
    yield
    plt.close("all")


def pointer_at(fig, ax, x: float, y: float) -> MouseEvent:
    """Motion event at canvas pixel (x, y), y pointing down."""
    display_x, display_y = ax.transData.transform((x, y))
    return MouseEvent("motion_notify_event", fig.canvas, display_x, display_y)


# =============================================================================
# PAINTING TESTS
# =============================================================================


class TestRenderChart:
    """Tests for render_chart and paint_primitives."""

    def test_canvas_size(self, bar_spec: ChartSpec) -> None:
        fig = render_chart(bar_spec, dpi=100)
        width, height = fig.get_size_inches() * fig.dpi
        assert (round(width), round(height)) == (900, 500)

    def test_axes_cover_pixel_space(self, bar_spec: ChartSpec) -> None:
        fig = render_chart(bar_spec)
        ax = fig.axes[0]
        assert ax.get_xlim() == (0.0, 900.0)
        assert ax.get_ylim() == (500.0, 0.0)
        assert not ax.axison

    def test_bars_painted_with_margin_offset(self, bar_spec: ChartSpec) -> None:
        fig = render_chart(bar_spec)
        rects = [p for p in fig.axes[0].patches if isinstance(p, Rectangle) and p.get_alpha() == 0.8]
        bars = bar_spec.by_role("bar")
        assert len(rects) == len(bars)
        margin = bar_spec.layout.margin
        assert rects[0].get_x() == pytest.approx(bars[0].x + margin.left)
        assert rects[0].get_y() == pytest.approx(bars[0].y + margin.top)

    def test_every_primitive_painted(self, line_spec: ChartSpec) -> None:
        fig, ax = plt.subplots()
        painted = paint_primitives(ax, line_spec, dpi=100)
        assert len(painted) == len(line_spec)
        assert any(isinstance(artist, PathPatch) for artist, _ in painted)

    def test_degenerate_path_skipped(self) -> None:
        spec = build_line_chart(Dataset.from_records(ChartKind.LINE, [{"Date": "d", "AvgLikes": 1}]))
        fig, ax = plt.subplots()
        painted = paint_primitives(ax, spec, dpi=100)
        assert len(painted) == len(spec) - 1
        assert not any(isinstance(artist, PathPatch) for artist, _ in painted)

    def test_rotated_labels(self, line_spec: ChartSpec) -> None:
        fig = render_chart(line_spec)
        rotations = {round(t.get_rotation()) for t in fig.axes[0].texts if t.get_text().startswith("3/")}
        assert rotations == {45}

    def test_px_to_pt(self) -> None:
        assert px_to_pt(100, 72) == 100
        assert px_to_pt(12, 96) == pytest.approx(9.0)

    def test_set_style(self) -> None:
        set_style("whitegrid")
        set_style("white")


# =============================================================================
# HOVER TESTS
# =============================================================================


class TestHoverHighlighter:
    """Tests for HoverHighlighter."""

    def make_target(self, inside: bool, alpha: float) -> tuple[MagicMock, MagicMock]:
        artist = MagicMock()
        artist.contains.return_value = (inside, {})
        artist.get_alpha.return_value = alpha
        primitive = MagicMock()
        primitive.style.opacity = 0.8
        primitive.style.hover_opacity = 1.0
        return artist, primitive

    def test_enter_raises_opacity(self) -> None:
        figure = MagicMock()
        artist, primitive = self.make_target(inside=True, alpha=0.8)
        highlighter = HoverHighlighter(figure, [(artist, primitive)])

        assert highlighter.on_move(MagicMock(inaxes=object())) is True
        artist.set_alpha.assert_called_once_with(1.0)
        figure.canvas.draw_idle.assert_called_once()

    def test_leave_restores_opacity(self) -> None:
        figure = MagicMock()
        artist, primitive = self.make_target(inside=False, alpha=1.0)
        highlighter = HoverHighlighter(figure, [(artist, primitive)])

        highlighter.on_move(MagicMock(inaxes=object()))
        artist.set_alpha.assert_called_once_with(0.8)

    def test_no_change_no_redraw(self) -> None:
        figure = MagicMock()
        artist, primitive = self.make_target(inside=False, alpha=0.8)
        highlighter = HoverHighlighter(figure, [(artist, primitive)])

        assert highlighter.on_move(MagicMock(inaxes=None)) is False
        artist.set_alpha.assert_not_called()
        figure.canvas.draw_idle.assert_not_called()

    def test_only_hoverable_primitives_tracked(self, bar_spec: ChartSpec) -> None:
        fig, ax = plt.subplots()
        painted = paint_primitives(ax, bar_spec, dpi=100)
        highlighter = HoverHighlighter(fig, painted)
        assert len(highlighter.targets) == len(bar_spec.by_role("bar"))

    def test_pointer_over_bar(self, bar_spec: ChartSpec) -> None:
        fig = render_chart(bar_spec)
        ax = fig.axes[0]
        margin = bar_spec.layout.margin
        bar = bar_spec.by_role("bar")[0]
        rect = next(p for p in ax.patches if isinstance(p, Rectangle) and p.get_alpha() == 0.8)

        enter = pointer_at(fig, ax, bar.x + bar.width / 2 + margin.left, bar.y + bar.height / 2 + margin.top)
        fig.canvas.callbacks.process("motion_notify_event", enter)
        assert rect.get_alpha() == 1.0

        leave = pointer_at(fig, ax, 5.0, 5.0)
        fig.canvas.callbacks.process("motion_notify_event", leave)
        assert rect.get_alpha() == 0.8

    def test_disconnect(self) -> None:
        figure = MagicMock()
        figure.canvas.mpl_connect.return_value = 7
        artist, primitive = self.make_target(inside=True, alpha=0.8)
        highlighter = HoverHighlighter(figure, [(artist, primitive)])

        highlighter.connect()
        highlighter.disconnect()
        figure.canvas.mpl_disconnect.assert_called_once_with(7)


# =============================================================================
# OUTPUT TESTS
# =============================================================================


class TestSaveFigure:
    """Tests for save_figure and render_to_file."""

    @pytest.mark.parametrize("suffix", ["png", "svg"])
    def test_save_formats(self, bar_spec: ChartSpec, tmp_path: Path, suffix: str) -> None:
        fig = render_chart(bar_spec)
        path = save_figure(fig, tmp_path / "out" / f"chart.{suffix}")
        close_figure(fig)
        assert path.exists()
        assert path.stat().st_size > 0

    def test_svg_content(self, line_spec: ChartSpec, tmp_path: Path) -> None:
        path = render_to_file(line_spec, tmp_path / "line.svg")
        assert "<svg" in path.read_text()

    def test_unsupported_format_raises(self, bar_spec: ChartSpec, tmp_path: Path) -> None:
        fig = render_chart(bar_spec)
        with pytest.raises(RenderError) as exc_info:
            save_figure(fig, tmp_path / "chart.gif", chart_id="grouped_bar")
        assert exc_info.value.chart_id == "grouped_bar"

    def test_render_to_file_closes_figure(self, bar_spec: ChartSpec, tmp_path: Path) -> None:
        before = set(plt.get_fignums())
        render_to_file(bar_spec, tmp_path / "bar.png")
        assert set(plt.get_fignums()) == before
