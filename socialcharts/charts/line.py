"""
Line chart of average likes over time.

Dates sit at band centers in dataset order. A natural cubic spline runs
through every point and each point also gets a marker circle.
"""

import logging
from dataclasses import dataclass

from socialcharts.charts.axes import axis_titles, bottom_band_axis, chart_title, left_linear_axis
from socialcharts.charts.layout import LINE_LAYOUT, Layout
from socialcharts.charts.primitives import ChartSpec, CirclePrimitive, PathPrimitive, Point, Style
from socialcharts.charts.scales import band_scale, linear_scale_for
from socialcharts.charts.smoothing import natural_cubic_path
from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.exceptions import ChartBuildError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineStyle:
    """Colors, sizes and labels for the line chart."""

    band_padding: float = 0.1
    headroom: float = 1.1
    color: str = "#e74c3c"
    stroke_width: float = 3.0
    marker_radius: float = 5.0
    tick_font_size: float = 10.0
    title: str = "Average Likes Over Time"
    x_title: str = "Date"
    y_title: str = "Average Number of Likes"
    x_title_offset: float = 80.0


def build_line_chart(
    dataset: Dataset,
    layout: Layout = LINE_LAYOUT,
    *,
    style: LineStyle = LineStyle(),
    chart_id: str = "line",
) -> ChartSpec:
    """
    Build the line chart spec.

    Args:
        dataset: Date / average likes rows in drawing order
        layout: Canvas geometry
        style: Colors, sizes and labels
        chart_id: Identifier of the produced chart

    Returns:
        ChartSpec with one smoothed path and one marker per row. A single
        row gives a degenerate path (start point, no segments).

    Raises:
        ChartBuildError: If the dataset holds rows for another chart kind
    """
    if dataset.kind != ChartKind.LINE:
        raise ChartBuildError(
            f"Line chart needs a {ChartKind.LINE.value} dataset, got {dataset.kind.value}",
            chart_kind=ChartKind.LINE.value,
        )

    x_scale = band_scale(
        dataset.values("date"),
        (0.0, layout.inner_width),
        padding=style.band_padding,
    )
    y_scale = linear_scale_for(
        dataset.values("avg_likes"),
        (layout.inner_height, 0.0),
        headroom=style.headroom,
    )

    points: list[Point] = [
        (x_scale.center(row.date), y_scale(row.avg_likes)) for row in dataset
    ]
    path = natural_cubic_path(points)

    spec = ChartSpec(chart_id=chart_id, chart_type=ChartKind.LINE.value, layout=layout)
    spec.add(
        *bottom_band_axis(
            x_scale,
            layout.inner_height,
            font_size=style.tick_font_size,
            rotate_labels=True,
        )
    )
    spec.add(*left_linear_axis(y_scale))
    spec.add(*axis_titles(layout, style.x_title, style.y_title, x_offset=style.x_title_offset))

    if not path.is_empty:
        spec.add(
            PathPrimitive(
                path.start,
                path.segments,
                style=Style(stroke=style.color, stroke_width=style.stroke_width),
                role="line",
            )
        )
    for cx, cy in points:
        spec.add(
            CirclePrimitive(cx, cy, style.marker_radius, style=Style(fill=style.color), role="marker")
        )

    spec.add(chart_title(layout, style.title))

    spec.metadata = {
        "points": [list(p) for p in points],
        "x_domain": list(x_scale.domain),
        "y_domain": list(y_scale.domain),
        "row_count": len(dataset),
        "dropped_rows": dataset.dropped_rows,
    }
    logger.debug(f"Built line chart through {len(points)} points")
    return spec
