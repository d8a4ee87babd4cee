"""
Boxplot of likes per age group.

One box per age group: whisker from min to max through the band center,
a box from q1 to q3 spanning the bandwidth, and a median line across it.
Whiskers always reach the true min and max; there are no outlier fences.
"""

import logging
from dataclasses import dataclass

from socialcharts.charts.axes import axis_titles, bottom_band_axis, chart_title, left_linear_axis
from socialcharts.charts.layout import BOXPLOT_LAYOUT, Layout
from socialcharts.charts.primitives import ChartSpec, DrawPrimitive, LinePrimitive, RectPrimitive, Style
from socialcharts.charts.scales import BandScale, LinearScale, band_scale, linear_scale_for
from socialcharts.charts.summary import summaries_to_dict, summarize_by_group
from socialcharts.data.schemas import CategorySummary, ChartKind, Dataset
from socialcharts.exceptions import ChartBuildError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoxplotStyle:
    """Colors, strokes and labels for the boxplot."""

    band_padding: float = 0.3
    box_fill: str = "#69b3a2"
    stroke: str = "black"
    box_stroke_width: float = 1.5
    whisker_stroke_width: float = 1.5
    median_stroke_width: float = 2.0
    title: str = "Distribution of Likes by Age Group"
    x_title: str = "Age Group"
    y_title: str = "Number of Likes"


def box_primitives(
    summary: CategorySummary,
    x_scale: BandScale,
    y_scale: LinearScale,
    style: BoxplotStyle,
) -> list[DrawPrimitive]:
    """Whisker, box and median line for one category."""
    x = x_scale(summary.category)
    width = x_scale.bandwidth
    center = x + width / 2
    y_q1 = y_scale(summary.q1)
    y_q3 = y_scale(summary.q3)
    y_median = y_scale(summary.median)

    return [
        LinePrimitive(
            center, y_scale(summary.min), center, y_scale(summary.max),
            style=Style(stroke=style.stroke, stroke_width=style.whisker_stroke_width),
            role="whisker",
        ),
        RectPrimitive(
            x, y_q3, width, y_q1 - y_q3,
            style=Style(fill=style.box_fill, stroke=style.stroke, stroke_width=style.box_stroke_width),
            role="box",
            datum=summary.model_dump(),
        ),
        LinePrimitive(
            x, y_median, x + width, y_median,
            style=Style(stroke=style.stroke, stroke_width=style.median_stroke_width),
            role="median",
        ),
    ]


def build_boxplot(
    dataset: Dataset,
    layout: Layout = BOXPLOT_LAYOUT,
    *,
    style: BoxplotStyle = BoxplotStyle(),
    chart_id: str = "boxplot",
) -> ChartSpec:
    """
    Build the boxplot spec.

    Args:
        dataset: Age group / likes rows
        layout: Canvas geometry
        style: Colors and labels
        chart_id: Identifier of the produced chart

    Returns:
        ChartSpec; an empty dataset gives axes and titles only

    Raises:
        ChartBuildError: If the dataset holds rows for another chart kind
    """
    if dataset.kind != ChartKind.BOXPLOT:
        raise ChartBuildError(
            f"Boxplot needs a {ChartKind.BOXPLOT.value} dataset, got {dataset.kind.value}",
            chart_kind=ChartKind.BOXPLOT.value,
        )

    x_scale = band_scale(
        dataset.values("age_group"),
        (0.0, layout.inner_width),
        padding=style.band_padding,
    )
    y_scale = linear_scale_for(dataset.values("likes"), (layout.inner_height, 0.0))
    summaries = summarize_by_group(dataset, "age_group", "likes")

    spec = ChartSpec(chart_id=chart_id, chart_type=ChartKind.BOXPLOT.value, layout=layout)
    spec.add(*bottom_band_axis(x_scale, layout.inner_height))
    spec.add(*left_linear_axis(y_scale))
    spec.add(*axis_titles(layout, style.x_title, style.y_title))

    for summary in summaries.values():
        spec.add(*box_primitives(summary, x_scale, y_scale, style))

    spec.add(chart_title(layout, style.title))

    spec.metadata = {
        "summaries": summaries_to_dict(summaries),
        "x_domain": list(x_scale.domain),
        "y_domain": list(y_scale.domain),
        "row_count": len(dataset),
        "dropped_rows": dataset.dropped_rows,
    }
    logger.debug(f"Built boxplot with {len(summaries)} boxes")
    return spec
