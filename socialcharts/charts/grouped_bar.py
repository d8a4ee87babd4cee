"""
Grouped bar chart of average likes by platform and post type.

Platforms split the x axis into outer bands; post types split each outer
band into inner bands. Every row becomes one bar colored by post type, and
a legend lists the post types to the right of the plot area.
"""

import logging
from dataclasses import dataclass

from socialcharts.charts.axes import axis_titles, bottom_band_axis, chart_title, left_linear_axis
from socialcharts.charts.layout import GROUPED_BAR_LAYOUT, Layout
from socialcharts.charts.primitives import ChartSpec, DrawPrimitive, RectPrimitive, Style, TextPrimitive
from socialcharts.charts.scales import (
    DEFAULT_PALETTE,
    OrdinalColorScale,
    band_scale,
    linear_scale_for,
)
from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.exceptions import ChartBuildError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupedBarStyle:
    """Spacing, colors and labels for the grouped bar chart."""

    outer_padding: float = 0.2
    inner_padding: float = 0.05
    headroom: float = 1.1
    palette: tuple[str, ...] = DEFAULT_PALETTE
    bar_opacity: float = 0.8
    hover_opacity: float = 1.0
    legend_offset: float = 20.0
    legend_row_height: float = 25.0
    swatch_size: float = 15.0
    # Label position relative to its swatch
    label_dx: float = 20.0
    label_dy: float = 12.0
    title: str = "Average Likes by Platform and Post Type"
    x_title: str = "Platform"
    y_title: str = "Average Number of Likes"


def legend_primitives(
    color_scale: OrdinalColorScale,
    x: float,
    style: GroupedBarStyle,
) -> list[DrawPrimitive]:
    """Color swatch and label per category, stacked from the top of the plot area."""
    primitives: list[DrawPrimitive] = []
    for i, category in enumerate(color_scale.domain):
        y = i * style.legend_row_height
        primitives.append(
            RectPrimitive(
                x, y, style.swatch_size, style.swatch_size,
                style=Style(fill=color_scale(category)),
                role="legend",
                datum={"category": category},
            )
        )
        primitives.append(
            TextPrimitive(
                x + style.label_dx, y + style.label_dy, category,
                style=Style(fill="black", font_size=12.0, baseline="middle"),
                role="legend",
            )
        )
    return primitives


def build_grouped_bar(
    dataset: Dataset,
    layout: Layout = GROUPED_BAR_LAYOUT,
    *,
    style: GroupedBarStyle = GroupedBarStyle(),
    chart_id: str = "grouped_bar",
) -> ChartSpec:
    """
    Build the grouped bar chart spec.

    Args:
        dataset: Platform / post type / average likes rows
        layout: Canvas geometry
        style: Spacing, colors and labels
        chart_id: Identifier of the produced chart

    Returns:
        ChartSpec with one bar per row plus the legend

    Raises:
        ChartBuildError: If the dataset holds rows for another chart kind
    """
    if dataset.kind != ChartKind.GROUPED_BAR:
        raise ChartBuildError(
            f"Grouped bar chart needs a {ChartKind.GROUPED_BAR.value} dataset, got {dataset.kind.value}",
            chart_kind=ChartKind.GROUPED_BAR.value,
        )

    post_types = dataset.unique("post_type")
    outer = band_scale(
        dataset.values("platform"),
        (0.0, layout.inner_width),
        padding=style.outer_padding,
    )
    inner = band_scale(post_types, (0.0, outer.bandwidth), padding=style.inner_padding)
    y_scale = linear_scale_for(
        dataset.values("avg_likes"),
        (layout.inner_height, 0.0),
        headroom=style.headroom,
    )
    color = OrdinalColorScale(domain=tuple(post_types), palette=style.palette)

    spec = ChartSpec(chart_id=chart_id, chart_type=ChartKind.GROUPED_BAR.value, layout=layout)
    spec.add(*bottom_band_axis(outer, layout.inner_height))
    spec.add(*left_linear_axis(y_scale))
    spec.add(*axis_titles(layout, style.x_title, style.y_title))

    for row in dataset:
        y = y_scale(row.avg_likes)
        spec.add(
            RectPrimitive(
                outer(row.platform) + inner(row.post_type),
                y,
                inner.bandwidth,
                layout.inner_height - y,
                style=Style(
                    fill=color(row.post_type),
                    opacity=style.bar_opacity,
                    hover_opacity=style.hover_opacity,
                ),
                role="bar",
                datum={
                    "platform": row.platform,
                    "post_type": row.post_type,
                    "avg_likes": row.avg_likes,
                },
            )
        )

    spec.add(*legend_primitives(color, layout.inner_width + style.legend_offset, style))
    spec.add(chart_title(layout, style.title))

    spec.metadata = {
        "platforms": list(outer.domain),
        "post_types": list(inner.domain),
        "colors": {c: color(c) for c in color.domain},
        "y_domain": list(y_scale.domain),
        "row_count": len(dataset),
        "dropped_rows": dataset.dropped_rows,
    }
    logger.debug(f"Built grouped bar chart with {len(dataset)} bars")
    return spec
