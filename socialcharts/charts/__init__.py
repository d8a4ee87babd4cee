"""
Chart builders for the three social-media charts.

Each chart type has its own module with a build_* function turning a
Dataset into a ChartSpec of draw primitives. Scales, summaries and
smoothing are pure helpers shared by the builders.
"""

from typing import Callable

from socialcharts.charts.boxplot import BoxplotStyle, build_boxplot
from socialcharts.charts.grouped_bar import GroupedBarStyle, build_grouped_bar
from socialcharts.charts.layout import (
    BOXPLOT_LAYOUT,
    GROUPED_BAR_LAYOUT,
    LINE_LAYOUT,
    Layout,
    Margin,
)
from socialcharts.charts.line import LineStyle, build_line_chart
from socialcharts.charts.primitives import ChartSpec
from socialcharts.data.schemas import ChartKind, Dataset

BUILDERS: dict[ChartKind, Callable[[Dataset], ChartSpec]] = {
    ChartKind.BOXPLOT: build_boxplot,
    ChartKind.GROUPED_BAR: build_grouped_bar,
    ChartKind.LINE: build_line_chart,
}


def build_chart(dataset: Dataset) -> ChartSpec:
    """Build the chart matching the dataset's kind with default layout and style."""
    return BUILDERS[dataset.kind](dataset)


__all__ = [
    "BOXPLOT_LAYOUT",
    "BUILDERS",
    "BoxplotStyle",
    "ChartSpec",
    "GROUPED_BAR_LAYOUT",
    "GroupedBarStyle",
    "LINE_LAYOUT",
    "Layout",
    "LineStyle",
    "Margin",
    "build_boxplot",
    "build_chart",
    "build_grouped_bar",
    "build_line_chart",
]
