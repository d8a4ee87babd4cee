"""Painting and export of chart specs."""

from socialcharts.rendering.export import (
    ChartJSONEncoder,
    chart_to_dict,
    export_chart_to_json,
    load_chart_json,
)
from socialcharts.rendering.matplotlib_renderer import (
    HoverHighlighter,
    close_figure,
    render_chart,
    render_to_file,
    save_figure,
    set_style,
    show_figure,
)

__all__ = [
    "ChartJSONEncoder",
    "HoverHighlighter",
    "chart_to_dict",
    "close_figure",
    "export_chart_to_json",
    "load_chart_json",
    "render_chart",
    "render_to_file",
    "save_figure",
    "set_style",
    "show_figure",
]
