"""
Axis, axis title and chart title primitives.

Geometry follows the usual SVG axis conventions: 6px tick marks, labels
3px beyond the tick, coordinates relative to the plot area.
"""

import math

from socialcharts.charts.layout import Layout
from socialcharts.charts.primitives import DrawPrimitive, LinePrimitive, Style, TextPrimitive
from socialcharts.charts.scales import BandScale, LinearScale

TICK_SIZE = 6.0
TICK_PADDING = 3.0

AXIS_STYLE = Style(stroke="black", stroke_width=1.0)


def format_tick(value: float, step: float) -> str:
    """Format a tick value with just enough decimals for the tick step."""
    decimals = 0
    if step > 0 and not float(step).is_integer():
        decimals = max(0, -math.floor(math.log10(step)))
    return f"{value:,.{decimals}f}"


def bottom_band_axis(
    scale: BandScale,
    y: float,
    *,
    font_size: float = 12.0,
    rotate_labels: bool = False,
) -> list[DrawPrimitive]:
    """
    Horizontal axis with one tick per band, centered in the band.

    Args:
        scale: Band scale along x
        y: Vertical position of the axis line (usually inner_height)
        font_size: Label size in pixels
        rotate_labels: Rotate labels by -45 degrees, anchored at their end

    Returns:
        Axis line, tick marks and tick labels
    """
    start, stop = scale.range
    primitives: list[DrawPrimitive] = [
        LinePrimitive(start, y, stop, y, style=AXIS_STYLE, role="axis"),
    ]

    label_style = Style(
        fill="black",
        font_size=font_size,
        text_anchor="end" if rotate_labels else "middle",
        baseline="hanging",
        rotation=-45.0 if rotate_labels else 0.0,
    )
    for category in scale.domain:
        x = scale.center(category)
        primitives.append(LinePrimitive(x, y, x, y + TICK_SIZE, style=AXIS_STYLE, role="axis"))
        primitives.append(
            TextPrimitive(x, y + TICK_SIZE + TICK_PADDING, category, style=label_style, role="axis_label")
        )
    return primitives


def left_linear_axis(
    scale: LinearScale,
    *,
    tick_count: int = 10,
    font_size: float = 10.0,
) -> list[DrawPrimitive]:
    """
    Vertical axis at x = 0 with nice ticks.

    Args:
        scale: Linear scale along y
        tick_count: Approximate number of ticks
        font_size: Label size in pixels

    Returns:
        Axis line, tick marks and tick labels
    """
    r0, r1 = scale.range
    primitives: list[DrawPrimitive] = [
        LinePrimitive(0.0, r0, 0.0, r1, style=AXIS_STYLE, role="axis"),
    ]

    ticks = scale.ticks(tick_count)
    step = ticks[1] - ticks[0] if len(ticks) > 1 else 0.0
    label_style = Style(fill="black", font_size=font_size, text_anchor="end", baseline="middle")
    for tick in ticks:
        y = scale(tick)
        primitives.append(LinePrimitive(-TICK_SIZE, y, 0.0, y, style=AXIS_STYLE, role="axis"))
        primitives.append(
            TextPrimitive(
                -(TICK_SIZE + TICK_PADDING), y, format_tick(tick, step), style=label_style, role="axis_label"
            )
        )
    return primitives


def axis_titles(
    layout: Layout,
    x_title: str,
    y_title: str,
    *,
    x_offset: float = 50.0,
    y_offset: float = 50.0,
) -> list[DrawPrimitive]:
    """Titles under the x axis and rotated left of the y axis."""
    style = Style(fill="black", font_size=14.0, text_anchor="middle")
    return [
        TextPrimitive(layout.inner_width / 2, layout.inner_height + x_offset, x_title, style=style, role="axis_title"),
        TextPrimitive(
            -y_offset,
            layout.inner_height / 2,
            y_title,
            style=Style(fill="black", font_size=14.0, text_anchor="middle", rotation=-90.0),
            role="axis_title",
        ),
    ]


def chart_title(layout: Layout, text: str) -> TextPrimitive:
    """Bold title centered above the plot area."""
    return TextPrimitive(
        layout.inner_width / 2,
        -10.0,
        text,
        style=Style(fill="black", font_size=16.0, font_weight="bold", text_anchor="middle"),
        role="title",
    )
