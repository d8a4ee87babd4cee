"""
Canvas geometry for the charts.

A Layout is the full canvas size plus margins; builders draw inside the
plot area (inner_width x inner_height) and the renderer offsets everything
by the top-left margin.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Margin:
    """Space around the plot area, in pixels."""

    top: float = 40
    right: float = 30
    bottom: float = 70
    left: float = 70


@dataclass(frozen=True)
class Layout:
    """Immutable canvas configuration passed into every builder."""

    width: float = 800
    height: float = 500
    margin: Margin = field(default_factory=Margin)

    def __post_init__(self) -> None:
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Margins {self.margin} leave no plot area in a {self.width}x{self.height} canvas"
            )

    @property
    def inner_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    def to_dict(self) -> dict[str, Any]:
        return {
            **asdict(self),
            "inner_width": self.inner_width,
            "inner_height": self.inner_height,
        }


BOXPLOT_LAYOUT = Layout(width=800, height=500, margin=Margin(top=40, right=30, bottom=70, left=70))

# Wide right margin holds the post type legend
GROUPED_BAR_LAYOUT = Layout(width=900, height=500, margin=Margin(top=40, right=180, bottom=70, left=70))

# Tall bottom margin holds the rotated date labels
LINE_LAYOUT = Layout(width=900, height=500, margin=Margin(top=40, right=30, bottom=100, left=70))
