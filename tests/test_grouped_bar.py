"""
Tests for socialcharts/charts/grouped_bar.py
"""

import pytest

from socialcharts.charts.grouped_bar import GroupedBarStyle, build_grouped_bar
from socialcharts.charts.layout import GROUPED_BAR_LAYOUT
from socialcharts.charts.primitives import RectPrimitive, TextPrimitive
from socialcharts.charts.scales import DEFAULT_PALETTE
from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.exceptions import ChartBuildError


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def dataset() -> Dataset:
    """Two platforms x three post types."""
    records = [
        {"Platform": platform, "PostType": post_type, "AvgLikes": likes}
        for platform, base in (("Instagram", 200), ("Facebook", 100))
        for post_type, likes in (("Image", base), ("Video", base + 50), ("Link", base - 50))
    ]
    return Dataset.from_records(ChartKind.GROUPED_BAR, records)


# =============================================================================
# BUILD TESTS
# =============================================================================


class TestBuildGroupedBar:
    """Tests for build_grouped_bar."""

    def test_one_bar_per_row(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        assert len(spec.by_role("bar")) == 6

    def test_no_overlap_within_platform(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        bars = spec.by_role("bar")
        for platform in ("Instagram", "Facebook"):
            group = sorted((b for b in bars if b.datum["platform"] == platform), key=lambda b: b.x)
            assert len(group) == 3
            for left, right in zip(group, group[1:]):
                assert left.right <= right.x + 1e-9

    def test_bars_inside_platform_band(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        bars = spec.by_role("bar")
        instagram = [b for b in bars if b.datum["platform"] == "Instagram"]
        facebook = [b for b in bars if b.datum["platform"] == "Facebook"]
        assert max(b.right for b in instagram) < min(b.x for b in facebook)

    def test_bars_rest_on_baseline(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        for bar in spec.by_role("bar"):
            assert bar.bottom == pytest.approx(GROUPED_BAR_LAYOUT.inner_height)

    def test_tallest_bar_leaves_headroom(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        tallest = min(bar.y for bar in spec.by_role("bar"))
        assert tallest == pytest.approx(GROUPED_BAR_LAYOUT.inner_height * (1 - 1 / 1.1))
        assert spec.metadata["y_domain"][1] == pytest.approx(275.0)

    def test_colors_by_post_type(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        colors = {b.datum["post_type"]: b.style.fill for b in spec.by_role("bar")}
        assert colors == dict(zip(["Image", "Video", "Link"], DEFAULT_PALETTE))

    def test_hover_opacity(self, dataset: Dataset) -> None:
        bar = build_grouped_bar(dataset).by_role("bar")[0]
        assert bar.style.opacity == 0.8
        assert bar.style.hover_opacity == 1.0

    def test_legend(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        legend = spec.by_role("legend")
        swatches = [p for p in legend if isinstance(p, RectPrimitive)]
        labels = [p for p in legend if isinstance(p, TextPrimitive)]

        assert [s.datum["category"] for s in swatches] == ["Image", "Video", "Link"]
        assert [s.y for s in swatches] == [0.0, 25.0, 50.0]
        assert all(s.x == GROUPED_BAR_LAYOUT.inner_width + 20 for s in swatches)
        assert all(s.width == s.height == 15.0 for s in swatches)
        assert [(t.x - swatches[0].x, t.y) for t in labels] == [(20.0, 12.0), (20.0, 37.0), (20.0, 62.0)]

    def test_custom_palette(self, dataset: Dataset) -> None:
        style = GroupedBarStyle(palette=("#111111",))
        spec = build_grouped_bar(dataset, style=style)
        assert {b.style.fill for b in spec.by_role("bar")} == {"#111111"}

    def test_metadata(self, dataset: Dataset) -> None:
        spec = build_grouped_bar(dataset)
        assert spec.metadata["platforms"] == ["Instagram", "Facebook"]
        assert spec.metadata["post_types"] == ["Image", "Video", "Link"]

    def test_empty_dataset(self) -> None:
        spec = build_grouped_bar(Dataset(kind=ChartKind.GROUPED_BAR))
        assert spec.by_role("bar") == []
        assert spec.by_role("legend") == []
        assert spec.by_role("title")

    def test_wrong_kind_raises(self) -> None:
        with pytest.raises(ChartBuildError):
            build_grouped_bar(Dataset(kind=ChartKind.BOXPLOT))
