"""
Tests for socialcharts/charts/summary.py
"""

import random

import pytest
from pydantic import ValidationError

from socialcharts.charts.summary import (
    five_number_summary,
    summaries_to_dict,
    summarize_by_group,
)
from socialcharts.data.schemas import AgeGroupLikes, CategorySummary, ChartKind, Dataset
from socialcharts.exceptions import DataValidationError


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def likes_dataset() -> Dataset:
    """Boxplot rows with age groups interleaved."""
    records = [
        {"AgeGroup": "26-35", "Likes": 120},
        {"AgeGroup": "18-25", "Likes": 300},
        {"AgeGroup": "26-35", "Likes": 80},
        {"AgeGroup": "36-50", "Likes": 40},
        {"AgeGroup": "18-25", "Likes": 200},
        {"AgeGroup": "26-35", "Likes": 100},
    ]
    return Dataset.from_records(ChartKind.BOXPLOT, records)


# =============================================================================
# FIVE NUMBER SUMMARY TESTS
# =============================================================================


class TestFiveNumberSummary:
    """Tests for five_number_summary."""

    def test_one_to_nine(self) -> None:
        summary = five_number_summary(list(range(1, 10)))
        assert (summary.min, summary.q1, summary.median, summary.q3, summary.max) == (1, 3, 5, 7, 9)
        assert summary.count == 9

    def test_single_value(self) -> None:
        summary = five_number_summary([10.0], category="only")
        assert summary.min == summary.q1 == summary.median == summary.q3 == summary.max == 10.0
        assert summary.category == "only"

    def test_linear_interpolation(self) -> None:
        summary = five_number_summary([1.0, 2.0, 3.0, 4.0])
        assert summary.q1 == pytest.approx(1.75)
        assert summary.median == pytest.approx(2.5)
        assert summary.q3 == pytest.approx(3.25)

    def test_two_values(self) -> None:
        summary = five_number_summary([10.0, 20.0])
        assert summary.median == pytest.approx(15.0)
        assert summary.q1 == pytest.approx(12.5)

    def test_order_independent(self) -> None:
        values = [float(v) for v in [5, 3, 99, 1, 42, 7, 7, 18, 0, 64, 23]]
        expected = five_number_summary(values)
        rng = random.Random(0)
        for _ in range(5):
            shuffled = values[:]
            rng.shuffle(shuffled)
            assert five_number_summary(shuffled) == expected

    def test_ordered_statistics(self) -> None:
        rng = random.Random(1)
        for n in (1, 2, 3, 10, 101):
            values = [rng.uniform(-50, 500) for _ in range(n)]
            s = five_number_summary(values)
            assert s.min <= s.q1 <= s.median <= s.q3 <= s.max

    def test_empty_raises(self) -> None:
        with pytest.raises(DataValidationError):
            five_number_summary([], category="empty")

    def test_non_finite_raises(self) -> None:
        with pytest.raises(DataValidationError):
            five_number_summary([1.0, float("nan")])


# =============================================================================
# GROUPING TESTS
# =============================================================================


class TestSummarizeByGroup:
    """Tests for summarize_by_group."""

    def test_first_encountered_order(self, likes_dataset: Dataset) -> None:
        summaries = summarize_by_group(likes_dataset, "age_group", "likes")
        assert list(summaries) == ["26-35", "18-25", "36-50"]

    def test_group_values(self, likes_dataset: Dataset) -> None:
        summaries = summarize_by_group(likes_dataset, "age_group", "likes")
        middle = summaries["26-35"]
        assert middle.count == 3
        assert (middle.min, middle.median, middle.max) == (80.0, 100.0, 120.0)
        assert summaries["36-50"].count == 1

    def test_callable_selectors(self) -> None:
        rows = [("a", 1), ("b", 2), ("a", 3)]
        summaries = summarize_by_group(rows, lambda r: r[0], lambda r: r[1])
        assert summaries["a"].median == 2.0
        assert summaries["b"].max == 2.0

    def test_empty_rows(self) -> None:
        assert summarize_by_group([], "age_group", "likes") == {}

    def test_summaries_to_dict(self, likes_dataset: Dataset) -> None:
        dumped = summaries_to_dict(summarize_by_group(likes_dataset, "age_group", "likes"))
        assert [d["category"] for d in dumped] == ["26-35", "18-25", "36-50"]
        assert set(dumped[0]) == {"category", "count", "min", "q1", "median", "q3", "max"}


class TestCategorySummary:
    """Tests for the CategorySummary model."""

    def test_unordered_statistics_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CategorySummary(category="x", count=3, min=1, q1=5, median=3, q3=6, max=7)

    def test_zero_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CategorySummary(category="x", count=0, min=1, q1=1, median=1, q3=1, max=1)

    def test_repr(self) -> None:
        summary = five_number_summary([1.0, 2.0, 3.0], category="a")
        assert "n=3" in repr(summary)


def test_row_model_accepts_field_names() -> None:
    row = AgeGroupLikes(age_group="18-25", likes=3)
    assert row.likes == 3.0
