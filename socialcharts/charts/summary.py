"""
Module: summary

Purpose: Five-number summaries (min, q1, median, q3, max) per category.

Quartiles use linear interpolation between order statistics at rank
``p * (n - 1)`` (Hyndman & Fan type 7, numpy's "linear" method). The
result depends only on the multiset of values, never on their input order.
"""

import logging
from typing import Any, Callable, Iterable, Sequence

import numpy as np

from socialcharts.data.schemas import CategorySummary
from socialcharts.exceptions import DataValidationError

logger = logging.getLogger(__name__)

QUARTILES = (0.25, 0.5, 0.75)

Selector = str | Callable[[Any], Any]


def _selector(spec: Selector) -> Callable[[Any], Any]:
    if callable(spec):
        return spec
    return lambda row: getattr(row, spec)


def five_number_summary(values: Sequence[float], *, category: str = "") -> CategorySummary:
    """
    Summarize a sample.

    Args:
        values: Numeric sample (any order)
        category: Label stored on the summary

    Returns:
        CategorySummary; a single value yields five equal statistics

    Raises:
        DataValidationError: If the sample is empty or holds non-finite values
    """
    data = np.asarray(values, dtype=float)
    if data.size == 0:
        raise DataValidationError(
            f"Cannot summarize an empty sample for {category!r}",
            field="values",
            context={"category": category},
        )
    if not np.all(np.isfinite(data)):
        raise DataValidationError(
            f"Sample for {category!r} contains non-finite values",
            field="values",
            context={"category": category},
        )

    data = np.sort(data)
    q1, median, q3 = np.quantile(data, QUARTILES, method="linear")

    return CategorySummary(
        category=category,
        count=int(data.size),
        min=float(data[0]),
        q1=float(q1),
        median=float(median),
        q3=float(q3),
        max=float(data[-1]),
    )


def summarize_by_group(
    rows: Iterable[Any],
    key: Selector,
    value: Selector,
) -> dict[str, CategorySummary]:
    """
    Group rows and summarize each group's values.

    Args:
        rows: Records (e.g. Dataset rows)
        key: Field name or callable giving the group label
        value: Field name or callable giving the numeric value

    Returns:
        Mapping of group label to CategorySummary, in first-encountered order

    Example:
        summaries = summarize_by_group(dataset, "age_group", "likes")
    """
    get_key = _selector(key)
    get_value = _selector(value)

    groups: dict[str, list[float]] = {}
    for row in rows:
        groups.setdefault(str(get_key(row)), []).append(float(get_value(row)))

    summaries = {
        label: five_number_summary(values, category=label)
        for label, values in groups.items()
    }
    logger.debug(f"Summarized {len(summaries)} groups")
    return summaries


def summaries_to_dict(summaries: dict[str, CategorySummary]) -> list[dict[str, Any]]:
    """Serializable list of summaries in group order."""
    return [s.model_dump() for s in summaries.values()]
