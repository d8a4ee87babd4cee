"""
Module: prepare

Purpose: Derive the averaged chart sources from the raw post table.

The raw table has one row per post (Platform, PostType, AgeGroup, Date,
Likes). The grouped bar chart needs average likes per platform and post
type; the line chart needs average likes per date. Groups keep the order in
which they first appear in the raw table.
"""

import logging

import pandas as pd

from socialcharts.data.loader import coerce_numeric
from socialcharts.exceptions import DataValidationError

logger = logging.getLogger(__name__)

RAW_COLUMNS = ("Platform", "PostType", "AgeGroup", "Date", "Likes")


def _clean_raw(raw: pd.DataFrame, needed: list[str]) -> pd.DataFrame:
    """Check columns and drop posts whose like count is not numeric."""
    missing = [c for c in needed if c not in raw.columns]
    if missing:
        raise DataValidationError(
            f"Raw post table is missing columns: {', '.join(missing)}",
            field=missing[0],
            context={"columns": list(raw.columns)},
        )

    out = raw.loc[:, needed].copy()
    out["Likes"] = coerce_numeric(out["Likes"])
    invalid = int(out["Likes"].isna().sum())
    if invalid:
        logger.warning(f"Dropping {invalid} posts with non-numeric Likes before averaging")
        out = out.dropna(subset=["Likes"])
    return out


def _average(raw: pd.DataFrame, keys: list[str], decimals: int) -> pd.DataFrame:
    clean = _clean_raw(raw, [*keys, "Likes"])
    averaged = (
        clean.groupby(keys, sort=False)["Likes"]
        .mean()
        .round(decimals)
        .reset_index()
        .rename(columns={"Likes": "AvgLikes"})
    )
    return averaged


def average_likes_by_platform_and_type(
    raw: pd.DataFrame,
    *,
    decimals: int = 2,
) -> pd.DataFrame:
    """
    Average likes for each platform / post type pair.

    Args:
        raw: Raw post table
        decimals: Rounding applied to the averages

    Returns:
        DataFrame with columns Platform, PostType, AvgLikes
    """
    return _average(raw, ["Platform", "PostType"], decimals)


def average_likes_by_date(
    raw: pd.DataFrame,
    *,
    decimals: int = 2,
) -> pd.DataFrame:
    """
    Average likes for each date.

    Args:
        raw: Raw post table
        decimals: Rounding applied to the averages

    Returns:
        DataFrame with columns Date, AvgLikes
    """
    return _average(raw, ["Date"], decimals)
