"""
Module: sample_generator

Purpose: Generate synthetic social-media post data for the chart pipelines.

Generates:
- A raw post table (Platform, PostType, AgeGroup, Date, Likes)
- The two averaged tables derived from it
- Deterministic output for a given seed
"""

import logging
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pandas as pd

from socialcharts.data.prepare import (
    average_likes_by_date,
    average_likes_by_platform_and_type,
)
from socialcharts.data.schemas import DEFAULT_SOURCE_FILES, ChartKind

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

PLATFORMS = ["Instagram", "Facebook", "Twitter", "LinkedIn"]
POST_TYPES = ["Image", "Video", "Link"]
AGE_GROUPS = ["18-25", "26-35", "36-50"]

# Median likes multiplier per category
PLATFORM_WEIGHTS = {"Instagram": 1.4, "Facebook": 1.0, "Twitter": 0.8, "LinkedIn": 0.6}
POST_TYPE_WEIGHTS = {"Image": 1.0, "Video": 1.3, "Link": 0.7}
AGE_GROUP_WEIGHTS = {"18-25": 1.25, "26-35": 1.0, "36-50": 0.75}

BASE_LIKES = 250.0
START_DATE = date(2024, 3, 1)
N_DAYS = 7


def format_date_label(day: date) -> str:
    """Label used in the Date column, e.g. '3/1/2024 (Friday)'."""
    return f"{day.month}/{day.day}/{day.year} ({day:%A})"


# =============================================================================
# SAMPLE DATA GENERATOR
# =============================================================================


class SampleDataGenerator:
    """
    Generate a synthetic raw post table.

    Uses numpy random generator with seed for reproducibility. Every
    platform / post type / date combination receives at least one post so
    all three charts have a full set of categories.
    """

    def __init__(
        self,
        *,
        seed: int = 42,
        start_date: date = START_DATE,
        n_days: int = N_DAYS,
    ) -> None:
        """
        Initialize generator with seed.

        Args:
            seed: Random seed for reproducibility
            start_date: First posting date
            n_days: Number of consecutive posting days
        """
        if n_days < 1:
            raise ValueError(f"n_days must be >= 1, got {n_days}")
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.dates = [format_date_label(start_date + timedelta(days=i)) for i in range(n_days)]

    @property
    def min_posts(self) -> int:
        return len(PLATFORMS) * len(POST_TYPES) * len(self.dates)

    def _likes(self, platform: str, post_type: str, age_group: str, day_index: int) -> int:
        """Draw a like count with a mild weekly trend."""
        scale = (
            BASE_LIKES
            * PLATFORM_WEIGHTS[platform]
            * POST_TYPE_WEIGHTS[post_type]
            * AGE_GROUP_WEIGHTS[age_group]
            * (1.0 + 0.05 * day_index)
        )
        return int(round(self.rng.lognormal(mean=np.log(scale), sigma=0.35)))

    def generate_raw_posts(self, n_posts: int = 500) -> pd.DataFrame:
        """
        Generate the raw post table ordered by date.

        Args:
            n_posts: Number of posts; at least one per platform/type/date

        Returns:
            DataFrame with columns Platform, PostType, AgeGroup, Date, Likes
        """
        if n_posts < self.min_posts:
            raise ValueError(f"n_posts must be >= {self.min_posts}, got {n_posts}")

        records = []
        for day_index, day in enumerate(self.dates):
            for platform in PLATFORMS:
                for post_type in POST_TYPES:
                    age_group = str(self.rng.choice(AGE_GROUPS))
                    records.append((platform, post_type, age_group, day_index, day))

        for _ in range(n_posts - self.min_posts):
            day_index = int(self.rng.integers(0, len(self.dates)))
            records.append((
                str(self.rng.choice(PLATFORMS)),
                str(self.rng.choice(POST_TYPES)),
                str(self.rng.choice(AGE_GROUPS)),
                day_index,
                self.dates[day_index],
            ))

        # Stable sort keeps the platform/type order within each day
        records.sort(key=lambda r: r[3])

        return pd.DataFrame(
            [
                {
                    "Platform": platform,
                    "PostType": post_type,
                    "AgeGroup": age_group,
                    "Date": day,
                    "Likes": self._likes(platform, post_type, age_group, day_index),
                }
                for platform, post_type, age_group, day_index, day in records
            ],
            columns=["Platform", "PostType", "AgeGroup", "Date", "Likes"],
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def generate_sample_tables(
    n_posts: int = 500,
    *,
    seed: int = 42,
) -> dict[ChartKind, pd.DataFrame]:
    """
    Generate the source table for each chart.

    Args:
        n_posts: Number of raw posts
        seed: Random seed

    Returns:
        Mapping of chart kind to its source DataFrame
    """
    raw = SampleDataGenerator(seed=seed).generate_raw_posts(n_posts)
    return {
        ChartKind.BOXPLOT: raw,
        ChartKind.GROUPED_BAR: average_likes_by_platform_and_type(raw),
        ChartKind.LINE: average_likes_by_date(raw),
    }


def write_sample_sources(
    output_dir: Path | str,
    *,
    n_posts: int = 500,
    seed: int = 42,
    sources: dict[ChartKind, str] | None = None,
) -> dict[ChartKind, Path]:
    """
    Write the three chart sources as CSV files.

    Args:
        output_dir: Directory to write into (created if missing)
        n_posts: Number of raw posts
        seed: Random seed
        sources: File name per chart (defaults to DEFAULT_SOURCE_FILES)

    Returns:
        Mapping of chart kind to written file path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    sources = sources or DEFAULT_SOURCE_FILES

    written: dict[ChartKind, Path] = {}
    for kind, table in generate_sample_tables(n_posts, seed=seed).items():
        path = output_dir / sources[kind]
        table.to_csv(path, index=False)
        written[kind] = path
        logger.info(f"Wrote {len(table)} rows to {path}")

    return written
