"""
Data module for the chart pipelines.

Contains row schemas, CSV loading, preparation of the averaged sources and
synthetic sample data.
"""

from socialcharts.data.loader import (
    CsvDatasetLoader,
    LoadResult,
    dataset_from_frame,
    load_dataset,
)
from socialcharts.data.prepare import (
    average_likes_by_date,
    average_likes_by_platform_and_type,
)
from socialcharts.data.sample_generator import (
    SampleDataGenerator,
    generate_sample_tables,
    write_sample_sources,
)
from socialcharts.data.schemas import (
    DEFAULT_SOURCE_FILES,
    AgeGroupLikes,
    CategorySummary,
    ChartKind,
    DailyLikes,
    Dataset,
    PlatformPostLikes,
    Row,
)

__all__ = [
    # Schemas
    "AgeGroupLikes",
    "CategorySummary",
    "ChartKind",
    "DailyLikes",
    "Dataset",
    "PlatformPostLikes",
    "Row",
    "DEFAULT_SOURCE_FILES",
    # Loading
    "CsvDatasetLoader",
    "LoadResult",
    "dataset_from_frame",
    "load_dataset",
    # Preparation
    "average_likes_by_date",
    "average_likes_by_platform_and_type",
    # Sample data
    "SampleDataGenerator",
    "generate_sample_tables",
    "write_sample_sources",
]
