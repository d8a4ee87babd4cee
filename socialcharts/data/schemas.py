"""
Module: schemas

Purpose: Pydantic models for the rows and derived statistics of the chart pipelines.

Rows are fixed-shape per chart kind and validated at the load boundary.
All models use Pydantic v2 and are immutable once parsed.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Iterator, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class ChartKind(str, Enum):
    """The three chart pipelines."""

    BOXPLOT = "boxplot"
    GROUPED_BAR = "grouped_bar"
    LINE = "line"

    @property
    def row_model(self) -> type["BaseSchema"]:
        """Row model parsed for this chart kind."""
        return ROW_MODELS[self]

    @property
    def required_columns(self) -> tuple[str, ...]:
        """CSV header names that must be present in the source."""
        return tuple(
            info.alias or name for name, info in self.row_model.model_fields.items()
        )

    @property
    def numeric_columns(self) -> tuple[str, ...]:
        """CSV header names coerced to numbers at load time."""
        return NUMERIC_COLUMNS[self]


# =============================================================================
# BASE MODELS
# =============================================================================


class BaseSchema(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
        populate_by_name=True,
    )


def _require_finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


FiniteFloat = Annotated[float, AfterValidator(_require_finite)]


# =============================================================================
# ROW SCHEMAS
# =============================================================================


class AgeGroupLikes(BaseSchema):
    """One post's like count with the poster's age group (boxplot source)."""

    age_group: str = Field(alias="AgeGroup")
    likes: FiniteFloat = Field(alias="Likes")


class PlatformPostLikes(BaseSchema):
    """Average likes for one platform / post type pair (grouped bar source)."""

    platform: str = Field(alias="Platform")
    post_type: str = Field(alias="PostType")
    avg_likes: FiniteFloat = Field(alias="AvgLikes")


class DailyLikes(BaseSchema):
    """Average likes for one date (line chart source)."""

    date: str = Field(alias="Date")
    avg_likes: FiniteFloat = Field(alias="AvgLikes")


Row = Union[AgeGroupLikes, PlatformPostLikes, DailyLikes]

ROW_MODELS: dict[ChartKind, type[BaseSchema]] = {
    ChartKind.BOXPLOT: AgeGroupLikes,
    ChartKind.GROUPED_BAR: PlatformPostLikes,
    ChartKind.LINE: DailyLikes,
}

NUMERIC_COLUMNS: dict[ChartKind, tuple[str, ...]] = {
    ChartKind.BOXPLOT: ("Likes",),
    ChartKind.GROUPED_BAR: ("AvgLikes",),
    ChartKind.LINE: ("AvgLikes",),
}

# Default file name of each chart source
DEFAULT_SOURCE_FILES: dict[ChartKind, str] = {
    ChartKind.BOXPLOT: "socialMedia.csv",
    ChartKind.GROUPED_BAR: "socialMediaAvg.csv",
    ChartKind.LINE: "socialMediaTime.csv",
}


# =============================================================================
# DATASET
# =============================================================================


@dataclass(frozen=True)
class Dataset:
    """Ordered rows for one chart; insertion order is file order."""

    kind: ChartKind
    rows: tuple[Row, ...] = field(default_factory=tuple)
    source: str | None = None
    dropped_rows: int = 0

    def __post_init__(self) -> None:
        expected = self.kind.row_model
        for row in self.rows:
            if not isinstance(row, expected):
                raise TypeError(
                    f"{self.kind.value} dataset expects {expected.__name__} rows, "
                    f"got {type(row).__name__}"
                )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def values(self, field_name: str) -> list[Any]:
        """Field values in row order."""
        return [getattr(row, field_name) for row in self.rows]

    def unique(self, field_name: str) -> list[Any]:
        """Distinct field values in first-occurrence order."""
        return list(dict.fromkeys(self.values(field_name)))

    @classmethod
    def from_records(
        cls,
        kind: ChartKind,
        records: list[dict[str, Any]],
        *,
        source: str | None = None,
    ) -> "Dataset":
        """Build a dataset from in-memory dicts keyed by header or field name."""
        model = kind.row_model
        rows = tuple(model.model_validate(record) for record in records)
        return cls(kind=kind, rows=rows, source=source)


# =============================================================================
# DERIVED STATISTICS
# =============================================================================


class CategorySummary(BaseSchema):
    """Five-number summary of one category's values."""

    category: str
    count: int = Field(ge=1)
    min: float
    q1: float
    median: float
    q3: float
    max: float

    @model_validator(mode="after")
    def check_order(self) -> "CategorySummary":
        if not (self.min <= self.q1 <= self.median <= self.q3 <= self.max):
            raise ValueError(
                f"summary for {self.category!r} is not ordered: "
                f"{self.min}, {self.q1}, {self.median}, {self.q3}, {self.max}"
            )
        return self

    def __repr__(self) -> str:
        return (
            f"CategorySummary(category={self.category!r}, n={self.count}, "
            f"min={self.min}, q1={self.q1}, median={self.median}, "
            f"q3={self.q3}, max={self.max})"
        )
