"""
Delimited-source loader for the chart pipelines.

Reads a CSV (header row + one record per line) into a typed Dataset for a
given ChartKind. Numeric columns are coerced at load time; rows whose
numeric fields are malformed are dropped with a warning rather than failing
the chart. Read failures are retried once before being reported.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from pydantic import ValidationError

from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.exceptions import DataLoadError, DataValidationError

logger = logging.getLogger(__name__)

# Errors worth a second read attempt
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    pd.errors.ParserError,
    UnicodeDecodeError,
)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class LoadResult:
    """Result of loading one delimited source."""

    dataset: Dataset
    total_rows: int = 0
    attempts: int = 0
    load_duration_ms: float = 0.0
    warnings: list[str] = field(default_factory=list)

    @property
    def dropped_rows(self) -> int:
        return self.dataset.dropped_rows


# =============================================================================
# CSV LOADER
# =============================================================================


class CsvDatasetLoader:
    """
    Load a chart dataset from a delimited text file.

    Usage:
        loader = CsvDatasetLoader("data/socialMedia.csv", ChartKind.BOXPLOT)
        result = loader.load()
        print(f"{len(result.dataset)} rows, {result.dropped_rows} dropped")
    """

    def __init__(
        self,
        source: str | Path,
        kind: ChartKind,
        *,
        delimiter: str = ",",
        retries: int = 1,
        retry_delay_s: float = 0.0,
    ):
        """
        Initialize loader.

        Args:
            source: Path to the delimited file
            kind: Chart kind whose row schema the file follows
            delimiter: Field separator
            retries: Extra read attempts after the first failure
            retry_delay_s: Pause between attempts
        """
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")
        self.source = Path(source)
        self.kind = kind
        self.delimiter = delimiter
        self.retries = retries
        self.retry_delay_s = retry_delay_s

    def load(self) -> LoadResult:
        """
        Read, validate and coerce the source.

        Returns:
            LoadResult with the typed dataset and load statistics

        Raises:
            DataLoadError: If the file cannot be read after retrying
            DataValidationError: If a required column is missing
        """
        start_time = time.perf_counter()
        frame, attempts = self._read_with_retry()

        dataset, warnings = dataset_from_frame(frame, self.kind, source=str(self.source))
        result = LoadResult(
            dataset=dataset,
            total_rows=len(frame),
            attempts=attempts,
            load_duration_ms=(time.perf_counter() - start_time) * 1000,
            warnings=warnings,
        )

        logger.info(
            f"Loaded {len(dataset)} {self.kind.value} rows from {self.source.name} "
            f"({dataset.dropped_rows} dropped) in {result.load_duration_ms:.1f}ms"
        )
        return result

    def _read_with_retry(self) -> tuple[pd.DataFrame, int]:
        """Read the raw frame, retrying retryable failures."""
        max_attempts = self.retries + 1
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            try:
                return self._read_frame(), attempt
            except RETRYABLE_ERRORS as e:
                last_error = e
                if attempt < max_attempts:
                    logger.warning(
                        f"Attempt {attempt}/{max_attempts} to read {self.source} failed: {e}; retrying"
                    )
                    if self.retry_delay_s > 0:
                        time.sleep(self.retry_delay_s)

        raise DataLoadError(
            f"Could not read {self.source} after {max_attempts} attempt(s): {last_error}",
            source=str(self.source),
            attempts=max_attempts,
        ) from last_error

    def _read_frame(self) -> pd.DataFrame:
        """Read every column as text; numeric coercion happens afterwards."""
        try:
            return pd.read_csv(
                self.source,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"{self.source} is empty; producing an empty dataset")
            return pd.DataFrame(columns=list(self.kind.required_columns))


# =============================================================================
# FRAME CONVERSION
# =============================================================================


def coerce_numeric(values: pd.Series) -> pd.Series:
    """Convert text to floats; anything unparseable or non-finite becomes NaN."""
    numeric = pd.to_numeric(values.astype(str).str.strip(), errors="coerce").astype(float)
    return numeric.where(np.isfinite(numeric))


def dataset_from_frame(
    frame: pd.DataFrame,
    kind: ChartKind,
    *,
    source: str | None = None,
) -> tuple[Dataset, list[str]]:
    """
    Convert a DataFrame into a typed Dataset.

    Extra columns are ignored. Rows with malformed numeric fields are
    excluded and reported as warnings.

    Args:
        frame: DataFrame whose headers follow the chart kind's schema
        kind: Chart kind
        source: Optional source label kept on the dataset

    Returns:
        Tuple of (dataset, warning messages)

    Raises:
        DataValidationError: If a required column is missing
    """
    columns = [str(c).strip() for c in frame.columns]
    frame = frame.set_axis(columns, axis="columns")

    for column in kind.required_columns:
        if column not in frame.columns:
            raise DataValidationError(
                f"{source or 'dataset'} is missing required column {column!r}",
                field=column,
                context={"chart_kind": kind.value, "columns": columns},
            )

    subset = frame.loc[:, list(kind.required_columns)].copy()
    for column in kind.required_columns:
        if column in kind.numeric_columns:
            subset[column] = coerce_numeric(subset[column])
        else:
            subset[column] = subset[column].astype(str)

    model = kind.row_model
    rows: list[Any] = []
    warnings: list[str] = []

    for position, record in enumerate(subset.to_dict(orient="records")):
        # Data records count from 1; blank lines are not records
        record_number = position + 1
        bad = [c for c in kind.numeric_columns if pd.isna(record[c])]
        if bad:
            message = (
                f"{source or kind.value}: record {record_number} has a non-numeric "
                f"{', '.join(bad)} value; row excluded"
            )
            logger.warning(message)
            warnings.append(message)
            continue

        try:
            rows.append(model.model_validate(record))
        except ValidationError as e:
            message = f"{source or kind.value}: record {record_number} rejected: {e.errors()[0]['msg']}"
            logger.warning(message)
            warnings.append(message)

    dataset = Dataset(
        kind=kind,
        rows=tuple(rows),
        source=source,
        dropped_rows=len(warnings),
    )
    return dataset, warnings


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def load_dataset(
    source: str | Path,
    kind: ChartKind,
    *,
    delimiter: str = ",",
    retries: int = 1,
    retry_delay_s: float = 0.0,
) -> Dataset:
    """
    Load a dataset from a delimited file.

    Args:
        source: Path to the file
        kind: Chart kind whose schema the file follows
        delimiter: Field separator
        retries: Extra read attempts after the first failure
        retry_delay_s: Pause between attempts

    Returns:
        Dataset in file order

    Example:
        dataset = load_dataset("data/socialMediaTime.csv", ChartKind.LINE)
    """
    loader = CsvDatasetLoader(
        source,
        kind,
        delimiter=delimiter,
        retries=retries,
        retry_delay_s=retry_delay_s,
    )
    return loader.load().dataset
