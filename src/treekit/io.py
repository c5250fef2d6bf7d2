"""Readers turning a spreadsheet into labeled records and a JSON file into one record."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

import polars as pl
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from treekit.exceptions import ColumnsNotFoundError, DatasetLoadError, EmptyDatasetError, RecordLoadError
from treekit.id3.records import AttributeKind, ClassLabel, Record

# ---------------------------------------------------------------------------
# Private helpers -- Formats and column kinds
# ---------------------------------------------------------------------------

_CSV_SUFFIXES: Final[frozenset[str]] = frozenset({".csv"})
_EXCEL_SUFFIXES: Final[frozenset[str]] = frozenset({".xlsx", ".xls", ".xlsm"})

_RECORD_ADAPTER: TypeAdapter[dict[str, bool | int | float | str | None]] = TypeAdapter(
    dict[str, bool | int | float | str | None]
)


def _classify_column(dtype: pl.DataType) -> AttributeKind:
    """Map a Polars dtype to the attribute kind its values get.

    Integer, float and boolean columns are numeric; every other dtype
    (strings, categoricals, dates) is categorical.

    Args:
        dtype (pl.DataType): The column's Polars data type.

    Returns:
        AttributeKind: `"numeric"` or `"categorical"`.
    """
    return "numeric" if dtype.is_numeric() or dtype == pl.Boolean else "categorical"


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def read_table(path: Path, *, separator: str = ",") -> pl.DataFrame:
    """Read a `.csv` or Excel spreadsheet into a DataFrame.

    Args:
        path (Path): Spreadsheet to read.
        separator (str): Field separator for CSV files.

    Returns:
        pl.DataFrame: The first sheet (Excel) or the whole file (CSV).

    Raises:
        DatasetLoadError: If the file is missing, has an unsupported suffix,
            or cannot be parsed.
    """
    suffix = path.suffix.lower()
    if suffix not in _CSV_SUFFIXES | _EXCEL_SUFFIXES:
        raise DatasetLoadError(f"Unsupported dataset format {suffix!r}; expected .csv or an Excel workbook", path)
    if not path.is_file():
        raise DatasetLoadError(f"Dataset file not found: {path}", path)

    # Column dtypes decide attribute kinds, so they are inferred from every row.
    try:
        if suffix in _CSV_SUFFIXES:
            return pl.read_csv(path, separator=separator, infer_schema_length=None)
        return pl.read_excel(path, infer_schema_length=None)
    except (OSError, pl.exceptions.PolarsError) as exc:
        raise DatasetLoadError(f"Could not read dataset {path}: {exc}", path) from exc


def records_from_frame(
    df: pl.DataFrame,
    *,
    target_column: str,
    class_labels: Mapping[str, ClassLabel],
) -> tuple[list[Record], int]:
    """Convert DataFrame rows into labeled records.

    The target column's values are looked up (as strings) in `class_labels`;
    rows with a null or unlisted outcome are skipped. Every other column
    becomes an attribute whose kind follows the column dtype. Null cells
    leave the attribute absent on that record.

    Args:
        df (pl.DataFrame): Source rows.
        target_column (str): Column holding the outcome name.
        class_labels (Mapping[str, ClassLabel]): Outcome name to class label.

    Returns:
        tuple[list[Record], int]: The records and the number of skipped rows.

    Raises:
        ColumnsNotFoundError: If `target_column` is not in `df`.
    """
    if target_column not in df.columns:
        raise ColumnsNotFoundError(missing_columns=[target_column], available_columns=df.columns)

    kinds = {name: _classify_column(dtype) for name, dtype in df.schema.items() if name != target_column}
    records: list[Record] = []
    skipped = 0

    for row in df.iter_rows(named=True):
        outcome = row[target_column]
        label = class_labels.get(str(outcome)) if outcome is not None else None
        if label is None:
            skipped += 1
            continue

        numeric: dict[str, float] = {}
        categorical: dict[str, str] = {}
        for name, kind in kinds.items():
            value = row[name]
            if value is None:
                continue
            if kind == "numeric":
                numeric[name] = float(value)
            else:
                categorical[name] = str(value)
        records.append(Record(numeric=numeric, categorical=categorical, label=label))

    return records, skipped


def load_dataset(
    path: Path | str,
    *,
    target_column: str,
    class_labels: Mapping[str, ClassLabel],
    separator: str = ",",
) -> list[Record]:
    """Read a spreadsheet of labeled rows into records.

    Args:
        path (Path | str): `.csv` or Excel file.
        target_column (str): Column holding the outcome name.
        class_labels (Mapping[str, ClassLabel]): Outcome name to class label.
        separator (str): Field separator for CSV files.

    Returns:
        list[Record]: One record per row with a recognized outcome, in file order.

    Raises:
        DatasetLoadError: If the file cannot be read.
        ColumnsNotFoundError: If `target_column` is missing.
        EmptyDatasetError: If no row has a recognized outcome.
    """
    dataset_path = Path(path)
    df = read_table(dataset_path, separator=separator)
    records, skipped = records_from_frame(df, target_column=target_column, class_labels=class_labels)

    if skipped:
        logger.warning("Skipped rows with unknown outcome", path=str(dataset_path), skipped=skipped)
    if not records:
        raise EmptyDatasetError(dataset_path, skipped)

    logger.info("Dataset loaded", path=str(dataset_path), records=len(records), columns=df.width)
    return records


def load_record(path: Path | str) -> Record:
    """Read one unlabeled record from a JSON object of attribute values.

    JSON numbers and booleans become numeric values, strings become
    categorical values, and `null` leaves the attribute absent. Strings are
    never parsed as numbers: `{"age": "19"}` gives a categorical `age`,
    which a numeric node treats as absent and routes to its `">"` branch.
    Write numeric attributes as JSON numbers.

    Args:
        path (Path | str): JSON file containing a single flat object.

    Returns:
        Record: The unlabeled record.

    Raises:
        RecordLoadError: If the file cannot be read or is not a flat JSON object.
    """
    record_path = Path(path)
    try:
        raw = record_path.read_bytes()
    except OSError as exc:
        raise RecordLoadError(f"Could not read record file {record_path}: {exc}", record_path) from exc

    try:
        values = _RECORD_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise RecordLoadError(
            f"Record file {record_path} is not a flat JSON object: {exc.error_count()} invalid value(s)",
            record_path,
        ) from exc

    logger.info("Record loaded", path=str(record_path), attributes=len(values))
    return Record.from_mapping(values)
