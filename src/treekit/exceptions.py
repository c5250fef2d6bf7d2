"""Custom exceptions for treekit's input adapters.

The tree engine itself never raises; every failure a user can see comes from
reading a dataset or a record from disk:

- ColumnsNotFoundError (subclass ValueError): the dataset lacks a required column.
- DatasetLoadError: base class for dataset reading failures.
- EmptyDatasetError: the dataset was read but has no usable labeled rows.
- RecordLoadError: a single record file is unreadable or malformed.
"""

from __future__ import annotations

from pathlib import Path


class ColumnsNotFoundError(ValueError):
    """Raised when required columns do not exist in a dataset.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the dataset.

    Examples:
        >>> err = ColumnsNotFoundError(missing_columns=["Target"], available_columns=["age", "course"])
        >>> err.missing_columns
        ['Target']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(self, missing_columns: list[str], available_columns: list[str]) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the dataset.
            available_columns (list[str]): Column names present in the dataset.
        """
        super().__init__(f"Columns not found in dataset: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class DatasetLoadError(Exception):
    """Raised when a dataset file cannot be read.

    Attributes:
        path (Path): The dataset file that failed to load.
    """

    path: Path

    def __init__(self, message: str, path: Path) -> None:
        """Initialize DatasetLoadError.

        Args:
            message (str): Description of the failure.
            path (Path): The dataset file that failed to load.
        """
        super().__init__(message)
        self.path = path

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including message and path.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, path={str(self.path)!r})"


class EmptyDatasetError(DatasetLoadError):
    """Raised when a dataset has no rows with a recognized class label.

    Attributes:
        skipped_rows (int): Rows dropped because their target was unknown or null.
    """

    skipped_rows: int

    def __init__(self, path: Path, skipped_rows: int) -> None:
        """Initialize EmptyDatasetError.

        Args:
            path (Path): The dataset file.
            skipped_rows (int): Rows dropped because their target was unknown or null.
        """
        super().__init__(f"No labeled rows in dataset ({skipped_rows} rows skipped)", path)
        self.skipped_rows = skipped_rows


class RecordLoadError(Exception):
    """Raised when a single record file cannot be read or is not a JSON object.

    Attributes:
        path (Path): The record file that failed to load.
    """

    path: Path

    def __init__(self, message: str, path: Path) -> None:
        """Initialize RecordLoadError.

        Args:
            message (str): Description of the failure.
            path (Path): The record file that failed to load.
        """
        super().__init__(message)
        self.path = path

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including message and path.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, path={str(self.path)!r})"
