"""Tests for custom exceptions.

This module tests the exception classes raised by the dataset and record
readers, ensuring proper inheritance, attribute storage, and catchability
patterns.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_check import check

from treekit.exceptions import ColumnsNotFoundError, DatasetLoadError, EmptyDatasetError, RecordLoadError


class TestColumnsNotFoundError:
    """Tests for ColumnsNotFoundError."""

    def test_is_value_error(self) -> None:
        """Verify ColumnsNotFoundError can be caught as ValueError."""
        # Arrange
        error = ColumnsNotFoundError(missing_columns=["Target"], available_columns=["age"])

        # Act / Assert
        with pytest.raises(ValueError, match="Columns not found"):
            raise error

    def test_stores_columns(self) -> None:
        """Verify the missing and available column lists are kept on the error."""
        # Arrange / Act
        error = ColumnsNotFoundError(missing_columns=["z", "a"], available_columns=["age", "course"])

        # Assert
        with check:
            assert error.missing_columns == ["z", "a"]
        with check:
            assert error.available_columns == ["age", "course"]
        with check:
            assert str(error) == "Columns not found in dataset: ['a', 'z']", "Message should list columns sorted"


class TestDatasetLoadError:
    """Tests for DatasetLoadError and EmptyDatasetError."""

    def test_stores_path_and_message(self) -> None:
        """Verify the message and path are accessible."""
        # Arrange / Act
        error = DatasetLoadError("Could not read dataset", Path("students.csv"))

        # Assert
        with check:
            assert str(error) == "Could not read dataset"
        with check:
            assert error.path == Path("students.csv")

    def test_repr_includes_message_and_path(self) -> None:
        """Verify repr shows the class name, message, and path."""
        # Arrange
        error = DatasetLoadError("boom", Path("students.csv"))

        # Act / Assert
        assert repr(error) == "DatasetLoadError(message='boom', path='students.csv')"

    def test_empty_dataset_error_caught_as_load_error(self) -> None:
        """Verify EmptyDatasetError is a DatasetLoadError carrying the skipped row count."""
        # Arrange
        error = EmptyDatasetError(Path("students.csv"), skipped_rows=12)

        # Act / Assert
        with pytest.raises(DatasetLoadError) as exc_info:
            raise error
        with check:
            assert exc_info.value.skipped_rows == 12  # type: ignore[attr-defined]
        with check:
            assert "12 rows skipped" in str(error)
        with check:
            assert repr(error).startswith("EmptyDatasetError(")


class TestRecordLoadError:
    """Tests for RecordLoadError."""

    def test_not_a_dataset_error(self) -> None:
        """Verify record failures are kept apart from dataset failures."""
        # Arrange / Act
        error = RecordLoadError("bad record", Path("record.json"))

        # Assert
        with check:
            assert not isinstance(error, DatasetLoadError)
        with check:
            assert error.path == Path("record.json")
        with check:
            assert repr(error) == "RecordLoadError(message='bad record', path='record.json')"
