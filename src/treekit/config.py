"""Training and prediction settings loaded from the environment or a `.env` file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CLASS_LABELS: dict[str, int] = {"Dropout": 0, "Enrolled": 1, "Graduate": 2}


class TrainingSettings(BaseSettings):
    """Settings for one train/evaluate/predict session.

    Every field can be set through a `TREEKIT_`-prefixed environment variable
    (e.g. `TREEKIT_MAX_DEPTH=6`) or a `.env` file. Mapping fields take JSON,
    e.g. `TREEKIT_CLASS_NAMES='{"0": "Dropout", "1": "Enrolled"}'`.

    Attributes:
        dataset_path (Path): Spreadsheet with one labeled record per row.
        record_path (Path): JSON file holding the record to classify.
        target_column (str): Dataset column holding the outcome name.
        class_labels (dict[str, int]): Outcome name to integer class label.
            Rows whose outcome is not listed are skipped.
        class_names (dict[int, str]): Integer class label to the display name
            used for predictions.
        csv_separator (str): Field separator for `.csv` datasets.
        train_fraction (float): Share of the shuffled dataset used for training.
        min_samples (int): Subsets this size or smaller are not split further.
        max_depth (int): Maximum tree depth.
        seed (int | None): Seed for the train/test shuffle; `None` is non-deterministic.
    """

    model_config = SettingsConfigDict(
        env_prefix="TREEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dataset_path: Path = Field(default=Path("data.csv"), description="Spreadsheet with labeled records.")
    record_path: Path = Field(default=Path("record.json"), description="JSON file with the record to classify.")
    target_column: str = Field(default="Target", min_length=1, description="Column holding the outcome name.")
    class_labels: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_CLASS_LABELS),
        description="Outcome name to integer class label.",
    )
    class_names: dict[int, str] = Field(
        default_factory=lambda: {label: name for name, label in DEFAULT_CLASS_LABELS.items()},
        description="Integer class label to display name.",
    )
    csv_separator: str = Field(default=",", min_length=1, max_length=1, description="CSV field separator.")
    train_fraction: float = Field(default=0.8, gt=0.0, lt=1.0, description="Share of records used for training.")
    min_samples: int = Field(default=5, ge=0, description="Subsets this size or smaller become leaves.")
    max_depth: int = Field(default=8, ge=0, description="Maximum tree depth.")
    seed: int | None = Field(default=None, description="Shuffle seed; None for a fresh shuffle each run.")

    @model_validator(mode="after")
    def _validate_class_labels_unique(self) -> TrainingSettings:
        """Validate that no two outcome names map to the same class label.

        Returns:
            TrainingSettings: The validated settings.

        Raises:
            ValueError: If `class_labels` assigns one label to several outcomes.
        """
        labels = list(self.class_labels.values())
        if len(labels) != len(set(labels)):
            raise ValueError(f"class_labels must map each outcome to a distinct label, got {self.class_labels}")
        return self
