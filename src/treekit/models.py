"""Result models handed to the caller after training, evaluation, and prediction."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, model_validator

from treekit.id3.nodes import TreeNode


class EvaluationReport(BaseModel):
    """Accuracy of a tree on the held-out test split, plus tree size metadata.

    Attributes:
        accuracy (float): Percentage of test records classified correctly, 0 to 100.
        correct (int): Number of test records classified correctly.
        train_size (int): Records the tree was built from.
        test_size (int): Records the tree was evaluated on.
        depth (int): Depth of the built tree.
        leaf_count (int): Number of leaves in the built tree.

    Examples:
        >>> report = EvaluationReport(accuracy=75.0, correct=3, train_size=16, test_size=4, depth=2, leaf_count=3)
        >>> report.formatted_accuracy
        '75.00%'
    """

    accuracy: float = Field(ge=0.0, le=100.0, description="Test accuracy as a percentage.")
    correct: int = Field(ge=0, description="Correctly classified test records.")
    train_size: int = Field(ge=0, description="Number of training records.")
    test_size: int = Field(ge=0, description="Number of test records.")
    depth: int = Field(ge=0, description="Depth of the built tree.")
    leaf_count: int = Field(ge=1, description="Number of leaves in the built tree.")

    @model_validator(mode="after")
    def _validate_correct_within_test_size(self) -> EvaluationReport:
        """Validate that `correct` does not exceed `test_size`.

        Returns:
            EvaluationReport: The validated model instance.

        Raises:
            ValueError: If more records are correct than were tested.
        """
        if self.correct > self.test_size:
            raise ValueError(f"correct ({self.correct}) cannot exceed test_size ({self.test_size})")
        return self

    @property
    def formatted_accuracy(self) -> str:
        """Accuracy with two decimals and a percent sign, e.g. `"83.12%"`."""
        return f"{self.accuracy:.2f}%"


class PredictionResult(BaseModel):
    """Predicted class of one record.

    Attributes:
        label (int): Predicted class label.
        class_name (str): Human-readable outcome name for `label`.
    """

    label: int = Field(description="Predicted class label.")
    class_name: str = Field(min_length=1, description="Human-readable outcome name.")


@dataclass(frozen=True)
class TrainingRun:
    """A built tree together with its evaluation on the test split.

    Attributes:
        tree (TreeNode): The tree built from the training split.
        report (EvaluationReport): Accuracy on the test split.
    """

    tree: TreeNode
    report: EvaluationReport
