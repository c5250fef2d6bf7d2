"""Shuffling, train/test splitting, evaluation, prediction, and run orchestration."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np
from loguru import logger
from sklearn.metrics import accuracy_score

from treekit.id3.building import build_tree, candidate_attributes
from treekit.id3.classify import classify
from treekit.id3.nodes import TreeNode, leaf_count, tree_depth
from treekit.id3.records import ClassLabel, Record
from treekit.logging import TRAINING_LEVEL
from treekit.models import EvaluationReport, PredictionResult, TrainingRun

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

DEFAULT_TRAIN_FRACTION: float = 0.8
DEFAULT_MIN_SAMPLES: int = 5
DEFAULT_MAX_DEPTH: int = 8


# ---------------------------------------------------------------------------
# Public interface -- Dataset splitting
# ---------------------------------------------------------------------------


def shuffle_records(records: Sequence[Record], *, seed: int | None = None) -> tuple[Record, ...]:
    """Return the records in a uniformly random order.

    The input is left untouched; a fresh permutation of its indices is drawn
    and every record appears exactly once in the result.

    Args:
        records (Sequence[Record]): Records to shuffle.
        seed (int | None): Seed for the random generator; `None` is non-deterministic.

    Returns:
        tuple[Record, ...]: The shuffled records.
    """
    rng = np.random.default_rng(seed)
    return tuple(records[int(index)] for index in rng.permutation(len(records)))


def train_test_split(
    records: Sequence[Record],
    *,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: int | None = None,
) -> tuple[tuple[Record, ...], tuple[Record, ...]]:
    """Shuffle `records` once and cut them into a training and a test split.

    Args:
        records (Sequence[Record]): Labeled records.
        train_fraction (float): Share of records for training; the training
            split holds `floor(len(records) * train_fraction)` records.
        seed (int | None): Shuffle seed.

    Returns:
        tuple[tuple[Record, ...], tuple[Record, ...]]: `(train, test)`.

    Raises:
        ValueError: If `train_fraction` is not strictly between 0 and 1.
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be between 0 and 1 (exclusive), got {train_fraction}.")
    shuffled = shuffle_records(records, seed=seed)
    cut = math.floor(len(shuffled) * train_fraction)
    return shuffled[:cut], shuffled[cut:]


# ---------------------------------------------------------------------------
# Public interface -- Evaluation and prediction
# ---------------------------------------------------------------------------


def evaluate(tree: TreeNode, records: Sequence[Record], *, train_size: int = 0) -> EvaluationReport:
    """Measure the accuracy of `tree` on labeled `records`.

    Args:
        tree (TreeNode): A built tree.
        records (Sequence[Record]): Labeled test records.
        train_size (int): Number of records the tree was built from, for the report.

    Returns:
        EvaluationReport: Accuracy and tree metadata. Accuracy is `0.0` when
            `records` is empty.
    """
    if records:
        true_labels = [record.label for record in records]
        predicted_labels = [classify(tree, record) for record in records]
        correct = int(accuracy_score(true_labels, predicted_labels, normalize=False))
        accuracy = 100.0 * correct / len(records)
    else:
        logger.warning("Test split is empty, reporting zero accuracy", train_size=train_size)
        correct = 0
        accuracy = 0.0

    return EvaluationReport(
        accuracy=accuracy,
        correct=correct,
        train_size=train_size,
        test_size=len(records),
        depth=tree_depth(tree),
        leaf_count=leaf_count(tree),
    )


def predict(tree: TreeNode, record: Record, *, class_names: Mapping[ClassLabel, str]) -> PredictionResult:
    """Classify one record and attach the outcome's display name.

    Args:
        tree (TreeNode): A built tree.
        record (Record): The record to classify.
        class_names (Mapping[ClassLabel, str]): Class label to display name.
            Labels without a name are shown as `"class <label>"`.

    Returns:
        PredictionResult: The predicted label and its name.
    """
    label = classify(tree, record)
    return PredictionResult(label=label, class_name=class_names.get(label, f"class {label}"))


# ---------------------------------------------------------------------------
# Public interface -- Run orchestration
# ---------------------------------------------------------------------------


def train_and_evaluate(
    records: Sequence[Record],
    *,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    min_samples: int = DEFAULT_MIN_SAMPLES,
    max_depth: int = DEFAULT_MAX_DEPTH,
    seed: int | None = None,
) -> TrainingRun:
    """Shuffle, split, build a tree on the training split, and score it on the test split.

    Candidate attributes are taken from the training split in first-seen
    order.

    Args:
        records (Sequence[Record]): Labeled records.
        train_fraction (float): Share of records used for training.
        min_samples (int): Subsets this size or smaller become leaves.
        max_depth (int): Maximum tree depth.
        seed (int | None): Shuffle seed.

    Returns:
        TrainingRun: The tree and its evaluation report.
    """
    train, test = train_test_split(records, train_fraction=train_fraction, seed=seed)
    attributes = candidate_attributes(train)
    logger.log(
        TRAINING_LEVEL,
        "Building tree",
        train_size=len(train),
        test_size=len(test),
        attributes=len(attributes),
        min_samples=min_samples,
        max_depth=max_depth,
    )

    tree = build_tree(train, attributes, min_samples=min_samples, max_depth=max_depth)
    report = evaluate(tree, test, train_size=len(train))

    logger.log(
        TRAINING_LEVEL,
        "Tree evaluated",
        accuracy=report.formatted_accuracy,
        depth=report.depth,
        leaf_count=report.leaf_count,
    )
    return TrainingRun(tree=tree, report=report)
