"""Command-line entry point: train on a spreadsheet, then classify records on request."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from treekit.config import TrainingSettings
from treekit.exceptions import ColumnsNotFoundError, DatasetLoadError, RecordLoadError
from treekit.id3.nodes import TreeNode
from treekit.id3.rules import extract_rules
from treekit.io import load_dataset, load_record
from treekit.logging import enable_logging
from treekit.training import predict, train_and_evaluate

_YES_ANSWERS: frozenset[str] = frozenset({"y", "yes"})


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; every option overrides the matching setting.

    Returns:
        argparse.ArgumentParser: The parser.
    """
    parser = argparse.ArgumentParser(
        prog="treekit",
        description="Train an ID3 decision tree on a spreadsheet and classify single records with it.",
    )
    parser.add_argument("--dataset", dest="dataset_path", type=Path, help="CSV or Excel file with labeled rows.")
    parser.add_argument("--record", dest="record_path", type=Path, help="JSON file with the record to classify.")
    parser.add_argument("--target", dest="target_column", help="Column holding the outcome name.")
    parser.add_argument("--separator", dest="csv_separator", help="CSV field separator.")
    parser.add_argument("--train-fraction", type=float, help="Share of rows used for training.")
    parser.add_argument("--min-samples", type=int, help="Subsets this size or smaller become leaves.")
    parser.add_argument("--max-depth", type=int, help="Maximum tree depth.")
    parser.add_argument("--seed", type=int, help="Shuffle seed.")
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "TRAINING", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Minimum level of treekit log messages written to stderr.",
    )
    parser.add_argument(
        "--hide-splits",
        action="store_true",
        help="Leave per-node split messages out of DEBUG output.",
    )
    parser.add_argument("--show-rules", action="store_true", help="Print one rule per leaf after training.")
    return parser


def settings_from_args(args: argparse.Namespace) -> TrainingSettings:
    """Merge command-line overrides onto environment-backed settings.

    Args:
        args (argparse.Namespace): Parsed arguments.

    Returns:
        TrainingSettings: Settings with every given option applied.
    """
    fields = TrainingSettings.model_fields
    overrides: dict[str, Any] = {
        name: value for name, value in vars(args).items() if name in fields and value is not None
    }
    return TrainingSettings(**overrides)


def prompt_loop(
    tree: TreeNode,
    settings: TrainingSettings,
    *,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
) -> None:
    """Ask whether to classify the record file until the answer is not yes.

    A record file that cannot be read is reported and the loop continues.

    Args:
        tree (TreeNode): The trained tree.
        settings (TrainingSettings): Supplies the record path and class names.
        ask (Callable[[str], str]): Reads one answer given a prompt.
        say (Callable[[str], None]): Writes one line of output.
    """
    say(f"Fill in {settings.record_path} with the attributes of the record to classify.")
    while True:
        try:
            answer = ask("Predict a record? (y/n): ")
        except EOFError:
            answer = ""
        if answer.strip().lower() not in _YES_ANSWERS:
            say("Goodbye!")
            return

        try:
            record = load_record(settings.record_path)
        except RecordLoadError as exc:
            logger.warning("Record prediction failed", path=str(exc.path), reason=str(exc))
            say(f"Could not classify record: {exc}")
            continue

        result = predict(tree, record, class_names=settings.class_names)
        say(f"Prediction: {result.class_name}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the train, evaluate, and predict session.

    Args:
        argv (Sequence[str] | None): Arguments; `None` reads `sys.argv`.

    Returns:
        int: Process exit code, 0 on success and 1 when the dataset cannot be loaded.
    """
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)

    with enable_logging(level=args.log_level, show_splits=not args.hide_splits):
        try:
            records = load_dataset(
                settings.dataset_path,
                target_column=settings.target_column,
                class_labels=settings.class_labels,
                separator=settings.csv_separator,
            )
        except (DatasetLoadError, ColumnsNotFoundError) as exc:
            print(f"Could not load dataset: {exc}")
            return 1

        run = train_and_evaluate(
            records,
            train_fraction=settings.train_fraction,
            min_samples=settings.min_samples,
            max_depth=settings.max_depth,
            seed=settings.seed,
        )
        print(f"Test accuracy: {run.report.formatted_accuracy}")
        if args.show_rules:
            for rule in extract_rules(run.tree):
                print(rule)

        prompt_loop(run.tree, settings)
    return 0
