"""treekit: ID3 decision trees over mixed numeric and categorical records."""

from loguru import logger

from treekit.id3 import Record, build_tree, classify
from treekit.logging import PACKAGE_NAME, enable_logging
from treekit.training import train_and_evaluate

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the treekit package by default

__all__ = [
    "Record",
    "build_tree",
    "classify",
    "enable_logging",
    "train_and_evaluate",
]
