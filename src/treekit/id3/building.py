"""Recursive ID3 tree construction with stopping rules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from loguru import logger

from treekit.id3.entropy import DEFAULT_LABEL, class_counts, majority_class
from treekit.id3.nodes import DecisionNode, Leaf, TreeNode
from treekit.id3.records import Record
from treekit.id3.splitting import best_split

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

GAIN_EPSILON: Final[float] = 1e-9  # Gains at or below this are float noise, not a split.
DEFAULT_MIN_SAMPLES: Final[int] = 5
DEFAULT_MAX_DEPTH: Final[int] = 10


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def candidate_attributes(records: Iterable[Record]) -> tuple[str, ...]:
    """Collect attribute names in first-seen order across `records`.

    The order is the tie-break order of the split search, so it must not
    depend on set or hash ordering.

    Args:
        records (Iterable[Record]): Records to scan.

    Returns:
        tuple[str, ...]: Every attribute defined on at least one record.
    """
    seen: dict[str, None] = {}
    for record in records:
        seen.update(dict.fromkeys(record.attributes))
    return tuple(seen)


def build_tree(
    records: Sequence[Record],
    attributes: Sequence[str],
    *,
    min_samples: int = DEFAULT_MIN_SAMPLES,
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> TreeNode:
    """Grow a decision tree over `records`.

    Stopping rules, in order: an empty subset gives `Leaf(0)`; a pure subset
    gives a leaf of its only label; running out of attributes, having at most
    `min_samples` records, or reaching `max_depth` gives a majority leaf; a
    best split with gain at or below `GAIN_EPSILON` also gives a majority leaf.

    Otherwise the node splits. A categorical attribute is dropped from the
    candidates of its subtrees; a numeric attribute stays available so deeper
    nodes can cut it at finer thresholds.

    Args:
        records (Sequence[Record]): Labeled training records reaching this node.
        attributes (Sequence[str]): Candidate attributes, in tie-break order.
        min_samples (int): Subsets this size or smaller become leaves.
        max_depth (int): Depth at which every node becomes a leaf.
        depth (int): Depth of the node being built; the root is 0.

    Returns:
        TreeNode: The (sub)tree built from `records`.
    """
    if not records:
        return Leaf(DEFAULT_LABEL)

    counts = class_counts(records)
    if len(counts) == 1:
        return Leaf(next(iter(counts)), counts)

    if not attributes or len(records) <= min_samples or depth >= max_depth:
        return Leaf(majority_class(counts), counts)

    split = best_split(records, attributes)
    if split.attribute is None or split.partition is None or split.gain <= GAIN_EPSILON:
        logger.debug("No informative split, making majority leaf", depth=depth, samples=len(records))
        return Leaf(majority_class(counts), counts)

    logger.debug(
        "Splitting node",
        depth=depth,
        attribute=split.attribute,
        threshold=split.threshold,
        gain=round(split.gain, 6),
        samples=len(records),
    )
    child_attributes = attributes
    if split.threshold is None:
        child_attributes = [attribute for attribute in attributes if attribute != split.attribute]

    children = {
        key: build_tree(
            group,
            child_attributes,
            min_samples=min_samples,
            max_depth=max_depth,
            depth=depth + 1,
        )
        for key, group in split.partition.groups.items()
    }
    return DecisionNode(attribute=split.attribute, threshold=split.threshold, children=children)
