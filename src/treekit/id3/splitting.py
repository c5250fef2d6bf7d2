"""Information gain and the exhaustive best-split search."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import pairwise

from treekit.id3.entropy import entropy
from treekit.id3.partition import Partition, partition
from treekit.id3.records import AttributeKind, Record


@dataclass(frozen=True)
class BestSplit:
    """Winner of a split search.

    `attribute is None` (with `gain == -inf`) means no split was found and
    the caller should make a leaf.

    Attributes:
        gain (float): Information gain of the winning split.
        attribute (str | None): Winning attribute.
        threshold (float | None): Winning numeric threshold, `None` for categorical.
        partition (Partition | None): The realized groups, reusable by the builder.
    """

    gain: float = -math.inf
    attribute: str | None = None
    threshold: float | None = None
    partition: Partition | None = None


NO_SPLIT = BestSplit()


def information_gain(records: Sequence[Record], split: Partition) -> float:
    """Entropy of `records` minus the size-weighted entropy of the split's groups.

    Args:
        records (Sequence[Record]): The parent record set.
        split (Partition): A partition of `records`.

    Returns:
        float: The information gain in bits.
    """
    total = len(records)
    remainder = sum(len(group) / total * entropy(group) for group in split.groups.values() if group)
    return entropy(records) - remainder


def best_split(records: Sequence[Record], attributes: Sequence[str]) -> BestSplit:
    """Find the attribute (and threshold) whose partition maximizes information gain.

    Attributes are scanned in the given order and only a strictly better gain
    replaces the current best, so the first of several equal splits wins.
    Numeric attributes are tried at the midpoint of every pair of adjacent
    distinct values; categorical attributes are tried once.

    Args:
        records (Sequence[Record]): Labeled records to split.
        attributes (Sequence[str]): Candidate attribute names.

    Returns:
        BestSplit: The best split found, or `NO_SPLIT` when `records` is
            already pure or no attribute can split it.
    """
    if entropy(records) == 0:
        return NO_SPLIT

    best = NO_SPLIT
    for attribute in attributes:
        for candidate in _candidate_partitions(records, attribute):
            gain = information_gain(records, candidate)
            if gain > best.gain:
                best = BestSplit(
                    gain=gain,
                    attribute=attribute,
                    threshold=candidate.threshold,
                    partition=candidate,
                )
    return best


def _candidate_partitions(records: Sequence[Record], attribute: str) -> Iterator[Partition]:
    """Yield every partition worth evaluating for one attribute.

    Args:
        records (Sequence[Record]): The record set being split.
        attribute (str): The candidate attribute.

    Yields:
        Partition: One partition per numeric midpoint, or the single
            categorical partition. Nothing when the attribute is absent from
            every record or has fewer than two distinct numeric values.
    """
    kind = _attribute_kind(records, attribute)
    if kind is None:
        return
    if kind == "categorical":
        yield partition(records, attribute)
        return

    values = sorted({record.numeric[attribute] for record in records if attribute in record.numeric})
    for lower, upper in pairwise(values):
        yield partition(records, attribute, (lower + upper) / 2)


def _attribute_kind(records: Sequence[Record], attribute: str) -> AttributeKind | None:
    """Return the kind of `attribute` on the first record that defines it."""
    for record in records:
        kind = record.kind_of(attribute)
        if kind is not None:
            return kind
    return None
