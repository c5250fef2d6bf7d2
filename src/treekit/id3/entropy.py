"""Class counting, majority vote, and Shannon entropy over record sets."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from treekit.id3.records import ClassLabel, Record

DEFAULT_LABEL: ClassLabel = 0


def class_counts(records: Iterable[Record]) -> Mapping[ClassLabel, int]:
    """Count the class labels of `records`.

    Args:
        records (Iterable[Record]): Labeled records.

    Returns:
        Mapping[ClassLabel, int]: Read-only label to count mapping.
    """
    return MappingProxyType(dict(Counter(record.label for record in records)))


def majority_class(counts: Mapping[ClassLabel, int]) -> ClassLabel:
    """Return the most frequent label in `counts`.

    Ties go to the smallest label value. The tie-break carries no meaning; it
    only keeps the outcome independent of mapping iteration order.

    Args:
        counts (Mapping[ClassLabel, int]): Label to count mapping.

    Returns:
        ClassLabel: The majority label, or `DEFAULT_LABEL` when `counts` is empty.
    """
    if not counts:
        return DEFAULT_LABEL
    return min(counts, key=lambda label: (-counts[label], label))


def entropy(records: Sequence[Record]) -> float:
    """Shannon entropy, in bits, of the class labels of `records`.

    Args:
        records (Sequence[Record]): Labeled records.

    Returns:
        float: `-sum(p * log2(p))` over observed class proportions; `0.0` for
            an empty sequence.

    Examples:
        >>> rows = [Record.from_mapping({}, label=label) for label in (0, 0, 1, 1)]
        >>> entropy(rows)
        1.0
    """
    total = len(records)
    if total == 0:
        return 0.0
    result = 0.0
    for count in class_counts(records).values():
        proportion = count / total
        result -= proportion * math.log2(proportion)
    return result
