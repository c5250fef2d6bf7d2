"""Partitioning record sets by one categorical attribute or one numeric threshold."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from treekit.id3.nodes import GT_BRANCH, LE_BRANCH, BranchKey
from treekit.id3.records import Record


@dataclass(frozen=True)
class Partition:
    """Disjoint, exhaustive grouping of a record set.

    Attributes:
        attribute (str): Attribute the records were grouped by.
        threshold (float | None): Numeric split point, or `None` for a
            categorical partition.
        groups (Mapping[BranchKey, tuple[Record, ...]]): Records per branch
            key, in input order.
    """

    attribute: str
    threshold: float | None
    groups: Mapping[BranchKey, tuple[Record, ...]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", MappingProxyType(dict(self.groups)))


def partition(records: Sequence[Record], attribute: str, threshold: float | None = None) -> Partition:
    """Split `records` by `attribute`.

    Without a threshold, records are grouped by their exact categorical value
    and the key set is exactly the values present; records lacking the
    attribute are grouped under `None`. With a threshold, two groups are
    always produced: `"<="` (ties included) and `">"`. A record lacking the
    attribute sorts as +infinity and lands in `">"`.

    Args:
        records (Sequence[Record]): Records to split.
        attribute (str): Attribute to split on.
        threshold (float | None): Numeric split point, or `None` for categorical mode.

    Returns:
        Partition: The groups, each record appearing in exactly one of them.
    """
    if threshold is None:
        grouped: dict[BranchKey, list[Record]] = {}
        for record in records:
            grouped.setdefault(record.categorical.get(attribute), []).append(record)
        return Partition(
            attribute=attribute,
            threshold=None,
            groups={key: tuple(members) for key, members in grouped.items()},
        )

    at_or_below: list[Record] = []
    above: list[Record] = []
    for record in records:
        value = record.numeric.get(attribute)
        if value is not None and value <= threshold:
            at_or_below.append(record)
        else:
            above.append(record)
    return Partition(
        attribute=attribute,
        threshold=threshold,
        groups={LE_BRANCH: tuple(at_or_below), GT_BRANCH: tuple(above)},
    )
