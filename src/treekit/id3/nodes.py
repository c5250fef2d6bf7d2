"""Tree node types produced by the builder and read by the classifier."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from treekit.id3.records import ClassLabel

LE_BRANCH: Final[str] = "<="
GT_BRANCH: Final[str] = ">"

# Categorical branches are keyed by the category itself; `None` holds the
# records on which the attribute was absent.
type BranchKey = str | None


@dataclass(frozen=True)
class Leaf:
    """Terminal node carrying a predicted class label.

    Attributes:
        label (ClassLabel): The predicted class.
        class_counts (Mapping[ClassLabel, int]): Training labels that reached
            this leaf. Empty for the fallback leaf built from an empty subset.
    """

    label: ClassLabel
    class_counts: Mapping[ClassLabel, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_counts", MappingProxyType(dict(self.class_counts)))

    @property
    def samples(self) -> int:
        """Number of training records that reached this leaf."""
        return sum(self.class_counts.values())


@dataclass(frozen=True)
class DecisionNode:
    """Internal node splitting on one attribute.

    A categorical node has `threshold=None` and one child per category seen
    during training. A numeric node has a float threshold and exactly two
    children keyed `"<="` and `">"`.

    Attributes:
        attribute (str): The attribute tested at this node.
        threshold (float | None): Numeric split point, or `None` for categorical.
        children (Mapping[BranchKey, TreeNode]): Child subtree per branch key.
    """

    attribute: str
    threshold: float | None
    children: Mapping[BranchKey, TreeNode]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    @property
    def is_numeric(self) -> bool:
        """Whether this node compares against a numeric threshold."""
        return self.threshold is not None


type TreeNode = Leaf | DecisionNode


def tree_depth(node: TreeNode) -> int:
    """Return the number of decision levels below `node` (a lone leaf has depth 0).

    Args:
        node (TreeNode): Root of the (sub)tree.

    Returns:
        int: Length of the longest root-to-leaf path, in edges.
    """
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(child) for child in node.children.values())


def leaf_count(node: TreeNode) -> int:
    """Return the number of leaves in the (sub)tree rooted at `node`.

    Args:
        node (TreeNode): Root of the (sub)tree.

    Returns:
        int: Leaf count.
    """
    if isinstance(node, Leaf):
        return 1
    return sum(leaf_count(child) for child in node.children.values())
