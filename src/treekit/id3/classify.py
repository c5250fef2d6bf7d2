"""Tree traversal for single-record prediction."""

from __future__ import annotations

from collections import Counter

from treekit.id3.entropy import majority_class
from treekit.id3.nodes import GT_BRANCH, LE_BRANCH, DecisionNode, Leaf, TreeNode
from treekit.id3.records import ClassLabel, Record


def classify(tree: TreeNode, record: Record) -> ClassLabel:
    """Predict the class of `record` by walking `tree` from the root.

    At a categorical node the record's value selects the child (an absent
    attribute looks up the `None` branch). When no child matches, the
    prediction is the majority label among the node's immediate leaf
    children, or `0` if none of them is a leaf. At a numeric node values at
    or below the threshold go left; larger or absent values go right.

    Args:
        tree (TreeNode): A built tree; it is only read.
        record (Record): The record to classify. Its label, if any, is ignored.

    Returns:
        ClassLabel: The predicted class.
    """
    node = tree
    while isinstance(node, DecisionNode):
        if node.is_numeric:
            value = record.numeric.get(node.attribute)
            branch = LE_BRANCH if value is not None and value <= node.threshold else GT_BRANCH
            node = node.children[branch]
            continue

        child = node.children.get(record.categorical.get(node.attribute))
        if child is None:
            return _fallback_label(node)
        node = child
    return node.label


def _fallback_label(node: DecisionNode) -> ClassLabel:
    """Majority label among the leaf children of `node`, looking one level deep only."""
    leaf_labels = Counter(child.label for child in node.children.values() if isinstance(child, Leaf))
    return majority_class(leaf_labels)
