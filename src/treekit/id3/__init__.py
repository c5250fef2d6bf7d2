"""ID3 sub-package: records, entropy, partitioning, split search, tree building, and classification."""

from __future__ import annotations

from treekit.id3.building import GAIN_EPSILON, build_tree, candidate_attributes
from treekit.id3.classify import classify
from treekit.id3.entropy import class_counts, entropy, majority_class
from treekit.id3.nodes import GT_BRANCH, LE_BRANCH, DecisionNode, Leaf, TreeNode, leaf_count, tree_depth
from treekit.id3.partition import Partition, partition
from treekit.id3.records import AttributeKind, ClassLabel, Record
from treekit.id3.rules import ClassificationRule, Predicate, extract_rules
from treekit.id3.splitting import BestSplit, best_split, information_gain

__all__ = [
    "GAIN_EPSILON",
    "GT_BRANCH",
    "LE_BRANCH",
    "AttributeKind",
    "BestSplit",
    "ClassLabel",
    "ClassificationRule",
    "DecisionNode",
    "Leaf",
    "Partition",
    "Predicate",
    "Record",
    "TreeNode",
    "best_split",
    "build_tree",
    "candidate_attributes",
    "class_counts",
    "classify",
    "entropy",
    "extract_rules",
    "information_gain",
    "leaf_count",
    "majority_class",
    "partition",
    "tree_depth",
]
