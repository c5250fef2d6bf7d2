"""Human-readable root-to-leaf rules extracted from a built tree."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from treekit.id3.nodes import LE_BRANCH, BranchKey, DecisionNode, Leaf, TreeNode

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type PredicateOp = Literal["==", "<=", ">"]

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single condition on one attribute along a tree path.

    Categorical branches become `==` predicates (a `None` value stands for
    "attribute absent"); numeric branches become `<=` / `>` predicates on the
    node's threshold.

    Attributes:
        variable (str): Attribute name, e.g. `"age_at_enrollment"`.
        operator (PredicateOp): Comparison operator.
        value (float | str | None): Threshold or category.

    Examples:
        >>> p = Predicate(variable="age_at_enrollment", operator=">", value=22.5)
        >>> str(p)
        'age_at_enrollment > 22.5'
        >>> p.eval(30.0)
        True
    """

    variable: str = Field(description="Attribute name the condition applies to.")
    operator: PredicateOp = Field(description="Comparison operator: '==' for categories, '<=' / '>' for thresholds.")
    value: float | str | None = Field(
        description="Numeric threshold, category, or None for the 'attribute absent' branch.",
    )

    def __str__(self) -> str:
        """Return the predicate as `"<variable> <operator> <value>"`.

        Returns:
            str: e.g. `"course == nursing"`, `"grade <= 12.5"` or `"course is missing"`.
        """
        if self.value is None:
            return f"{self.variable} is missing"
        return f"{self.variable} {self.operator} {self.value}"

    def eval(self, x: float | str | None) -> bool:
        """Evaluate this predicate against an attribute value.

        Absent values follow the tree's routing: they only satisfy `>` and
        the `== None` branch. A category tested against a threshold, or a
        number tested against a category, counts as absent.

        Args:
            x (float | str | None): The attribute value to test.

        Returns:
            bool: `True` if the predicate holds for `x`.
        """
        return _apply_operator(self.operator, x, self.value)


class ClassificationRule(BaseModel):
    """The path from the root to one leaf, with the leaf's prediction.

    Attributes:
        predicates (list[Predicate]): Conditions from root to leaf. Empty for
            a single-leaf tree.
        prediction (int): Class label predicted at the leaf.
        samples (int): Training records that reached the leaf.
        confidence (float): Fraction of those records carrying the predicted
            label; 0.0 for a leaf that no training record reached.
    """

    predicates: list[Predicate] = Field(description="Conditions along the path from root to this leaf.")
    prediction: int = Field(description="Predicted class label for records reaching this leaf.")
    samples: int = Field(ge=0, description="Number of training records that reached this leaf.")
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Fraction of training records at this leaf carrying the predicted label.",
    )

    def __str__(self) -> str:
        """Return the rule as `"IF a AND b THEN class=<label>"`.

        Returns:
            str: The rule, with `ALWAYS` standing in for an empty condition list.
        """
        conditions = " AND ".join(str(predicate) for predicate in self.predicates) or "ALWAYS"
        return f"IF {conditions} THEN class={self.prediction} (samples={self.samples}, confidence={self.confidence})"


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def extract_rules(tree: TreeNode) -> list[ClassificationRule]:
    """Extract one rule per leaf, in depth-first branch order.

    Args:
        tree (TreeNode): A built tree.

    Returns:
        list[ClassificationRule]: One rule per leaf.
    """
    rules: list[ClassificationRule] = []
    _walk_tree(tree, path_predicates=[], rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

_SCALAR_OPS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "<=": operator.le,
    ">": operator.gt,
}


def _apply_operator(op: PredicateOp, x: float | str | None, value: float | str | None) -> bool:
    """Apply `op` between an attribute value and a predicate value.

    Args:
        op (PredicateOp): The comparison operator.
        x (float | str | None): Attribute value; `None` when absent.
        value (float | str | None): Threshold or category.

    Returns:
        bool: Result of the comparison.

    Raises:
        ValueError: If `op` is not a recognized `PredicateOp`.
    """
    if op not in _SCALAR_OPS:
        raise ValueError(f"Unexpected operator: {op!r}")
    # A value of the wrong kind for the node counts as absent.
    if op == "==":
        x = x if isinstance(x, str) else None
    elif not isinstance(x, int | float):
        return op == ">"
    return _SCALAR_OPS[op](x, value)


def _walk_tree(node: TreeNode, *, path_predicates: list[Predicate], rules: list[ClassificationRule]) -> None:
    """Recursively walk `node`, appending one rule per leaf to `rules`."""
    if isinstance(node, Leaf):
        samples = node.samples
        confidence = node.class_counts.get(node.label, 0) / samples if samples else 0.0
        rules.append(
            ClassificationRule(
                predicates=path_predicates,
                prediction=node.label,
                samples=samples,
                confidence=round(confidence, 4),
            )
        )
        return

    for key, child in node.children.items():
        predicate = _branch_predicate(node, key)
        _walk_tree(child, path_predicates=[*path_predicates, predicate], rules=rules)


def _branch_predicate(node: DecisionNode, key: BranchKey) -> Predicate:
    """Build the predicate that selects branch `key` of `node`."""
    if node.threshold is None:
        return Predicate(variable=node.attribute, operator="==", value=key)
    op: PredicateOp = "<=" if key == LE_BRANCH else ">"
    return Predicate(variable=node.attribute, operator=op, value=node.threshold)
