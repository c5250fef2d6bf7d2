"""Tests for `classify`: traversal, unseen-value fallback, and missing-attribute routing."""

from __future__ import annotations

import pytest
from pytest_check import check

from treekit.id3.building import build_tree
from treekit.id3.classify import classify
from treekit.id3.nodes import GT_BRANCH, LE_BRANCH, DecisionNode, Leaf
from treekit.id3.records import Record


class TestClassifyTraversal:
    """Tests for routing a record from the root to a leaf."""

    def test_leaf_returns_its_label(self) -> None:
        """A lone leaf should predict its label for any record."""
        # Arrange / Act / Assert
        assert classify(Leaf(2), Record.from_mapping({"x": 1})) == 2

    @pytest.mark.parametrize(("x", "expected"), [(3, 0), (8, 1), (5, 0), (6, 1)])
    def test_numeric_threshold_tree(self, x: int, expected: int) -> None:
        """A tree learned from `x <= 5 -> 0, x > 5 -> 1` should classify by that rule.

        Args:
            x (int): Value to classify.
            expected (int): Expected label.
        """
        # Arrange
        records = [Record.from_mapping({"x": value}, label=0 if value <= 5 else 1) for value in range(1, 11)]
        tree = build_tree(records, ["x"], min_samples=1, max_depth=5)

        # Act / Assert
        assert classify(tree, Record.from_mapping({"x": x})) == expected

    def test_value_equal_to_threshold_goes_left(self) -> None:
        """A value exactly at the threshold should take the `<=` branch."""
        # Arrange
        tree = DecisionNode(attribute="x", threshold=2.5, children={LE_BRANCH: Leaf(0), GT_BRANCH: Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"x": 2.5})) == 0

    def test_nested_categorical_then_numeric(self) -> None:
        """Traversal should follow categorical and numeric nodes in sequence."""
        # Arrange
        tree = DecisionNode(
            attribute="course",
            threshold=None,
            children={
                "nursing": Leaf(2),
                "design": DecisionNode(
                    attribute="grade",
                    threshold=12.0,
                    children={LE_BRANCH: Leaf(0), GT_BRANCH: Leaf(1)},
                ),
            },
        )

        # Act / Assert
        with check:
            assert classify(tree, Record.from_mapping({"course": "nursing", "grade": 5})) == 2
        with check:
            assert classify(tree, Record.from_mapping({"course": "design", "grade": 10})) == 0
        with check:
            assert classify(tree, Record.from_mapping({"course": "design", "grade": 15})) == 1

    def test_label_on_input_record_is_ignored(self) -> None:
        """A label already present on the record should not influence the prediction."""
        # Arrange
        tree = DecisionNode(attribute="x", threshold=2.5, children={LE_BRANCH: Leaf(0), GT_BRANCH: Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"x": 9}, label=0)) == 1

    def test_idempotent(self) -> None:
        """Classifying the same record twice should return the same label."""
        # Arrange
        records = [Record.from_mapping({"x": value, "c": "ab"[value % 2]}, label=value % 3) for value in range(30)]
        tree = build_tree(records, ["x", "c"], min_samples=2)
        record = Record.from_mapping({"x": 13, "c": "b"})

        # Act / Assert
        assert classify(tree, record) == classify(tree, record)


class TestUnseenCategoricalFallback:
    """Tests for the one-level majority fallback on unseen categorical values."""

    def test_unseen_value_uses_majority_of_leaf_children(self) -> None:
        """An unseen color should predict the majority label among the node's leaf children."""
        # Arrange
        records = [
            Record.from_mapping({"color": "red"}, label=0),
            Record.from_mapping({"color": "red"}, label=0),
            Record.from_mapping({"color": "blue"}, label=1),
            Record.from_mapping({"color": "blue"}, label=1),
            Record.from_mapping({"color": "teal"}, label=1),
        ]
        tree = build_tree(records, ["color"], min_samples=0)

        # Act
        predicted = classify(tree, Record.from_mapping({"color": "green"}))

        # Assert - leaves are red->0, blue->1, teal->1
        assert predicted == 1

    def test_fallback_tie_goes_to_smallest_label(self) -> None:
        """Tied leaf-child labels should resolve to the smallest label."""
        # Arrange
        tree = DecisionNode(attribute="color", threshold=None, children={"red": Leaf(2), "blue": Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"color": "green"})) == 1

    def test_fallback_ignores_non_leaf_children(self) -> None:
        """Only immediate leaf children should vote; deeper leaves are not inspected."""
        # Arrange
        deep = DecisionNode(attribute="x", threshold=1.0, children={LE_BRANCH: Leaf(2), GT_BRANCH: Leaf(2)})
        tree = DecisionNode(attribute="color", threshold=None, children={"red": Leaf(0), "blue": deep})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"color": "green"})) == 0

    def test_no_leaf_children_gives_default_label(self) -> None:
        """When no immediate child is a leaf the fallback should return 0."""
        # Arrange
        inner = DecisionNode(attribute="x", threshold=1.0, children={LE_BRANCH: Leaf(2), GT_BRANCH: Leaf(1)})
        tree = DecisionNode(attribute="color", threshold=None, children={"red": inner, "blue": inner})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"color": "green"})) == 0


class TestMissingAttribute:
    """Tests for records that lack the attribute a node tests."""

    def test_missing_numeric_attribute_goes_right(self) -> None:
        """A record without the numeric attribute should take the `>` branch."""
        # Arrange
        tree = DecisionNode(attribute="x", threshold=2.5, children={LE_BRANCH: Leaf(0), GT_BRANCH: Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"other": 1})) == 1

    def test_missing_categorical_attribute_follows_absent_branch(self) -> None:
        """A record without the categorical attribute should follow the `None` branch when it exists."""
        # Arrange
        records = [
            Record.from_mapping({"color": "red"}, label=0),
            Record.from_mapping({"color": "blue"}, label=1),
            Record.from_mapping({}, label=2),
        ]
        tree = build_tree(records, ["color"], min_samples=0)

        # Act / Assert
        assert classify(tree, Record.from_mapping({})) == 2

    def test_missing_categorical_attribute_without_absent_branch_falls_back(self) -> None:
        """Without a `None` branch, a missing categorical value should use the leaf-majority fallback."""
        # Arrange
        tree = DecisionNode(attribute="color", threshold=None, children={"red": Leaf(1), "blue": Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({})) == 1

    def test_categorical_value_on_numeric_node_goes_right(self) -> None:
        """A categorical value where a number is expected should be treated as absent."""
        # Arrange
        tree = DecisionNode(attribute="x", threshold=2.5, children={LE_BRANCH: Leaf(0), GT_BRANCH: Leaf(1)})

        # Act / Assert
        assert classify(tree, Record.from_mapping({"x": "low"})) == 1
