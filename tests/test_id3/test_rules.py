"""Tests for Predicate, ClassificationRule, and `extract_rules`."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from treekit.id3.building import build_tree
from treekit.id3.classify import classify
from treekit.id3.nodes import GT_BRANCH, LE_BRANCH, DecisionNode, Leaf
from treekit.id3.records import Record
from treekit.id3.rules import ClassificationRule, Predicate, extract_rules


class TestPredicate:
    """Tests for the Predicate model: construction, str, and eval."""

    def test_numeric_predicate_construction_sets_correct_fields(self) -> None:
        """Numeric predicate should populate all three fields from constructor arguments."""
        # Arrange / Act
        predicate = Predicate(variable="grade", operator="<=", value=12.5)

        # Assert
        with check:
            assert predicate.variable == "grade"
        with check:
            assert predicate.operator == "<="
        with check:
            assert predicate.value == 12.5

    def test_invalid_operator_rejected_raises_validation_error(self) -> None:
        """An operator outside the Literal set should raise a ValidationError."""
        # Arrange / Act / Assert
        with pytest.raises(ValidationError):
            Predicate(variable="x", operator="in", value=1.0)  # type: ignore[arg-type]

    def test_category_string_kept_as_string(self) -> None:
        """A numeric-looking category should stay a string, not be coerced to float."""
        # Arrange / Act
        predicate = Predicate(variable="shift", operator="==", value="1")

        # Assert
        assert predicate.value == "1"

    @pytest.mark.parametrize(
        ("predicate", "expected"),
        [
            (Predicate(variable="grade", operator="<=", value=12.5), "grade <= 12.5"),
            (Predicate(variable="grade", operator=">", value=12.5), "grade > 12.5"),
            (Predicate(variable="course", operator="==", value="nursing"), "course == nursing"),
            (Predicate(variable="course", operator="==", value=None), "course is missing"),
        ],
    )
    def test_str(self, predicate: Predicate, expected: str) -> None:
        """`str()` should render `"<variable> <operator> <value>"`, or "is missing" for the absent branch.

        Args:
            predicate (Predicate): Predicate to render.
            expected (str): Expected text.
        """
        # Arrange / Act / Assert
        assert str(predicate) == expected

    @pytest.mark.parametrize(
        ("operator", "value", "x", "expected"),
        [
            ("<=", 5.0, 5.0, True),
            ("<=", 5.0, 5.1, False),
            (">", 5.0, 5.1, True),
            (">", 5.0, 5.0, False),
            ("==", "red", "red", True),
            ("==", "red", "blue", False),
            ("==", None, None, True),
            ("<=", 5.0, None, False),
            (">", 5.0, None, True),
            ("<=", 5.0, "abc", False),
            (">", 5.0, "abc", True),
            ("==", None, 3.0, True),
            ("==", "red", 3.0, False),
        ],
    )
    def test_eval(self, operator: str, value: float | str | None, x: float | str | None, expected: bool) -> None:
        """`eval` should follow the tree's routing, including absent values sorting as +infinity.

        Args:
            operator (str): Predicate operator.
            value (float | str | None): Predicate value.
            x (float | str | None): Attribute value under test.
            expected (bool): Expected result.
        """
        # Arrange
        predicate = Predicate(variable="v", operator=operator, value=value)  # type: ignore[arg-type]

        # Act / Assert
        assert predicate.eval(x) is expected


class TestClassificationRule:
    """Tests for the ClassificationRule model."""

    def test_negative_samples_rejected(self) -> None:
        """A negative sample count should raise a ValidationError."""
        # Arrange / Act / Assert
        with pytest.raises(ValidationError):
            ClassificationRule(predicates=[], prediction=0, samples=-1, confidence=0.5)

    @pytest.mark.parametrize("confidence", [-0.1, 1.1])
    def test_confidence_out_of_range_rejected(self, confidence: float) -> None:
        """Confidence outside [0, 1] should raise a ValidationError.

        Args:
            confidence (float): Out-of-range confidence.
        """
        # Arrange / Act / Assert
        with pytest.raises(ValidationError):
            ClassificationRule(predicates=[], prediction=0, samples=3, confidence=confidence)

    def test_str_joins_conditions(self) -> None:
        """`str()` should render an IF ... THEN sentence."""
        # Arrange
        rule = ClassificationRule(
            predicates=[
                Predicate(variable="course", operator="==", value="design"),
                Predicate(variable="grade", operator=">", value=12.0),
            ],
            prediction=2,
            samples=40,
            confidence=0.9,
        )

        # Act / Assert
        assert str(rule) == "IF course == design AND grade > 12.0 THEN class=2 (samples=40, confidence=0.9)"

    def test_str_of_unconditional_rule(self) -> None:
        """A rule with no predicates should render its condition as ALWAYS."""
        # Arrange
        rule = ClassificationRule(predicates=[], prediction=1, samples=4, confidence=1.0)

        # Act / Assert
        assert str(rule).startswith("IF ALWAYS THEN class=1")


class TestExtractRules:
    """Tests for `extract_rules`: one rule per leaf of a built tree."""

    def test_single_leaf_tree_gives_one_unconditional_rule(self) -> None:
        """A lone leaf should give one rule with no predicates."""
        # Arrange
        tree = Leaf(1, {1: 4})

        # Act
        rules = extract_rules(tree)

        # Assert
        assert rules == [ClassificationRule(predicates=[], prediction=1, samples=4, confidence=1.0)]

    def test_numeric_tree_rules(self) -> None:
        """A threshold tree should give `<=` and `>` rules with leaf statistics."""
        # Arrange
        records = [Record.from_mapping({"x": x}, label=0 if x <= 5 else 1) for x in range(1, 11)]
        tree = build_tree(records, ["x"], min_samples=1)

        # Act
        rules = extract_rules(tree)

        # Assert
        with check:
            assert [str(rule.predicates[0]) for rule in rules] == ["x <= 5.5", "x > 5.5"]
        with check:
            assert [rule.prediction for rule in rules] == [0, 1]
        with check:
            assert [rule.samples for rule in rules] == [5, 5]
        with check:
            assert all(rule.confidence == 1.0 for rule in rules)

    def test_rule_count_matches_leaf_count(self) -> None:
        """There should be exactly one rule per leaf, with predicates accumulated along the path."""
        # Arrange
        tree = DecisionNode(
            attribute="course",
            threshold=None,
            children={
                "nursing": Leaf(2, {2: 9, 0: 1}),
                "design": DecisionNode(
                    attribute="grade",
                    threshold=12.0,
                    children={LE_BRANCH: Leaf(0, {0: 4}), GT_BRANCH: Leaf(1, {1: 3, 2: 1})},
                ),
            },
        )

        # Act
        rules = extract_rules(tree)

        # Assert
        with check:
            assert len(rules) == 3
        with check:
            assert [len(rule.predicates) for rule in rules] == [1, 2, 2]
        with check:
            assert rules[0].confidence == 0.9
        with check:
            assert rules[2].confidence == 0.75

    def test_rules_match_their_training_records(self) -> None:
        """Every training record should satisfy the predicates of exactly one rule."""
        # Arrange
        records = [
            Record.from_mapping({"course": "ab"[i % 2], "grade": float(i)}, label=int(i > 6) + (i % 2))
            for i in range(14)
        ]
        rules = extract_rules(build_tree(records, ["course", "grade"], min_samples=0))

        # Act
        matches = [
            sum(all(p.eval(record.get(p.variable)) for p in rule.predicates) for rule in rules) for record in records
        ]

        # Assert
        assert matches == [1] * len(records)

    @pytest.mark.parametrize(
        "values",
        [{"grade": "high", "course": "design"}, {"grade": 15, "course": 3}, {}],
        ids=["category-on-threshold", "number-on-category", "all-absent"],
    )
    def test_wrong_kind_values_match_classifier_path(self, values: dict[str, object]) -> None:
        """The only rule a record satisfies should predict what `classify` predicts for it.

        Args:
            values (dict[str, object]): Attribute values, some of the wrong kind for their node.
        """
        # Arrange
        tree = DecisionNode(
            attribute="course",
            threshold=None,
            children={
                "design": DecisionNode(
                    attribute="grade",
                    threshold=12.0,
                    children={LE_BRANCH: Leaf(0, {0: 4}), GT_BRANCH: Leaf(1, {1: 3})},
                ),
                None: Leaf(2, {2: 5}),
            },
        )
        record = Record.from_mapping(values)

        # Act
        matching = [
            rule for rule in extract_rules(tree) if all(p.eval(record.get(p.variable)) for p in rule.predicates)
        ]

        # Assert
        with check:
            assert len(matching) == 1
        with check:
            assert matching[0].prediction == classify(tree, record)

    def test_empty_leaf_has_zero_confidence(self) -> None:
        """A leaf no training record reached should report zero samples and zero confidence."""
        # Arrange / Act
        rules = extract_rules(Leaf(0))

        # Assert
        with check:
            assert rules[0].samples == 0
        with check:
            assert rules[0].confidence == 0.0
