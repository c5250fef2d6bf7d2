"""Labeled records with explicitly tagged numeric and categorical attribute values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

type AttributeKind = Literal["numeric", "categorical"]

type AttributeValue = float | str

type ClassLabel = int


@dataclass(frozen=True, eq=False)
class Record:
    """One row of a dataset: tagged attribute values plus an optional class label.

    Numeric and categorical values live in two disjoint mappings, so the kind
    of every record-attribute pair is fixed when the record is built and never
    inferred again. An attribute present in neither mapping is absent on this
    record.

    Records compare and hash by identity. Two rows with identical content are
    still two distinct members of a dataset.

    Attributes:
        numeric (Mapping[str, float]): Numeric attribute values.
        categorical (Mapping[str, str]): Categorical attribute values.
        label (ClassLabel | None): Integer class label; `None` for records
            that are only meant to be classified.

    Examples:
        >>> record = Record.from_mapping({"age": 19, "course": "nursing"}, label=2)
        >>> record.kind_of("age")
        'numeric'
        >>> record.get("course")
        'nursing'
        >>> record.get("missing") is None
        True
    """

    numeric: Mapping[str, float] = field(default_factory=dict)
    categorical: Mapping[str, str] = field(default_factory=dict)
    label: ClassLabel | None = None

    def __post_init__(self) -> None:
        """Freeze the value mappings and reject attributes tagged with both kinds.

        Raises:
            ValueError: If an attribute name appears in both `numeric` and
                `categorical`.
        """
        overlap = set(self.numeric) & set(self.categorical)
        if overlap:
            raise ValueError(f"Attributes cannot be both numeric and categorical: {sorted(overlap)}")
        object.__setattr__(self, "numeric", MappingProxyType(dict(self.numeric)))
        object.__setattr__(self, "categorical", MappingProxyType(dict(self.categorical)))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], label: ClassLabel | None = None) -> Record:
        """Build a record from a plain mapping, tagging each value by its Python type.

        `int`, `float` and `bool` values are numeric (stored as `float`);
        `None` marks the attribute as absent; anything else is categorical and
        stored as its `str()`.

        Args:
            values (Mapping[str, Any]): Attribute name to raw value.
            label (ClassLabel | None): Class label, or `None` for an unlabeled record.

        Returns:
            Record: The tagged record.
        """
        numeric: dict[str, float] = {}
        categorical: dict[str, str] = {}
        for name, value in values.items():
            if value is None:
                continue
            if isinstance(value, int | float):
                numeric[name] = float(value)
            else:
                categorical[name] = str(value)
        return cls(numeric=numeric, categorical=categorical, label=label)

    @property
    def attributes(self) -> tuple[str, ...]:
        """Attribute names defined on this record, numeric ones first."""
        return (*self.numeric, *self.categorical)

    def kind_of(self, attribute: str) -> AttributeKind | None:
        """Return the kind of `attribute` on this record, or `None` when absent.

        Args:
            attribute (str): Attribute name to look up.

        Returns:
            AttributeKind | None: `"numeric"`, `"categorical"`, or `None`.
        """
        if attribute in self.numeric:
            return "numeric"
        if attribute in self.categorical:
            return "categorical"
        return None

    def get(self, attribute: str) -> AttributeValue | None:
        """Return the value of `attribute`, or `None` when it is absent.

        Args:
            attribute (str): Attribute name to look up.

        Returns:
            AttributeValue | None: The numeric or categorical value.
        """
        if attribute in self.numeric:
            return self.numeric[attribute]
        return self.categorical.get(attribute)
