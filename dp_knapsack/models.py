"""Data structures for the knapsack solvers.

This module contains the core data types used throughout the package:
- Item: An immutable (weight, value) pair with a name for readability
- ProblemTrait: Tag distinguishing the 0/1 and unbounded problem variants
- InvalidArgumentError: Raised when a solver precondition is violated
"""

from dataclasses import dataclass
from enum import Enum


class InvalidArgumentError(ValueError):
    """Raised when a capacity or item violates a solver precondition."""


class ProblemTrait(Enum):
    """Which knapsack variant a solver implements.

    Attributes:
        ZERO_ONE: Each item may be selected at most once
        UNBOUNDED: Each item may be selected any number of times
    """
    ZERO_ONE = "0/1 Knapsack Problem"
    UNBOUNDED = "Unbounded Knapsack Problem"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Item:
    """Represents an item that can be packed into the knapsack.

    Attributes:
        name: Identifier for the item
        weight: Capacity consumed by one copy of this item
        value: Value gained from one copy of this item
    """
    name: str
    weight: int
    value: int


def _is_int(x):
    # bool is an int subclass but never a meaningful weight or capacity
    return isinstance(x, int) and not isinstance(x, bool)


def validate_capacity(capacity):
    """Check that a capacity is a non-negative integer.

    Raises:
        InvalidArgumentError: If capacity is not an int or is negative
    """
    if not _is_int(capacity):
        raise InvalidArgumentError(f"capacity must be an integer, got {capacity!r}")
    if capacity < 0:
        raise InvalidArgumentError(f"capacity must be non-negative, got {capacity}")


def validate_items(items):
    """Check that every item exposes non-negative integer weight and value.

    Args:
        items: Sequence of objects with .weight and .value attributes

    Raises:
        InvalidArgumentError: On the first offending item
    """
    for index, item in enumerate(items):
        for field in ("weight", "value"):
            if not hasattr(item, field):
                raise InvalidArgumentError(f"item {index} has no '{field}' attribute: {item!r}")
            x = getattr(item, field)
            if not _is_int(x):
                raise InvalidArgumentError(f"item {index} {field} must be an integer, got {x!r}")
            if x < 0:
                raise InvalidArgumentError(f"item {index} {field} must be non-negative, got {x}")


def total_weight(items):
    """Sum of weights over a (multi)set of items."""
    return sum(it.weight for it in items)


def total_value(items):
    """Sum of values over a (multi)set of items."""
    return sum(it.value for it in items)
