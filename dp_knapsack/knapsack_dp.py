"""Dynamic Programming solutions for the 0/1 and unbounded Knapsack Problems.

Both solvers keep their DP tables in sparse storage (see sparse_matrix.py)
so that memory follows the cells actually touched rather than the full
(items + 1) x (capacity + 1) extent. Tables live only for one solve() call.

- ZeroOneKnapsackSolver: each item can be selected at most once
- UnboundedKnapsackSolver: each item can be selected any number of times
- SOLVERS / get_solver / solve_knapsack: dispatch on ProblemTrait
- knapsack_01 / knapsack_unbounded: list-based convenience wrappers
"""

from typing import Protocol, Sequence

from models import (Item, InvalidArgumentError, ProblemTrait, total_value, total_weight,
                    validate_capacity, validate_items)
from sparse_matrix import SparseArray, SparseMatrix
from logger import NoOpLogger


class KnapsackSolver(Protocol):
    """Contract shared by every knapsack solver.

    solve() returns a multiset of items as a list. The order of the
    returned items carries no meaning; compare by count and membership.
    """

    @property
    def trait(self) -> ProblemTrait:
        ...

    def solve(self, items: Sequence, max_capacity: int) -> list:
        ...


class ZeroOneKnapsackSolver:
    """Solves the 0/1 knapsack problem with a value table and a decision table.

    value[i, c] = best value using the first i items with capacity c
    keep[i, c]  = True iff item i-1 is taken in the solution stored at (i, c)

    Row 0 is never written: with no items considered every cell reads 0.
    Ties keep the incumbent (strict >), so a later item only replaces an
    earlier solution when it is strictly better.
    """

    def __init__(self, logger=None, table_factory=SparseMatrix):
        """
        Args:
            logger: Optional SolverLogger; a NoOpLogger is used if omitted
            table_factory: Callable taking default= and returning an empty 2D table
        """
        self.logger = logger if logger is not None else NoOpLogger()
        self.table_factory = table_factory

    @property
    def trait(self):
        return ProblemTrait.ZERO_ONE

    def solve(self, items, max_capacity):
        """Select the most valuable subset of items that fits max_capacity.

        Args:
            items: Sequence of objects with integer .weight and .value
            max_capacity: Non-negative integer capacity

        Returns:
            list of the selected items (each input item at most once)

        Raises:
            InvalidArgumentError: If capacity or any item is invalid
        """
        validate_capacity(max_capacity)
        items = list(items)
        validate_items(items)
        if not items:
            return []

        self.logger.start_run({"trait": str(self.trait), "n_items": len(items),
                               "capacity": max_capacity})

        value = self.table_factory(default=0)
        keep = self.table_factory(default=False)
        self._build_tables(items, max_capacity, value, keep)
        selection = self._reconstruct(items, keep, max_capacity)

        self.logger.end_run({"total_value": total_value(selection),
                             "total_weight": total_weight(selection),
                             "n_selected": len(selection)})
        return selection

    def _build_tables(self, items, max_capacity, value, keep):
        """Fill value/keep rows 1..n with the 0/1 recurrence."""
        for i in range(1, len(items) + 1):
            weight = items[i - 1].weight
            item_value = items[i - 1].value
            kept = 0
            for c in range(max_capacity + 1):
                # Option 1: skip item i-1
                baseline = value[i - 1, c]
                # Option 2: take item i-1, only considered if it fits
                if weight <= c:
                    candidate = item_value + value[i - 1, c - weight]
                    if candidate > baseline:
                        value[i, c] = candidate
                        keep[i, c] = True
                        kept += 1
                        continue
                value[i, c] = baseline
            self.logger.log_row_filled(i, max_capacity + 1 + kept)

    def _reconstruct(self, items, keep, max_capacity):
        """Walk the decision table from the last item back to the first."""
        selection = []
        remaining = max_capacity
        for i in range(len(items), 0, -1):
            if keep[i, remaining]:
                item = items[i - 1]
                selection.append(item)
                remaining -= item.weight
                self.logger.log_item_selected(i - 1, item, remaining)
        return selection


class UnboundedKnapsackSolver:
    """Solves the unbounded knapsack problem over a per-capacity memo.

    memo[w]     = best value achievable with capacity w
    keep[k, w]  = True iff item k is the choice that produced memo[w]

    For each w only items that fit compete. The incumbent is the lowest
    index fitting item and is replaced only on a strictly better value,
    so ties go to the earliest item. If nothing fits at w, no decision
    is recorded and reconstruction stops there.
    """

    def __init__(self, logger=None, table_factory=SparseMatrix):
        """
        Args:
            logger: Optional SolverLogger; a NoOpLogger is used if omitted
            table_factory: Callable taking default= and returning an empty 2D table
        """
        self.logger = logger if logger is not None else NoOpLogger()
        self.table_factory = table_factory

    @property
    def trait(self):
        return ProblemTrait.UNBOUNDED

    def solve(self, items, max_capacity):
        """Select the most valuable multiset of items that fits max_capacity.

        Args:
            items: Sequence of objects with integer .weight and .value
            max_capacity: Non-negative integer capacity

        Returns:
            list of selected items; the same instance appears once per copy

        Raises:
            InvalidArgumentError: If capacity or any item is invalid, or an
                item has zero weight
        """
        validate_capacity(max_capacity)
        items = list(items)
        validate_items(items)
        for index, item in enumerate(items):
            if item.weight == 0:
                raise InvalidArgumentError(
                    f"item {index} has zero weight; unbounded copies would never fill the knapsack")
        if not items:
            return []

        self.logger.start_run({"trait": str(self.trait), "n_items": len(items),
                               "capacity": max_capacity})

        memo = SparseArray(default=0)
        keep = self.table_factory(default=False)
        self._build_tables(items, max_capacity, memo, keep)
        selection = self._reconstruct(items, keep, max_capacity)

        self.logger.end_run({"total_value": total_value(selection),
                             "total_weight": total_weight(selection),
                             "n_selected": len(selection)})
        return selection

    def _build_tables(self, items, max_capacity, memo, keep):
        """Fill memo[1..max_capacity] and record the winning item per capacity."""
        for w in range(1, max_capacity + 1):
            # Working vectors for this capacity, indexed by item
            smaller = SparseArray(default=0)
            candidates = SparseArray(default=0)
            best_index = None
            for k, item in enumerate(items):
                if item.weight > w:
                    continue
                smaller[k] = memo[w - item.weight]
                candidates[k] = smaller[k] + item.value
                if best_index is None or candidates[k] > candidates[best_index]:
                    best_index = k

            if best_index is None:
                self.logger.log_row_filled(w, 0)
                continue
            memo[w] = candidates[best_index]
            keep[best_index, w] = True
            self.logger.log_row_filled(w, 2)

    def _reconstruct(self, items, keep, max_capacity):
        """Repeatedly take the recorded item at the remaining capacity."""
        selection = []
        remaining = max_capacity
        while remaining > 0:
            chosen = next((k for k in range(len(items)) if keep[k, remaining]), None)
            if chosen is None:
                break
            item = items[chosen]
            selection.append(item)
            remaining -= item.weight
            self.logger.log_item_selected(chosen, item, remaining)
        return selection


SOLVERS = {
    ProblemTrait.ZERO_ONE: ZeroOneKnapsackSolver,
    ProblemTrait.UNBOUNDED: UnboundedKnapsackSolver,
}


def get_solver(trait, **kwargs) -> KnapsackSolver:
    """Build the solver registered for a problem variant.

    Args:
        trait: ProblemTrait member
        **kwargs: Forwarded to the solver constructor (logger, table_factory)

    Raises:
        InvalidArgumentError: If no solver is registered for trait
    """
    try:
        solver_cls = SOLVERS[trait]
    except (KeyError, TypeError):
        raise InvalidArgumentError(f"no solver registered for {trait!r}") from None
    return solver_cls(**kwargs)


def solve_knapsack(items, capacity, trait=ProblemTrait.ZERO_ONE, **kwargs):
    """Solve with the solver registered for trait. See KnapsackSolver.solve."""
    return get_solver(trait, **kwargs).solve(items, capacity)


def _items_from_lists(values, weights):
    if len(values) != len(weights):
        raise InvalidArgumentError(
            f"values and weights differ in length ({len(values)} != {len(weights)})")
    return [Item(name=f"item{i}", weight=weights[i], value=values[i]) for i in range(len(values))]


def knapsack_01(values, weights, capacity):
    """Solve 0/1 knapsack problem using dynamic programming.

    Each item can be selected at most once. Maximizes total value
    subject to weight constraint.

    Args:
        values: List of item values
        weights: List of item weights
        capacity: Maximum weight capacity

    Returns:
        dict with:
            - max_value: Maximum achievable value
            - selected: Binary list indicating which items are selected
    """
    items = _items_from_lists(values, weights)
    chosen = {id(it) for it in ZeroOneKnapsackSolver().solve(items, capacity)}
    selected = [1 if id(it) in chosen else 0 for it in items]
    return {
        'max_value': sum(v * s for v, s in zip(values, selected)),
        'selected': selected
    }


def knapsack_unbounded(values, weights, capacity):
    """Solve unbounded knapsack problem using dynamic programming.

    Each item can be selected multiple times. Maximizes total value
    subject to weight constraint.

    Args:
        values: List of item values
        weights: List of item weights (all positive)
        capacity: Maximum weight capacity

    Returns:
        dict with:
            - max_value: Maximum achievable value
            - counts: List of counts for each item type
    """
    items = _items_from_lists(values, weights)
    position = {id(it): i for i, it in enumerate(items)}
    counts = [0] * len(items)
    for it in UnboundedKnapsackSolver().solve(items, capacity):
        counts[position[id(it)]] += 1
    return {
        'max_value': sum(v * c for v, c in zip(values, counts)),
        'counts': counts
    }
