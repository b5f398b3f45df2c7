"""
Property tests for both DP solvers against exhaustive enumeration.

For random small instances the DP selection must be feasible, must reach
the enumerated optimum, and must be reproducible across repeated solves.
Also covers dispatch through the solver registry.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import random

import pytest

from models import Item, InvalidArgumentError, ProblemTrait, total_value, total_weight
from knapsack_dp import (SOLVERS, UnboundedKnapsackSolver, ZeroOneKnapsackSolver,
                         get_solver, solve_knapsack)
from solvers import solve_knapsack_enumeration


def random_instance(rng, trait):
    """Small random instance; unbounded weights start at 2 to keep enumeration cheap."""
    if trait == ProblemTrait.ZERO_ONE:
        n = rng.randint(1, 7)
        items = [Item(name=f"i{k}", weight=rng.randint(0, 9), value=rng.randint(0, 12))
                 for k in range(n)]
    else:
        n = rng.randint(1, 4)
        items = [Item(name=f"i{k}", weight=rng.randint(2, 8), value=rng.randint(0, 12))
                 for k in range(n)]
    capacity = rng.randint(0, 15)
    return items, capacity


@pytest.mark.parametrize("trait", [ProblemTrait.ZERO_ONE, ProblemTrait.UNBOUNDED])
def test_dp_matches_enumeration(trait):
    """Feasible and optimal on 60 random instances per variant"""
    print("=" * 70)
    print(f"TEST: DP vs enumeration ({trait})")
    print("=" * 70)

    rng = random.Random(20141)
    for trial in range(60):
        items, capacity = random_instance(rng, trait)
        knapsack = get_solver(trait).solve(items, capacity)
        oracle = solve_knapsack_enumeration(items, capacity, trait)

        assert total_weight(knapsack) <= capacity, \
            f"Trial {trial}: infeasible selection {knapsack} for capacity {capacity}"
        assert total_value(knapsack) == oracle['max_value'], \
            f"Trial {trial}: DP value {total_value(knapsack)} != optimum {oracle['max_value']}"

        if trait == ProblemTrait.ZERO_ONE:
            ids = [id(it) for it in knapsack]
            assert len(ids) == len(set(ids)), f"Trial {trial}: item used twice"
        else:
            assert all(any(it is src for src in items) for it in knapsack)

    print(f"PASS 60 instances match the enumerated optimum")


@pytest.mark.parametrize("trait", [ProblemTrait.ZERO_ONE, ProblemTrait.UNBOUNDED])
def test_solve_is_repeatable(trait):
    """Re-running solve on the same input yields the same selection"""
    rng = random.Random(7)
    items, capacity = random_instance(rng, trait)
    solver = get_solver(trait)
    first = solver.solve(items, capacity)
    for _ in range(3):
        again = solver.solve(items, capacity)
        assert total_value(again) == total_value(first)
        assert [id(it) for it in again] == [id(it) for it in first]


def test_unbounded_never_worse_than_zero_one():
    rng = random.Random(99)
    for _ in range(30):
        items, capacity = random_instance(rng, ProblemTrait.UNBOUNDED)
        zero_one = solve_knapsack(items, capacity, ProblemTrait.ZERO_ONE)
        unbounded = solve_knapsack(items, capacity, ProblemTrait.UNBOUNDED)
        assert total_value(unbounded) >= total_value(zero_one)


def test_registry_dispatch():
    """Every registered solver reports the trait it is registered under"""
    assert set(SOLVERS) == set(ProblemTrait)
    for trait, solver_cls in SOLVERS.items():
        solver = get_solver(trait)
        assert isinstance(solver, solver_cls)
        assert solver.trait == trait

    assert isinstance(get_solver(ProblemTrait.ZERO_ONE), ZeroOneKnapsackSolver)
    assert isinstance(get_solver(ProblemTrait.UNBOUNDED), UnboundedKnapsackSolver)


def test_registry_rejects_unknown_trait():
    with pytest.raises(InvalidArgumentError):
        get_solver("fractional")
    with pytest.raises(InvalidArgumentError):
        solve_knapsack([], 5, trait=None)


def test_solve_knapsack_defaults_to_zero_one():
    item = Item(name="x", weight=5, value=5)
    assert solve_knapsack([item], 15) == [item]
    assert solve_knapsack([item], 15, ProblemTrait.UNBOUNDED) == [item, item, item]


def test_enumeration_oracle():
    items = [Item(name=str(n), weight=n, value=n) for n in (2, 3, 4)]
    result = solve_knapsack_enumeration(items, 5, ProblemTrait.ZERO_ONE)
    assert result['max_value'] == 5
    assert result['counts'] == [1, 1, 0]
    assert result['checked'] == 8

    result = solve_knapsack_enumeration([Item(name="5", weight=5, value=5)], 15, ProblemTrait.UNBOUNDED)
    assert result['counts'] == [3]

    with pytest.raises(InvalidArgumentError):
        solve_knapsack_enumeration([Item(name="0", weight=0, value=1)], 3, ProblemTrait.UNBOUNDED)


def test_enumeration_time_limit():
    items = [Item(name=str(k), weight=1, value=1) for k in range(25)]
    with pytest.raises(TimeoutError):
        solve_knapsack_enumeration(items, 25, ProblemTrait.ZERO_ONE, time_limit=-1.0)
