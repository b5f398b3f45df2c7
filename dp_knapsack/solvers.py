"""Reference knapsack solvers used to cross-check the dynamic programs.

This module contains two independent solvers:
- solve_knapsack_ilp: Gurobi integer program (binary or general integer copies)
- solve_knapsack_enumeration: Exhaustive enumeration of all feasible selections
"""
import itertools
import time

try:
    import gurobipy as gp
    from gurobipy import GRB
except Exception as e:
    gp = None
    GRB = None

from models import InvalidArgumentError, ProblemTrait, validate_capacity, validate_items


def solve_knapsack_ilp(items, capacity, trait=ProblemTrait.ZERO_ONE, time_limit=None, verbose=False):
    """Solve a knapsack instance as an integer program with Gurobi.

    Args:
        items: List of items with .weight and .value attributes
        capacity: Weight capacity
        trait: ProblemTrait.ZERO_ONE (binary x) or ProblemTrait.UNBOUNDED (integer x >= 0)
        time_limit: Optional time limit in seconds for Gurobi
        verbose: Whether to show Gurobi output

    Returns:
        dict with keys:
            - x: List of counts (number of copies of each item)
            - obj: Objective value (total value)
            - status: Gurobi solution status
            - model: Gurobi model object

    Raises:
        RuntimeError: If gurobipy is not available
    """
    if gp is None:
        raise RuntimeError("gurobipy is not available. Install gurobipy into the active Python environment.")
    validate_capacity(capacity)
    validate_items(items)

    n = len(items)
    model = gp.Model("knapsack")
    model.setParam('OutputFlag', 1 if verbose else 0)
    if time_limit is not None:
        model.setParam('TimeLimit', time_limit)

    # Decision variables: x[i] = number of copies of item i
    vtype = GRB.BINARY if trait == ProblemTrait.ZERO_ONE else GRB.INTEGER
    x = {i: model.addVar(vtype=vtype, lb=0.0, name=f"x_{i}") for i in range(n)}
    model.update()

    model.addConstr(gp.quicksum(items[i].weight * x[i] for i in range(n)) <= capacity, name="capacity")
    model.setObjective(gp.quicksum(items[i].value * x[i] for i in range(n)), GRB.MAXIMIZE)

    model.optimize()

    status = model.Status
    if status == GRB.OPTIMAL or status == GRB.TIME_LIMIT or status == GRB.SUBOPTIMAL:
        sol = [int(round(x[i].X)) for i in range(n)]
        obj = model.ObjVal
        return {"x": sol, "obj": obj, "status": status, "model": model}
    else:
        return {"status": status, "message": "No feasible solution or model failed"}


def solve_knapsack_enumeration(items, capacity, trait=ProblemTrait.ZERO_ONE, time_limit=60.0):
    """Solve a knapsack instance by enumerating every feasible selection.

    Only practical for small instances; used as an optimality oracle.

    Args:
        items: List of items with .weight and .value attributes
        capacity: Weight capacity
        trait: ProblemTrait.ZERO_ONE (0 or 1 copies) or ProblemTrait.UNBOUNDED
        time_limit: Maximum enumeration time in seconds

    Returns:
        dict with:
            - counts: Copies of each item in the best selection found
            - max_value: Value of that selection
            - checked: Number of selections enumerated

    Raises:
        TimeoutError: If the time limit is exceeded
        InvalidArgumentError: If an unbounded item has zero weight
    """
    validate_capacity(capacity)
    validate_items(items)

    ranges = []
    for i, it in enumerate(items):
        if trait == ProblemTrait.ZERO_ONE:
            ranges.append(range(2 if it.weight <= capacity else 1))
        else:
            if it.weight == 0:
                raise InvalidArgumentError(f"item {i} has zero weight")
            ranges.append(range(capacity // it.weight + 1))

    best_value = 0
    best_counts = [0] * len(items)
    checked = 0
    start_time = time.time()

    for counts in itertools.product(*ranges):
        if time.time() - start_time > time_limit:
            raise TimeoutError(f"Time limit exceeded in knapsack enumeration after checking {checked} selections.")
        checked += 1

        weight = sum(c * it.weight for c, it in zip(counts, items))
        if weight > capacity:
            continue
        value = sum(c * it.value for c, it in zip(counts, items))
        if value > best_value:
            best_value = value
            best_counts = list(counts)

    return {"counts": best_counts, "max_value": best_value, "checked": checked}
