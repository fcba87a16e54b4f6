"""
ILP solver wrapper for the Str8ts model.

This module turns a ConstraintBuilder into a PuLP problem and solves it:
  - One integer variable per VariableSpec, bounded by its [lower, upper]
  - One PuLP constraint per LinearConstraint (==, <=, >= or a ranged pair)
  - Zero objective (feasibility only)
  - Solves using PuLP's bundled CBC solver
  - Returns the raw status and a numpy vector of variable values

Uses standard pulp library (no custom solver implementation).
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pulp

from str8ts.constraints.builder import ConstraintBuilder, LinearConstraint


logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """
    Options forwarded to PULP_CBC_CMD.

    Attributes:
        msg: If True, CBC prints its log
        time_limit: Wall-clock limit in seconds, None for no limit
        threads: Maximum CBC threads, None for CBC's default
    """
    msg: bool = False
    time_limit: Optional[float] = None
    threads: Optional[int] = None

    def make_solver(self) -> pulp.LpSolver:
        return pulp.PULP_CBC_CMD(msg=self.msg, timeLimit=self.time_limit, threads=self.threads)


@dataclass
class LpSolution:
    """
    Outcome of a single solve attempt.

    Attributes:
        solver_status: Raw PuLP status string ("Optimal", "Infeasible",
                       "Not Solved", "Unbounded", "Undefined")
        values: Variable values indexed like builder.variables, or None when
                no optimal solution was found
    """
    solver_status: str
    values: Optional[np.ndarray] = None

    @property
    def is_optimal(self) -> bool:
        return self.solver_status == "Optimal"


def _add_linear_constraint(prob: pulp.LpProblem, variables: list, lc: LinearConstraint) -> None:
    expr = pulp.lpSum(coeff * variables[idx] for idx, coeff in zip(lc.indices, lc.coeffs))
    sense = lc.sense
    if sense == "==":
        prob += (expr == lc.lower, lc.name or None)
    elif sense == "<=":
        prob += (expr <= lc.upper, lc.name or None)
    elif sense == ">=":
        prob += (expr >= lc.lower, lc.name or None)
    else:
        prob += (expr >= lc.lower, f"{lc.name}_lo" if lc.name else None)
        prob += (expr <= lc.upper, f"{lc.name}_hi" if lc.name else None)


def solve_constraints(
    builder: ConstraintBuilder,
    config: Optional[SolverConfig] = None
) -> LpSolution:
    """
    Build and solve the ILP described by a builder.

    Variables are created as integers with the builder's bounds rather than
    as pulp.LpBinary, because PuLP resets binary bounds to [0, 1] and the
    fixed bounds carry the clues.

    Constraints with no terms are not sent to the solver; one whose bounds
    exclude 0 makes the model infeasible on its own. A model without any
    non-empty constraint never reaches CBC.

    Args:
        builder: ConstraintBuilder with variables and constraints
        config: Solver options, defaults to SolverConfig()

    Returns:
        LpSolution. values is a float array of length builder.num_variables
        when solver_status == "Optimal", else None.

    Example:
        >>> b = ConstraintBuilder()
        >>> v = b.add_variable("v", 0, 1)
        >>> b.add_eq([v], [1.0], 1.0)
        >>> solve_constraints(b).values
        array([1.])
    """
    if config is None:
        config = SolverConfig()

    # 1. Trivial models never reach CBC
    for lc in builder.constraints:
        if not lc.indices and not (lc.lower <= 0 <= lc.upper):
            logger.debug("Empty constraint %s excludes 0, model is infeasible", lc.name)
            return LpSolution(solver_status="Infeasible")
    lower_bounds = np.array([spec.lower for spec in builder.variables], dtype=float)
    if not any(lc.indices for lc in builder.constraints):
        # Nothing couples the variables, so their lower bounds are a solution
        return LpSolution(solver_status="Optimal", values=lower_bounds)

    # 2. Create model
    prob = pulp.LpProblem("str8ts", pulp.LpMinimize)

    # 3. Create bounded integer variables
    variables = [
        pulp.LpVariable(spec.name, lowBound=spec.lower, upBound=spec.upper, cat=pulp.LpInteger)
        for spec in builder.variables
    ]

    # 4. Add constraints
    for lc in builder.constraints:
        if lc.indices:
            _add_linear_constraint(prob, variables, lc)

    # 5. Zero objective (feasibility only)
    prob += 0

    # 6. Solve using pulp's CBC solver
    status = prob.solve(config.make_solver())
    solver_status = pulp.LpStatus[status]
    logger.debug("CBC finished with status %s", solver_status)

    if solver_status != "Optimal":
        return LpSolution(solver_status=solver_status)

    # 7. Extract values; variables no constraint mentions stay at their lower bound
    values = lower_bounds.copy()
    for idx, var in enumerate(variables):
        val = pulp.value(var)
        if val is not None:
            values[idx] = val

    return LpSolution(solver_status=solver_status, values=values)
