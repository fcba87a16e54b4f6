"""
Linear constraint builder for the Str8ts constraint system.

This module defines the solver-independent data structures that hold a
binary model: bounded variables and ranged linear constraints over them.

Constraints have the form:
    lower <= sum_i coeffs[i] * v[indices[i]] <= upper

with lower = -inf or upper = +inf for one-sided constraints and
lower == upper for equalities. No solver logic or puzzle rules here.
"""

import math
from dataclasses import dataclass, field
from typing import List


@dataclass
class VariableSpec:
    """
    A binary decision variable with explicit bounds.

    Bounds are [0, 1] for a free variable, [1, 1] for one forced on and
    [0, 0] for one forced off.

    Attributes:
        name: Solver-facing label, e.g. "x_12_5"
        lower: Lower bound (0 or 1)
        upper: Upper bound (0 or 1)
    """
    name: str
    lower: int = 0
    upper: int = 1

    @property
    def is_fixed(self) -> bool:
        return self.lower == self.upper


@dataclass
class LinearConstraint:
    """
    A single ranged linear constraint over the variable vector:

        lower <= sum_i coeffs[i] * v[indices[i]] <= upper

    Attributes:
        indices: Indices into the variable vector
        coeffs: Coefficients (same length as indices)
        lower: Lower bound, -inf if absent
        upper: Upper bound, +inf if absent
        name: Label used in solver output, e.g. "c_1_12"

    Example:
        # v[3] + v[4] - v[9] >= 0
        LinearConstraint(indices=[3, 4, 9], coeffs=[1.0, 1.0, -1.0],
                         lower=0.0, upper=math.inf, name="link")
    """
    indices: List[int]
    coeffs: List[float]
    lower: float
    upper: float
    name: str = ""

    @property
    def sense(self) -> str:
        """One of "==", "<=", ">=", or "range" for two-sided constraints."""
        if self.lower == self.upper:
            return "=="
        if self.lower == -math.inf:
            return "<="
        if self.upper == math.inf:
            return ">="
        return "range"


@dataclass
class ConstraintBuilder:
    """
    Collects variables and linear constraints for one model.

    This is the interface the encoder emits into; the solver adapter turns it
    into a concrete PuLP problem.

    Attributes:
        variables: VariableSpec objects; a variable's index is its position
        constraints: LinearConstraint objects
    """
    variables: List[VariableSpec] = field(default_factory=list)
    constraints: List[LinearConstraint] = field(default_factory=list)

    def add_variable(self, name: str, lower: int = 0, upper: int = 1) -> int:
        """
        Add a binary variable and return its index.

        Raises:
            AssertionError: If the bounds are not a sub-range of [0, 1]
        """
        assert 0 <= lower <= upper <= 1, \
            f"Binary variable {name} needs 0 <= lower <= upper <= 1, got [{lower}, {upper}]"
        self.variables.append(VariableSpec(name=name, lower=lower, upper=upper))
        return len(self.variables) - 1

    def add_constraint(
        self,
        indices: List[int],
        coeffs: List[float],
        lower: float,
        upper: float,
        name: str = ""
    ) -> None:
        """
        Add a generic ranged constraint:

            lower <= sum_i coeffs[i] * v[indices[i]] <= upper

        Raises:
            AssertionError: If indices and coeffs have different lengths,
                            an index is unknown, or lower > upper
        """
        assert len(indices) == len(coeffs), \
            f"indices and coeffs must have same length, got {len(indices)} != {len(coeffs)}"
        assert lower <= upper, f"Constraint {name} has lower {lower} > upper {upper}"
        for idx in indices:
            assert 0 <= idx < len(self.variables), \
                f"Constraint {name} references unknown variable {idx}"

        self.constraints.append(
            LinearConstraint(indices=list(indices), coeffs=list(coeffs),
                             lower=lower, upper=upper, name=name)
        )

    def add_eq(self, indices: List[int], coeffs: List[float], rhs: float, name: str = "") -> None:
        """sum_i coeffs[i] * v[indices[i]] = rhs"""
        self.add_constraint(indices, coeffs, rhs, rhs, name)

    def add_le(self, indices: List[int], coeffs: List[float], rhs: float, name: str = "") -> None:
        """sum_i coeffs[i] * v[indices[i]] <= rhs"""
        self.add_constraint(indices, coeffs, -math.inf, rhs, name)

    def add_ge(self, indices: List[int], coeffs: List[float], rhs: float, name: str = "") -> None:
        """sum_i coeffs[i] * v[indices[i]] >= rhs"""
        self.add_constraint(indices, coeffs, rhs, math.inf, name)

    def forbid(self, idx: int, name: str = "") -> None:
        """
        Force variable idx to zero with the constraint v[idx] <= 0.

        Used for exclusions that come from other cells, so the variable's own
        bounds still describe only its own clue.
        """
        self.add_le([idx], [1.0], 0.0, name)

    def add_exactly_one(self, indices: List[int], name: str = "") -> None:
        """sum_i v[indices[i]] = 1"""
        self.add_eq(indices, [1.0] * len(indices), 1.0, name)

    def add_at_most_one(self, indices: List[int], name: str = "") -> None:
        """sum_i v[indices[i]] <= 1"""
        self.add_le(indices, [1.0] * len(indices), 1.0, name)

    @property
    def num_variables(self) -> int:
        return len(self.variables)

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)
