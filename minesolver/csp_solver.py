# minesolver/csp_solver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .model import Constraint


logger = logging.getLogger(__name__)

UNASSIGNED = -1
SAFE = 0
MINE = 1

Assignment = Tuple[int, ...]


@dataclass(frozen=True)
class SolutionSet:
    """
    Every assignment of the frontier variables found for one cycle.

    truncated is True when a consistent assignment was left out because
    max_solutions were already found; the solutions are then only a sample
    and prove nothing.
    """
    solutions: Tuple[Assignment, ...]
    num_variables: int
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.solutions)

    def safe_counts(self) -> List[int]:
        """Per variable, the number of solutions in which it is safe."""
        counts = [0] * self.num_variables
        for solution in self.solutions:
            for i, value in enumerate(solution):
                if value == SAFE:
                    counts[i] += 1
        return counts


def _violates(
    constraint: Constraint,
    assignment: Sequence[int],
    var: int = -1,
    value: int = UNASSIGNED,
) -> bool:
    """
    True when a (partial) assignment can no longer satisfy the constraint.
    `var`/`value` test a tentative value without building a new assignment.

    With S = sum of assigned members, U = unassigned members, R = required:
      - U == 0 and S != R  -> violated
      - U > 0 and S > R    -> violated (too many mines already)
      - U > 0 and S + U < R -> violated (not enough cells left for the mines)
    """
    assigned_sum = 0
    unassigned = 0
    for member in constraint.variables:
        current = value if member == var else assignment[member]
        if current == UNASSIGNED:
            unassigned += 1
        else:
            assigned_sum += current

    if unassigned == 0:
        return assigned_sum != constraint.required
    return (
        assigned_sum > constraint.required
        or assigned_sum + unassigned < constraint.required
    )


def meets_constraints(
    assignment: Sequence[int], constraints: Sequence[Constraint]
) -> bool:
    """Check a partial assignment against every constraint."""
    return not any(_violates(c, assignment) for c in constraints)


class CSPSolver:
    """
    Exhaustive backtracking solver over the frontier variables.

    Variables are assigned in index order, SAFE before MINE. After each
    tentative assignment the branch is rejected when:
      1. any constraint is violated (see meets_constraints),
      2. the assigned mines exceed the mine budget, or
      3. forward checking finds a later unassigned variable for which
         neither value keeps its constraints satisfiable.

    The search uses an explicit stack of immutable partial assignments, so
    sibling branches never share state and deep frontiers never hit the
    interpreter's recursion limit.
    """

    def __init__(
        self,
        num_variables: int,
        constraints: Sequence[Constraint],
        mine_budget: int,
        max_solutions: Optional[int] = None,
    ) -> None:
        self.num_variables = num_variables
        self.constraints = list(constraints)
        self.mine_budget = mine_budget
        self.max_solutions = max_solutions
        # Partial assignments popped by the last solve()
        self.nodes_expanded = 0

        # var index -> constraints that mention it
        self._constraints_of: List[List[Constraint]] = [
            [] for _ in range(num_variables)
        ]
        for constraint in self.constraints:
            for var in constraint.variables:
                self._constraints_of[var].append(constraint)

    # ------------------------------------------------------------------ #
    # Search
    # ------------------------------------------------------------------ #
    def solve(self) -> SolutionSet:
        solutions: List[Assignment] = []
        truncated = False
        self.nodes_expanded = 0

        if self.mine_budget < 0:
            logger.debug("Negative mine budget, no solutions")
            return SolutionSet((), self.num_variables)

        if self.num_variables == 0:
            return SolutionSet((), 0)

        root: Assignment = (UNASSIGNED,) * self.num_variables
        if not meets_constraints(root, self.constraints):
            logger.debug("Constraint set is unsatisfiable before any assignment")
            return SolutionSet((), self.num_variables)

        # (next index to assign, partial assignment, mines so far)
        stack: List[Tuple[int, Assignment, int]] = [(0, root, 0)]

        while stack and not truncated:
            index, partial, mines = stack.pop()
            self.nodes_expanded += 1

            children: List[Tuple[Assignment, int]] = []
            for value in (SAFE, MINE):
                child = partial[:index] + (value,) + partial[index + 1:]
                if self._consistent(child, index, mines + value):
                    children.append((child, mines + value))

            if index + 1 < self.num_variables:
                # Pushed in reverse so the SAFE branch is explored first.
                for child, child_mines in reversed(children):
                    stack.append((index + 1, child, child_mines))
                continue

            for child, _ in children:
                # Only a consistent leaf beyond the cap proves the set incomplete.
                if (
                    self.max_solutions is not None
                    and len(solutions) >= self.max_solutions
                ):
                    truncated = True
                    break
                solutions.append(child)

        logger.debug(
            "CSP search over %d variables expanded %d nodes, found %d solutions%s",
            self.num_variables,
            self.nodes_expanded,
            len(solutions),
            " (truncated)" if truncated else "",
        )
        return SolutionSet(tuple(solutions), self.num_variables, truncated)

    # ------------------------------------------------------------------ #
    # Consistency checks
    # ------------------------------------------------------------------ #
    def _consistent(self, assignment: Assignment, index: int, mines: int) -> bool:
        if mines > self.mine_budget:
            return False
        # Constraints without `index` are unchanged since the parent passed.
        if not meets_constraints(assignment, self._constraints_of[index]):
            return False
        return self._forward_check(assignment, index, mines)

    def _forward_check(self, assignment: Assignment, index: int, mines: int) -> bool:
        """Every later unassigned variable must keep at least one feasible value."""
        for var in range(index + 1, self.num_variables):
            related = self._constraints_of[var]
            if not related:
                continue

            feasible = False
            for value in (SAFE, MINE):
                if mines + value > self.mine_budget:
                    continue
                if not any(_violates(c, assignment, var, value) for c in related):
                    feasible = True
                    break
            if not feasible:
                return False
        return True
