# minesolver/inference.py
from __future__ import annotations

import logging
from typing import List, Sequence

from .csp_solver import SolutionSet
from .model import FrontierVariable
from .utils import Move


logger = logging.getLogger(__name__)


def extract_deductions(
    solutions: SolutionSet, variables: Sequence[FrontierVariable]
) -> List[Move]:
    """
    Moves that hold in every solution: probe variables that are safe in all
    of them, mark variables that are mines in all of them.

    Returns [] for an empty or truncated solution set.
    """
    if not solutions.solutions or solutions.truncated:
        return []

    total = len(solutions)
    moves: List[Move] = []

    for var, safe_count in zip(variables, solutions.safe_counts()):
        if safe_count == total:
            moves.append(Move("probe", var.row, var.col))
        elif safe_count == 0:
            moves.append(Move("mark", var.row, var.col))

    if moves:
        logger.debug("Deduced %d cells from %d solutions", len(moves), total)
    return moves
