"""
Minesweeper decision engine.

Each cycle scans the board into a constraint model, enumerates every
consistent mine assignment of the frontier with a forward-checking
backtracking search, applies the cells that agree across all solutions and
otherwise probes the statistically safest cell.
"""

from .config import EngineConfig
from .csp_solver import CSPSolver, SolutionSet, meets_constraints
from .inference import extract_deductions
from .model import Constraint, ConstraintModel, FrontierVariable, scan_board
from .probabilistic_solver import Guess, choose_guess, prioritized_choice
from .strategy import CSPStrategy
from .utils import BaseStrategy, Move

__version__ = "1.0.0"

__all__ = [
    "BaseStrategy",
    "CSPSolver",
    "CSPStrategy",
    "Constraint",
    "ConstraintModel",
    "EngineConfig",
    "FrontierVariable",
    "Guess",
    "Move",
    "SolutionSet",
    "choose_guess",
    "extract_deductions",
    "meets_constraints",
    "prioritized_choice",
    "scan_board",
]
