# minesolver/probabilistic_solver.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from .config import EngineConfig
from .csp_solver import SolutionSet
from .model import ConstraintModel
from .utils import Move, Position, corner_positions


logger = logging.getLogger(__name__)


GuessSource = Literal["frontier", "non_frontier", "random"]


@dataclass(frozen=True)
class Guess:
    """A probe chosen without proof, with the estimated chance it is safe."""
    move: Move
    safety: Optional[float]
    source: GuessSource


# ---------------------------------------------------------------------------
# Probability helpers
# ---------------------------------------------------------------------------

def frontier_safety(solutions: SolutionSet) -> Optional[List[float]]:
    """
    Per frontier variable: (solutions where it is safe) / (all solutions).
    None when there are no solutions to count.
    """
    if not solutions.solutions:
        return None
    total = len(solutions)
    return [count / total for count in solutions.safe_counts()]


def non_frontier_safety(mine_budget: int, pool_size: int) -> Optional[float]:
    """
    Uniform chance that an unprobed cell off the frontier is safe:
        1 - remaining_mines / unprobed_cells
    """
    if pool_size <= 0:
        return None
    return 1.0 - mine_budget / pool_size


def prioritized_choice(
    candidates: Sequence[Position],
    rows: int,
    cols: int,
    rng: random.Random,
    prioritize_corners: bool,
) -> Position:
    """Pick a grid corner from candidates when allowed and present, else a uniform pick."""
    if prioritize_corners:
        present = set(candidates)
        for corner in corner_positions(rows, cols):
            if corner in present:
                return corner
    return rng.choice(list(candidates))


# ---------------------------------------------------------------------------
# Guess selection
# ---------------------------------------------------------------------------

def random_guess(
    model: ConstraintModel, config: EngineConfig, rng: random.Random
) -> Optional[Guess]:
    """Prioritized random probe over every unprobed cell."""
    if not model.all_unprobed:
        return None
    row, col = prioritized_choice(
        model.all_unprobed, model.rows, model.cols, rng, config.prioritize_corners
    )
    return Guess(Move("probe", row, col), None, "random")


def _best_frontier(
    model: ConstraintModel, safety: List[float], config: EngineConfig
) -> Position:
    """Safest frontier variable; a corner among the equally safe when allowed, else first in scan order."""
    best = max(safety)
    best_positions = [
        var.position for var, p in zip(model.variables, safety) if p == best
    ]
    if config.prioritize_corners:
        for corner in corner_positions(model.rows, model.cols):
            if corner in best_positions:
                return corner
    return best_positions[0]


def choose_guess(
    model: ConstraintModel,
    solutions: SolutionSet,
    config: EngineConfig,
    rng: random.Random,
) -> Optional[Guess]:
    """
    Choose the cell to probe when nothing could be deduced.

    Strategy:
      - No frontier, or good_guessing off: prioritized random probe.
      - Otherwise compare the best frontier safety with the uniform safety
        of cells off the frontier and guess in the safer class; the
        frontier wins ties.
      - Within the frontier the safest variable is taken. Corner priority
        only breaks ties among the equally safest; a safer non-corner
        always beats a corner.
      - If one class has no candidates, use the other.
    """
    if not model.has_frontier or not config.good_guessing:
        return random_guess(model, config, rng)

    safety = frontier_safety(solutions)
    off_frontier = model.non_frontier_cells()
    pool = model.guess_pool()
    off_safety = non_frontier_safety(model.mine_budget, len(pool))

    frontier_p: Optional[float] = max(safety) if safety else None

    use_frontier: bool
    if not off_frontier:
        use_frontier = True
    elif frontier_p is None:
        use_frontier = False
    else:
        use_frontier = off_safety is None or frontier_p >= off_safety

    if use_frontier:
        if safety is None:
            positions = [var.position for var in model.variables]
            row, col = prioritized_choice(
                positions, model.rows, model.cols, rng, config.prioritize_corners
            )
        else:
            row, col = _best_frontier(model, safety, config)
        guess = Guess(Move("probe", row, col), frontier_p, "frontier")
    else:
        row, col = prioritized_choice(
            off_frontier, model.rows, model.cols, rng, config.prioritize_corners
        )
        guess = Guess(Move("probe", row, col), off_safety, "non_frontier")

    logger.info(
        "Guessing %s cell (%d, %d) (frontier %s, off-frontier %s)",
        guess.source, row, col,
        _fmt(frontier_p), _fmt(off_safety),
    )
    return guess


def _fmt(p: Optional[float]) -> str:
    return "n/a" if p is None else f"{p:.3f}"
