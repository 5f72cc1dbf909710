# minesolver/strategy.py
from __future__ import annotations

import logging
import random
from typing import List, Optional

from board import Board
from .config import EngineConfig
from .csp_solver import CSPSolver
from .inference import extract_deductions
from .model import scan_board
from .probabilistic_solver import choose_guess, random_guess
from .utils import BaseStrategy, Move


logger = logging.getLogger(__name__)


class CSPStrategy(BaseStrategy):
    """
    Decision engine that plays one cycle per call.

    Strategy:
      1. Scan the board. A revealed 0 with unprobed neighbors -> probe all of
         them and stop.
      2. No frontier -> prioritized random probe.
      3. Enumerate every solution of the frontier constraints and apply every
         cell that is safe (probe) or mined (mark) in all of them.
      4. Nothing deduced -> probability-based guess.

    No state is kept between cycles besides the config and the rng.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(rng=rng)
        self.config = config or EngineConfig()

    def next_moves(self, board: Board) -> List[Move]:
        if board.done():
            return []

        model = scan_board(board, self.config)
        if model.zero_cell_moves:
            return model.zero_cell_moves

        if not model.has_frontier:
            guess = random_guess(model, self.config, self.rng)
            return [guess.move] if guess else []

        solver = CSPSolver(
            num_variables=len(model.variables),
            constraints=model.constraints,
            mine_budget=model.mine_budget,
            max_solutions=self.config.max_solutions,
        )
        solutions = solver.solve()

        deductions = extract_deductions(solutions, model.variables)
        if deductions:
            return deductions

        guess = choose_guess(model, solutions, self.config, self.rng)
        return [guess.move] if guess else []
