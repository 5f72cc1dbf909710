# minesolver/model.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from board import Board, MARKED, UNPROBED
from .config import EngineConfig, LONE_CELL_RADIUS
from .utils import Move, Position, neighbor_positions, positions_within


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constraint model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FrontierVariable:
    """An unprobed cell next to at least one revealed number."""
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(frozen=True)
class Constraint:
    """
    A constraint derived from a revealed numbered cell.

    row, col  : position of the numbered cell
    variables : indices into ConstraintModel.variables (its unprobed neighbors)
    required  : number on the cell minus its marked neighbors
    """
    row: int
    col: int
    variables: Tuple[int, ...]
    required: int


@dataclass
class ConstraintModel:
    """Everything one decision cycle knows about the board."""
    rows: int
    cols: int
    variables: List[FrontierVariable] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    mine_budget: int = 0
    all_unprobed: List[Position] = field(default_factory=list)
    # Neighbors of lone cells; their mines are already charged to mine_budget.
    skipped: Set[Position] = field(default_factory=set)
    zero_cell_moves: List[Move] = field(default_factory=list)

    @property
    def has_frontier(self) -> bool:
        return bool(self.variables)

    def frontier_positions(self) -> Set[Position]:
        return {v.position for v in self.variables}

    def guess_pool(self) -> List[Position]:
        """Unprobed cells whose mines are still covered by mine_budget."""
        return [pos for pos in self.all_unprobed if pos not in self.skipped]

    def non_frontier_cells(self) -> List[Position]:
        frontier = self.frontier_positions()
        return [pos for pos in self.guess_pool() if pos not in frontier]


# ---------------------------------------------------------------------------
# Board scanner
# ---------------------------------------------------------------------------

def _has_unprobed_neighbor(board: Board, row: int, col: int) -> bool:
    return bool(neighbor_positions(board, row, col, UNPROBED))


def is_lone_cell(board: Board, row: int, col: int) -> bool:
    """
    True when no other revealed cell within LONE_CELL_RADIUS still touches
    an unprobed cell, so no other constraint can share this cell's unknowns.
    """
    for r, c in positions_within(board, row, col, LONE_CELL_RADIUS):
        if board.look(r, c) >= 0 and _has_unprobed_neighbor(board, r, c):
            return False
    return True


def scan_board(board: Board, config: EngineConfig) -> ConstraintModel:
    """
    Read the board once in row-major order and build the constraint model.

    A revealed 0 with unprobed neighbors stops the scan: the returned model
    carries those neighbors in zero_cell_moves and nothing else needs solving.
    """
    model = ConstraintModel(
        rows=board.rows(),
        cols=board.columns(),
        mine_budget=board.mines_minus_marks(),
    )
    index_of: Dict[Position, int] = {}

    for row in range(model.rows):
        for col in range(model.cols):
            value = board.look(row, col)

            if value == UNPROBED:
                model.all_unprobed.append((row, col))
                continue
            if value < 0:
                continue

            unprobed = neighbor_positions(board, row, col, UNPROBED)
            if not unprobed:
                continue

            if value == 0:
                model.zero_cell_moves = [Move("probe", r, c) for r, c in unprobed]
                logger.debug(
                    "Zero cell at (%d, %d): probing %d neighbors",
                    row, col, len(unprobed),
                )
                return model

            remaining = value - len(neighbor_positions(board, row, col, MARKED))

            if (
                config.ignore_lone_cells
                and 0 < remaining < len(unprobed)
                and is_lone_cell(board, row, col)
            ):
                model.mine_budget -= remaining
                model.skipped.update(unprobed)
                logger.debug("Skipping lone cell at (%d, %d)", row, col)
                continue

            indices: List[int] = []
            for pos in unprobed:
                if pos not in index_of:
                    index_of[pos] = len(model.variables)
                    model.variables.append(FrontierVariable(*pos))
                indices.append(index_of[pos])

            model.constraints.append(
                Constraint(row=row, col=col, variables=tuple(indices), required=remaining)
            )

    logger.debug(
        "Scanned board: %d frontier variables, %d constraints, budget %d",
        len(model.variables), len(model.constraints), model.mine_budget,
    )
    return model
