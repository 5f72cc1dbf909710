# minesolver/utils.py
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Tuple

from board import Board, OUT_OF_BOUNDS, UNPROBED


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Core data structures
# ---------------------------------------------------------------------------

ActionType = Literal["probe", "mark"]

Position = Tuple[int, int]


@dataclass(frozen=True)
class Move:
    """A single strategy action on the board."""
    action: ActionType
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


# ---------------------------------------------------------------------------
# Base strategy interface
# ---------------------------------------------------------------------------

class BaseStrategy(ABC):
    """
    Abstract base class for all strategies.

    Typical usage:
        strategy = SomeStrategy()
        strategy.play_game(board)
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    @abstractmethod
    def next_moves(self, board: Board) -> List[Move]:
        """
        Compute the moves for one decision cycle.
        This method MUST NOT modify the board.
        """
        raise NotImplementedError

    def play_step(self, board: Board) -> List[Move]:
        """
        Compute moves via next_moves(...) and apply them to the board.

        Moves whose cell is no longer unprobed (e.g. opened by an earlier
        flood fill in the same step) are skipped. Application stops as soon
        as the board reports the game is done.

        Returns the list of moves actually applied.
        """
        if board.done():
            return []

        applied: List[Move] = []
        for move in self.next_moves(board):
            if move.action not in ("probe", "mark"):
                raise ValueError(f"Unknown action: {move.action}")
            if board.done():
                break
            if not is_unprobed(board, move.row, move.col):
                continue

            if move.action == "probe":
                board.probe(move.row, move.col)
            else:
                board.mark(move.row, move.col)
            applied.append(move)

        return applied

    def play_game(self, board: Board, max_steps: Optional[int] = None) -> None:
        """
        Let this strategy play automatically until:
          - the game is over, or
          - it gets stuck (no moves), or
          - max_steps is reached (if provided).

        An unprobed board is opened in its middle first.
        """
        if not board.probed():
            board.probe(board.rows() // 2, board.columns() // 2)

        steps = 0
        while not board.done():
            moves = self.play_step(board)
            if not moves:
                logger.info("No moves available, stopping after %d steps", steps)
                break
            steps += 1
            if max_steps is not None and steps >= max_steps:
                break


# ---------------------------------------------------------------------------
# Board / neighborhood helpers
# ---------------------------------------------------------------------------

def is_unprobed(board: Board, row: int, col: int) -> bool:
    return board.look(row, col) == UNPROBED


def neighbor_positions(
    board: Board, row: int, col: int, kind: Optional[int] = None
) -> List[Position]:
    """
    Positions around (row, col) whose look() value equals `kind`.
    With kind=None every in-bounds neighbor is returned.
    """
    found: List[Position] = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            value = board.look(row + dr, col + dc)
            if value == OUT_OF_BOUNDS:
                continue
            if kind is None or value == kind:
                found.append((row + dr, col + dc))
    return found


def positions_within(
    board: Board, row: int, col: int, radius: int
) -> Iterable[Position]:
    """Yield in-bounds positions within Chebyshev distance `radius`, excluding (row, col)."""
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            if dr == 0 and dc == 0:
                continue
            if board.look(row + dr, col + dc) != OUT_OF_BOUNDS:
                yield (row + dr, col + dc)


def corner_positions(rows: int, cols: int) -> List[Position]:
    """The four grid corners (fewer on degenerate 1-wide grids), deduplicated."""
    corners: List[Position] = []
    for pos in ((0, 0), (0, cols - 1), (rows - 1, 0), (rows - 1, cols - 1)):
        if pos not in corners:
            corners.append(pos)
    return corners
