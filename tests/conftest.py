# tests/conftest.py
from __future__ import annotations

from typing import Callable, List

import pytest

from board import Board, CellState


@pytest.fixture
def make_board() -> Callable[[List[str]], Board]:
    """
    Build a board from a picture, one string per row:

      '.' unprobed safe cell     '*' unprobed mine
      'o' probed safe cell       'F' marked mine
    """
    def _make(picture: List[str]) -> Board:
        mines = [
            (r, c)
            for r, line in enumerate(picture)
            for c, ch in enumerate(line)
            if ch in "*F"
        ]
        board = Board.from_layout(len(picture), len(picture[0]), mines)
        for r, line in enumerate(picture):
            for c, ch in enumerate(line):
                if ch == "o":
                    board.get_cell(r, c).state = CellState.PROBED
                elif ch == "F":
                    board.get_cell(r, c).state = CellState.MARKED
        return board

    return _make
