from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple


# Values returned by Board.look() for cells that are not revealed numbers.
BOOM = -1
UNPROBED = -2
MARKED = -3
OUT_OF_BOUNDS = -4


class CellState(Enum):
    """Possible visible states of a cell."""
    UNPROBED = auto()
    PROBED = auto()
    MARKED = auto()


@dataclass
class Cell:
    """Represents a single square on the mine map."""
    row: int
    col: int
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.UNPROBED

    @property
    def is_probed(self) -> bool:
        return self.state == CellState.PROBED

    @property
    def is_marked(self) -> bool:
        return self.state == CellState.MARKED

    def look(self) -> int:
        if self.state == CellState.MARKED:
            return MARKED
        if self.state == CellState.UNPROBED:
            return UNPROBED
        if self.is_mine:
            return BOOM
        return self.adjacent_mines

    def display_char(self, reveal_mines: bool = False) -> str:
        """
        Character for this cell.

        - 'U' : unprobed
        - 'O' : probed, 0 adjacent mines
        - '1'..'8' : probed, that many adjacent mines
        - 'F' : marked
        - 'B' : bomb (when probed or reveal_mines=True)
        """
        if reveal_mines and self.is_mine:
            return "B"

        if self.state == CellState.MARKED:
            return "F"
        if self.state == CellState.UNPROBED:
            return "U"

        if self.is_mine:
            return "B"

        return "O" if self.adjacent_mines == 0 else str(self.adjacent_mines)


class Board:
    """
    Mine map consumed by the decision engine.

    The engine only talks to the board through rows(), columns(), look(),
    probed(), done(), won(), probe(), mark() and mines_minus_marks().

    Design:
    - Random boards place mines *after* the first probe so that the first
      probe is always safe.
    - Boards built with from_layout() have their mines fixed up front.
    - Coordinates are 0-indexed: row in [0, rows-1], col in [0, cols-1].
    """

    def __init__(
        self,
        rows: int = 16,
        cols: int = 16,
        num_mines: int = 40,
        rng: Optional[random.Random] = None,
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("Board dimensions must be positive.")
        if num_mines < 0 or num_mines >= rows * cols:
            raise ValueError("Number of mines must be between 0 and rows*cols-1.")

        self._rows = rows
        self._cols = cols
        self.num_mines = num_mines
        self.rng = rng or random.Random()

        self.mines_placed: bool = False
        self.game_over: bool = False
        self.win: bool = False

        self.grid: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

    @classmethod
    def from_layout(
        cls, rows: int, cols: int, mines: Iterable[Tuple[int, int]]
    ) -> "Board":
        """Build a board whose mines sit exactly at the given positions."""
        positions = set(mines)
        board = cls(rows=rows, cols=cols, num_mines=len(positions))
        for r, c in positions:
            board.get_cell(r, c).is_mine = True
        board._compute_adjacent_mine_counts()
        board.mines_placed = True
        return board

    # ------------------------------------------------------------------
    # Engine-facing interface
    # ------------------------------------------------------------------
    def rows(self) -> int:
        return self._rows

    def columns(self) -> int:
        return self._cols

    def look(self, row: int, col: int) -> int:
        """Visible value of a cell; OUT_OF_BOUNDS for any position off the grid."""
        if not self.in_bounds(row, col):
            return OUT_OF_BOUNDS
        return self.grid[row][col].look()

    def probed(self) -> bool:
        """True once at least one cell has been probed."""
        return any(cell.is_probed for cell in self.iter_cells())

    def done(self) -> bool:
        return self.game_over

    def won(self) -> bool:
        return self.win

    def mines_minus_marks(self) -> int:
        return self.num_mines - self.count_marks()

    # ------------------------------------------------------------------
    # Core board / cell helpers
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def get_cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is out of bounds.")
        return self.grid[row][col]

    def neighbors(self, row: int, col: int) -> Iterable[Cell]:
        """Yield all neighboring cells (up to 8)."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    yield self.grid[nr][nc]

    # ------------------------------------------------------------------
    # Mine placement and counts
    # ------------------------------------------------------------------
    def _place_mines(self, first_probe: Tuple[int, int]) -> None:
        """
        Randomly place mines on the board, making sure the first probe
        is always safe.
        """
        all_positions = [
            (r, c)
            for r in range(self._rows)
            for c in range(self._cols)
            if (r, c) != first_probe
        ]

        mine_positions = set(self.rng.sample(all_positions, self.num_mines))
        for r, c in mine_positions:
            self.grid[r][c].is_mine = True

        self._compute_adjacent_mine_counts()
        self.mines_placed = True

    def _compute_adjacent_mine_counts(self) -> None:
        """Calculate the number of mines around each cell."""
        for cell in self.iter_cells():
            if cell.is_mine:
                cell.adjacent_mines = 0
                continue
            cell.adjacent_mines = sum(
                1 for n in self.neighbors(cell.row, cell.col) if n.is_mine
            )

    # ------------------------------------------------------------------
    # Game actions: probe / mark cells
    # ------------------------------------------------------------------
    def probe(self, row: int, col: int) -> int:
        """
        Probe the cell at (row, col) and return its new look() value.

        - On the first probe of a random board, this triggers mine placement.
        - Probing a mine ends the game as a loss.
        - Probing a cell with 0 adjacent mines flood fills its region.
        - Probing a marked or already probed cell is a no-op.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is out of bounds.")
        if self.game_over:
            return self.look(row, col)

        if not self.mines_placed:
            self._place_mines(first_probe=(row, col))

        cell = self.grid[row][col]
        if cell.is_marked or cell.is_probed:
            return cell.look()

        if cell.is_mine:
            cell.state = CellState.PROBED
            self.game_over = True
            self.win = False
            return BOOM

        self._flood_fill_probe(row, col)

        if self._all_safe_cells_probed():
            self.game_over = True
            self.win = True

        return cell.look()

    def _flood_fill_probe(self, start_row: int, start_col: int) -> None:
        """
        Probe a region of safe cells with 0 adjacent mines, plus their
        boundary of numbered cells.
        """
        stack: List[Tuple[int, int]] = [(start_row, start_col)]

        while stack:
            row, col = stack.pop()
            cell = self.grid[row][col]

            if cell.is_probed or cell.is_marked or cell.is_mine:
                continue

            cell.state = CellState.PROBED

            if cell.adjacent_mines == 0:
                for neighbor in self.neighbors(row, col):
                    if (
                        not neighbor.is_probed
                        and not neighbor.is_marked
                        and not neighbor.is_mine
                    ):
                        stack.append((neighbor.row, neighbor.col))

    def mark(self, row: int, col: int) -> int:
        """
        Mark the given cell as a mine. Only unprobed cells can be marked;
        marking a marked cell leaves it marked.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is out of bounds.")

        cell = self.grid[row][col]
        if not self.game_over and cell.state == CellState.UNPROBED:
            cell.state = CellState.MARKED
        return cell.look()

    def unmark(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is out of bounds.")

        cell = self.grid[row][col]
        if not self.game_over and cell.state == CellState.MARKED:
            cell.state = CellState.UNPROBED
        return cell.look()

    # ------------------------------------------------------------------
    # Queries (useful for strategies & tests)
    # ------------------------------------------------------------------
    def _all_safe_cells_probed(self) -> bool:
        """True iff every non-mine cell is probed."""
        return all(cell.is_mine or cell.is_probed for cell in self.iter_cells())

    def iter_cells(self) -> Iterable[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self.grid:
            for cell in row:
                yield cell

    def count_marks(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.is_marked)

    def mine_positions(self) -> List[Tuple[int, int]]:
        return [(cell.row, cell.col) for cell in self.iter_cells() if cell.is_mine]

    # ------------------------------------------------------------------
    # Rendering helpers (terminal front-end can just print(board))
    # ------------------------------------------------------------------
    def to_display_grid(self, reveal_mines: bool = False) -> List[List[str]]:
        return [
            [
                self.grid[r][c].display_char(
                    reveal_mines=reveal_mines or self.game_over
                )
                for c in range(self._cols)
            ]
            for r in range(self._rows)
        ]

    def __str__(self) -> str:
        return self.render()

    def render(self, reveal_mines: bool = False) -> str:
        """
        Render the board as a multiline string, e.g.:

        ____________________
        [U][U][2][U][O][U]
        [U][U][2][U][U][U]
        ____________________
        """
        grid = self.to_display_grid(reveal_mines=reveal_mines)
        border = "_" * (self._cols * 3 + 2)

        lines = [border]
        for r in range(self._rows):
            lines.append("".join(f"[{grid[r][c]}]" for c in range(self._cols)))
        lines.append(border)
        return "\n".join(lines)
