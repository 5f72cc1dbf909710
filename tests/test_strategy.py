# tests/test_strategy.py

import random

import pytest

from board import UNPROBED, Board
from minesolver import (
    CSPSolver,
    CSPStrategy,
    EngineConfig,
    Move,
    extract_deductions,
    scan_board,
)


def test_zero_cell_probes_all_its_neighbors_and_nothing_else(make_board):
    """A revealed 0 probes every unprobed neighbor and nothing more."""
    board = make_board([
        "...*",
        ".o..",
        "....",
    ])
    # (1,1) has no mine around it
    strategy = CSPStrategy(rng=random.Random(0))

    moves = strategy.next_moves(board)

    assert moves == [
        Move("probe", 0, 0), Move("probe", 0, 1), Move("probe", 0, 2),
        Move("probe", 1, 0), Move("probe", 1, 2),
        Move("probe", 2, 0), Move("probe", 2, 1), Move("probe", 2, 2),
    ]

    strategy.play_step(board)

    for r, c in [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]:
        assert board.look(r, c) >= 0
    assert board.count_marks() == 0
    assert board.look(0, 3) == UNPROBED


def test_saturated_cell_marks_all_its_neighbors(make_board):
    """A cell whose count equals its unprobed neighbors marks them all."""
    board = make_board(["*o*"])

    moves = CSPStrategy().play_step(board)

    assert moves == [Move("mark", 0, 0), Move("mark", 0, 2)]
    assert board.mines_minus_marks() == 0


def test_satisfied_marks_make_every_frontier_cell_safe(make_board):
    """Marks that already meet every count leave the frontier safe."""
    board = make_board([
        "F...",
        "o...",
        "....",
    ])

    moves = CSPStrategy().next_moves(board)

    assert moves == [
        Move("probe", 0, 1), Move("probe", 1, 1),
        Move("probe", 2, 0), Move("probe", 2, 1),
    ]


def test_three_by_three_endgame_is_won(make_board):
    """The last safe cell of a small endgame is probed and wins."""
    board = make_board([
        "Foo",
        "ooo",
        "oo.",
    ])

    moves = CSPStrategy().play_step(board)

    assert moves == [Move("probe", 2, 2)]
    assert board.done() is True
    assert board.won() is True


def test_last_cell_deduced_safe_by_search(make_board):
    """A cell safe in the only solution is probed."""
    board = make_board([
        "Fo",
        "o.",
    ])

    moves = CSPStrategy().play_step(board)

    assert moves == [Move("probe", 1, 1)]
    assert board.won() is True


def test_mixed_frontier_guesses_the_safer_corner(make_board):
    """Off-frontier cells win when uniformly safer than the best frontier cell."""
    board = make_board([
        "o..",
        ".*.",
    ])
    # frontier cells are 2/3 safe, the two cells off the frontier 4/5 safe

    moves = CSPStrategy(rng=random.Random(1)).next_moves(board)

    assert moves == [Move("probe", 0, 2)]


def test_unprobed_board_is_guessed_at_a_corner():
    """With no frontier the guess goes to a corner."""
    board = Board.from_layout(4, 4, [(1, 1)])

    moves = CSPStrategy().next_moves(board)

    assert moves == [Move("probe", 0, 0)]


def test_finished_board_gets_no_moves():
    """A finished game yields no moves."""
    board = Board.from_layout(2, 2, [(0, 0)])
    board.probe(0, 0)
    assert board.done()

    strategy = CSPStrategy()
    assert strategy.next_moves(board) == []
    assert strategy.play_step(board) == []


def test_truncated_search_guesses_instead_of_deducing(make_board):
    """A sample cut short by max_solutions proves nothing, so the cycle guesses."""
    # Two worlds: mines at (0,2) or at (0,0) and (0,4); the first one found
    # alone would claim both ends safe.
    board = make_board(["*o.o*"])
    strategy = CSPStrategy(config=EngineConfig(max_solutions=1))

    moves = strategy.next_moves(board)

    assert moves == [Move("probe", 0, 0)]


def test_cap_equal_to_the_solution_count_still_deduces(make_board):
    """A single-solution frontier under max_solutions=1 is complete and deduced."""
    board = make_board(["*o*"])
    strategy = CSPStrategy(config=EngineConfig(max_solutions=1))

    moves = strategy.play_step(board)

    assert moves == [Move("mark", 0, 0), Move("mark", 0, 2)]
    assert board.mines_minus_marks() == 0


def test_invalid_config_is_rejected():
    """A non-positive solution cap is refused."""
    with pytest.raises(ValueError):
        EngineConfig(max_solutions=0)


@pytest.mark.parametrize("ignore_lone_cells", [False, True])
@pytest.mark.parametrize("seed", range(15))
def test_deductions_agree_with_the_hidden_layout(seed, ignore_lone_cells):
    """Every deduction and mark matches the real mine layout."""
    config = EngineConfig(ignore_lone_cells=ignore_lone_cells)
    board = Board(rows=6, cols=6, num_mines=5, rng=random.Random(seed))
    strategy = CSPStrategy(config=config, rng=random.Random(seed))
    board.probe(3, 3)

    for _ in range(100):
        if board.done():
            break

        model = scan_board(board, config)
        if not model.zero_cell_moves and model.has_frontier:
            solutions = CSPSolver(
                len(model.variables), model.constraints, model.mine_budget
            ).solve()
            for move in extract_deductions(solutions, model.variables):
                is_mine = board.get_cell(move.row, move.col).is_mine
                assert is_mine == (move.action == "mark"), move

        if not strategy.play_step(board):
            break

    for cell in board.iter_cells():
        if cell.is_marked:
            assert cell.is_mine


@pytest.mark.parametrize("seed", range(5))
def test_play_game_runs_to_completion(seed):
    """Full games end in a win or a loss."""
    board = Board(rows=8, cols=8, num_mines=8, rng=random.Random(seed))

    CSPStrategy(rng=random.Random(seed)).play_game(board, max_steps=500)

    assert board.probed()
    assert board.done()
