# main.py

from __future__ import annotations

import logging

from board import Board
from minesolver import CSPStrategy, EngineConfig


# ---------------------------------------------------------------------------
# Helper functions for user input
# ---------------------------------------------------------------------------

def ask_yes_no(prompt: str, default: bool = True) -> bool:
    default_str = "Y/n" if default else "y/N"
    while True:
        answer = input(f"{prompt} [{default_str}]: ").strip().lower()
        if not answer:
            return default
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False
        print("Please enter 'y' or 'n'.")


def ask_int(prompt: str, minimum: int, maximum: int, default: int) -> int:
    full_prompt = f"{prompt} (min={minimum}, max={maximum}, default={default}): "
    while True:
        raw = input(full_prompt).strip()
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            print("Please enter an integer.")
            continue
        if not (minimum <= value <= maximum):
            print(f"Value must be between {minimum} and {maximum}.")
            continue
        return value


# ---------------------------------------------------------------------------
# Game setup
# ---------------------------------------------------------------------------

def configure_board() -> Board:
    """Ask the user for board size and mine count, with good defaults."""
    print("=== Board Configuration ===")
    use_default = not ask_yes_no("Do you want to customize the board?", default=False)

    if use_default:
        rows, cols, mines = 16, 16, 40
    else:
        rows = ask_int("Number of rows", minimum=2, maximum=50, default=16)
        cols = ask_int("Number of columns", minimum=2, maximum=50, default=16)

        max_mines = rows * cols - 1  # at least one safe cell for the first probe
        default_mines = min(max(1, (rows * cols) // 6), max_mines)
        mines = ask_int("Number of mines", minimum=1, maximum=max_mines, default=default_mines)

    print(f"\nCreating a {rows}x{cols} board with {mines} mines...\n")
    return Board(rows=rows, cols=cols, num_mines=mines)


def configure_engine() -> EngineConfig:
    print("=== Engine Configuration ===")
    return EngineConfig(
        prioritize_corners=ask_yes_no("Prefer corners when guessing?", default=True),
        good_guessing=ask_yes_no("Compare probabilities before guessing?", default=True),
        ignore_lone_cells=ask_yes_no("Skip isolated numbered cells?", default=False),
    )


# ---------------------------------------------------------------------------
# AI game loop
# ---------------------------------------------------------------------------

def run_ai_game(board: Board, config: EngineConfig) -> None:
    print("=== Minesweeper (AI Mode) ===")
    strategy = CSPStrategy(config=config)

    # Same opening as BaseStrategy.play_game, inlined so each step can be printed.
    first_r, first_c = board.rows() // 2, board.columns() // 2
    board.probe(first_r, first_c)
    print(f"\nAfter the opening probe at ({first_r + 1}, {first_c + 1}):")
    print(board.render())

    step = 0
    while not board.done():
        moves = strategy.play_step(board)
        if not moves:
            print("\nAI is stuck and cannot find a move.")
            break

        step += 1
        summary = ", ".join(f"{m.action} ({m.row + 1}, {m.col + 1})" for m in moves)
        print(f"\nAfter AI step {step}: {summary}")
        print(board.render())
        print(f"Mines remaining (estimate): {board.mines_minus_marks()}")

    if board.done():
        if board.won():
            print("\nAI probed all safe cells. AI wins!")
        else:
            print("\nAI hit a mine. Game over!")

    print("\nFinal board (mines revealed):")
    print(board.render(reveal_mines=True))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    verbose = ask_yes_no("Show engine diagnostics?", default=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    board = configure_board()
    config = configure_engine()
    run_ai_game(board, config)


if __name__ == "__main__":
    main()
