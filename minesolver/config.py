# minesolver/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Chebyshev distance inside which two numbered cells may share unprobed neighbors.
LONE_CELL_RADIUS = 2


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunable flags for one decision cycle.

    prioritize_corners : take a grid corner from the guess candidates when one is there
    good_guessing      : compare frontier vs. non-frontier safety before guessing;
                         when off, guesses are a prioritized random pick
    ignore_lone_cells  : skip isolated numbered cells as constraint sources and
                         charge their mines to the budget instead
    max_solutions      : stop enumerating after this many solutions (None = exhaustive);
                         a truncated search yields no deductions
    """
    prioritize_corners: bool = True
    good_guessing: bool = True
    ignore_lone_cells: bool = False
    max_solutions: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_solutions is not None and self.max_solutions <= 0:
            raise ValueError("max_solutions must be positive or None.")
