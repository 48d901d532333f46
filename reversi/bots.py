"""Computer player for Othello."""
from __future__ import annotations

from typing import Callable, Dict, Optional

from .game import BOARD_SIZE, EMPTY, Board, Position, count_flips, legal_moves

BotStrategy = Callable[[Board, int], Optional[Position]]

POSITION_WEIGHTS: Dict[str, int] = {
    "corner": 100,
    "edge": 20,
    "near_corner": -50,
}

_LAST = BOARD_SIZE - 1

CORNERS = {(0, 0), (0, _LAST), (_LAST, 0), (_LAST, _LAST)}

# Each corner with the three cells that touch it.
CORNER_NEIGHBORS = {
    (0, 0): ((0, 1), (1, 0), (1, 1)),
    (0, _LAST): ((0, _LAST - 1), (1, _LAST), (1, _LAST - 1)),
    (_LAST, 0): ((_LAST - 1, 0), (_LAST, 1), (_LAST - 1, 1)),
    (_LAST, _LAST): ((_LAST - 1, _LAST), (_LAST, _LAST - 1), (_LAST - 1, _LAST - 1)),
}


def next_to_empty_corner(board: Board, pos: Position) -> bool:
    for (cr, cc), neighbors in CORNER_NEIGHBORS.items():
        if board[cr][cc] == EMPTY and pos in neighbors:
            return True
    return False


def positional_bonus(board: Board, pos: Position) -> int:
    """Static weight of ``pos``: corners, then edges, then X/C squares."""
    row, col = pos
    if pos in CORNERS:
        return POSITION_WEIGHTS["corner"]
    if row in (0, _LAST) or col in (0, _LAST):
        return POSITION_WEIGHTS["edge"]
    if next_to_empty_corner(board, pos):
        return POSITION_WEIGHTS["near_corner"]
    return 0


def evaluate(board: Board, pos: Position, color: int) -> int:
    return count_flips(board, pos, color) + positional_bonus(board, pos)


def select_move(board: Board, color: int) -> Optional[Position]:
    """Pick the move with the best flips-plus-position score.

    ``None`` means ``color`` has no legal move and must pass. Ties keep the
    first candidate in scan order, so the choice is deterministic.
    """
    best_move: Optional[Position] = None
    best_val = 0
    for pos in legal_moves(board, color):
        val = evaluate(board, pos, color)
        if best_move is None or val > best_val:
            best_val = val
            best_move = pos
    return best_move


BOTS: Dict[str, BotStrategy] = {
    "Computer": select_move,
}
