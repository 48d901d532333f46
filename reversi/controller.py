"""Turn sequencing for a game of Othello.

The controller owns no state of its own. Callers keep a :class:`GameState`
and pass it into :func:`submit_move`, getting a new state back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

from .game import (
    BLACK,
    Board,
    Position,
    Score,
    apply_move,
    color_name,
    create_initial_board,
    is_legal,
    is_terminal,
    legal_moves,
    opponent,
    score,
    winner,
)

logger = logging.getLogger(__name__)

IN_PROGRESS = "in_progress"
GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    board: Board
    to_move: int
    phase: str = IN_PROGRESS
    # Color that was just forced to pass, kept only so a UI can announce it.
    skipped: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.phase == IN_PROGRESS

    @property
    def score(self) -> Score:
        return score(self.board)

    @property
    def winner(self) -> Optional[str]:
        if self.active:
            return None
        return winner(self.board)


class MoveResult(NamedTuple):
    accepted: bool
    state: GameState


def new_game() -> GameState:
    return GameState(board=create_initial_board(), to_move=BLACK)


def resolve_turn(board: Board, mover: int) -> GameState:
    """Decide who plays next after ``mover`` has played onto ``board``."""
    if is_terminal(board):
        return GameState(board=board, to_move=mover, phase=GAME_OVER)
    nxt = opponent(mover)
    if legal_moves(board, nxt):
        return GameState(board=board, to_move=nxt)
    if legal_moves(board, mover):
        logger.info("%s has no legal move and passes", color_name(nxt))
        return GameState(board=board, to_move=mover, skipped=nxt)
    # Only reachable if is_terminal disagrees with the move lists.
    logger.warning("neither side can move but board was not terminal")
    return GameState(board=board, to_move=mover, phase=GAME_OVER)


def submit_move(state: GameState, pos: Position) -> MoveResult:
    """Play ``pos`` for the side to move.

    An illegal move, or any move after the game has ended, is rejected and
    the original state is returned unchanged.
    """
    if not state.active or not is_legal(state.board, pos, state.to_move):
        return MoveResult(False, state)
    board = apply_move(state.board, pos, state.to_move)
    nxt = resolve_turn(board, state.to_move)
    if not nxt.active:
        black, white = nxt.score
        logger.info("game over: black %d, white %d (%s)", black, white, nxt.winner)
    return MoveResult(True, nxt)


def current_state(state: GameState) -> Dict[str, Any]:
    """Plain snapshot of ``state`` suitable for JSON."""
    black, white = state.score
    return {
        "board": [list(row) for row in state.board],
        "to_move": color_name(state.to_move),
        "skipped": color_name(state.skipped) if state.skipped is not None else None,
        "phase": state.phase,
        "score": {"black": black, "white": white},
        "winner": state.winner,
        "legal_moves": [list(m) for m in legal_moves(state.board, state.to_move)]
        if state.active
        else [],
    }
