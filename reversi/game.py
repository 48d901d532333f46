"""Othello board rules.

Boards are immutable: a tuple of rows, each a tuple of cells. Every function
here is pure and returns new boards instead of changing the one it is given,
so speculative evaluation never disturbs a board that is still in use.
"""
from __future__ import annotations

from typing import List, NamedTuple, Sequence, Tuple

BOARD_SIZE = 8

# Cell values: 0 empty, 1 black, -1 white
EMPTY = 0
BLACK = 1
WHITE = -1

Position = Tuple[int, int]
Board = Tuple[Tuple[int, ...], ...]

DIRECTIONS: Tuple[Position, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class IllegalMove(ValueError):
    """Raised when a disc is placed where it flips nothing."""

    def __init__(self, position: Position, color: int) -> None:
        super().__init__(f"illegal move for {color_name(color)} at {position}")
        self.position = position
        self.color = color


class Score(NamedTuple):
    black: int
    white: int


def opponent(color: int) -> int:
    return -color


def color_name(color: int) -> str:
    return "black" if color == BLACK else "white"


def parse_color(name: str) -> int:
    if name == "black":
        return BLACK
    if name == "white":
        return WHITE
    raise ValueError(f"unknown color {name!r}")


def make_board(rows: Sequence[Sequence[int]]) -> Board:
    """Freeze ``rows`` into a board, checking that it is 8x8."""
    board = tuple(tuple(int(cell) for cell in row) for row in rows)
    assert len(board) == BOARD_SIZE and all(len(row) == BOARD_SIZE for row in board), (
        "board must be %dx%d" % (BOARD_SIZE, BOARD_SIZE)
    )
    return board


def create_initial_board() -> Board:
    rows = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    mid = BOARD_SIZE // 2
    # Starting pieces
    rows[mid - 1][mid - 1] = WHITE
    rows[mid][mid] = WHITE
    rows[mid - 1][mid] = BLACK
    rows[mid][mid - 1] = BLACK
    return make_board(rows)


def inside(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def captures(board: Board, pos: Position, color: int) -> List[Position]:
    """Return the opponent discs a disc of ``color`` at ``pos`` would flip.

    Each direction is scanned on its own: a run of opponent discs counts only
    when it is closed by a disc of ``color``. Hitting the edge or an empty
    cell first leaves that direction with nothing to flip. The target cell
    itself is not examined, see :func:`is_legal`.
    """
    row, col = pos
    other = opponent(color)
    captured = []
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        run = []
        while inside(r, c) and board[r][c] == other:
            run.append((r, c))
            r += dr
            c += dc
        if run and inside(r, c) and board[r][c] == color:
            captured.extend(run)
    return captured


def count_flips(board: Board, pos: Position, color: int) -> int:
    return len(captures(board, pos, color))


def is_legal(board: Board, pos: Position, color: int) -> bool:
    row, col = pos
    if not inside(row, col) or board[row][col] != EMPTY:
        return False
    return bool(captures(board, pos, color))


def legal_moves(board: Board, color: int) -> List[Position]:
    """Legal positions for ``color`` in row-major order."""
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if is_legal(board, (row, col), color)
    ]


def apply_move(board: Board, pos: Position, color: int) -> Board:
    """Return a new board with ``color`` played at ``pos``.

    Raises :class:`IllegalMove` when the move is not legal; ``board`` is left
    untouched either way.
    """
    if not is_legal(board, pos, color):
        raise IllegalMove(pos, color)
    rows = [list(row) for row in board]
    row, col = pos
    rows[row][col] = color
    for r, c in captures(board, pos, color):
        rows[r][c] = color
    return make_board(rows)


def score(board: Board) -> Score:
    black = sum(cell == BLACK for row in board for cell in row)
    white = sum(cell == WHITE for row in board for cell in row)
    return Score(black, white)


def empty_count(board: Board) -> int:
    return sum(cell == EMPTY for row in board for cell in row)


def is_terminal(board: Board) -> bool:
    """True when neither side can move or the board is full."""
    if empty_count(board) == 0:
        return True
    return not legal_moves(board, BLACK) and not legal_moves(board, WHITE)


def winner(board: Board) -> str:
    """Return ``"black"``, ``"white"`` or ``"tie"`` by disc count."""
    black, white = score(board)
    if black > white:
        return "black"
    if white > black:
        return "white"
    return "tie"
