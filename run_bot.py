#!/usr/bin/env python3
"""Ask the computer player for its move in a saved position."""
import argparse
import json
import logging
from pathlib import Path
from typing import Tuple

from reversi.bots import positional_bonus, select_move
from reversi.game import (
    BLACK,
    EMPTY,
    WHITE,
    Board,
    color_name,
    count_flips,
    legal_moves,
    make_board,
)

logger = logging.getLogger("run_bot")


def load_position(path: Path) -> Tuple[Board, int]:
    """Load a board and side to move from ``path``.

    The file may either contain a single position or a history list as
    produced by the server. In the latter case the last entry is used.
    """
    with path.open() as f:
        data = json.load(f)
    if isinstance(data, dict) and "history" in data:
        state = data["history"][-1]
    else:
        state = data
    current = state["current"]
    if current not in (BLACK, WHITE) or isinstance(current, bool):
        raise ValueError(f"current must be {BLACK} (black) or {WHITE} (white), not {current!r}")
    rows = state["board"]
    if any(cell not in (EMPTY, BLACK, WHITE) or isinstance(cell, bool) for row in rows for cell in row):
        raise ValueError("board cells must be 0, 1 or -1")
    return make_board(rows), current


def main() -> None:
    parser = argparse.ArgumentParser(description="Suggest the computer's move for a saved position")
    parser.add_argument("file", type=Path, help="Path to saved position JSON file")
    parser.add_argument(
        "--verbose", action="store_true", help="Show how each candidate was scored"
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        board, current = load_position(args.file)
    except (OSError, ValueError, KeyError, TypeError, AssertionError) as exc:
        parser.error(f"cannot load {args.file}: {exc!r}")
    for pos in legal_moves(board, current):
        logger.debug(
            "%s: flips %d, bonus %d",
            pos,
            count_flips(board, pos, current),
            positional_bonus(board, pos),
        )
    move = select_move(board, current)
    if move:
        print(f"Next move for {color_name(current)}: {move[0]} {move[1]}")
    else:
        print("No valid moves available.")


if __name__ == "__main__":
    main()
