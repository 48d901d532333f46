"""Log of completed games kept in a JSON file."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .game import Board, score, winner

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


@dataclass(frozen=True)
class GameResult:
    black_player: str
    white_player: str
    black_score: int
    white_score: int
    winner: str  # "black", "white" or "tie"
    date: str
    mode: str  # "pvp" or "pvc"

    @classmethod
    def from_board(
        cls,
        black_player: str,
        white_player: str,
        board: Board,
        mode: str,
        date: Optional[str] = None,
    ) -> "GameResult":
        black, white = score(board)
        return cls(
            black_player=black_player,
            white_player=white_player,
            black_score=black,
            white_score=white,
            winner=winner(board),
            date=date or datetime.now(timezone.utc).isoformat(),
            mode=mode,
        )


class GameHistory:
    """Completed games, newest first, capped at ``limit`` entries."""

    def __init__(self, path: Optional[str] = None, limit: int = HISTORY_LIMIT) -> None:
        self.path = (
            Path(path) if path is not None else Path(__file__).with_name("history.json")
        )
        self.limit = limit
        self.results: List[GameResult] = self._load()

    def _load(self) -> List[GameResult]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return [GameResult(**item) for item in data][: self.limit]
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError, TypeError) as exc:
            logger.warning("ignoring unreadable history file %s: %s", self.path, exc)
            return []

    def _save(self) -> None:
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump([asdict(r) for r in self.results], f)
        except OSError as exc:
            logger.warning("could not write history file %s: %s", self.path, exc)

    def record(self, result: GameResult) -> None:
        self.results.insert(0, result)
        del self.results[self.limit:]
        self._save()

    def clear(self) -> None:
        self.results = []
        self._save()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)
