"""FastAPI server for playing Othello against a friend or the computer."""
from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import asdict
from typing import Dict, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from .bots import BOTS
from .controller import GameState, current_state, new_game, submit_move
from .game import BLACK, Position, color_name, opponent, parse_color
from .history import GameHistory, GameResult

logger = logging.getLogger(__name__)

# Pause before the computer replies so a person can follow the turns.
COMPUTER_TURN_DELAY = 1.0
COMPUTER_NAME = "Computer"

app = FastAPI()


class CreateRoom(BaseModel):
    mode: str = "pvc"
    player_color: str = "black"
    black_name: str = "Black"
    white_name: str = "White"


class Room:
    """One game plus the people watching it."""

    def __init__(
        self,
        name: str,
        mode: str = "pvc",
        player_color: int = BLACK,
        black_name: str = "Black",
        white_name: str = "White",
        bot: str = COMPUTER_NAME,
    ) -> None:
        self.name = name
        self.mode = mode
        self.state: GameState = new_game()
        # Color played by the computer, ``None`` for two humans.
        self.computer: Optional[int] = opponent(player_color) if mode == "pvc" else None
        self.bot = bot
        self.names: Dict[str, str] = {"black": black_name, "white": white_name}
        if self.computer is not None:
            self.names[color_name(self.computer)] = COMPUTER_NAME
        self.last_computer_move: Optional[Position] = None
        self.connections: Set[WebSocket] = set()
        self.computer_task: Optional[asyncio.Task] = None

    def computer_to_move(self) -> bool:
        return self.state.active and self.state.to_move == self.computer

    def restart(self) -> None:
        if self.computer_task:
            self.computer_task.cancel()
            self.computer_task = None
        self.state = new_game()
        self.last_computer_move = None

    def snapshot(self) -> dict:
        last = self.last_computer_move
        return {
            "mode": self.mode,
            "players": self.names,
            "computer": color_name(self.computer) if self.computer is not None else None,
            "last_computer_move": list(last) if last is not None else None,
            "state": current_state(self.state),
        }


class RoomManager:
    def __init__(
        self,
        history_path: Optional[str] = None,
        computer_delay: Optional[float] = None,
    ) -> None:
        self.rooms: Dict[str, Room] = {}
        self.history = GameHistory(history_path)
        self.computer_delay = (
            COMPUTER_TURN_DELAY if computer_delay is None else computer_delay
        )
        self._counter = 1

    def create_game(
        self,
        mode: str = "pvc",
        player_color: str = "black",
        black_name: str = "Black",
        white_name: str = "White",
    ) -> str:
        """Create a new room and return its id."""
        if mode not in ("pvp", "pvc"):
            raise ValueError(f"unknown mode {mode!r}")
        game_id = str(self._counter)
        self._counter += 1
        self.rooms[game_id] = Room(
            f"Game {game_id}",
            mode=mode,
            player_color=parse_color(player_color),
            black_name=black_name or "Black",
            white_name=white_name or "White",
        )
        logger.info("created room %s (%s)", game_id, mode)
        return game_id

    def get(self, game_id: str) -> Room:
        room = self.rooms.get(game_id)
        if room is None:
            raise HTTPException(status_code=404, detail="Unknown game")
        return room

    async def broadcast(self, game_id: str, message: dict) -> None:
        room = self.rooms.get(game_id)
        if room is None:
            return
        for connection in list(room.connections):
            try:
                await connection.send_text(json.dumps(message))
            except Exception as exc:
                logger.warning("dropping connection in room %s: %r", game_id, exc)
                room.connections.discard(connection)

    async def send_update(self, game_id: str) -> None:
        room = self.rooms[game_id]
        await self.broadcast(game_id, {"type": "update", **room.snapshot()})
        if not room.state.active:
            black, white = room.state.score
            await self.broadcast(
                game_id,
                {
                    "type": "game_over",
                    "score": {"black": black, "white": white},
                    "winner": room.state.winner,
                    "players": room.names,
                },
            )

    def play(self, game_id: str, pos: Position, by_computer: bool = False) -> bool:
        """Play ``pos`` for whoever is to move. Returns ``False`` if rejected."""
        room = self.rooms[game_id]
        if room.computer_to_move() and not by_computer:
            return False
        result = submit_move(room.state, pos)
        if not result.accepted:
            return False
        mover = color_name(room.state.to_move)
        room.state = result.state
        room.last_computer_move = pos if by_computer else None
        logger.debug("room %s: %s played %s", game_id, mover, pos)
        if not room.state.active:
            self.record_result(game_id)
        return True

    def record_result(self, game_id: str) -> None:
        room = self.rooms[game_id]
        result = GameResult.from_board(
            room.names["black"], room.names["white"], room.state.board, room.mode
        )
        self.history.record(result)
        logger.info(
            "room %s finished %d-%d", game_id, result.black_score, result.white_score
        )

    def schedule_computer(self, game_id: str) -> None:
        """Start the computer's reply if it is the computer's turn."""
        room = self.rooms.get(game_id)
        if room is None or not room.computer_to_move():
            return
        if room.computer_task and not room.computer_task.done():
            return
        room.computer_task = asyncio.create_task(self._computer_move(game_id, room.state))

    async def _computer_move(self, game_id: str, scheduled_for: GameState) -> None:
        await asyncio.sleep(self.computer_delay)
        room = self.rooms.get(game_id)
        # The game may have been restarted while we were waiting.
        if room is None or room.state is not scheduled_for:
            return
        room.computer_task = None
        strategy = BOTS[room.bot]
        move = strategy(room.state.board, room.state.to_move)
        # The controller never leaves a side to move without a legal move.
        if move is None or not self.play(game_id, move, by_computer=True):
            logger.error("computer could not move in room %s", game_id)
            return
        await self.send_update(game_id)
        # After a forced skip the computer is to move again.
        self.schedule_computer(game_id)


manager = RoomManager(history_path=os.environ.get("REVERSI_HISTORY"))


@app.get("/rooms")
async def list_rooms() -> dict:
    return {
        "rooms": [
            {"id": gid, "name": room.name, "mode": room.mode, "players": room.names}
            for gid, room in manager.rooms.items()
        ]
    }


@app.post("/create")
async def create_room(request: CreateRoom) -> dict:
    try:
        gid = manager.create_game(
            request.mode, request.player_color, request.black_name, request.white_name
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"id": gid, "name": manager.rooms[gid].name}


@app.get("/rooms/{game_id}")
async def get_room(game_id: str) -> dict:
    room = manager.get(game_id)
    return {"id": game_id, "name": room.name, **room.snapshot()}


@app.get("/history")
async def get_history() -> dict:
    return {"games": [asdict(r) for r in manager.history]}


@app.delete("/history")
async def clear_history() -> dict:
    manager.history.clear()
    return {"games": []}


def _parse_move(msg: dict) -> Position:
    row, col = msg["row"], msg["col"]
    if not isinstance(row, int) or not isinstance(col, int):
        raise ValueError("row and col must be integers")
    return row, col


@app.websocket("/ws/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    await websocket.accept()
    room = manager.rooms.get(game_id)
    if room is None:
        await websocket.send_text(json.dumps({"type": "error", "message": "Unknown game"}))
        await websocket.close()
        return
    room.connections.add(websocket)
    await websocket.send_text(
        json.dumps({"type": "init", "id": game_id, "bots": list(BOTS.keys()), **room.snapshot()})
    )
    # A computer playing black opens the game.
    manager.schedule_computer(game_id)
    try:
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
                action = msg.get("action")
            except (json.JSONDecodeError, AttributeError):
                await websocket.send_text(json.dumps({"type": "error", "message": "Bad message"}))
                continue
            if action == "move":
                try:
                    pos = _parse_move(msg)
                except (KeyError, ValueError):
                    await websocket.send_text(json.dumps({"type": "error", "message": "Bad move"}))
                    continue
                if manager.play(game_id, pos):
                    await manager.send_update(game_id)
                    # Let the player see their move before the computer responds.
                    manager.schedule_computer(game_id)
                else:
                    await websocket.send_text(json.dumps({"type": "error", "message": "Invalid move"}))
            elif action == "restart":
                room.restart()
                await manager.send_update(game_id)
                manager.schedule_computer(game_id)
            elif action == "name":
                color = msg.get("color")
                name = msg.get("name", "")
                if color in ("black", "white") and color != _computer_seat(room) and name:
                    room.names[color] = name
                    await manager.broadcast(game_id, {"type": "players", "players": room.names})
                else:
                    await websocket.send_text(json.dumps({"type": "error", "message": "Cannot rename"}))
            else:
                await websocket.send_text(json.dumps({"type": "error", "message": "Unknown action"}))
    except WebSocketDisconnect:
        room.connections.discard(websocket)


def _computer_seat(room: Room) -> Optional[str]:
    return color_name(room.computer) if room.computer is not None else None


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
