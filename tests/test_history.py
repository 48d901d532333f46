from reversi.game import BLACK, BOARD_SIZE, EMPTY, WHITE, create_initial_board, make_board
from reversi.history import GameHistory, GameResult


def make_result(black_score, white_score, black="alice", white="bob"):
    return GameResult(
        black_player=black,
        white_player=white,
        black_score=black_score,
        white_score=white_score,
        winner="black" if black_score > white_score else "white",
        date="2026-01-01T00:00:00+00:00",
        mode="pvp",
    )


def test_result_from_board():
    rows = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    rows[0][0] = BLACK
    rows[0][1] = BLACK
    rows[7][7] = WHITE
    result = GameResult.from_board("alice", "bob", make_board(rows), "pvc")
    assert (result.black_score, result.white_score) == (2, 1)
    assert result.winner == "black"
    assert result.mode == "pvc"
    assert result.date

    tie = GameResult.from_board("alice", "bob", create_initial_board(), "pvp")
    assert tie.winner == "tie"


def test_history_persists_across_instances(tmp_path):
    path = tmp_path / "history.json"
    history = GameHistory(path)
    history.record(make_result(40, 24))
    history.record(make_result(10, 54, black="carol"))

    reloaded = GameHistory(path)
    assert len(reloaded) == 2
    newest, oldest = list(reloaded)
    assert newest.black_player == "carol"
    assert newest.winner == "white"
    assert oldest.black_score == 40


def test_history_keeps_newest_entries(tmp_path):
    history = GameHistory(tmp_path / "history.json", limit=3)
    for i in range(5):
        history.record(make_result(i, 0))
    assert [r.black_score for r in history] == [4, 3, 2]


def test_corrupt_history_file_is_ignored(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    assert len(GameHistory(path)) == 0


def test_unreadable_history_path_is_ignored(tmp_path):
    # A directory where the file should be cannot be opened for reading.
    path = tmp_path / "history.json"
    path.mkdir()
    history = GameHistory(path)
    assert len(history) == 0
    # Writing fails too, but is only logged.
    history.record(make_result(40, 24))
    assert len(history) == 1


def test_clear(tmp_path):
    path = tmp_path / "history.json"
    history = GameHistory(path)
    history.record(make_result(40, 24))
    history.clear()
    assert len(history) == 0
    assert len(GameHistory(path)) == 0
