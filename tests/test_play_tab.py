import pytest

from tictactoe.game.session import Mode, SessionController
from tictactoe.game.types import Mark
from tictactoe.ui import play_tab
from tictactoe.ui.play_tab import _apply_human_move, _new_game, _undo_move


@pytest.fixture(autouse=True)
def no_delay(monkeypatch):
    monkeypatch.setattr(play_tab, "COMPUTER_MOVE_DELAY", 0)


def test_new_game_as_x():
    session = SessionController()
    result = _new_game("Human vs Computer", "X (moves first)", session)
    assert session.human_mark is Mark.X
    assert len(session.game.moves) == 0
    assert "You are X" in result[4]


def test_new_game_as_o_computer_goes_first():
    session = SessionController()
    result = _new_game("Human vs Computer", "O", session)
    assert session.human_mark is Mark.O
    assert len(session.game.moves) == 1
    assert session.game.moves[0].mark is Mark.X
    assert session.game.current_player is Mark.O
    assert "You are O" in result[4]


def test_new_game_two_players():
    session = SessionController()
    result = _new_game("Human vs Human", "X (moves first)", session)
    assert session.mode is Mode.VS_HUMAN
    assert "Two players" in result[4]


def test_human_move_then_computer_reply():
    session = SessionController()
    updates = list(_apply_human_move("B2", session))
    # First update shows the human move, second the computer reply
    assert len(updates) == 2
    assert "Computer is thinking" in updates[0][1]
    assert updates[0][2] == [["1", "You", "X", "B2"]]
    assert len(updates[1][2]) == 2
    assert updates[1][1] == "Your turn (X)"
    assert all(u[4] == "" for u in updates)


def test_invalid_cell_text():
    session = SessionController()
    updates = list(_apply_human_move("Z9", session))
    assert len(updates) == 1
    assert "Invalid cell" in updates[0][1]
    assert session.game.moves == []


def test_occupied_cell_message():
    session = SessionController(mode=Mode.VS_HUMAN)
    list(_apply_human_move("4", session))
    updates = list(_apply_human_move("4", session))
    assert updates[-1][1] == "B2 is already taken."


def test_two_player_move_has_single_update():
    session = SessionController(mode=Mode.VS_HUMAN)
    updates = list(_apply_human_move("0", session))
    assert len(updates) == 1
    assert updates[0][1] == "O to move"


def test_undo():
    session = SessionController()
    list(_apply_human_move("4", session))
    result = _undo_move(session)
    assert session.game.moves == []
    assert len(result) == 4


def test_undo_nothing():
    session = SessionController()
    result = _undo_move(session)
    assert result[1] == "Nothing to undo."


def test_non_ascii_digit_is_invalid_cell():
    session = SessionController()
    updates = list(_apply_human_move("B²", session))
    assert len(updates) == 1
    assert "Invalid cell" in updates[0][1]
    assert session.game.moves == []
