"""
Tests for the console front end.
"""

import io

import pytest

import main
from logic.board import Mark
from logic.config import GameConfig


def run_console(commands, **settings):
    settings.setdefault("AI_MOVE_DELAY_S", 0)
    config = GameConfig(**settings)
    output = io.StringIO()
    game = main.ConsoleGame(config, io.StringIO(commands), output)
    game.start()
    return game, output.getvalue()


def test_pvp_game_to_a_win():
    game, text = run_console("0\n3\n1\n4\n2\ns\nq\n")
    assert game.controller.get_state().winner == Mark.X
    assert "Threats: X 1, O 0" in text
    assert "X wins!" in text
    assert "PvP: X 1" in text


def test_ai_game_answers_moves():
    game, text = run_console("4\nq\n", DEFAULT_GAME_MODE="ai", DEFAULT_DIFFICULTY="hard")
    state = game.controller.get_state()
    assert state.board[4] == Mark.X
    assert state.move_count == 2
    assert "AI difficulty: hard" in text


def test_capture_command():
    game, text = run_console("0\n1\n2\nc0\nq\n", BATTLE_MODE=True)
    state = game.controller.get_state()
    assert state.board[0] == Mark.O
    assert state.turns_remaining == 2
    assert "Capturable: 0" in text
    assert "Turns remaining: 2" in text


def test_illegal_input_is_reported():
    game, text = run_console("4\n4\nc2\nxyz\nq\n", BATTLE_MODE=True)
    assert "Move '4' is not allowed." in text
    assert "Cell 2 can't be captured right now." in text
    assert "Unknown command: 'xyz'" in text
    assert game.controller.get_state().move_count == 1


def test_reset_and_hint():
    game, text = run_console("4\nr\nh\nq\n")
    assert game.controller.get_state().move_count == 0
    assert "Hint: Place X at cell 4" in text


def test_stops_at_end_of_input():
    game, _ = run_console("4\n")
    assert not game.is_running


def test_main_runs_console(monkeypatch, capsys):
    monkeypatch.setattr(GameConfig, "AI_MOVE_DELAY_S", 0)
    monkeypatch.setattr("sys.stdin", io.StringIO("4\nq\n"))

    assert main.main(["--mode", "ai", "--difficulty", "easy", "--battle"]) == 0

    out = capsys.readouterr().out
    assert "Battle mode: ON" in out
    assert "Goodbye!" in out


def test_main_rejects_unknown_difficulty():
    with pytest.raises(SystemExit):
        main.main(["--difficulty", "impossible"])
