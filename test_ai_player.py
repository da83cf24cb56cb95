"""
Tests for the TicTacToe AI player.
"""

import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from logic.ai_player import AIPlayer, Difficulty, MoveDecision
from logic.board import Mark, available_moves, empty_board, to_board
from logic.win_checker import check_winner


ALL_DIFFICULTIES = list(Difficulty)


def make_ai(difficulty, seed=0):
    return AIPlayer(difficulty, rng=random.Random(seed))


cells = st.sampled_from([None, Mark.X, Mark.O])
boards_with_space = (
    st.lists(cells, min_size=9, max_size=9)
    .map(tuple)
    .filter(lambda b: None in b)
)


def test_difficulty_from_string():
    assert AIPlayer("hard").difficulty == Difficulty.HARD
    with pytest.raises(ValueError):
        AIPlayer("impossible")


@pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
def test_full_board_has_no_move(difficulty):
    board = to_board(["X", "O", "X", "X", "O", "O", "O", "X", "X"])
    assert make_ai(difficulty).get_move(board, "O") is None


@pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
def test_does_not_modify_board(difficulty):
    board = ["X", None, None, None, "O", None, None, None, None]
    original = list(board)
    make_ai(difficulty).get_move(board, "X", battle_mode=True)
    assert board == original


@settings(max_examples=50, deadline=None)
@given(boards_with_space, st.sampled_from(ALL_DIFFICULTIES), st.sampled_from([Mark.X, Mark.O]))
def test_always_returns_a_legal_placement(board, difficulty, mark):
    decision = make_ai(difficulty).get_move(board, mark)
    assert isinstance(decision, MoveDecision)
    assert not decision.is_capture
    assert decision.position in available_moves(board)


@settings(max_examples=50, deadline=None)
@given(boards_with_space, st.sampled_from(ALL_DIFFICULTIES), st.sampled_from([Mark.X, Mark.O]))
def test_battle_decision_is_placement_or_opponent_cell(board, difficulty, mark):
    decision = make_ai(difficulty).get_move(board, mark, battle_mode=True)
    if decision.is_capture:
        assert board[decision.position] == mark.opposite()
    else:
        assert decision.position in available_moves(board)


@pytest.mark.parametrize("difficulty", [Difficulty.MEDIUM, Difficulty.HARD])
def test_takes_winning_row(difficulty):
    board = ["O", "O", None, "X", "X", None, None, None, None]
    decision = make_ai(difficulty).get_move(board, "O")
    assert decision == MoveDecision(2, is_capture=False)


@pytest.mark.parametrize("difficulty", [Difficulty.MEDIUM, Difficulty.HARD])
@pytest.mark.parametrize("board, block", [
    (["X", "X", None, None, "O", None, None, None, None], 2),
    (["X", None, None, "X", "O", None, None, None, None], 6),
    ([None, "O", "X", None, "X", None, None, None, None], 6),
    (["O", None, "X", None, None, "X", None, None, None], 8),
])
def test_blocks_opponent_win(difficulty, board, block):
    decision = make_ai(difficulty).get_move(board, "O")
    assert decision.position == block


def test_medium_takes_center():
    board = ["X", None, None, None, None, None, None, None, None]
    assert make_ai(Difficulty.MEDIUM).get_move(board, "O").position == 4


def test_medium_random_fallback_is_seeded():
    board = ["X", None, None, None, "O", None, None, None, None]
    first = make_ai(Difficulty.MEDIUM, seed=7).get_move(board, "X")
    second = make_ai(Difficulty.MEDIUM, seed=7).get_move(board, "X")
    assert first == second
    assert first.position in available_moves(to_board(board))


def test_easy_never_captures():
    # Capturing 6 would win for O, but easy only places
    board = ["O", "X", None, "O", "X", None, "X", None, None]
    for seed in range(20):
        decision = make_ai(Difficulty.EASY, seed).get_move(board, "O", battle_mode=True)
        assert not decision.is_capture


def test_hard_opening_is_corner_or_center():
    decision = make_ai(Difficulty.HARD).get_move(empty_board(), Mark.X)
    assert decision.position in {0, 2, 4, 6, 8}


def test_hard_is_deterministic():
    board = ["X", None, None, None, None, None, None, None, None]
    moves = {make_ai(Difficulty.HARD, seed).get_move(board, "O") for seed in range(5)}
    assert moves == {MoveDecision(4)}


def test_hard_prefers_lowest_index_among_equal_moves():
    # Both 5 and 7 win immediately for O
    board = ["X", "O", "X", "O", "O", None, None, None, "X"]
    assert make_ai(Difficulty.HARD).get_move(board, "O").position == 5


@pytest.mark.parametrize("difficulty", [Difficulty.MEDIUM, Difficulty.HARD])
def test_takes_winning_capture_in_battle_mode(difficulty):
    # O owns 0 and 3; capturing X on 6 completes the first column
    board = ["O", "X", None, "O", "X", None, "X", None, None]
    decision = make_ai(difficulty).get_move(board, "O", battle_mode=True)
    assert decision == MoveDecision(6, is_capture=True)


@pytest.mark.parametrize("difficulty", [Difficulty.MEDIUM, Difficulty.HARD])
def test_winning_capture_skips_locked_and_last_placed(difficulty):
    board = ["O", "X", None, "O", "X", None, "X", None, None]
    ai = make_ai(difficulty)

    locked = ai.get_move(board, "O", battle_mode=True, locked_positions={6})
    assert not locked.is_capture

    protected = ai.get_move(board, "O", battle_mode=True, last_placed_position=6)
    assert not protected.is_capture


def test_no_capture_outside_battle_mode():
    board = ["O", "X", None, "O", "X", None, "X", None, None]
    decision = make_ai(Difficulty.HARD).get_move(board, "O")
    assert not decision.is_capture


def test_hard_never_loses_to_random_play():
    rng = random.Random(3)
    hard = make_ai(Difficulty.HARD)

    for _ in range(20):
        board = empty_board()
        current = Mark.X
        while check_winner(board) is None and None in board:
            if current == Mark.O:
                position = hard.get_move(board, Mark.O).position
            else:
                position = rng.choice(available_moves(board))
            board = board[:position] + (current,) + board[position + 1:]
            current = current.opposite()
        assert check_winner(board) != Mark.X


def test_suggest_move():
    ai = make_ai(Difficulty.HARD)
    board = ["O", "O", None, "X", "X", None, None, None, None]
    assert ai.suggest_move(board, "O") == "Place O at cell 2"

    capture_board = ["O", "X", None, "O", "X", None, "X", None, None]
    assert ai.suggest_move(capture_board, "O", battle_mode=True) == "Capture cell 6"

    full = ["X", "O", "X", "X", "O", "O", "O", "X", "X"]
    assert ai.suggest_move(full, "O") == "No moves available!"
