"""
Logic module for TicTacToe.
Handles the board rules, game state (with battle mode), AI opponent,
scoreboard and the controller that ties them together.
"""

__version__ = "1.0.0"

from .board import Mark, Board, empty_board, to_board, is_valid_move, apply_move, available_moves
from .win_checker import WIN_LINES, WinResult, evaluate_win, check_winner, is_draw
from .move_validator import MoveValidator, ValidationResult
from .game_state import GameState, GameSnapshot, GameStatus
from .ai_player import AIPlayer, Difficulty, MoveDecision
from .scoreboard import Scoreboard, Scores
from .config import GameConfig
from .game_controller import GameController, GameMode
