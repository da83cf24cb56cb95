"""
AI player for TicTacToe.
Chooses moves at three strength levels, from random play up to a
full Minimax search. In battle mode it also looks for captures that
win on the spot.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from .board import (
    CENTER,
    Board,
    Mark,
    apply_move,
    available_moves,
    positions_of,
    replace_mark,
    to_board,
    to_mark,
)
from .win_checker import check_winner

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"        # Random moves
    MEDIUM = "medium"    # Win, block, center, then random
    HARD = "hard"        # Full minimax


@dataclass(frozen=True)
class MoveDecision:
    """A move chosen by the AI."""
    position: int
    is_capture: bool = False


class AIPlayer:
    """
    An AI that plays TicTacToe.

    EASY picks any empty cell and never captures.
    MEDIUM takes a winning capture (battle mode), then a winning move,
    then blocks the opponent, then takes the center, otherwise plays
    randomly.
    HARD takes a winning capture (battle mode), otherwise plays the
    Minimax-optimal placement and never loses the non-capture game.

    The AI keeps no state between calls apart from its random number
    generator, and never modifies the board it is given.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the AI player.

        Args:
            difficulty: Strength level (Difficulty or "easy"/"medium"/"hard").
            rng: Random number generator for the randomized levels.
        """
        self.difficulty = Difficulty(difficulty)
        self.rng = rng or random.Random()

    def get_move(
        self,
        board: Sequence,
        mark: Union[Mark, str],
        battle_mode: bool = False,
        locked_positions: Iterable[int] = (),
        last_placed_position: Optional[int] = None,
    ) -> Optional[MoveDecision]:
        """
        Choose a move for the given mark.

        Args:
            board: Current board (9 cells of Mark, "X"/"O" or None).
            mark: The AI's mark.
            battle_mode: Whether captures are allowed.
            locked_positions: Cells that can no longer be captured.
            last_placed_position: The most recently placed cell, which
                cannot be captured this turn.

        Returns:
            MoveDecision, or None if the board is full.
        """
        board = to_board(board)
        mark = to_mark(mark)

        valid_moves = available_moves(board)
        if not valid_moves:
            return None

        if self.difficulty == Difficulty.EASY:
            return MoveDecision(self.rng.choice(valid_moves))

        if battle_mode:
            capture = self.find_winning_capture(
                board, mark, locked_positions, last_placed_position
            )
            if capture is not None:
                logger.debug("AI %s captures %d to win", mark.value, capture)
                return MoveDecision(capture, is_capture=True)

        if self.difficulty == Difficulty.MEDIUM:
            return MoveDecision(self._get_medium_move(board, mark, valid_moves))

        return MoveDecision(self.get_best_move(board, mark))

    def _get_medium_move(self, board: Board, mark: Mark, valid_moves: List[int]) -> int:
        """Win, block, center, then random."""
        winning_move = self.find_winning_move(board, mark)
        if winning_move is not None:
            return winning_move

        blocking_move = self.find_winning_move(board, mark.opposite())
        if blocking_move is not None:
            return blocking_move

        if CENTER in valid_moves:
            return CENTER

        return self.rng.choice(valid_moves)

    @staticmethod
    def find_winning_move(board: Board, mark: Mark) -> Optional[int]:
        """Find the lowest empty cell that completes a line for mark."""
        for move in available_moves(board):
            if check_winner(apply_move(board, move, mark)) == mark:
                return move
        return None

    @staticmethod
    def find_winning_capture(
        board: Board,
        mark: Mark,
        locked_positions: Iterable[int] = (),
        last_placed_position: Optional[int] = None,
    ) -> Optional[int]:
        """
        Find the lowest opponent cell whose capture completes a line for mark.

        Cells that are locked or were just placed are skipped.
        """
        locked = set(locked_positions)
        for position in positions_of(board, mark.opposite()):
            if position in locked or position == last_placed_position:
                continue
            if check_winner(replace_mark(board, position, mark)) == mark:
                return position
        return None

    # ==================== MINIMAX ====================

    def get_best_move(self, board: Board, mark: Mark) -> Optional[int]:
        """
        Get the Minimax-optimal placement.

        Ties go to the lowest cell index.

        Args:
            board: Current board.
            mark: The mark to move.

        Returns:
            Cell index of the best move, or None if no moves available.
        """
        valid_moves = available_moves(board)

        if not valid_moves:
            return None

        # Special case: if only one move, just take it
        if len(valid_moves) == 1:
            return valid_moves[0]

        stats = {"positions": 0}
        best_score = float('-inf')
        best_move = valid_moves[0]

        for move in valid_moves:
            new_board = apply_move(board, move, mark)
            score = self._minimax(new_board, mark, 1, False, stats)

            # Strictly greater keeps the lowest index among equal scores
            if score > best_score:
                best_score = score
                best_move = move

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %s)",
            stats["positions"], best_move, best_score,
        )
        return best_move

    def _minimax(
        self,
        board: Board,
        ai_mark: Mark,
        depth: int,
        is_maximizing: bool,
        stats: dict,
        alpha: float = float('-inf'),
        beta: float = float('inf'),
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Board to evaluate.
            ai_mark: The mark being maximized.
            depth: Plies played since the root.
            is_maximizing: True if it is ai_mark's turn.
            stats: Counters for logging.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position.
        """
        stats["positions"] += 1

        winner = check_winner(board)
        if winner == ai_mark:
            return WIN_SCORE - depth  # Win (prefer faster wins)
        elif winner is not None:
            return depth - WIN_SCORE  # Loss (prefer slower losses)

        valid_moves = available_moves(board)
        if not valid_moves:
            return 0  # Draw

        if is_maximizing:
            max_score = float('-inf')
            for move in valid_moves:
                new_board = apply_move(board, move, ai_mark)
                score = self._minimax(new_board, ai_mark, depth + 1, False, stats, alpha, beta)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            opponent = ai_mark.opposite()
            for move in valid_moves:
                new_board = apply_move(board, move, opponent)
                score = self._minimax(new_board, ai_mark, depth + 1, True, stats, alpha, beta)
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score

    def suggest_move(
        self,
        board: Sequence,
        mark: Union[Mark, str],
        battle_mode: bool = False,
        locked_positions: Iterable[int] = (),
        last_placed_position: Optional[int] = None,
    ) -> str:
        """
        Get a human-readable move suggestion.

        Returns:
            A string describing the suggested move.
        """
        decision = self.get_move(
            board, mark, battle_mode, locked_positions, last_placed_position
        )

        if decision is None:
            return "No moves available!"

        if decision.is_capture:
            return f"Capture cell {decision.position}"

        return f"Place {to_mark(mark).value} at cell {decision.position}"

    def __repr__(self) -> str:
        return f"AIPlayer(difficulty={self.difficulty.value})"
