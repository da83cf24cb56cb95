"""
Win checker for TicTacToe.
Checks if a mark has completed a line or if the game is a draw.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, Mark


# All possible winning lines, checked in this order.
# When several lines are complete (only possible on an illegal board),
# the first one in this table wins.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class WinResult:
    """A completed line and the mark that completed it."""
    winner: Mark
    line: Tuple[int, int, int]


def evaluate_win(board: Board) -> Optional[WinResult]:
    """
    Find the first completed winning line.

    Args:
        board: The board to check.

    Returns:
        WinResult for the first complete line in WIN_LINES order,
        or None if no line is complete.
    """
    for line in WIN_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return WinResult(winner=board[a], line=line)
    return None


def check_winner(board: Board) -> Optional[Mark]:
    """Return the winning mark, or None if no one has won."""
    result = evaluate_win(board)
    return result.winner if result else None


def is_draw(board: Board) -> bool:
    """
    Check if the game is a draw.

    A draw is a full board with no completed line.
    """
    if evaluate_win(board) is not None:
        return False
    return all(cell is not None for cell in board)


def count_threats(board: Board, mark: Mark) -> int:
    """
    Count lines where a mark needs one more move to win.

    A threat is a line holding two of the mark and one empty cell.
    """
    threats = 0
    for line in WIN_LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(None) == 1:
            threats += 1
    return threats
