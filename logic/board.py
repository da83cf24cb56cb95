"""
Board representation for TicTacToe.

The board is a tuple of 9 cells, row-major:

     0 | 1 | 2
    ---+---+---
     3 | 4 | 5
    ---+---+---
     6 | 7 | 8

Each cell is a Mark or None (empty). Boards are immutable values:
every move produces a new tuple.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union


class Mark(Enum):
    """The two players' marks. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the opposite mark."""
        return Mark.O if self == Mark.X else Mark.X


Cell = Optional[Mark]
Board = Tuple[Cell, ...]

BOARD_CELLS = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)


def empty_board() -> Board:
    """Return a board with all 9 cells empty."""
    return (None,) * BOARD_CELLS


def to_mark(value: Union[Mark, str, None]) -> Cell:
    """
    Convert a mark-like value to a Mark.

    Accepts Mark members, "X"/"O" strings (any case) or None.

    Raises:
        ValueError: If the value is not a known mark.
    """
    if value is None or isinstance(value, Mark):
        return value
    if isinstance(value, str):
        try:
            return Mark(value.upper())
        except ValueError:
            pass
    raise ValueError(f"Unknown mark: {value!r}")


def to_board(cells: Iterable[Union[Mark, str, None]]) -> Board:
    """
    Normalize a sequence of cells into a Board.

    Args:
        cells: 9 values, each a Mark, "X"/"O" or None.

    Returns:
        The board as a tuple of Mark/None.

    Raises:
        ValueError: If there are not exactly 9 cells or a cell is unknown.
    """
    board = tuple(to_mark(cell) for cell in cells)
    if len(board) != BOARD_CELLS:
        raise ValueError(f"Board must have {BOARD_CELLS} cells, got {len(board)}")
    return board


def in_range(position) -> bool:
    # bool is an int subclass, but True/False are not positions
    return (
        isinstance(position, int)
        and not isinstance(position, bool)
        and 0 <= position < BOARD_CELLS
    )


def is_valid_move(board: Board, position: int) -> bool:
    """
    Check if a mark can be placed at a position.

    Args:
        board: The board.
        position: Cell index (0-8).

    Returns:
        True if the position is in range and the cell is empty.
    """
    return in_range(position) and board[position] is None


def apply_move(board: Board, position: int, mark: Union[Mark, str]) -> Board:
    """
    Place a mark on the board.

    Invalid moves are a no-op: the input board is returned unchanged.

    Args:
        board: The board.
        position: Cell index (0-8).
        mark: The mark to place.

    Returns:
        A new board with the mark placed, or the original board.
    """
    try:
        mark = to_mark(mark)
    except ValueError:
        return board

    if mark is None or not is_valid_move(board, position):
        return board

    return board[:position] + (mark,) + board[position + 1:]


def replace_mark(board: Board, position: int, mark: Mark) -> Board:
    """Overwrite an occupied cell with a mark (used for captures)."""
    return board[:position] + (mark,) + board[position + 1:]


def available_moves(board: Board) -> List[int]:
    """Return the indices of empty cells, in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def positions_of(board: Board, mark: Mark) -> List[int]:
    """Return the indices occupied by a mark, in ascending order."""
    return [i for i, cell in enumerate(board) if cell == mark]


def render_board(board: Board) -> str:
    """
    Render the board as text.

    Empty cells show their index so players know what to type.
    """
    rows = []
    for row in range(3):
        cells = []
        for col in range(3):
            index = row * 3 + col
            cell = board[index]
            cells.append(f" {cell.value if cell else index} ")
        rows.append("|".join(cells))
    return "\n---+---+---\n".join(rows)
