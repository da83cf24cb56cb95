"""
Move validator for TicTacToe.
Validates placements and battle-mode captures against a game snapshot.
"""

from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass

from .board import is_valid_move, in_range

if TYPE_CHECKING:
    from .game_state import GameSnapshot


@dataclass(frozen=True)
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


VALID = ValidationResult(is_valid=True)


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. The game must still be in progress
    2. A placement needs an empty cell in range 0-8
    3. A capture (battle mode only) needs an opponent mark that is
       neither locked nor the most recently placed piece
    """

    def validate_move(
        self,
        snapshot: "GameSnapshot",
        position: int,
    ) -> ValidationResult:
        """
        Validate an ordinary placement.

        Args:
            snapshot: Current game snapshot.
            position: Cell index (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if not snapshot.is_playing:
            return ValidationResult(False, "Game is already over!")

        if not in_range(position):
            return ValidationResult(False, f"Invalid position {position!r}. Must be 0-8.")

        if not is_valid_move(snapshot.board, position):
            occupant = snapshot.board[position]
            return ValidationResult(
                False,
                f"Cell {position} is already occupied by {occupant.value}",
            )

        return VALID

    def validate_capture(
        self,
        snapshot: "GameSnapshot",
        position: int,
    ) -> ValidationResult:
        """
        Validate a capture of an opponent's mark.

        Args:
            snapshot: Current game snapshot.
            position: Cell index (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if not snapshot.battle_mode:
            return ValidationResult(False, "Captures are only allowed in battle mode")

        if not snapshot.is_playing:
            return ValidationResult(False, "Game is already over!")

        if not in_range(position):
            return ValidationResult(False, f"Invalid position {position!r}. Must be 0-8.")

        opponent = snapshot.current_player.opposite()
        occupant = snapshot.board[position]

        if occupant is None:
            return ValidationResult(False, f"Cell {position} is empty, nothing to capture")

        if occupant != opponent:
            return ValidationResult(False, f"Cell {position} holds your own mark")

        if position in snapshot.locked_positions:
            return ValidationResult(False, f"Cell {position} is locked (already captured)")

        if position == snapshot.last_placed_position:
            return ValidationResult(
                False,
                f"Cell {position} was just placed and is protected this turn",
            )

        return VALID
