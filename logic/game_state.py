"""
Game state management for TicTacToe.
Tracks the board, current player, battle-mode turn accounting and
capture bookkeeping. All changes go through make_move() and reset_game().
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Tuple

from .board import Board, Mark, empty_board, apply_move, replace_mark, render_board
from .move_validator import MoveValidator
from .win_checker import evaluate_win, is_draw

logger = logging.getLogger(__name__)

# Turns owed to a player whose piece was just captured
CAPTURE_TURN_GRANT = 2


class GameStatus(Enum):
    """Where the game is in its lifecycle."""
    PLAYING = "playing"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class GameSnapshot:
    """
    A read-only copy of the game session.

    Snapshots are immutable, so handing one out can never change
    the session it came from.
    """

    board: Board = field(default_factory=empty_board)
    current_player: Mark = Mark.X
    game_status: GameStatus = GameStatus.PLAYING
    winner: Optional[Mark] = None
    winning_line: Optional[Tuple[int, int, int]] = None

    # Battle mode bookkeeping
    battle_mode: bool = False
    turns_remaining: int = 1
    last_placed_position: Optional[int] = None
    locked_positions: FrozenSet[int] = frozenset()
    last_capture_player: Optional[Mark] = None

    # Accepted moves since the last reset
    move_count: int = 0

    @property
    def is_playing(self) -> bool:
        return self.game_status == GameStatus.PLAYING

    @property
    def is_game_over(self) -> bool:
        return self.game_status != GameStatus.PLAYING


Listener = Callable[[GameSnapshot], None]


class GameState:
    """
    The authoritative TicTacToe game session.

    State machine:
        playing -> playing   (any accepted move that does not end the game)
        playing -> won       (a move completes a line)
        playing -> draw      (a move fills the board without a line)
        won/draw -> playing  (only via reset_game)

    In battle mode a player may capture an opponent's mark instead of
    placing a new one. A capture locks the cell for the rest of the game
    and hands the opponent two consecutive turns. The most recently
    placed piece cannot be captured on the very next turn.

    Battle mode is fixed when the session is created. To change it,
    create a new GameState.

    Every transition is guarded by one lock so the multi-field update
    is atomic to other threads. Listeners run after the lock is released.
    """

    def __init__(self, battle_mode: bool = False):
        """
        Initialize a new game session.

        Args:
            battle_mode: Enable captures and turn extension.
        """
        self._battle_mode = battle_mode
        self._state = GameSnapshot(battle_mode=battle_mode)
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self.validator = MoveValidator()

    @property
    def battle_mode(self) -> bool:
        """Whether battle mode is enabled for this session."""
        return self._battle_mode

    def get_state(self) -> GameSnapshot:
        """Get a read-only snapshot of the current game."""
        with self._lock:
            return self._state

    # ==================== TRANSITIONS ====================

    def make_move(self, position: int, is_capture: bool = False) -> bool:
        """
        Make a move for the current player.

        Args:
            position: Cell index (0-8).
            is_capture: Capture the opponent's mark at position
                instead of placing on an empty cell (battle mode only).

        Returns:
            True if the move was accepted. A rejected move returns False
            and leaves the session unchanged.
        """
        with self._lock:
            before = self._state
            if is_capture:
                after = self._capture(before, position)
            else:
                after = self._place(before, position)

            if after is None:
                return False

            self._state = after

        logger.debug(
            "%s %s %d -> status=%s next=%s turns=%d",
            before.current_player.value,
            "captured" if is_capture else "placed",
            position,
            after.game_status.value,
            after.current_player.value,
            after.turns_remaining,
        )
        self._notify(after)
        return True

    def _place(self, state: GameSnapshot, position: int) -> Optional[GameSnapshot]:
        """Apply an ordinary placement, or return None if it is illegal."""
        result = self.validator.validate_move(state, position)
        if not result.is_valid:
            logger.debug("Rejected move at %r: %s", position, result.error_message)
            return None

        board = apply_move(state.board, position, state.current_player)
        state = replace(
            state,
            board=board,
            last_placed_position=position,
            move_count=state.move_count + 1,
        )

        finished = self._finish_if_over(state)
        if finished is not None:
            return finished

        turns_remaining = state.turns_remaining - 1
        if turns_remaining <= 0:
            return replace(
                state,
                current_player=state.current_player.opposite(),
                turns_remaining=1,
            )
        return replace(state, turns_remaining=turns_remaining)

    def _capture(self, state: GameSnapshot, position: int) -> Optional[GameSnapshot]:
        """Apply a capture, or return None if it is illegal."""
        result = self.validator.validate_capture(state, position)
        if not result.is_valid:
            logger.debug("Rejected capture at %r: %s", position, result.error_message)
            return None

        capturer = state.current_player
        state = replace(
            state,
            board=replace_mark(state.board, position, capturer),
            locked_positions=state.locked_positions | {position},
            last_placed_position=position,
            last_capture_player=capturer,
            move_count=state.move_count + 1,
        )

        finished = self._finish_if_over(state)
        if finished is not None:
            return finished

        # The player who lost a piece gets two turns, whatever was left
        return replace(
            state,
            current_player=capturer.opposite(),
            turns_remaining=CAPTURE_TURN_GRANT,
        )

    @staticmethod
    def _finish_if_over(state: GameSnapshot) -> Optional[GameSnapshot]:
        """Return the terminal state if the board is won or drawn."""
        win = evaluate_win(state.board)
        if win is not None:
            return replace(
                state,
                game_status=GameStatus.WON,
                winner=win.winner,
                winning_line=win.line,
            )
        if is_draw(state.board):
            return replace(state, game_status=GameStatus.DRAW)
        return None

    def can_capture(self, position: int) -> bool:
        """
        Check if the current player may capture at a position.

        Args:
            position: Cell index (0-8).

        Returns:
            True if battle mode is on, the game is in progress and the
            cell holds an opponent mark that is neither locked nor the
            last placed piece.
        """
        with self._lock:
            return self.validator.validate_capture(self._state, position).is_valid

    def capturable_positions(self) -> List[int]:
        """Get every cell the current player may capture."""
        with self._lock:
            state = self._state
            return [
                i for i in range(len(state.board))
                if self.validator.validate_capture(state, i).is_valid
            ]

    def reset_game(self):
        """Start a new game with the same battle mode setting."""
        with self._lock:
            self._state = GameSnapshot(battle_mode=self._battle_mode)
            state = self._state

        logger.debug("Game reset (battle_mode=%s)", self._battle_mode)
        self._notify(state)

    # ==================== SUBSCRIPTIONS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new snapshot after every
        accepted move and every reset.

        Args:
            listener: Callable taking a GameSnapshot.

        Returns:
            A function that removes the listener. Calling it more than
            once is harmless.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: GameSnapshot):
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("Game state listener %r failed", listener)

    # ==================== DISPLAY ====================

    def render(self) -> str:
        """Render the board and game status as text."""
        state = self.get_state()
        lines = [render_board(state.board), ""]

        if state.game_status == GameStatus.WON:
            lines.append(f"{state.winner.value} WINS!")
        elif state.game_status == GameStatus.DRAW:
            lines.append("It's a DRAW!")
        else:
            lines.append(f"Current turn: {state.current_player.value}")
            if state.battle_mode:
                lines.append(f"Turns remaining: {state.turns_remaining}")
                if state.locked_positions:
                    locked = ", ".join(str(p) for p in sorted(state.locked_positions))
                    lines.append(f"Locked: {locked}")

        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())

    def __repr__(self) -> str:
        state = self.get_state()
        return (
            f"GameState(battle_mode={self._battle_mode}, "
            f"status={state.game_status.value}, "
            f"current_player={state.current_player.value})"
        )
