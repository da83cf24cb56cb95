"""
Game controller for TicTacToe.

Ties together:
- The game session (GameState)
- The AI opponent (AIPlayer)
- The scoreboard

In AI mode the human plays X and the AI answers synchronously, playing
as many moves as it is owed (two after the human captures one of its
pieces in battle mode).
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Union

from .ai_player import AIPlayer, Difficulty, MoveDecision
from .config import GameConfig
from .game_state import GameSnapshot, GameState, GameStatus
from .scoreboard import Scoreboard

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Who the human is playing against."""
    PVP = "pvp"    # Two humans at one board
    AI = "ai"      # Human (X) against the computer (O)


class GameController:
    """
    Orchestrates turn order between a human and the AI.

    Game flow in AI mode:
    1. Human (X) makes a move or capture
    2. If the move was accepted and the AI owns the turn, the AI moves
    3. The AI keeps moving while it still has turns remaining
    4. Finished games are recorded on the scoreboard
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scoreboard: Optional[Scoreboard] = None,
        ai_player: Optional[AIPlayer] = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Game settings (defaults to GameConfig()).
            scoreboard: Tally to record results in.
            ai_player: AI to use in AI mode (built from config if omitted).
        """
        self.config = config or GameConfig()
        self.scoreboard = scoreboard or Scoreboard(self.config.SCOREBOARD_PATH)

        self.game_mode = GameMode(self.config.DEFAULT_GAME_MODE)
        self.ai = ai_player or AIPlayer(self.config.DEFAULT_DIFFICULTY)

        self.state: Optional[GameState] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.new_session(self.config.BATTLE_MODE)

    # ==================== SESSION ====================

    def new_session(self, battle_mode: bool) -> GameState:
        """
        Replace the game session.

        Battle mode is fixed per session, so switching it means a new game.

        Args:
            battle_mode: Enable battle mode for the new session.

        Returns:
            The new GameState.
        """
        if self._unsubscribe is not None:
            self._unsubscribe()

        self.state = GameState(battle_mode=battle_mode)
        self._unsubscribe = self.state.subscribe(self._record_result)
        logger.info(
            "New %s session (battle_mode=%s)", self.game_mode.value, battle_mode
        )
        return self.state

    def set_game_mode(self, mode: Union[GameMode, str]):
        """Switch between PvP and AI mode. Starts a new game."""
        self.game_mode = GameMode(mode)
        self.state.reset_game()

    def set_ai_difficulty(self, difficulty: Union[Difficulty, str]):
        """Change the AI strength. Takes effect on the AI's next move."""
        self.ai = AIPlayer(difficulty, rng=self.ai.rng)
        logger.info("AI difficulty set to %s", self.ai.difficulty.value)

    def get_game_mode(self) -> GameMode:
        return self.game_mode

    def get_ai_difficulty(self) -> Difficulty:
        return self.ai.difficulty

    def get_state(self) -> GameSnapshot:
        return self.state.get_state()

    # ==================== MOVES ====================

    def is_ai_turn(self) -> bool:
        """Check if the AI owns the current turn."""
        snapshot = self.state.get_state()
        return (
            self.game_mode == GameMode.AI
            and snapshot.is_playing
            and snapshot.current_player == self.config.AI_MARK
        )

    def make_move(self, position: int, is_capture: bool = False) -> bool:
        """
        Make a human move, then let the AI answer if it is its turn.

        Any confirmation a front end wants before a capture must happen
        before calling this.

        Args:
            position: Cell index (0-8).
            is_capture: Capture an opponent mark (battle mode only).

        Returns:
            True if the human move was accepted.
        """
        if self.is_ai_turn():
            logger.debug("Ignoring human move at %r: it's the AI's turn", position)
            return False

        if not self.state.make_move(position, is_capture):
            return False

        if self.game_mode == GameMode.AI:
            self.play_ai_turns()

        return True

    def can_capture(self, position: int) -> bool:
        return self.state.can_capture(position)

    def play_ai_turns(self) -> int:
        """
        Let the AI move for as long as it owns the turn.

        Returns:
            Number of moves the AI made.
        """
        moves_made = 0

        while self.is_ai_turn():
            if self.config.AI_MOVE_DELAY_S > 0:
                time.sleep(self.config.AI_MOVE_DELAY_S)

            decision = self.get_ai_move()
            if decision is None:
                break

            if not self.state.make_move(decision.position, decision.is_capture):
                logger.warning("AI proposed an illegal move: %s", decision)
                break

            moves_made += 1

        return moves_made

    def get_ai_move(self) -> Optional[MoveDecision]:
        """Ask the AI for a move on the current board."""
        snapshot = self.state.get_state()
        return self.ai.get_move(
            snapshot.board,
            self.config.AI_MARK,
            battle_mode=snapshot.battle_mode,
            locked_positions=snapshot.locked_positions,
            last_placed_position=snapshot.last_placed_position,
        )

    def reset_game(self):
        self.state.reset_game()

    # ==================== SCORES ====================

    def _record_result(self, snapshot: GameSnapshot):
        if snapshot.game_status == GameStatus.PLAYING:
            return

        mode = self.game_mode.value
        if snapshot.game_status == GameStatus.DRAW:
            result = "draw"
        elif self.game_mode == GameMode.PVP:
            result = snapshot.winner.value
        elif snapshot.winner == self.config.HUMAN_MARK:
            result = "win"
        else:
            result = "loss"

        logger.info("Game over (%s): %s", mode, result)
        self.scoreboard.record_game(mode, result)

    def close(self):
        """Stop listening to the current session."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
