"""
Console front end for TicTacToe.

This script ties together:
- Logic (game state, battle mode, AI opponent)
- Scoreboard (win/loss/draw tally)
- A simple text interface

Run this script to play TicTacToe in the terminal!
"""

import logging
import sys
from typing import Optional, TextIO

from logic.ai_player import Difficulty
from logic.config import GameConfig
from logic.game_controller import GameController, GameMode
from logic.game_state import GameSnapshot
from logic.win_checker import count_threats


HELP_TEXT = """Commands:
  0-8   place your mark on that cell
  c<N>  capture the opponent's mark on cell N (battle mode)
  h     show a hint
  r     start a new game
  s     show scores
  q     quit"""


class ConsoleGame:
    """
    Text interface for TicTacToe.

    Game flow:
    1. The board is printed after every change
    2. The player types a cell number (or c<N> to capture)
    3. In AI mode the computer answers straight away
    4. Repeat until someone wins or it's a draw, then 'r' to play again
    """

    def __init__(
        self,
        config: GameConfig,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
    ):
        """
        Initialize the console game.

        Args:
            config: Game settings.
            input_stream: Where commands are read from.
            output: Where the board is printed.
        """
        self.config = config
        self.input = input_stream or sys.stdin
        self.output = output or sys.stdout
        self.controller = GameController(config)
        self.controller.state.subscribe(self._on_state_change)
        self.is_running = False

    def _print(self, *args):
        print(*args, file=self.output)

    def _on_state_change(self, snapshot: GameSnapshot):
        self.show_board(snapshot)

    def show_board(self, snapshot: Optional[GameSnapshot] = None):
        """Print the board, status and capturable cells."""
        snapshot = snapshot or self.controller.get_state()
        self._print()
        self._print(self.controller.state.render())

        if snapshot.is_playing and snapshot.battle_mode:
            capturable = self.controller.state.capturable_positions()
            if capturable:
                self._print(f"Capturable: {', '.join(str(p) for p in capturable)}")

        if snapshot.is_playing:
            threats = ", ".join(
                f"{mark.value} {count_threats(snapshot.board, mark)}"
                for mark in (self.config.HUMAN_MARK, self.config.AI_MARK)
            )
            self._print(f"Threats: {threats}")

        if snapshot.is_game_over:
            self._show_game_result(snapshot)

    def _show_game_result(self, snapshot: GameSnapshot):
        """Show the final game result."""
        self._print("\n" + "=" * 40)
        self._print("   GAME OVER!")
        if snapshot.winner is None:
            self._print("   It's a draw! Good game!")
        elif self.controller.game_mode == GameMode.AI:
            if snapshot.winner == self.config.HUMAN_MARK:
                self._print("   Congratulations! You won!")
            else:
                self._print("   The computer wins! Better luck next time!")
        else:
            self._print(f"   {snapshot.winner.value} wins!")
        self._print("=" * 40)
        self._print("Type 'r' for a new game or 'q' to quit.")

    def show_scores(self):
        """Print the scoreboard."""
        scores = self.controller.scoreboard.get_scores()
        self._print("\n=== Scores ===")
        self._print(
            f"  PvP: X {scores.pvp.x_wins}  O {scores.pvp.o_wins}  "
            f"Draws {scores.pvp.draws}"
        )
        self._print(
            f"  vs AI: Wins {scores.ai.wins}  Losses {scores.ai.losses}  "
            f"Draws {scores.ai.draws}"
        )

    def show_hint(self):
        """Print the AI's suggestion for the side to move."""
        snapshot = self.controller.get_state()
        if snapshot.is_game_over:
            self._print("Game is over.")
            return

        self._print(
            "Hint: "
            + self.controller.ai.suggest_move(
                snapshot.board,
                snapshot.current_player,
                battle_mode=snapshot.battle_mode,
                locked_positions=snapshot.locked_positions,
                last_placed_position=snapshot.last_placed_position,
            )
        )

    def handle_command(self, command: str) -> bool:
        """
        Handle one line of input.

        Args:
            command: The text the player typed.

        Returns:
            False if the player asked to quit, True otherwise.
        """
        command = command.strip().lower()

        if not command:
            return True
        if command == "q":
            return False
        if command == "r":
            self.controller.reset_game()
            return True
        if command == "s":
            self.show_scores()
            return True
        if command == "h":
            self.show_hint()
            return True
        if command in ("?", "help"):
            self._print(HELP_TEXT)
            return True

        is_capture = command.startswith("c")
        cell = command[1:] if is_capture else command

        if not cell.isdigit():
            self._print(f"Unknown command: {command!r}. Type 'help' for commands.")
            return True

        position = int(cell)
        if is_capture and not self.controller.can_capture(position):
            self._print(f"Cell {position} can't be captured right now.")
            return True

        if not self.controller.make_move(position, is_capture):
            self._print(f"Move {command!r} is not allowed.")

        return True

    def start(self):
        """Start the game loop."""
        self._print("\n" + "=" * 40)
        self._print("   TicTacToe")
        self._print(f"   Mode: {self.controller.game_mode.value.upper()}")
        if self.controller.game_mode == GameMode.AI:
            self._print(f"   AI difficulty: {self.controller.ai.difficulty.value}")
        if self.controller.state.battle_mode:
            self._print("   Battle mode: ON (capture = 2 turns for the opponent)")
        self._print("=" * 40)
        self._print(HELP_TEXT)
        self.show_board()

        self.is_running = True
        while self.is_running:
            self.output.write("> ")
            self.output.flush()
            line = self.input.readline()
            if not line:
                break
            self.is_running = self.handle_command(line)

        self.controller.close()


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe with battle mode")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameConfig.DEFAULT_GAME_MODE,
        help="Play against another human (pvp) or the computer (ai)"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY,
        help="AI strength"
    )
    parser.add_argument(
        "--battle",
        action="store_true",
        help="Enable battle mode (captures)"
    )
    parser.add_argument(
        "--scores",
        metavar="PATH",
        default=GameConfig.SCOREBOARD_PATH,
        help="Keep the scoreboard in this JSON file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args(argv)

    config = GameConfig(
        DEFAULT_GAME_MODE=args.mode,
        DEFAULT_DIFFICULTY=args.difficulty,
        BATTLE_MODE=args.battle,
        SCOREBOARD_PATH=args.scores,
        LOG_LEVEL="DEBUG" if args.verbose else GameConfig.LOG_LEVEL,
    )

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = ConsoleGame(config)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
