"""
Game configuration for TicTacToe.
Default settings for players, AI strength, battle mode and the scoreboard.
"""

from .board import Mark


class GameConfig:
    """
    Configuration class for game settings.
    Change these values, or override them per instance:

        config = GameConfig(BATTLE_MODE=True, DEFAULT_DIFFICULTY="hard")
    """

    # ==================== PLAYERS ====================
    # In AI mode the human always plays X and moves first
    HUMAN_MARK = Mark.X
    AI_MARK = Mark.O

    # ==================== GAME MODE ====================
    DEFAULT_GAME_MODE = "pvp"       # "pvp" or "ai"
    DEFAULT_DIFFICULTY = "medium"   # "easy", "medium" or "hard"

    # Battle mode can only be chosen when a session is created
    BATTLE_MODE = False

    # ==================== AI ====================
    # Pause before each AI move in the console, in seconds
    AI_MOVE_DELAY_S = 0.5

    # ==================== SCOREBOARD ====================
    # JSON file for the win/loss/draw tally (None = keep in memory)
    SCOREBOARD_PATH = None

    # ==================== DEBUG SETTINGS ====================
    LOG_LEVEL = "WARNING"

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not name.isupper() or not hasattr(type(self), name):
                raise ValueError(f"Unknown config setting: {name}")
            setattr(self, name, value)
