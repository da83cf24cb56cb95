"""
Scoreboard for TicTacToe.
Keeps a win/loss/draw tally for each game mode.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class PvPScores:
    """Results of player-vs-player games."""
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0


@dataclass
class AIScores:
    """Results of games against the AI, from the human's side."""
    wins: int = 0
    losses: int = 0
    draws: int = 0


@dataclass
class Scores:
    """Tally for both game modes."""
    pvp: PvPScores = field(default_factory=PvPScores)
    ai: AIScores = field(default_factory=AIScores)

    @classmethod
    def from_dict(cls, data: dict) -> "Scores":
        return cls(
            pvp=PvPScores(**data.get("pvp", {})),
            ai=AIScores(**data.get("ai", {})),
        )


class Scoreboard:
    """
    Tracks game results.

    Results are kept in memory. If a path is given the tally is loaded
    from and saved to a small JSON file; a missing or unreadable file
    starts from zero.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize the scoreboard.

        Args:
            path: Optional JSON file to keep the tally in.
        """
        self.path = Path(path) if path else None
        self._scores = self._load()

    def get_scores(self) -> Scores:
        """Get a copy of the current scores."""
        return Scores.from_dict(asdict(self._scores))

    def record_game(self, game_mode: str, result: str):
        """
        Record a game result.

        Args:
            game_mode: "pvp" or "ai".
            result: "X", "O" or "draw" for pvp; "win", "loss" or "draw" for ai.
        """
        if game_mode == "pvp":
            scores = self._scores.pvp
            if result == "X":
                scores.x_wins += 1
            elif result == "O":
                scores.o_wins += 1
            elif result == "draw":
                scores.draws += 1
            else:
                raise ValueError(f"Unknown pvp result: {result!r}")
        elif game_mode == "ai":
            scores = self._scores.ai
            if result == "win":
                scores.wins += 1
            elif result == "loss":
                scores.losses += 1
            elif result == "draw":
                scores.draws += 1
            else:
                raise ValueError(f"Unknown ai result: {result!r}")
        else:
            raise ValueError(f"Unknown game mode: {game_mode!r}")

        logger.debug("Recorded %s result: %s", game_mode, result)
        self._save()

    def reset_scores(self):
        """Reset all scores."""
        self._scores = Scores()
        self._save()

    def reset_mode_scores(self, game_mode: str):
        """
        Reset scores for one game mode.

        Args:
            game_mode: "pvp" or "ai".
        """
        if game_mode == "pvp":
            self._scores.pvp = PvPScores()
        elif game_mode == "ai":
            self._scores.ai = AIScores()
        else:
            raise ValueError(f"Unknown game mode: {game_mode!r}")
        self._save()

    def _load(self) -> Scores:
        if self.path is None or not self.path.exists():
            return Scores()

        try:
            with open(self.path) as f:
                return Scores.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not read scores from %s: %s", self.path, e)
            return Scores()

    def _save(self):
        if self.path is None:
            return

        try:
            with open(self.path, "w") as f:
                json.dump(asdict(self._scores), f, indent=2)
        except OSError as e:
            logger.warning("Could not save scores to %s: %s", self.path, e)
