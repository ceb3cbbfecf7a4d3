from enum import Enum


class GameResult(str, Enum):
    """Outcome of a single game as stored in the teams table."""

    WIN = "V"
    LOSS = "D"

    @property
    def opposite(self) -> "GameResult":
        return GameResult.LOSS if self is GameResult.WIN else GameResult.WIN


class Conference(str, Enum):
    EAST = "East"
    WEST = "West"
