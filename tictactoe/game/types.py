from __future__ import annotations

import enum
from typing import NamedTuple, Optional


class Mark(enum.Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> Mark:
        return Mark.O if self is Mark.X else Mark.X

    def __str__(self) -> str:
        return self.value


class Status(enum.Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


class Outcome(NamedTuple):
    status: Status
    winner: Optional[Mark] = None

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS


class SearchResult(NamedTuple):
    move: Optional[int]  # None only when the board is terminal
    score: int
