from __future__ import annotations

import abc

from tictactoe.game.board import TicTacToeGameState


class Agent(abc.ABC):
    @abc.abstractmethod
    def select_move(self, game_state: TicTacToeGameState) -> int:
        """Return the cell index where this agent wants to play."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
