from __future__ import annotations

import random
from typing import Optional

from tictactoe.game.board import TicTacToeGameState

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def select_move(self, game_state: TicTacToeGameState) -> int:
        moves = game_state.legal_moves()
        assert moves, "No legal moves available"
        return self._rng.choice(moves)
