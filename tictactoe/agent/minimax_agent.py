"""Perfect-play agent backed by the exhaustive minimax search."""

from __future__ import annotations

import logging

from tictactoe.agent.base import Agent
from tictactoe.engine.minimax import solve
from tictactoe.game.board import TicTacToeGameState, format_cell

logger = logging.getLogger(__name__)


class MinimaxAgent(Agent):
    """Plays the game-theoretically optimal move for the side to move."""

    @property
    def name(self) -> str:
        return "Computer"

    def select_move(self, game_state: TicTacToeGameState) -> int:
        assert not game_state.is_over, "Game is already over"
        mark = game_state.current_player
        result = solve(game_state.board.cells, mark)
        assert result.move is not None, "No legal moves available"
        logger.debug(
            "%s plays %s (score %d)", mark, format_cell(result.move), result.score
        )
        return result.move
