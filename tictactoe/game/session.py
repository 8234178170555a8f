"""Session controller: turn handling between a human and the computer."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from tictactoe.agent.base import Agent
from tictactoe.agent.minimax_agent import MinimaxAgent
from tictactoe.game.board import (
    Board,
    TicTacToeGameState,
    format_cell,
    winning_line,
)
from tictactoe.game.types import Mark, Outcome, Status

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    VS_COMPUTER = "vs_computer"
    VS_HUMAN = "vs_human"


class TurnReport(NamedTuple):
    """Result of a session command."""

    accepted: bool
    outcome: Outcome
    computer_move: Optional[int] = None
    reason: str = ""


@dataclass
class SessionController:
    """Mutable session state plus the commands that change it.

    Rejected commands leave the state untouched and return accepted=False.
    """

    game: TicTacToeGameState = field(default_factory=TicTacToeGameState)
    mode: Mode = Mode.VS_COMPUTER
    human_mark: Mark = Mark.X
    agent: Agent = field(default_factory=MinimaxAgent)
    active: bool = True
    awaiting_computer: bool = False

    # -- derived state ------------------------------------------------------

    @property
    def computer_mark(self) -> Optional[Mark]:
        if self.mode is Mode.VS_COMPUTER:
            return self.human_mark.other
        return None

    @property
    def is_computer_turn(self) -> bool:
        return self.active and self.game.current_player is self.computer_mark

    @property
    def board(self) -> Board:
        return self.game.board.copy()

    @property
    def outcome(self) -> Outcome:
        return self.game.outcome

    @property
    def winning_line(self) -> Optional[tuple[int, int, int]]:
        return winning_line(self.game.board)

    # -- commands -----------------------------------------------------------

    def apply_human_move(self, index: int, respond: bool = True) -> TurnReport:
        """Play `index` for the side to move, then let the computer answer.

        With respond=False the computer reply is left pending
        (awaiting_computer) until computer_reply() is called.
        """
        if not self.active:
            return self._reject("The game is over. Start a new game.")
        if self.awaiting_computer or self.is_computer_turn:
            return self._reject("Wait, it's the computer's turn.")
        if not self.game.board.is_on_grid(index):
            return self._reject(f"Cell {index} is off the board.")
        if not self.game.board.is_empty(index):
            return self._reject(f"{format_cell(index)} is already taken.")

        self.game.apply_move(index)
        self._after_move()

        computer_move: Optional[int] = None
        if self.is_computer_turn:
            if respond:
                computer_move = self.computer_reply().computer_move
            else:
                self.awaiting_computer = True
        return TurnReport(True, self.outcome, computer_move)

    def computer_reply(self) -> TurnReport:
        """Play the computer's move if one is due."""
        if not self.is_computer_turn:
            self.awaiting_computer = False
            return self._reject("It's not the computer's turn.")

        self.awaiting_computer = True
        move = self.agent.select_move(self.game)
        self.game.apply_move(move)
        self.awaiting_computer = False
        logger.debug("Computer (%s) played %s", self.computer_mark, format_cell(move))
        self._after_move()
        return TurnReport(True, self.outcome, move)

    def reset(
        self,
        mode: Optional[Mode] = None,
        human_mark: Optional[Mark] = None,
    ) -> TurnReport:
        """Start a new game. The computer opens when it holds X."""
        if mode is not None:
            self.mode = mode
        if human_mark is not None:
            self.human_mark = human_mark
        self.game = TicTacToeGameState()
        self.active = True
        self.awaiting_computer = False
        logger.info("New game: mode=%s human=%s", self.mode.value, self.human_mark)

        opening: Optional[int] = None
        if self.is_computer_turn:
            opening = self.computer_reply().computer_move
        return TurnReport(True, self.outcome, opening)

    def undo(self) -> TurnReport:
        """Take back the last human move and any computer reply after it."""
        moves = self.game.moves
        if self.mode is Mode.VS_COMPUTER:
            human_moves = [m for m in moves if m.mark is self.human_mark]
        else:
            human_moves = list(moves)
        if not human_moves:
            return self._reject("Nothing to undo.")

        if self.mode is Mode.VS_COMPUTER and moves[-1].mark is not self.human_mark:
            self.game.undo_move()
        self.game.undo_move()
        self.active = True
        self.awaiting_computer = False
        return TurnReport(True, self.outcome)

    # -- presentation helpers ----------------------------------------------

    @property
    def game_over_banner(self) -> str:
        """Short text for the board overlay. Empty if the game is not over."""
        result = self.outcome
        if not result.is_over:
            return ""
        if result.status is Status.DRAW:
            return "Draw!"
        if self.mode is Mode.VS_COMPUTER:
            return "You win!" if result.winner is self.human_mark else "Computer wins!"
        return f"{result.winner} wins!"

    @property
    def status_text(self) -> str:
        if not self.active:
            return f"Game over: {self.game_over_banner}"
        player = self.game.current_player
        if self.mode is Mode.VS_COMPUTER:
            if player is self.computer_mark:
                return f"Computer is thinking... ({player})"
            return f"Your turn ({player})"
        return f"{player} to move"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            if self.mode is Mode.VS_COMPUTER:
                who = "You" if move.mark is self.human_mark else "Computer"
            else:
                who = f"Player {move.mark}"
            rows.append([str(i + 1), who, str(move.mark), format_cell(move.index)])
        return rows

    # -- internals -----------------------------------------------------------

    def _after_move(self) -> None:
        result = self.outcome
        if result.is_over:
            self.active = False
            if result.status is Status.WIN:
                logger.info("Game over: %s wins", result.winner)
            else:
                logger.info("Game over: draw")

    def _reject(self, reason: str) -> TurnReport:
        logger.debug("Rejected: %s", reason)
        return TurnReport(False, self.outcome, reason=reason)
