from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .types import Mark, Outcome, Status

BOARD_SIZE = 3
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# Column labels: A-C, row 1 is the top row
COL_LABELS = "ABC"

LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)

EMPTY_CHARS = ".-_"


def parse_cell(text: str) -> Optional[int]:
    """Parse a cell given as an index '0'-'8' or a coordinate like 'B2'.

    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) == 1:
        try:
            index = int(text)
        except ValueError:
            return None
        return index if 0 <= index < NUM_CELLS else None
    if len(text) != 2:
        return None
    col_char, row_str = text[0], text[1]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    return (row - 1) * BOARD_SIZE + COL_LABELS.index(col_char)


def format_cell(index: int) -> str:
    """Format a cell index as a coordinate string like 'B2'."""
    row, col = divmod(index, BOARD_SIZE)
    return f"{COL_LABELS[col]}{row + 1}"


@dataclass
class Move:
    index: int
    mark: Mark

    def __str__(self) -> str:
        return f"{self.mark}: {format_cell(self.index)}"


class Board:
    """3x3 tic-tac-toe board. Cells are indexed 0-8 in row-major order."""

    def __init__(self, cells: Optional[Iterable[Optional[Mark]]] = None) -> None:
        self._cells: list[Optional[Mark]] = (
            [None] * NUM_CELLS if cells is None else list(cells)
        )
        assert len(self._cells) == NUM_CELLS, f"Board needs {NUM_CELLS} cells"

    def place(self, index: int, mark: Mark) -> None:
        assert self.is_empty(index), f"{format_cell(index)} is occupied"
        self._cells[index] = mark

    def remove(self, index: int) -> None:
        self._cells[index] = None

    def get(self, index: int) -> Optional[Mark]:
        return self._cells[index]

    def is_empty(self, index: int) -> bool:
        return self._cells[index] is None

    def is_on_grid(self, index: int) -> bool:
        return 0 <= index < NUM_CELLS

    @property
    def cells(self) -> tuple[Optional[Mark], ...]:
        return tuple(self._cells)

    @property
    def occupied_count(self) -> int:
        return sum(1 for c in self._cells if c is not None)

    def count(self, mark: Mark) -> int:
        return self._cells.count(mark)

    def copy(self) -> Board:
        return Board(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({format_board(self)!r})"


# ---------------------------------------------------------------------------
# Terminal-state detection
# ---------------------------------------------------------------------------

def is_winning_for(board: Board, mark: Mark) -> bool:
    return any(all(board.get(i) is mark for i in line) for line in LINES)


def is_draw(board: Board) -> bool:
    """Full board with no winner. A full board with a completed line is a win."""
    if board.occupied_count < NUM_CELLS:
        return False
    return not is_winning_for(board, Mark.X) and not is_winning_for(board, Mark.O)


def available_moves(board: Board) -> list[int]:
    """Empty cell indices in ascending order.

    The search breaks ties by taking the first move in this order.
    """
    return [i for i in range(NUM_CELLS) if board.is_empty(i)]


def winning_line(board: Board) -> Optional[tuple[int, int, int]]:
    """Return the first completed line, or None."""
    for line in LINES:
        first = board.get(line[0])
        if first is not None and all(board.get(i) is first for i in line):
            return line
    return None


def outcome(board: Board) -> Outcome:
    for mark in (Mark.X, Mark.O):
        if is_winning_for(board, mark):
            return Outcome(Status.WIN, mark)
    if board.occupied_count == NUM_CELLS:
        return Outcome(Status.DRAW)
    return Outcome(Status.IN_PROGRESS)


def mark_to_move(board: Board) -> Mark:
    return Mark.X if board.count(Mark.X) == board.count(Mark.O) else Mark.O


def is_reachable(board: Board) -> bool:
    """True if the board can arise from alternating play with X first."""
    x, o = board.count(Mark.X), board.count(Mark.O)
    if not (x == o or x == o + 1):
        return False
    x_wins = is_winning_for(board, Mark.X)
    o_wins = is_winning_for(board, Mark.O)
    if x_wins and o_wins:
        return False
    # The winner must have made the last move
    if x_wins and x != o + 1:
        return False
    if o_wins and x != o:
        return False
    return True


# ---------------------------------------------------------------------------
# Text form: 9 chars of X, O and '.' (row-major)
# ---------------------------------------------------------------------------

def parse_board(text: str) -> Board:
    raw = text.strip().upper()
    if len(raw) != NUM_CELLS:
        raise ValueError(f"Board string must have {NUM_CELLS} cells, got {len(raw)}: {text!r}")
    cells: list[Optional[Mark]] = []
    for ch in raw:
        if ch in EMPTY_CHARS:
            cells.append(None)
        elif ch in ("X", "O"):
            cells.append(Mark(ch))
        else:
            raise ValueError(f"Invalid cell character {ch!r} in {text!r}")
    return Board(cells)


def format_board(board: Board) -> str:
    return "".join("." if c is None else str(c) for c in board.cells)


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class TicTacToeGameState:
    """Full game state for tic-tac-toe. X always moves first."""

    def __init__(self) -> None:
        self.board = Board()
        self.current_player = Mark.X
        self.moves: list[Move] = []
        self._winner: Optional[Mark] = None
        self._is_over = False

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Mark]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    @property
    def outcome(self) -> Outcome:
        return outcome(self.board)

    def legal_moves(self) -> list[int]:
        if self._is_over:
            return []
        return available_moves(self.board)

    def apply_move(self, index: int) -> None:
        """Place the current player's mark and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.is_on_grid(index), f"Cell {index} is off the grid"
        assert self.board.is_empty(index), f"Cell {format_cell(index)} is occupied"

        mark = self.current_player
        self.board.place(index, mark)
        self.moves.append(Move(index=index, mark=mark))

        if is_winning_for(self.board, mark):
            self._winner = mark
            self._is_over = True
        elif self.board.occupied_count == NUM_CELLS:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.index)
        self.current_player = move.mark
        self._winner = None
        self._is_over = False
        return move
