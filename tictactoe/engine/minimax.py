"""Exhaustive minimax search for tic-tac-toe.

O is the maximizing side and X the minimizing side. Scores are +10 for an O
win, -10 for an X win and 0 for a draw. Among equally scored moves the one
with the lowest cell index wins.
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from functools import lru_cache
from typing import Optional

from tictactoe.game.board import Board, available_moves, is_winning_for
from tictactoe.game.types import Mark, SearchResult

MAXIMIZING_MARK = Mark.O
MINIMIZING_MARK = Mark.X

WIN_SCORE = 10


def _terminal_score(board: Board) -> Optional[int]:
    """Score of a finished board, or None if play continues."""
    if is_winning_for(board, MAXIMIZING_MARK):
        return WIN_SCORE
    if is_winning_for(board, MINIMIZING_MARK):
        return -WIN_SCORE
    if not available_moves(board):
        return 0
    return None


def _select(candidates: list[tuple[int, int]], mark: Mark) -> SearchResult:
    """Pick the best (index, score) for `mark` from candidates in index order.

    Strict comparison keeps the first of several equal scores.
    """
    best_move, best_score = candidates[0]
    for move, score in candidates[1:]:
        if mark is MAXIMIZING_MARK:
            better = score > best_score
        else:
            better = score < best_score
        if better:
            best_move, best_score = move, score
    return SearchResult(best_move, best_score)


# ---------------------------------------------------------------------------
# Plain search: apply and revert on the caller's board
# ---------------------------------------------------------------------------

def minimax(board: Board, mark_to_move: Mark) -> SearchResult:
    """Return the optimal move and its score for `mark_to_move`.

    On a terminal board the result has move=None. The board is restored to
    its original contents before returning.
    """
    terminal = _terminal_score(board)
    if terminal is not None:
        return SearchResult(None, terminal)

    candidates: list[tuple[int, int]] = []
    for move in available_moves(board):
        board.place(move, mark_to_move)
        score = minimax(board, mark_to_move.other).score
        board.remove(move)
        candidates.append((move, score))

    return _select(candidates, mark_to_move)


# ---------------------------------------------------------------------------
# Memoized search on immutable cell tuples
# ---------------------------------------------------------------------------

@lru_cache(maxsize=None)
def solve(cells: tuple[Optional[Mark], ...], mark_to_move: Mark) -> SearchResult:
    """Same result as minimax(), cached by position."""
    board = Board(cells)
    terminal = _terminal_score(board)
    if terminal is not None:
        return SearchResult(None, terminal)

    candidates: list[tuple[int, int]] = []
    for move in available_moves(board):
        child = cells[:move] + (mark_to_move,) + cells[move + 1:]
        candidates.append((move, solve(child, mark_to_move.other).score))

    return _select(candidates, mark_to_move)


# ---------------------------------------------------------------------------
# Parallel search over the top-level moves
# ---------------------------------------------------------------------------

def _score_move(cells: tuple[Optional[Mark], ...], move: int, mark: Mark) -> int:
    board = Board(cells)
    board.place(move, mark)
    return minimax(board, mark.other).score


def minimax_parallel(
    board: Board,
    mark_to_move: Mark,
    max_workers: Optional[int] = None,
) -> SearchResult:
    """Score each top-level move in its own process.

    Results are merged in ascending index order, not completion order, so the
    answer is identical to minimax().
    """
    terminal = _terminal_score(board)
    if terminal is not None:
        return SearchResult(None, terminal)

    moves = available_moves(board)
    cells = board.cells
    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_score_move, cells, move, mark_to_move) for move in moves]
        candidates = [(move, fut.result()) for move, fut in zip(moves, futures)]

    return _select(candidates, mark_to_move)
