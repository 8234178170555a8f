"""Property-based checks for detection and search."""

from typing import List

from hypothesis import given, settings, strategies as st

from tictactoe.agent.random_agent import RandomAgent
from tictactoe.engine.minimax import minimax, solve
from tictactoe.game.board import (
    LINES,
    NUM_CELLS,
    Board,
    TicTacToeGameState,
    available_moves,
    is_draw,
    is_reachable,
    is_winning_for,
    mark_to_move,
    outcome,
)
from tictactoe.game.types import Mark, Outcome, Status


def _play(order: List[int], n_moves: int) -> Board:
    """Play the first n_moves cells of `order` alternately, stopping at a win."""
    g = TicTacToeGameState()
    for index in order[:n_moves]:
        if g.is_over:
            break
        g.apply_move(index)
    return g.board


reachable_boards = st.builds(
    _play,
    st.permutations(list(range(NUM_CELLS))),
    st.integers(min_value=0, max_value=NUM_CELLS),
)

# At least two marks down keeps the plain search small
searchable_boards = st.builds(
    _play,
    st.permutations(list(range(NUM_CELLS))),
    st.integers(min_value=2, max_value=NUM_CELLS),
)

any_boards = st.lists(
    st.sampled_from([None, Mark.X, Mark.O]), min_size=NUM_CELLS, max_size=NUM_CELLS
).map(Board)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

@given(any_boards)
def test_available_plus_occupied_is_nine(board: Board):
    assert len(available_moves(board)) + board.occupied_count == NUM_CELLS


@given(any_boards)
def test_available_moves_ascending_and_empty(board: Board):
    moves = available_moves(board)
    assert moves == sorted(moves)
    assert all(board.is_empty(i) for i in moves)


@given(reachable_boards)
def test_reachable_board_never_has_two_winners(board: Board):
    assert is_reachable(board)
    assert not (is_winning_for(board, Mark.X) and is_winning_for(board, Mark.O))


@given(any_boards)
def test_winning_line_reported_as_win(board: Board):
    for mark in (Mark.X, Mark.O):
        if any(all(board.get(i) is mark for i in line) for line in LINES):
            assert is_winning_for(board, mark)
            assert not is_draw(board)


@given(reachable_boards)
def test_outcome_matches_predicates(board: Board):
    result = outcome(board)
    if result.status is Status.WIN:
        assert is_winning_for(board, result.winner)
    elif result.status is Status.DRAW:
        assert is_draw(board)
    else:
        assert available_moves(board)
        assert result == Outcome(Status.IN_PROGRESS)


@given(any_boards)
def test_full_board_without_line_is_draw(board: Board):
    if board.occupied_count == NUM_CELLS and not any(
        is_winning_for(board, m) for m in (Mark.X, Mark.O)
    ):
        assert is_draw(board)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@settings(max_examples=60, deadline=None)
@given(searchable_boards)
def test_solve_matches_minimax(board: Board):
    for mark in (Mark.X, Mark.O):
        assert solve(board.cells, mark) == minimax(board, mark)


@settings(max_examples=60, deadline=None)
@given(searchable_boards)
def test_minimax_restores_board_and_is_deterministic(board: Board):
    before = board.cells
    mark = mark_to_move(board)
    first = minimax(board, mark)
    assert board.cells == before
    assert minimax(board, mark) == first


@settings(max_examples=60, deadline=None)
@given(searchable_boards)
def test_move_absent_only_on_terminal_board(board: Board):
    mark = mark_to_move(board)
    result = minimax(board, mark)
    if outcome(board).is_over:
        assert result.move is None
    else:
        assert result.move in available_moves(board)
    assert result.score in (-10, 0, 10)


# ---------------------------------------------------------------------------
# No-loss
# ---------------------------------------------------------------------------

def _computer_never_loses(game: TicTacToeGameState, computer: Mark) -> bool:
    """Explore every opponent reply; the computer follows the search."""
    if game.is_over:
        return game.winner is not computer.other
    if game.current_player is computer:
        move = solve(game.board.cells, computer).move
        game.apply_move(move)
        ok = _computer_never_loses(game, computer)
        game.undo_move()
        return ok
    for move in game.legal_moves():
        game.apply_move(move)
        ok = _computer_never_loses(game, computer)
        game.undo_move()
        if not ok:
            return False
    return True


def test_computer_as_o_never_loses_to_any_play():
    assert _computer_never_loses(TicTacToeGameState(), Mark.O)


def test_computer_as_x_never_loses_to_any_play():
    assert _computer_never_loses(TicTacToeGameState(), Mark.X)


def test_perfect_play_both_sides_draws():
    g = TicTacToeGameState()
    while not g.is_over:
        g.apply_move(solve(g.board.cells, g.current_player).move)
    assert g.is_draw


@settings(max_examples=5, deadline=None)
@given(st.integers(min_value=0, max_value=10_000))
def test_plain_search_never_loses_to_random(seed: int):
    g = TicTacToeGameState()
    opponent = RandomAgent(seed=seed)
    while not g.is_over:
        if g.current_player is Mark.O:
            g.apply_move(minimax(g.board, Mark.O).move)
        else:
            g.apply_move(opponent.select_move(g))
    assert g.winner is not Mark.X
