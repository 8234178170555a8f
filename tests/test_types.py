from tictactoe.game.types import Mark, Outcome, SearchResult, Status


def test_mark_other():
    assert Mark.X.other is Mark.O
    assert Mark.O.other is Mark.X


def test_mark_str():
    assert str(Mark.X) == "X"
    assert str(Mark.O) == "O"


def test_outcome_is_over():
    assert not Outcome(Status.IN_PROGRESS).is_over
    assert Outcome(Status.DRAW).is_over
    assert Outcome(Status.WIN, Mark.O).is_over


def test_search_result_is_namedtuple():
    r = SearchResult(4, 0)
    assert r.move == 4
    assert r.score == 0
    assert r == SearchResult(4, 0)
