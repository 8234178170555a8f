from __future__ import annotations

import argparse
import logging
from typing import Optional

from tictactoe.engine.minimax import solve
from tictactoe.game.board import (
    format_board,
    format_cell,
    is_reachable,
    mark_to_move,
    outcome,
    parse_board,
)
from tictactoe.game.types import Mark

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictactoe", description="Tic-tac-toe with a perfect-play computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_sol = sub.add_parser("solve", help="Print the optimal move for a board")
    p_sol.add_argument(
        "--board",
        required=True,
        help="Board string, 9 chars of X/O/. in row-major order, e.g. XX.OO....",
    )
    p_sol.add_argument(
        "--to-move",
        choices=["X", "O"],
        default=None,
        help="Side to move (default: inferred from the mark counts)",
    )

    p_srv = sub.add_parser("serve", help="Launch the web app")
    p_srv.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    p_srv.add_argument("--port", type=int, default=7860, help="Server port (default: 7860)")
    p_srv.add_argument("--share", action="store_true", help="Create a public Gradio share link")

    return p


def _solve(board_text: str, to_move: Optional[str]) -> int:
    try:
        board = parse_board(board_text)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    if not is_reachable(board):
        logger.error("Board is not a reachable position: %s", format_board(board))
        return 2

    mark = Mark(to_move) if to_move else mark_to_move(board)
    result = solve(board.cells, mark)
    logger.debug("search cache: %s", solve.cache_info())
    if result.move is None:
        logger.info("board=%s terminal outcome=%s score=%d",
                    format_board(board), outcome(board).status.value, result.score)
        return 0
    logger.info(
        "board=%s to_move=%s move=%d (%s) score=%d",
        format_board(board),
        mark,
        result.move,
        format_cell(result.move),
        result.score,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    logging.getLogger("tictactoe").setLevel(logging.DEBUG if ns.verbose else logging.INFO)

    if ns.version:
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("tictactoe"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.cmd == "solve":
        return _solve(ns.board, ns.to_move)

    if ns.cmd == "serve":
        from tictactoe.ui.app import build_app

        build_app().launch(server_name=ns.host, server_port=ns.port, share=ns.share)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
