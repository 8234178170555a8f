"""Play tab: human vs computer or human vs human with an interactive SVG board."""

from __future__ import annotations

import time as _time
from typing import Iterator

import gradio as gr

from tictactoe.game.board import TicTacToeGameState, parse_cell
from tictactoe.game.session import Mode, SessionController
from tictactoe.game.types import Mark
from tictactoe.ui.board_component import render_board_svg

# Pause before the computer's reply is shown
COMPUTER_MOVE_DELAY = 0.5

MODE_CHOICES: dict[str, Mode] = {
    "Human vs Computer": Mode.VS_COMPUTER,
    "Human vs Human": Mode.VS_HUMAN,
}

MARK_CHOICES: dict[str, Mark] = {
    "X (moves first)": Mark.X,
    "O": Mark.O,
}


def _make_board_html(session: SessionController) -> str:
    clickable = (
        session.active
        and not session.awaiting_computer
        and not session.is_computer_turn
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: SessionController, status: str = "") -> tuple:
    return (
        _make_board_html(session),
        status or session.status_text,
        session.move_history_table,
        session,
        "",  # clear cell input
    )


def _apply_human_move(cell_text: str, session: SessionController) -> Iterator[tuple]:
    """Process a human move; the computer's reply follows after a short pause."""
    index = parse_cell(cell_text)
    if index is None:
        yield _outputs(
            session, f"Invalid cell: '{cell_text}'. Use 0-8 or a coordinate like B2."
        )
        return

    report = session.apply_human_move(index, respond=False)
    if not report.accepted:
        yield _outputs(session, report.reason)
        return

    yield _outputs(session)

    if session.awaiting_computer:
        _time.sleep(COMPUTER_MOVE_DELAY)
        session.computer_reply()
        yield _outputs(session)


def _new_game(mode_choice: str, mark_choice: str, session: SessionController):
    """Start a new game with the chosen mode and mark."""
    mode = MODE_CHOICES.get(mode_choice, Mode.VS_COMPUTER)
    human = MARK_CHOICES.get(mark_choice, Mark.X)
    session.reset(mode=mode, human_mark=human)

    if mode is Mode.VS_COMPUTER:
        info = f"You are {human}. Computer is {human.other}."
    else:
        info = "Two players, X moves first."
    board_html, status, table, session, _ = _outputs(session)
    return board_html, status, table, session, info


def _undo_move(session: SessionController):
    report = session.undo()
    board_html, status, table, session, _ = _outputs(session, report.reason)
    return board_html, status, table, session


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(SessionController())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(TicTacToeGameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (X)",
                label="Status",
                interactive=False,
                lines=2,
            )
            mode_info = gr.Textbox(
                value="You are X. Computer is O.",
                label="Players",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            mode_choice = gr.Radio(
                choices=list(MODE_CHOICES.keys()),
                value="Human vs Computer",
                label="Mode",
            )
            mark_choice = gr.Radio(
                choices=list(MARK_CHOICES.keys()),
                value="X (moves first)",
                label="Play as",
            )
            new_game_btn = gr.Button("New Game", variant="primary")
            undo_btn = gr.Button("Undo")

            gr.Markdown("### Enter Move")
            cell_input = gr.Textbox(
                label="Cell (0-8 or A1-C3)",
                placeholder="B2",
                elem_id="cell-input",
                lines=1,
            )
            cell_submit = gr.Button(
                "Submit Move",
                elem_id="cell-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Mark", "Cell"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    cell_submit.click(
        fn=_apply_human_move,
        inputs=[cell_input, session_state],
        outputs=board_outputs + [cell_input],
    )

    new_game_btn.click(
        fn=_new_game,
        inputs=[mode_choice, mark_choice, session_state],
        outputs=board_outputs + [mode_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )
