"""Gradio Blocks app assembly."""

from __future__ import annotations

import gradio as gr

from tictactoe.ui.board_component import BOARD_CLICK_JS
from tictactoe.ui.play_tab import build_play_tab


def build_app() -> gr.Blocks:
    with gr.Blocks(title="Tic-Tac-Toe") as demo:
        gr.Markdown("# Tic-Tac-Toe")
        gr.Markdown("Three in a row wins. The computer plays perfectly: the best you can do is draw.")

        with gr.Tab("Play"):
            build_play_tab()

        # Bind board click handler JS on page load
        demo.load(fn=None, js=BOARD_CLICK_JS)
    return demo
