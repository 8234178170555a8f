"""Tic-Tac-Toe: Gradio web app entry point."""

import logging

from tictactoe.ui.app import build_app

demo = build_app()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    demo.launch()
