"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from tictactoe.game.board import (
    BOARD_SIZE,
    NUM_CELLS,
    TicTacToeGameState,
    format_cell,
    winning_line,
)
from tictactoe.game.types import Mark

# Layout constants
CELL_SIZE = 110
MARGIN = 20
BOARD_PX = MARGIN * 2 + CELL_SIZE * BOARD_SIZE
MARK_INSET = 24
LINE_WIDTH = 6

# Colors
BG_COLOR = "#1E293B"
GRID_COLOR = "#94A3B8"
X_COLOR = "#F472B6"
O_COLOR = "#38BDF8"
WIN_CELL_COLOR = "rgba(250, 204, 21, 0.35)"
LAST_MOVE_COLOR = "rgba(255, 255, 255, 0.08)"

# Banner colors keyed by message
BANNER_COLORS: dict[str, str] = {
    "You win!": "#4ADE80",
    "Computer wins!": "#F87171",
}
BANNER_DEFAULT_COLOR = "#FFFFFF"


def _cell_origin(index: int) -> tuple[int, int]:
    """Top-left pixel of a cell."""
    row, col = divmod(index, BOARD_SIZE)
    return MARGIN + col * CELL_SIZE, MARGIN + row * CELL_SIZE


def _render_mark(index: int, mark: Mark) -> str:
    x0, y0 = _cell_origin(index)
    if mark is Mark.X:
        a, b = x0 + MARK_INSET, x0 + CELL_SIZE - MARK_INSET
        c, d = y0 + MARK_INSET, y0 + CELL_SIZE - MARK_INSET
        return (
            f'<g class="mark-x" stroke="{X_COLOR}" stroke-width="{LINE_WIDTH + 4}" '
            f'stroke-linecap="round">'
            f'<line x1="{a}" y1="{c}" x2="{b}" y2="{d}"/>'
            f'<line x1="{b}" y1="{c}" x2="{a}" y2="{d}"/></g>'
        )
    cx, cy = x0 + CELL_SIZE // 2, y0 + CELL_SIZE // 2
    r = CELL_SIZE // 2 - MARK_INSET
    return (
        f'<circle class="mark-o" cx="{cx}" cy="{cy}" r="{r}" fill="none" '
        f'stroke="{O_COLOR}" stroke-width="{LINE_WIDTH + 4}"/>'
    )


def _render_banner(message: str) -> str:
    color = BANNER_COLORS.get(message, BANNER_DEFAULT_COLOR)
    y = BOARD_PX // 2
    return (
        f'<rect x="0" y="{y - 36}" width="{BOARD_PX}" height="72" '
        f'fill="rgba(0, 0, 0, 0.7)"/>'
        f'<text x="{BOARD_PX // 2}" y="{y + 12}" text-anchor="middle" '
        f'font-size="36" font-weight="bold" font-family="sans-serif" '
        f'fill="{color}">{message}</text>'
    )


def render_board_svg(
    game_state: TicTacToeGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="tictactoe-board">'
    )
    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="12"/>'
    )

    # Cell backgrounds: winning line first, then the last move
    win_cells: tuple[int, ...] = winning_line(game_state.board) or ()
    last_index: Optional[int] = None
    if highlight_last and game_state.moves:
        last_index = game_state.moves[-1].index
    for i in range(NUM_CELLS):
        if i in win_cells:
            fill = WIN_CELL_COLOR
        elif i == last_index:
            fill = LAST_MOVE_COLOR
        else:
            continue
        x0, y0 = _cell_origin(i)
        cls = "win-cell" if i in win_cells else "last-move"
        parts.append(
            f'<rect class="{cls}" x="{x0}" y="{y0}" width="{CELL_SIZE}" '
            f'height="{CELL_SIZE}" fill="{fill}"/>'
        )

    # Grid lines (two inner lines each way)
    end = MARGIN + BOARD_SIZE * CELL_SIZE
    for k in range(1, BOARD_SIZE):
        p = MARGIN + k * CELL_SIZE
        parts.append(
            f'<line x1="{p}" y1="{MARGIN}" x2="{p}" y2="{end}" '
            f'stroke="{GRID_COLOR}" stroke-width="{LINE_WIDTH}" stroke-linecap="round"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{p}" x2="{end}" y2="{p}" '
            f'stroke="{GRID_COLOR}" stroke-width="{LINE_WIDTH}" stroke-linecap="round"/>'
        )

    # Marks
    for i, mark in enumerate(game_state.board.cells):
        if mark is not None:
            parts.append(_render_mark(i, mark))

    # Clickable cell targets (invisible rects)
    if clickable and not game_state.is_over:
        for i in range(NUM_CELLS):
            if not game_state.board.is_empty(i):
                continue
            x0, y0 = _cell_origin(i)
            parts.append(
                f'<rect x="{x0}" y="{y0}" width="{CELL_SIZE}" height="{CELL_SIZE}" '
                f'fill="transparent" class="board-click" '
                f'data-cell="{i}" style="cursor:pointer">'
                f'<title>{format_cell(i)}</title></rect>'
            )

    if game_over_message:
        parts.append(_render_banner(game_over_message))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the cell index to
# a hidden Gradio Textbox, then presses the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._tictactoeClickBound) return;
    window._tictactoeClickBound = true;

    document.addEventListener('click', function(e) {
        const target = e.target.closest('.board-click');
        if (!target) return;
        const cell = target.getAttribute('data-cell');
        if (cell === null) return;

        const input = document.querySelector('#cell-input textarea, #cell-input input');
        if (!input) return;
        const proto = input.tagName === 'TEXTAREA'
            ? window.HTMLTextAreaElement.prototype
            : window.HTMLInputElement.prototype;
        const nativeSetter = Object.getOwnPropertyDescriptor(proto, 'value')?.set;
        if (nativeSetter) {
            nativeSetter.call(input, cell);
        } else {
            input.value = cell;
        }
        input.dispatchEvent(new Event('input', { bubbles: true }));
        const btn = document.querySelector('#cell-submit');
        if (btn) btn.click();
    });
}
"""
