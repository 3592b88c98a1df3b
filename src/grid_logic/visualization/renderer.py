from typing import Optional

from rich.console import Console
from rich.table import Table

from grid_logic.core.board import Board, CellState
from grid_logic.core.hints import HintsModel

CORNER = "+"
HORIZONTAL_EDGE = "-"
VERTICAL_EDGE = "|"
SYMBOL_FILLED = "#"
SYMBOL_EMPTY = " "

CYAN_STYLE = "cyan"
GREEN_STYLE = "green"
YELLOW_STYLE = "yellow"


def render_board(board: Board) -> str:
    """Bordered text grid: '#' for filled cells, a space for anything else."""
    border = CORNER + HORIZONTAL_EDGE * board.cols_count + CORNER
    lines = [border]
    for r in range(board.rows_count):
        cells = ''.join(SYMBOL_FILLED if cell == CellState.FILLED else SYMBOL_EMPTY for cell in board.row(r))
        lines.append(f"{VERTICAL_EDGE}{cells}{VERTICAL_EDGE}")
    lines.append(border)
    return "\n".join(lines)


def print_board(board: Board, console: Optional[Console] = None):
    console = console or Console()
    console.print(render_board(board), markup=False, highlight=False)


def format_runs(runs) -> str:
    return " ".join(str(run) for run in runs) if runs else "0"


def hints_table(hints: HintsModel) -> Table:
    table = Table(
        title=f"Hints ({hints.rows_count}x{hints.cols_count})",
        show_header=True,
        header_style=f"bold {CYAN_STYLE}",
    )
    table.add_column("Line", style=CYAN_STYLE, justify="right")
    table.add_column("Rows", style=GREEN_STYLE)
    table.add_column("Columns", style=YELLOW_STYLE)

    for index in range(max(hints.rows_count, hints.cols_count)):
        row = format_runs(hints.row_runs[index]) if index < hints.rows_count else ""
        col = format_runs(hints.col_runs[index]) if index < hints.cols_count else ""
        table.add_row(str(index), row, col)
    return table
