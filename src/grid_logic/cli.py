import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from grid_logic.core.errors import NonogramError
from grid_logic.core.hints import HintsModel
from grid_logic.core.solver import BacktrackingSolver, SolveStatus
from grid_logic.core.validator import count_violations
from grid_logic.data.bitmap import read_board, read_seed, write_board
from grid_logic.data.loader import load_hints, save_hints
from grid_logic.utils.config import settings
from grid_logic.utils.log import configure_logging
from grid_logic.visualization.renderer import hints_table, print_board

app = typer.Typer(help="Grid Logic: backtracking nonogram solver.")
console = Console()

EXIT_INPUT_ERROR = 1
EXIT_UNSATISFIABLE = 2
EXIT_ABORTED = 3

CYAN_STYLE = "cyan"
GREEN_STYLE = "green"
RED_STYLE = "red"
YELLOW_STYLE = "yellow"
MAGENTA_STYLE = "magenta"
BOLD_STYLE = "bold"
DIM_STYLE = "dim"

SOLVED_STATUS = "SOLVED"
FAILED_STATUS = "FAILED"
UNSATISFIABLE_MESSAGE = "Unsolvable puzzle"


def fail(message: str, code: int = EXIT_INPUT_ERROR):
    console.print(f"[{BOLD_STYLE}{RED_STYLE}]Error:[/{BOLD_STYLE}{RED_STYLE}] {message}", highlight=False)
    sys.exit(code)


def resolve_step_budget(max_steps: int) -> Optional[int]:
    return max_steps if max_steps > 0 else None


def load_inputs(hints_file: Path, board_file: Optional[Path]):
    try:
        hints = load_hints(hints_file)
        seed = read_seed(board_file) if board_file else None
    except (NonogramError, FileNotFoundError) as e:
        fail(str(e))
    return hints, seed


@app.command()
def solve(
    hints_file: Annotated[Path, typer.Argument(help="JSON hint file")],
    board: Annotated[Optional[Path], typer.Option(help="PBM seed board; black pixels are kept filled")] = None,
    output: Annotated[Optional[Path], typer.Option(help="Write the solved board as PBM")] = None,
    max_steps: int = typer.Option(settings.MAX_STEPS, help="Tentative assignment budget, 0 for none"),
    show_hints: bool = typer.Option(False, help="Print the hint table before solving"),
):
    configure_logging()
    hints, seed = load_inputs(hints_file, board)

    if show_hints:
        console.print(hints_table(hints))

    solver = BacktrackingSolver(max_steps=resolve_step_budget(max_steps))
    try:
        result = solver.solve(hints, seed)
    except NonogramError as e:
        fail(str(e))

    if result.status is SolveStatus.UNSATISFIABLE:
        console.print(f"[{RED_STYLE}]{UNSATISFIABLE_MESSAGE}[/{RED_STYLE}]")
        sys.exit(EXIT_UNSATISFIABLE)
    if result.status is SolveStatus.ABORTED:
        console.print(f"[{YELLOW_STYLE}]Search stopped after {result.steps} steps without a solution.[/{YELLOW_STYLE}]")
        sys.exit(EXIT_ABORTED)

    print_board(result.board, console)

    console.print(f"\n[{BOLD_STYLE}]Final Report:[/{BOLD_STYLE}]")
    console.print(f"  Status: [{GREEN_STYLE}]{SOLVED_STATUS}[/{GREEN_STYLE}]")
    console.print(f"  Steps: [{BOLD_STYLE}{CYAN_STYLE}]{result.steps}[/{BOLD_STYLE}{CYAN_STYLE}]")
    console.print(f"  Total Time: [{BOLD_STYLE}{MAGENTA_STYLE}]{result.elapsed_ms:.2f} ms[/{BOLD_STYLE}{MAGENTA_STYLE}]")

    if output:
        path = write_board(result.board, output)
        console.print(f"[{DIM_STYLE}]Board saved to: {path}[/{DIM_STYLE}]")


@app.command()
def hints(
    board_file: Annotated[Path, typer.Argument(help="PBM board to encode")],
    output: Annotated[Optional[Path], typer.Option(help="Write the hints as JSON")] = None,
):
    try:
        model = HintsModel.derive_from_board(read_board(board_file))
    except (NonogramError, FileNotFoundError) as e:
        fail(str(e))

    console.print(model.to_canonical_text(), markup=False, highlight=False)
    if output:
        path = save_hints(model, output)
        console.print(f"[{DIM_STYLE}]Hints saved to: {path}[/{DIM_STYLE}]")


@app.command()
def check(
    hints_file: Annotated[Path, typer.Argument(help="JSON hint file")],
    board_file: Annotated[Path, typer.Argument(help="PBM candidate solution")],
):
    try:
        model = load_hints(hints_file)
        candidate = read_board(board_file)
        errors = count_violations(candidate, model)
    except (NonogramError, FileNotFoundError) as e:
        fail(str(e))

    if errors == 0:
        console.print(f"  Status: [{GREEN_STYLE}]{SOLVED_STATUS}[/{GREEN_STYLE}]")
    else:
        console.print(f"  Status: [{RED_STYLE}]{FAILED_STATUS} ({errors} lines wrong)[/{RED_STYLE}]")
        sys.exit(EXIT_INPUT_ERROR)


def main():
    app()


if __name__ == "__main__":
    main()
