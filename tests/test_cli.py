import re
import pytest
from pathlib import Path
from unittest.mock import patch
from typer.testing import CliRunner

from grid_logic import cli
from grid_logic.cli import app
from grid_logic.core.board import Board
from grid_logic.data.bitmap import read_bitmap, write_board

runner = CliRunner()

SMILEY = [
    [0, 1, 0, 1, 0],
    [0, 1, 0, 1, 0],
    [0, 0, 0, 0, 0],
    [1, 0, 0, 0, 1],
    [0, 1, 1, 1, 0],
]
SMILEY_HINTS = '{"rows":[[1,1],[1,1],[],[1,1],[3]],"cols":[[1],[2,1],[1],[2,1],[1]]}'


def strip_ansi(text: str) -> str:
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    text = re.sub(r'\[/?[a-z]+\]', '', text)
    return ansi_escape.sub('', text)


@pytest.fixture
def hint_file(tmp_path: Path) -> Path:
    path = tmp_path / "smiley.json"
    path.write_text(SMILEY_HINTS)
    return path


@pytest.fixture
def smiley_pbm(tmp_path: Path) -> Path:
    return write_board(Board.from_bits(SMILEY), tmp_path / "smiley.pbm")


def test_solve_prints_board_and_report(hint_file: Path):
    result = runner.invoke(app, ["solve", str(hint_file)])
    output = strip_ansi(result.output)

    assert result.exit_code == 0
    assert "+-----+" in output
    assert "|#   #|" in output
    assert "| ### |" in output
    assert "SOLVED" in output
    assert "Steps:" in output


def test_solve_writes_output(hint_file: Path, tmp_path: Path):
    out = tmp_path / "solved.pbm"
    result = runner.invoke(app, ["solve", str(hint_file), "--output", str(out)])

    assert result.exit_code == 0
    assert read_bitmap(out).tolist() == SMILEY


def test_solve_with_seed_board(hint_file: Path, smiley_pbm: Path):
    result = runner.invoke(app, ["solve", str(hint_file), "--board", str(smiley_pbm)])

    output = strip_ansi(result.output)
    assert result.exit_code == 0
    assert "SOLVED" in output
    assert "| ### |" in output


def test_solve_unsatisfiable(tmp_path: Path):
    path = tmp_path / "impossible.json"
    path.write_text('{"rows":[[2],[]],"cols":[[1],[]]}')

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == cli.EXIT_UNSATISFIABLE
    assert "Unsolvable puzzle" in strip_ansi(result.output)


def test_solve_malformed_hints(tmp_path: Path):
    path = tmp_path / "narrow.json"
    path.write_text('{"rows":[[2],[2]],"cols":[[2]]}')

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == cli.EXIT_INPUT_ERROR
    assert "Error" in strip_ansi(result.output)


def test_solve_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["solve", str(tmp_path / "absent.json")])
    assert result.exit_code == cli.EXIT_INPUT_ERROR
    assert "missing" in strip_ansi(result.output)


def test_solve_step_budget(hint_file: Path):
    result = runner.invoke(app, ["solve", str(hint_file), "--max-steps", "2"])

    assert result.exit_code == cli.EXIT_ABORTED
    assert "stopped after 2 steps" in strip_ansi(result.output)


def test_solve_seed_shape_mismatch(hint_file: Path, tmp_path: Path):
    small = write_board(Board.from_bits([[1, 0], [0, 1]]), tmp_path / "small.pbm")
    result = runner.invoke(app, ["solve", str(hint_file), "--board", str(small)])
    assert result.exit_code == cli.EXIT_INPUT_ERROR


def test_solve_show_hints(hint_file: Path):
    result = runner.invoke(app, ["solve", str(hint_file), "--show-hints"])
    assert result.exit_code == 0
    assert "Hints (5x5)" in strip_ansi(result.output)


def test_hints_command(smiley_pbm: Path, tmp_path: Path):
    out = tmp_path / "derived.json"
    result = runner.invoke(app, ["hints", str(smiley_pbm), "--output", str(out)])

    assert result.exit_code == 0
    assert SMILEY_HINTS in result.output
    assert out.read_text() == SMILEY_HINTS


def test_hints_command_bad_bitmap(tmp_path: Path):
    bad = tmp_path / "bad.pbm"
    bad.write_bytes(b"nope")
    result = runner.invoke(app, ["hints", str(bad)])
    assert result.exit_code == cli.EXIT_INPUT_ERROR


def test_check_command(hint_file: Path, smiley_pbm: Path, tmp_path: Path):
    result = runner.invoke(app, ["check", str(hint_file), str(smiley_pbm)])
    assert result.exit_code == 0
    assert "SOLVED" in strip_ansi(result.output)

    blank = write_board(Board.from_bits([[0] * 5] * 5), tmp_path / "blank.pbm")
    result = runner.invoke(app, ["check", str(hint_file), str(blank)])
    assert result.exit_code == cli.EXIT_INPUT_ERROR
    assert "lines wrong" in strip_ansi(result.output)


def test_resolve_step_budget():
    assert cli.resolve_step_budget(0) is None
    assert cli.resolve_step_budget(10) == 10


def test_main_runs_app():
    with patch("grid_logic.cli.app") as m:
        cli.main()
        assert m.called
