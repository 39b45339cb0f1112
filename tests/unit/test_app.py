"""
Unit tests for the CLI entry point and its error boundary.
"""
import io

import pytest
from rich.console import Console

from game import InternalInvariantError
from play import app, exit_codes


def _console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, width=200, color_system=None)


class TestMain:
    """Test running whole games through main()."""

    def test_exploding_game_exits_cleanly(self, scripted_input) -> None:
        buffer = io.StringIO()
        code = app.main(
            ["--size", "3", "--density", "1.0"],
            console=_console(buffer),
            read_line=scripted_input(["o 1 1"]),
        )
        assert code == exit_codes.SUCCESS
        assert "result: EXPLODED" in buffer.getvalue()

    def test_winning_game(self, scripted_input) -> None:
        buffer = io.StringIO()
        code = app.main(
            ["-s", "1", "-d", "1", "-n", "bob"],
            console=_console(buffer),
            read_line=scripted_input(["f 0 0"]),
        )
        assert code == exit_codes.SUCCESS
        text = buffer.getvalue()
        assert "bob" in text
        assert "result: CLEARED" in text

    def test_end_of_input_exits_as_interrupt(self, scripted_input) -> None:
        code = app.main(
            ["--deterministic"],
            console=_console(io.StringIO()),
            read_line=scripted_input(["s"]),
        )
        assert code == exit_codes.KEYBOARD_INTERRUPT

    def test_version_flag(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            app.main(["--version"])
        assert excinfo.value.code == 0
        assert "minesweeper" in capsys.readouterr().out


class TestErrorBoundary:
    """Test exit codes chosen by cli()."""

    def test_zero_density_fails_fast(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            app.cli(["--density", "0"])
        assert excinfo.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "density" in err

    def test_bad_size_fails_fast(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            app.cli(["--size", "0"])
        assert excinfo.value.code == exit_codes.GENERAL_ERROR

    def test_internal_invariant_failure(self, monkeypatch, capsys) -> None:
        def broken(argv=None):
            raise InternalInvariantError("cell is both opened and flagged")

        monkeypatch.setattr(app, "main", broken)
        with pytest.raises(SystemExit) as excinfo:
            app.cli([])
        assert excinfo.value.code == exit_codes.UNEXPECTED_ERROR
        assert "internal invariant failure" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch) -> None:
        def interrupted(argv=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(app, "main", interrupted)
        with pytest.raises(SystemExit) as excinfo:
            app.cli([])
        assert excinfo.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch, capsys) -> None:
        def broken(argv=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(app, "main", broken)
        with pytest.raises(SystemExit) as excinfo:
            app.cli([])
        assert excinfo.value.code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: boom" in capsys.readouterr().err
