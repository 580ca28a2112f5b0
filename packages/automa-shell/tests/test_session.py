"""Tests for the interactive and batch session drivers."""
from __future__ import annotations

import io

from automa_shell.config import ShellConfig
from automa_shell.interpreter import Interpreter
from automa_shell.session import main, run_batch, run_interactive

CONFIG = ShellConfig(prompt="> ", continuation_prompt=".. ")


def _interactive(text: str) -> tuple[int, str, Interpreter]:
    interp = Interpreter(config=CONFIG)
    out = io.StringIO()
    status = run_interactive(interp, io.StringIO(text), out, CONFIG)
    return status, out.getvalue(), interp


class TestInteractive:
    def test_prompt_and_results(self) -> None:
        status, out, _ = _interactive(
            "SYMBOLS 0 1;\nSTATES A;\nFINAL A;\nTRANSITIONS 0 A A;\nEXECUTE 00;\n"
        )
        assert status == 0
        assert out.splitlines()[-2].endswith("> A A A YES")
        assert out.startswith("> ")

    def test_input_is_not_echoed(self) -> None:
        _, out, _ = _interactive("STATES A;\n")
        assert "STATES A" not in out

    def test_continuation_prompt(self) -> None:
        _, out, interp = _interactive("STATES A\nB;\n")
        assert ".. " in out
        assert interp.automaton.states == {"A", "B"}

    def test_exit_stops_reading(self) -> None:
        status, out, interp = _interactive("STATES A;\nEXIT;\nSTATES B;\n")
        assert status == 0
        assert "Terminating FSM session" in out
        assert interp.automaton.states == {"A"}

    def test_errors_do_not_end_session(self) -> None:
        _, out, interp = _interactive("NOPE;\nSTATES A;\n")
        assert "Error: Invalid command 'NOPE'" in out
        assert interp.automaton.states == {"A"}

    def test_end_of_input(self) -> None:
        status, _, _ = _interactive("")
        assert status == 0


class TestBatch:
    def test_echoes_and_runs(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "cmds.txt"
        path.write_text("SYMBOLS a\n\nSTATES S;\nEXECUTE b;\n")
        out = io.StringIO()
        status = run_batch(Interpreter(), str(path), out, CONFIG)
        assert status == 0
        assert out.getvalue().splitlines() == [
            ">> SYMBOLS a",
            ">> STATES S;",
            "'S' set as initial state",
            ">> EXECUTE b;",
            "Error: Symbol 'B' not declared",
        ]

    def test_missing_file(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "absent.txt"
        out = io.StringIO()
        assert run_batch(Interpreter(), str(path), out, CONFIG) == 1
        assert out.getvalue() == f"File not found: {path}\n"

    def test_exit_in_batch(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "cmds.txt"
        path.write_text("STATES A;\nEXIT;\nSTATES B;\n")
        interp = Interpreter()
        out = io.StringIO()
        assert run_batch(interp, str(path), out, CONFIG) == 0
        assert ">> STATES B;" not in out.getvalue()
        assert interp.automaton.states == {"A"}


class TestMain:
    def test_batch_mode(self, tmp_path, capsys) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "cmds.txt"
        path.write_text(
            "SYMBOLS 0 1;\n"
            "STATES A B;\n"
            "FINAL-STATES B;\n"
            "TRANSITIONS 0 A A, 1 A B, 0 B B, 1 B A;\n"
            "EXECUTE 101;\n"
        )
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert "A B B A NO" in out.splitlines()

    def test_missing_batch_file(self, tmp_path, capsys) -> None:  # type: ignore[no-untyped-def]
        assert main([str(tmp_path / "absent.txt")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_log_option(self, tmp_path, capsys) -> None:  # type: ignore[no-untyped-def]
        script = tmp_path / "cmds.txt"
        script.write_text("STATES A;\n")
        log = tmp_path / "session.log"
        assert main([str(script), "--log", str(log)]) == 0
        assert "STATES A;" in log.read_text().splitlines()
