"""Interpreter - routes terminated commands to automaton operations."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from automa import (
    Automaton,
    Diagnostic,
    Level,
    SnapshotError,
    decode_snapshot,
    execute,
    render_definition,
    write_definition,
    write_snapshot,
)
from automa.types import error, info, warning
from automa_shell.commands import CommandBuffer, parse_command
from automa_shell.config import ShellConfig
from automa_shell.transcript import Transcript


@dataclass
class Outcome:
    """Result of one command: the lines to report, and whether to end the session."""

    messages: list[Diagnostic] = field(default_factory=list)
    stop: bool = False

    def lines(self) -> list[str]:
        return [m.render() for m in self.messages]

    def errors(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.level is Level.ERROR]


Handler = Callable[[str], Outcome]


class Interpreter:
    """Dispatches commands by verb to handlers.

    One handler per verb; aliases share the handler. Handlers take the raw
    argument string and return an Outcome. Nothing a handler does can abort
    the caller's loop: exceptions become error diagnostics.
    """

    def __init__(
        self,
        automaton: Automaton | None = None,
        config: ShellConfig | None = None,
        transcript: Transcript | None = None,
    ) -> None:
        self._automaton = automaton if automaton is not None else Automaton()
        self._config = config if config is not None else ShellConfig()
        if transcript is None:
            transcript = Transcript(
                encoding=self._config.encoding,
                header=self._config.transcript_header,
            )
        self._transcript = transcript
        self._handlers: dict[str, Handler] = {}
        self._loading: set[Path] = set()

        self.handle("EXIT", self._exit)
        self.handle("LOG", self._log)
        self.handle("SYMBOLS", self._symbols)
        self.handle("STATES", self._states)
        self.handle("INITIAL-STATE", self._initial_state, "INITIALSTATE", "INITIAL")
        self.handle("FINAL-STATES", self._final_states, "FINALSTATES", "FINAL")
        self.handle("TRANSITIONS", self._transitions)
        self.handle("PRINT", self._print)
        self.handle("COMPILE", self._compile)
        self.handle("CLEAR", self._clear)
        self.handle("LOAD", self._load)
        self.handle("EXECUTE", self._execute)

    @property
    def automaton(self) -> Automaton:
        return self._automaton

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    def handle(self, verb: str, handler: Handler, *aliases: str) -> None:
        """Register *handler* for *verb* and its aliases. Later calls overwrite."""
        for name in (verb, *aliases):
            self._handlers[name.upper()] = handler

    def verbs(self) -> list[str]:
        return sorted(self._handlers)

    def execute(self, text: str) -> Outcome:
        """Run one user command (without its terminator), mirroring it to the log."""
        text = text.strip()
        if not text:
            return Outcome()
        self._record(text)
        return self._dispatch(text)

    def run_lines(self, lines: Iterable[str]) -> Outcome:
        """Replay script lines, framing commands the way the prompt does.

        Failures are tagged with the line that completed the command and
        never stop the replay; only EXIT does.
        """
        buffer = CommandBuffer()
        outcome = Outcome()
        for number, line in enumerate(lines, start=1):
            for command in buffer.feed(line):
                result = self._dispatch(command)
                outcome.messages.extend(_at_line(number, result.messages))
                if result.stop:
                    outcome.stop = True
                    return outcome
        leftover = buffer.flush()
        if leftover:
            outcome.messages.append(
                warning(f"Ignoring unterminated command '{leftover}'")
            )
        return outcome

    def close(self) -> None:
        self._transcript.stop()

    def _record(self, text: str) -> None:
        """Mirror *text* to the log; a failing log is reported and dropped."""
        try:
            self._transcript.record(text)
        except (OSError, ValueError) as exc:
            print(
                f"automa-shell: cannot write to log file, logging stopped: {exc}",
                file=sys.stderr,
            )
            try:
                self._transcript.stop()
            except OSError as close_exc:
                print(
                    f"automa-shell: cannot close log file: {close_exc}",
                    file=sys.stderr,
                )

    def _dispatch(self, text: str) -> Outcome:
        command = parse_command(text)
        if not command.verb:
            return Outcome()
        handler = self._handlers.get(command.verb)
        if handler is None:
            return Outcome([error(f"Invalid command '{command.verb}'")])
        try:
            return handler(command.args)
        except Exception as exc:
            return Outcome([error(f"{type(exc).__name__}: {exc}")])

    # -- Handlers --

    def _exit(self, args: str) -> Outcome:
        self._transcript.stop()
        return Outcome([info("Terminating FSM session")], stop=True)

    def _log(self, args: str) -> Outcome:
        if not args:
            path = self._transcript.path
            if path is None:
                return Outcome([info("Logging is not active")])
            self._transcript.stop()
            return Outcome([info(f"Stopped logging to '{path}'")])
        try:
            self._transcript.start(args)
        except OSError as exc:
            return Outcome([error(f"Cannot open log file '{args}': {exc}")])
        return Outcome([info(f"Logging to '{args}'")])

    def _symbols(self, args: str) -> Outcome:
        if args:
            return Outcome(self._automaton.declare_symbols(args.split()))
        symbols = sorted(self._automaton.symbols)
        if not symbols:
            return Outcome([info("No symbols declared")])
        return Outcome([info(f"Symbols: {' '.join(symbols)}")])

    def _states(self, args: str) -> Outcome:
        if args:
            return Outcome(self._automaton.declare_states(args.split()))
        fsm = self._automaton
        if not fsm.states:
            return Outcome([info("No states declared")])
        out: list[Diagnostic] = []
        for state in sorted(fsm.states):
            line = state
            if state == fsm.initial_state:
                line += " (initial)"
            if fsm.is_final(state):
                line += " (final)"
            out.append(info(line))
        return Outcome(out)

    def _initial_state(self, args: str) -> Outcome:
        tokens = args.split()
        if not tokens:
            return Outcome([error("No initial state specified")])
        if len(tokens) > 1:
            return Outcome([error(f"Expected one initial state, got {len(tokens)}")])
        return Outcome(self._automaton.set_initial_state(tokens[0]))

    def _final_states(self, args: str) -> Outcome:
        if args:
            return Outcome(self._automaton.declare_final_states(args.split()))
        final = sorted(self._automaton.final_states)
        if not final:
            return Outcome([info("No final states declared")])
        return Outcome([info(f"Final states: {' '.join(final)}")])

    def _transitions(self, args: str) -> Outcome:
        if not args:
            table = self._automaton.transitions()
            if not table:
                return Outcome([info("No transitions declared")])
            return Outcome([
                info(f"{symbol} {source} -> {target}")
                for source, edges in sorted(table.items())
                for symbol, target in sorted(edges.items())
            ])
        out: list[Diagnostic] = []
        for chunk in args.split(","):
            fields = chunk.split()
            if len(fields) != 3:
                out.append(error(
                    f"Invalid transition '{chunk.strip()}', expected 'symbol from to'"
                ))
                continue
            out.extend(self._automaton.set_transition(*fields))
        return Outcome(out)

    def _print(self, args: str) -> Outcome:
        if not args:
            lines = render_definition(self._automaton)
            if not lines:
                return Outcome([info("FSM is empty")])
            return Outcome([info(line) for line in lines])
        try:
            write_definition(self._automaton, args, encoding=self._config.encoding)
        except OSError as exc:
            return Outcome([error(f"Cannot write to file '{args}': {exc}")])
        return Outcome([info(f"FSM written to '{args}'")])

    def _compile(self, args: str) -> Outcome:
        if not args:
            return Outcome([error("No filename specified")])
        try:
            write_snapshot(self._automaton, args)
        except OSError as exc:
            return Outcome([error(f"Cannot compile to file '{args}': {exc}")])
        return Outcome([info("Compile successful")])

    def _clear(self, args: str) -> Outcome:
        self._automaton.clear()
        return Outcome([info("FSM cleared")])

    def _load(self, args: str) -> Outcome:
        if not args:
            return Outcome([error("No filename specified")])
        path = Path(args)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return Outcome([error(f"File '{args}' not found")])
        except OSError as exc:
            return Outcome([error(f"Cannot read file '{args}': {exc}")])

        try:
            self._automaton.restore(decode_snapshot(raw))
        except SnapshotError:
            pass
        else:
            return Outcome([info(f"FSM loaded from compiled file '{args}'")])

        try:
            text = raw.decode(self._config.encoding)
        except UnicodeDecodeError:
            return Outcome([error(
                f"File '{args}' is neither a compiled FSM nor a text definition"
            )])

        key = path.resolve()
        if key in self._loading:
            return Outcome([error(f"Recursive load of '{args}' ignored")])
        self._loading.add(key)
        try:
            outcome = self.run_lines(text.splitlines())
        finally:
            self._loading.discard(key)
        if not outcome.stop:
            outcome.messages.append(info(f"FSM commands loaded from text file '{args}'"))
        return outcome

    def _execute(self, args: str) -> Outcome:
        run = execute(self._automaton, args)
        if run.ok:
            return Outcome([info(run.render())])
        return Outcome([error(run.render())])


def _at_line(number: int, messages: list[Diagnostic]) -> list[Diagnostic]:
    return [
        Diagnostic(m.level, f"line {number}: {m.message}")
        if m.level is not Level.INFO else m
        for m in messages
    ]
