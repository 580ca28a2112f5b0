"""Session drivers - interactive prompt, batch files and the ``automa`` CLI."""
from __future__ import annotations

import argparse
import sys
from typing import IO, Sequence

from automa_shell.commands import CommandBuffer, split_line
from automa_shell.config import ShellConfig
from automa_shell.interpreter import Interpreter, Outcome
from automa_shell.transcript import Transcript


def _emit(outcome: Outcome, stdout: IO[str]) -> None:
    for line in outcome.lines():
        print(line, file=stdout)


def run_interactive(
    interpreter: Interpreter,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    config: ShellConfig | None = None,
) -> int:
    """Read commands from *stdin* until EXIT or end of input. Returns exit status."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    config = config if config is not None else ShellConfig()

    buffer = CommandBuffer()
    while True:
        stdout.write(config.continuation_prompt if buffer.pending else config.prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return 0
        for command in buffer.feed(line):
            outcome = interpreter.execute(command)
            _emit(outcome, stdout)
            if outcome.stop:
                return 0


def run_batch(
    interpreter: Interpreter,
    path: str,
    stdout: IO[str] | None = None,
    config: ShellConfig | None = None,
) -> int:
    """Run every command in *path*, one physical line at a time.

    Each non-empty line is echoed before it runs. Per-command failures are
    reported and the file carries on.
    """
    stdout = stdout if stdout is not None else sys.stdout
    config = config if config is not None else ShellConfig()

    try:
        f = open(path, encoding=config.encoding)
    except FileNotFoundError:
        print(f"File not found: {path}", file=stdout)
        return 1
    except OSError as exc:
        print(f"An error occurred while reading the file: {exc}", file=stdout)
        return 1

    with f:
        try:
            for line in f:
                stripped = line.strip()
                if not stripped:
                    continue
                print(f"{config.echo_prefix}{stripped}", file=stdout)
                for command in split_line(stripped):
                    outcome = interpreter.execute(command)
                    _emit(outcome, stdout)
                    if outcome.stop:
                        return 0
        except (OSError, UnicodeDecodeError) as exc:
            print(f"An error occurred while reading the file: {exc}", file=stdout)
            return 1
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="automa",
        description="Define and run deterministic finite automata",
    )
    p.add_argument("file", nargs="?", default=None,
                   help="Command file to run in batch mode (default: interactive)")
    p.add_argument("--log", type=str, default=None, metavar="FILE",
                   help="Append every command to FILE, as the LOG command does")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = ShellConfig()

    with Transcript(encoding=config.encoding, header=config.transcript_header) as transcript:
        if args.log:
            try:
                transcript.start(args.log)
            except OSError as exc:
                print(f"automa-shell: cannot open log file: {exc}", file=sys.stderr)
        interpreter = Interpreter(config=config, transcript=transcript)
        if args.file is not None:
            return run_batch(interpreter, args.file, config=config)
        return run_interactive(interpreter, config=config)


if __name__ == "__main__":
    sys.exit(main())
