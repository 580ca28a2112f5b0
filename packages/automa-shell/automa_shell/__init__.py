"""automa-shell - Command interpreter and session drivers for automa."""
from __future__ import annotations

from automa_shell.commands import Command, CommandBuffer, parse_command, split_line
from automa_shell.config import ShellConfig
from automa_shell.interpreter import Interpreter, Outcome
from automa_shell.session import main, run_batch, run_interactive
from automa_shell.transcript import Transcript

__all__ = [
    "Command",
    "CommandBuffer",
    "Interpreter",
    "Outcome",
    "ShellConfig",
    "Transcript",
    "main",
    "parse_command",
    "run_batch",
    "run_interactive",
    "split_line",
]
