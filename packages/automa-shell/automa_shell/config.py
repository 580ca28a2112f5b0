"""Shell configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShellConfig:
    """Immutable configuration for the command shell.

    Attributes:
        prompt: Printed before each new command in interactive mode.
        continuation_prompt: Printed while a multi-line command is pending.
        echo_prefix: Prefix for lines echoed in batch mode.
        encoding: Encoding for scripts, definitions and transcripts.
        transcript_header: Write a timestamped comment when a log is opened.
    """

    prompt: str = "fsm> "
    continuation_prompt: str = "...> "
    echo_prefix: str = ">> "
    encoding: str = "utf-8"
    transcript_header: bool = True
