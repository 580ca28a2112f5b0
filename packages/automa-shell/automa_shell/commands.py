"""Command framing - ``;`` terminated commands and verb parsing."""
from __future__ import annotations

from dataclasses import dataclass

TERMINATOR = ";"


@dataclass(frozen=True)
class Command:
    verb: str
    args: str


def parse_command(text: str) -> Command:
    """Split *text* into an uppercased verb and the raw argument string.

    >>> parse_command("states a b")
    Command(verb='STATES', args='a b')
    """
    parts = text.strip().split(None, 1)
    if not parts:
        return Command("", "")
    verb = parts[0].upper()
    args = parts[1].strip() if len(parts) > 1 else ""
    return Command(verb, args)


class CommandBuffer:
    """Accumulates physical lines until a terminator completes a command.

    A command may span lines and a line may hold several commands. Lines
    whose trimmed text starts with the terminator are comments.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    @property
    def pending(self) -> bool:
        return bool(self._parts)

    def flush(self) -> str:
        """Return and discard the unterminated text accumulated so far."""
        text = " ".join(self._parts).strip()
        self._parts.clear()
        return text

    def feed(self, line: str) -> list[str]:
        stripped = line.strip()
        if not stripped or stripped.startswith(TERMINATOR):
            return []
        commands: list[str] = []
        rest = stripped
        while TERMINATOR in rest:
            head, rest = rest.split(TERMINATOR, 1)
            self._parts.append(head)
            command = self.flush()
            if command:
                commands.append(command)
        if rest.strip():
            self._parts.append(rest.strip())
        return commands


def split_line(line: str) -> list[str]:
    """Commands on one batch-mode line; the terminator is optional."""
    stripped = line.strip()
    if stripped.startswith(TERMINATOR):
        return []
    return [part.strip() for part in stripped.split(TERMINATOR) if part.strip()]
