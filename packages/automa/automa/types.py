"""Shared type aliases, diagnostics and errors for automa."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Symbol = str
State = str

# source state -> symbol -> destination state
TransitionTable = dict[State, dict[Symbol, State]]


class Level(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One line of feedback produced by a model mutation or a command."""

    level: Level
    message: str

    def render(self) -> str:
        if self.level is Level.WARNING:
            return f"Warning: {self.message}"
        if self.level is Level.ERROR:
            return f"Error: {self.message}"
        return self.message


def info(message: str) -> Diagnostic:
    return Diagnostic(Level.INFO, message)


def warning(message: str) -> Diagnostic:
    return Diagnostic(Level.WARNING, message)


def error(message: str) -> Diagnostic:
    return Diagnostic(Level.ERROR, message)


class AutomatonError(Exception):
    """Base class for automa errors."""


class SnapshotError(AutomatonError):
    """Raised on restore failures (bad magic, version mismatch, malformed payload)."""
