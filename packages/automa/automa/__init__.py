"""automa - Deterministic finite automaton model, simulation and persistence."""

from automa.execution import Run, execute
from automa.model import Automaton
from automa.persistence import (
    decode_snapshot,
    encode_snapshot,
    read_snapshot,
    render_definition,
    write_definition,
    write_snapshot,
)
from automa.types import AutomatonError, Diagnostic, Level, SnapshotError

__all__ = [
    "Automaton",
    "AutomatonError",
    "Diagnostic",
    "Level",
    "Run",
    "SnapshotError",
    "decode_snapshot",
    "encode_snapshot",
    "execute",
    "read_snapshot",
    "render_definition",
    "write_definition",
    "write_snapshot",
]
