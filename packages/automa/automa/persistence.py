"""Snapshot and text-definition formats for an Automaton."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from automa.model import Automaton
from automa.types import SnapshotError

SNAPSHOT_FORMAT = "automa-snapshot"
_SNAPSHOT_VERSION = 1


# -- Snapshot --


def encode_snapshot(automaton: Automaton) -> bytes:
    data: dict[str, Any] = {
        "format": SNAPSHOT_FORMAT,
        "version": _SNAPSHOT_VERSION,
    }
    data.update(automaton.snapshot())
    return json.dumps(data, sort_keys=True).encode("utf-8")


def decode_snapshot(raw: bytes) -> dict[str, Any]:
    """Parse snapshot bytes into a payload for ``Automaton.restore``.

    Raises SnapshotError if *raw* is not a snapshot written by
    ``encode_snapshot``. Field validation is left to ``restore``.
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Not a snapshot: {exc}") from exc
    if not isinstance(data, dict) or data.get("format") != SNAPSHOT_FORMAT:
        raise SnapshotError("Not a snapshot: missing format marker")
    version = data.get("version")
    if version != _SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
        )
    return data


def write_snapshot(automaton: Automaton, path: str | Path) -> None:
    Path(path).write_bytes(encode_snapshot(automaton))


def read_snapshot(path: str | Path) -> Automaton:
    automaton = Automaton()
    automaton.restore(decode_snapshot(Path(path).read_bytes()))
    return automaton


# -- Text definition --


def render_definition(automaton: Automaton) -> list[str]:
    """Render the automaton as replayable command lines.

    Directives for empty fields are left out, since an argument-less
    directive lists instead of declaring.
    """
    lines: list[str] = []
    if automaton.symbols:
        lines.append(f"SYMBOLS {' '.join(sorted(automaton.symbols))};")
    if automaton.states:
        lines.append(f"STATES {' '.join(sorted(automaton.states))};")
    if automaton.initial_state is not None:
        lines.append(f"INITIAL-STATE {automaton.initial_state};")
    if automaton.final_states:
        lines.append(f"FINAL-STATES {' '.join(sorted(automaton.final_states))};")
    triples = [
        f"{symbol} {source} {target}"
        for source, edges in sorted(automaton.transitions().items())
        for symbol, target in sorted(edges.items())
    ]
    if triples:
        lines.append(f"TRANSITIONS {', '.join(triples)};")
    return lines


def write_definition(
    automaton: Automaton, path: str | Path, encoding: str = "utf-8",
) -> int:
    """Write the text definition to *path*. Returns number of lines written."""
    lines = render_definition(automaton)
    with Path(path).open("w", encoding=encoding) as f:
        for line in lines:
            f.write(line + "\n")
    return len(lines)
