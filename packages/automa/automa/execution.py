"""Execution engine - strict DFA simulation with abort-on-first-failure."""

from __future__ import annotations

from dataclasses import dataclass

from automa.model import Automaton, normalize_symbol
from automa.types import State


@dataclass(frozen=True, slots=True)
class Run:
    """Outcome of feeding one input string to an automaton.

    Exactly one of two shapes: a completed run (``error is None``) with
    ``len(input) + 1`` states in ``path`` and a verdict, or an aborted run
    with an ``error`` and an empty path.
    """

    path: tuple[State, ...] = ()
    accepted: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.error is not None:
            return self.error
        return " ".join(self.path) + (" YES" if self.accepted else " NO")


def execute(automaton: Automaton, text: str) -> Run:
    current = automaton.initial_state
    if current is None:
        return Run(error="No initial state defined")
    if not text:
        return Run(error="No input string specified")

    symbols = automaton.symbols
    path = [current]
    for char in text:
        symbol = normalize_symbol(char)
        if symbol not in symbols:
            return Run(error=f"Symbol '{symbol}' not declared")
        edges = automaton.outgoing(current)
        if not edges:
            return Run(error=f"No transitions defined from state '{current}'")
        target = edges.get(symbol)
        if target is None:
            return Run(
                error=f"No transition for symbol '{symbol}' from state '{current}'"
            )
        current = target
        path.append(current)

    return Run(path=tuple(path), accepted=automaton.is_final(current))
