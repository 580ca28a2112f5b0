"""Automaton - alphabet, states and transition table of a DFA."""

from __future__ import annotations

import re
from typing import Any, Iterable

from automa.types import (
    Diagnostic,
    SnapshotError,
    State,
    Symbol,
    TransitionTable,
    error,
    info,
    warning,
)

_STATE_RE = re.compile(r"[A-Za-z0-9]+")


def normalize_symbol(token: str) -> Symbol:
    return token.upper()


def is_valid_symbol(token: str) -> bool:
    return len(token) == 1 and token.isascii() and token.isalnum()


def is_valid_state(token: str) -> bool:
    return _STATE_RE.fullmatch(token) is not None


class Automaton:
    """Deterministic finite automaton built up one command at a time.

    Mutating methods never raise on bad input. They skip the offending
    token and return the diagnostics describing what happened, so a
    caller can report them and carry on.
    """

    def __init__(self) -> None:
        self._symbols: set[Symbol] = set()
        self._states: set[State] = set()
        self._initial: State | None = None
        self._final: set[State] = set()
        self._transitions: TransitionTable = {}

    # -- Read access --

    @property
    def symbols(self) -> frozenset[Symbol]:
        return frozenset(self._symbols)

    @property
    def states(self) -> frozenset[State]:
        return frozenset(self._states)

    @property
    def initial_state(self) -> State | None:
        return self._initial

    @property
    def final_states(self) -> frozenset[State]:
        return frozenset(self._final)

    def transitions(self) -> TransitionTable:
        """Return a copy of the transition table."""
        return {src: dict(edges) for src, edges in self._transitions.items()}

    def outgoing(self, state: State) -> dict[Symbol, State]:
        return dict(self._transitions.get(state, {}))

    def successor(self, state: State, symbol: Symbol) -> State | None:
        return self._transitions.get(state, {}).get(normalize_symbol(symbol))

    def is_final(self, state: State) -> bool:
        return state in self._final

    def is_empty(self) -> bool:
        return not (
            self._symbols or self._states or self._final or self._transitions
        ) and self._initial is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Automaton):
            return NotImplemented
        return (
            self._symbols == other._symbols
            and self._states == other._states
            and self._initial == other._initial
            and self._final == other._final
            and self._transitions == other._transitions
        )

    def __repr__(self) -> str:
        return (
            f"Automaton(symbols={sorted(self._symbols)}, "
            f"states={sorted(self._states)}, initial={self._initial!r}, "
            f"final={sorted(self._final)})"
        )

    # -- Mutation --

    def declare_symbols(self, tokens: Iterable[str]) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        for token in tokens:
            if not is_valid_symbol(token):
                out.append(warning(
                    f"'{token}' is not a valid symbol "
                    "(expected one alphanumeric character)"
                ))
                continue
            symbol = normalize_symbol(token)
            if symbol in self._symbols:
                out.append(warning(f"Symbol '{symbol}' already declared"))
                continue
            self._symbols.add(symbol)
        return out

    def declare_states(self, tokens: Iterable[str]) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        for token in tokens:
            if not is_valid_state(token):
                out.append(warning(f"'{token}' is not a valid state name"))
                continue
            if token in self._states:
                out.append(warning(f"State '{token}' already declared"))
                continue
            out.extend(self._add_state(token))
        return out

    def set_initial_state(self, token: str) -> list[Diagnostic]:
        if not is_valid_state(token):
            return [error(f"'{token}' is not a valid state name")]
        self._initial = token
        return self._ensure_state(token)

    def declare_final_states(self, tokens: Iterable[str]) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        for token in tokens:
            if not is_valid_state(token):
                out.append(warning(f"'{token}' is not a valid state name"))
                continue
            out.extend(self._ensure_state(token))
            if token in self._final:
                out.append(warning(f"State '{token}' already declared as final"))
                continue
            self._final.add(token)
        return out

    def set_transition(
        self, symbol: str, source: str, target: str,
    ) -> list[Diagnostic]:
        """Install ``source --symbol--> target``.

        Unknown symbols or states reject the transition outright; unlike
        the state declarations there is no auto-declaration here.
        """
        sym = normalize_symbol(symbol)
        if sym not in self._symbols:
            return [error(f"Symbol '{sym}' is not declared")]
        for state in (source, target):
            if state not in self._states:
                return [error(f"State '{state}' is not declared")]
        edges = self._transitions.setdefault(source, {})
        previous = edges.get(sym)
        edges[sym] = target
        if previous is not None and previous != target:
            return [warning(
                f"Overriding transition {sym} {source} -> {previous} "
                f"with {sym} {source} -> {target}"
            )]
        return []

    def clear(self) -> None:
        self._symbols = set()
        self._states = set()
        self._initial = None
        self._final = set()
        self._transitions = {}

    def _add_state(self, state: State) -> list[Diagnostic]:
        self._states.add(state)
        if self._initial is None:
            self._initial = state
            return [info(f"'{state}' set as initial state")]
        return []

    def _ensure_state(self, state: State) -> list[Diagnostic]:
        if state in self._states:
            return []
        out = [warning(f"State '{state}' was not declared, declaring it")]
        out.extend(self._add_state(state))
        return out

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "symbols": sorted(self._symbols),
            "states": sorted(self._states),
            "initial": self._initial,
            "final": sorted(self._final),
            "transitions": {
                src: dict(sorted(edges.items()))
                for src, edges in sorted(self._transitions.items())
            },
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace every field with the snapshot contents.

        The payload is fully validated first; on SnapshotError the
        automaton is left untouched.
        """
        symbols = _string_set(data, "symbols")
        states = _string_set(data, "states")
        final = _string_set(data, "final")

        initial = data.get("initial")
        if initial is not None and not isinstance(initial, str):
            raise SnapshotError(f"'initial' must be a string or null, got {initial!r}")
        if initial is not None and initial not in states:
            raise SnapshotError(f"Initial state {initial!r} is not a declared state")
        if not final <= states:
            raise SnapshotError(
                f"Final states {sorted(final - states)} are not declared states"
            )

        raw_transitions = data.get("transitions")
        if not isinstance(raw_transitions, dict):
            raise SnapshotError("'transitions' must be an object")
        transitions: TransitionTable = {}
        for src, edges in raw_transitions.items():
            if src not in states or not isinstance(edges, dict):
                raise SnapshotError(f"Invalid transitions for state {src!r}")
            row: dict[Symbol, State] = {}
            for sym, dst in edges.items():
                if sym not in symbols:
                    raise SnapshotError(f"Transition uses undeclared symbol {sym!r}")
                if not isinstance(dst, str) or dst not in states:
                    raise SnapshotError(f"Transition targets undeclared state {dst!r}")
                row[sym] = dst
            transitions[src] = row

        self._symbols = symbols
        self._states = states
        self._initial = initial
        self._final = final
        self._transitions = transitions


def _string_set(data: dict[str, Any], key: str) -> set[str]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SnapshotError(f"{key!r} must be a list of strings")
    return set(value)
