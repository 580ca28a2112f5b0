"""Tests for command framing and verb parsing."""
from __future__ import annotations

import pytest

from automa_shell.commands import Command, CommandBuffer, parse_command, split_line


@pytest.fixture
def buffer() -> CommandBuffer:
    return CommandBuffer()


class TestParseCommand:
    def test_verb_is_uppercased(self) -> None:
        assert parse_command("states a b") == Command("STATES", "a b")

    def test_args_are_kept_raw(self) -> None:
        assert parse_command("  TRANSITIONS 0 A B,  1 A A ") == Command(
            "TRANSITIONS", "0 A B,  1 A A"
        )

    def test_no_args(self) -> None:
        assert parse_command("clear") == Command("CLEAR", "")

    def test_empty(self) -> None:
        assert parse_command("   ") == Command("", "")


class TestCommandBuffer:
    def test_single_command(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("SYMBOLS 0 1;") == ["SYMBOLS 0 1"]
        assert not buffer.pending

    def test_multi_line_command(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("TRANSITIONS 0 A A,") == []
        assert buffer.pending
        assert buffer.feed("  1 A B;") == ["TRANSITIONS 0 A A, 1 A B"]
        assert not buffer.pending

    def test_several_commands_on_one_line(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("SYMBOLS 0; STATES A; EXEC") == ["SYMBOLS 0", "STATES A"]
        assert buffer.feed("UTE 0;") == ["EXEC UTE 0"]

    def test_comment_line(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("; this is a comment; STATES A;") == []
        assert not buffer.pending

    def test_comment_inside_pending_command_is_skipped(self, buffer: CommandBuffer) -> None:
        buffer.feed("STATES A")
        assert buffer.feed("  ; comment") == []
        assert buffer.feed("B;") == ["STATES A B"]

    def test_blank_lines_ignored(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("") == []
        assert buffer.feed("   \n") == []
        assert not buffer.pending

    def test_empty_commands_dropped(self, buffer: CommandBuffer) -> None:
        assert buffer.feed("CLEAR;;") == ["CLEAR"]

    def test_flush_returns_leftover(self, buffer: CommandBuffer) -> None:
        buffer.feed("STATES A")
        assert buffer.flush() == "STATES A"
        assert not buffer.pending


class TestSplitLine:
    def test_terminator_optional(self) -> None:
        assert split_line("SYMBOLS 0 1") == ["SYMBOLS 0 1"]
        assert split_line("SYMBOLS 0 1;") == ["SYMBOLS 0 1"]

    def test_several_commands(self) -> None:
        assert split_line("CLEAR; STATES A;") == ["CLEAR", "STATES A"]

    def test_comment(self) -> None:
        assert split_line("; note") == []
