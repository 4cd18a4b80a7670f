"""Unit tests for kv_parser."""

import pytest

from kv_parser import classify, parse_command, tokenize
from kv_state import CommandKind


@pytest.mark.unit
class TestTokenize:
    def test_splits_on_whitespace_runs(self) -> None:
        assert tokenize("  put   a \t b  ") == ["put", "a", "b"]

    def test_blank_line_has_no_tokens(self) -> None:
        assert tokenize("   \n") == []


@pytest.mark.unit
class TestClassify:
    @pytest.mark.parametrize("word", ["l", "ls", "list", "lemon"])
    def test_first_letter_l_is_list(self, word: str) -> None:
        assert classify(word) is CommandKind.LIST

    @pytest.mark.parametrize(
        "word,kind",
        [("p", CommandKind.PUT), ("q", CommandKind.QUERY), ("del", CommandKind.DELETE)],
    )
    def test_other_letters(self, word: str, kind: CommandKind) -> None:
        assert classify(word) is kind

    @pytest.mark.parametrize("word", ["L", "PUT", "x", "help", "1", ""])
    def test_unknown_or_uppercase_is_invalid(self, word: str) -> None:
        assert classify(word) is CommandKind.INVALID


@pytest.mark.unit
class TestParseCommand:
    def test_empty_line_is_invalid_without_raising(self) -> None:
        cmd = parse_command("")
        assert cmd.kind is CommandKind.INVALID
        assert cmd.tokens == []

    def test_put_keeps_all_tokens(self) -> None:
        cmd = parse_command("put key value extra\n")
        assert cmd.kind is CommandKind.PUT
        assert cmd.tokens == ["put", "key", "value", "extra"]
        assert cmd.arguments == ["key", "value", "extra"]

    def test_invalid_keeps_tokens(self) -> None:
        cmd = parse_command("xyz a")
        assert cmd.kind is CommandKind.INVALID
        assert cmd.tokens == ["xyz", "a"]
