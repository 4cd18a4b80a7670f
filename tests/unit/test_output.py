"""Unit tests for kv_output."""

import io

import pytest

from kv_output import OutputWriter
from kv_state import ABSENT_MARKER


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.mark.unit
class TestOutputWriter:
    def test_entries(self, out: io.StringIO) -> None:
        OutputWriter(out).entries(2, [("x", "1"), ("y", "2")])
        assert out.getvalue() == "DB contains 2 entries:\n\tx = 1\n\ty = 2\n"

    def test_empty_listing(self, out: io.StringIO) -> None:
        OutputWriter(out).entries(0, [])
        assert out.getvalue() == "DB contains 0 entries:\n"

    def test_value_and_absent(self, out: io.StringIO) -> None:
        writer = OutputWriter(out)
        writer.value("hello")
        writer.value(None)
        assert out.getvalue() == f"hello\n{ABSENT_MARKER}\n"

    def test_usage_block(self, out: io.StringIO) -> None:
        OutputWriter(out).usage()
        assert out.getvalue() == (
            "Supported commands:\n"
            "\tl[ist] - list entries\n"
            "\tp[ut] <key> <value> - add/update entry\n"
            "\tq[uery] <key> - query key\n"
            "\td[elete] <key> - delete entry\n"
        )

    def test_prompt_has_no_newline(self, out: io.StringIO) -> None:
        OutputWriter(out).prompt("Enter command: ")
        assert out.getvalue() == "Enter command: "

    def test_acknowledgements(self, out: io.StringIO) -> None:
        writer = OutputWriter(out)
        writer.stored("a", "1")
        writer.deleted("a")
        assert out.getvalue() == "OK: a = 1\nOK: a deleted\n"
