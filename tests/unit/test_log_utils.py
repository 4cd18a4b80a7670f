"""Unit tests for log_utils."""

import io
import logging

import pytest

from log_utils import Colors, configure_logging, log_event, print_colored


class TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.mark.unit
class TestPrintColored:
    def test_plain_when_not_a_tty(self) -> None:
        out = io.StringIO()
        print_colored("boom", Colors.FAIL, out)
        assert out.getvalue() == "boom\n"

    def test_colored_on_tty(self) -> None:
        out = TtyStream()
        print_colored("boom", Colors.FAIL, out)
        assert out.getvalue() == f"{Colors.FAIL}boom{Colors.ENDC}\n"


@pytest.mark.unit
def test_configure_logging_level_and_stream() -> None:
    stream = io.StringIO()
    configure_logging("info", stream)
    try:
        log_event("store ready")
        log_event("hidden", "DEBUG")
        assert logging.getLogger().level == logging.INFO
        assert "INFO: store ready" in stream.getvalue()
        assert "hidden" not in stream.getvalue()
    finally:
        configure_logging("WARNING", io.StringIO())
