"""
KV Shell Interactive Loop
Reads lines, parses them and hands them to the dispatcher until input ends.
"""

import logging
import sys
from typing import TextIO

from kv_dispatcher import CommandDispatcher
from kv_output import OutputWriter
from kv_parser import parse_command


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_READ_FAILURE = 1
EXIT_INTERRUPTED = 130


class CommandShell:
    """Prompt -> read -> parse -> dispatch, one line at a time."""

    def __init__(self, dispatcher: CommandDispatcher, writer: OutputWriter,
                 stdin: TextIO = None, prompt: str = "Enter command: "):
        self.dispatcher = dispatcher
        self.writer = writer
        self.stdin = stdin or sys.stdin
        self.prompt = prompt
        self.lines_read = 0

    def read_line(self) -> str:
        """Read one line. Raises EOFError when the input stream is exhausted."""
        line = self.stdin.readline()
        if line == "":
            raise EOFError
        self.lines_read += 1
        return line

    def run_once(self, line: str) -> bool:
        """Process one line. Returns whether the command was accepted."""
        return self.dispatcher.dispatch(parse_command(line))

    def run(self) -> int:
        """Run until end of input. Store failures are not caught here."""
        try:
            while True:
                self.writer.prompt(self.prompt)
                try:
                    line = self.read_line()
                except EOFError:
                    self.writer.newline()
                    logger.info("End of input after %d lines", self.lines_read)
                    return EXIT_OK
                except (OSError, UnicodeDecodeError) as e:
                    self.writer.newline()
                    logger.error("Read failure: %s", e)
                    return EXIT_READ_FAILURE
                self.run_once(line)
        except KeyboardInterrupt:
            self.writer.newline()
            logger.info("Interrupted")
            return EXIT_INTERRUPTED
