"""
KV Shell Output Writer
Renders listings, query results and the usage block.
Single Responsibility: formatting output only.
"""

import sys
from typing import Iterable, Optional, TextIO, Tuple

from kv_state import ABSENT_MARKER


USAGE_LINES = (
    "Supported commands:",
    "\tl[ist] - list entries",
    "\tp[ut] <key> <value> - add/update entry",
    "\tq[uery] <key> - query key",
    "\td[elete] <key> - delete entry",
)


class OutputWriter:
    """Writes shell output to a text stream."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout

    def _line(self, text: str = ""):
        print(text, file=self.stream)

    def prompt(self, text: str):
        """Write the prompt without a newline and flush it."""
        self.stream.write(text)
        self.stream.flush()

    def newline(self):
        self._line()

    def entries(self, count: int, items: Iterable[Tuple[str, str]]):
        """Print the count line followed by one indented line per entry."""
        self._line(f"DB contains {count} entries:")
        for key, value in items:
            self._line(f"\t{key} = {value}")

    def value(self, value: Optional[str]):
        self._line(ABSENT_MARKER if value is None else value)

    def stored(self, key: str, value: str):
        self._line(f"OK: {key} = {value}")

    def deleted(self, key: str):
        self._line(f"OK: {key} deleted")

    def usage(self):
        for line in USAGE_LINES:
            self._line(line)
