"""KV Shell State - Core data structures shared by the parser, dispatcher and shell."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


ABSENT_MARKER = "<absent>"


class CommandKind(Enum):
    """Enum for the classified intent of an input line."""
    LIST = "list"
    PUT = "put"
    QUERY = "query"
    DELETE = "delete"
    INVALID = "invalid"


@dataclass
class Command:
    """A parsed input line. Built per line and discarded after dispatch."""
    kind: CommandKind
    tokens: List[str] = field(default_factory=list)  # includes the command word

    @property
    def arguments(self) -> List[str]:
        return self.tokens[1:]


@dataclass
class ShellConfig:
    """Configuration for the interactive shell."""
    db_path: str = "tmp/kvshell.db"
    prompt: str = "Enter command: "
    acknowledge: bool = False       # print OK lines after put/delete
    compact_threshold: int = 1000   # journal records before the snapshot is rewritten
    log_level: str = "WARNING"
