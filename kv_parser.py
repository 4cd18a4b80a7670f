"""
KV Shell Command Parser
Turns a raw input line into a Command.
Single Responsibility: tokenizing and classification only.
"""

from typing import Dict

from kv_state import Command, CommandKind


# Only the first character of the command word is significant.
COMMAND_LETTERS: Dict[str, CommandKind] = {
    "l": CommandKind.LIST,
    "p": CommandKind.PUT,
    "q": CommandKind.QUERY,
    "d": CommandKind.DELETE,
}


def tokenize(line: str) -> list:
    """Split a line on runs of whitespace."""
    return line.strip().split()


def classify(word: str) -> CommandKind:
    """Classify a command word by its leading character (case-sensitive)."""
    if not word:
        return CommandKind.INVALID
    return COMMAND_LETTERS.get(word[0], CommandKind.INVALID)


def parse_command(line: str) -> Command:
    """Parse a raw line. Never raises on malformed input; it becomes INVALID."""
    tokens = tokenize(line)
    if not tokens:
        return Command(CommandKind.INVALID)
    return Command(classify(tokens[0]), tokens)
