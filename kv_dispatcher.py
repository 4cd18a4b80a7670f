"""
KV Shell Command Dispatcher
Validates arity and routes each Command to its Store operation.
Single Responsibility: dispatch only.
"""

import logging
from typing import Callable, Dict

from kv_output import OutputWriter
from kv_state import Command, CommandKind
from kv_storage import Store


logger = logging.getLogger(__name__)

# Tokens required per kind, command word included.
MIN_TOKENS: Dict[CommandKind, int] = {
    CommandKind.LIST: 1,
    CommandKind.PUT: 3,
    CommandKind.QUERY: 2,
    CommandKind.DELETE: 2,
}


class CommandDispatcher:
    """Routes parsed commands to the store and renders results.

    The store is injected and never opened or closed here. Store errors
    propagate to the caller.
    """

    def __init__(self, store: Store, writer: OutputWriter, acknowledge: bool = False):
        self.store = store
        self.writer = writer
        self.acknowledge = acknowledge
        self.handlers: Dict[CommandKind, Callable[[Command], None]] = {
            CommandKind.LIST: self._handle_list,
            CommandKind.PUT: self._handle_put,
            CommandKind.QUERY: self._handle_query,
            CommandKind.DELETE: self._handle_delete,
        }

    def dispatch(self, command: Command) -> bool:
        """Run a command. Returns False (after printing usage) when it is rejected."""
        handler = self.handlers.get(command.kind)
        if handler is None or len(command.tokens) < MIN_TOKENS[command.kind]:
            logger.debug("Rejected input: %r", command.tokens)
            self.writer.usage()
            return False
        handler(command)
        return True

    def _handle_list(self, command: Command):
        keys = self.store.keys()
        items = []
        for key in keys:
            items.append((key, self.store.get(key)))
        self.writer.entries(self.store.size(), items)

    def _handle_put(self, command: Command):
        key, value = command.arguments[0], command.arguments[1]
        self.store.put(key, value)
        if self.acknowledge:
            self.writer.stored(key, value)

    def _handle_query(self, command: Command):
        self.writer.value(self.store.get(command.arguments[0]))

    def _handle_delete(self, command: Command):
        key = command.arguments[0]
        self.store.remove(key)
        if self.acknowledge:
            self.writer.deleted(key)
