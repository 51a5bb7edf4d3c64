"""Interactive REPL for reattach."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .commands import CommandRegistry
from .completion import ReAttachCompleter
from .context import ReAttachContext
from .parser import is_parse_error, split_command

LOGGER = logging.getLogger("reattach.repl")


def dispatch_line(ctx: ReAttachContext, registry: CommandRegistry, line: str) -> int:
    """Run one command line and return its exit code."""
    argv = split_command(line)
    if not argv:
        return 0
    if is_parse_error(argv):
        print(f"Parse error: {argv[-1]}")
        return 1
    cmd_name, *cmd_args = argv
    command = registry.get(cmd_name)
    if not command:
        print(f"Unknown command: {cmd_name}")
        return 1
    try:
        return command.run(ctx, cmd_args)
    except SystemExit:
        raise
    except Exception as exc:
        LOGGER.exception("command failed")
        print(f"Command '{cmd_name}' failed: {exc}")
        return 2


class ReAttachREPL:
    """prompt_toolkit REPL; falls back to input() when stdin is not a terminal."""

    def __init__(
        self,
        ctx: ReAttachContext,
        registry: CommandRegistry,
        *,
        history_path: Optional[str] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry
        self.history_path = history_path

    def run(self) -> int:
        try:
            if not sys.stdin.isatty():
                return self._fallback_loop()
            return self._prompt_loop()
        finally:
            self.ctx.shutdown()

    def _prompt_loop(self) -> int:
        history = FileHistory(self.history_path) if self.history_path else InMemoryHistory()
        completer = ReAttachCompleter(self.ctx, self.registry)
        session = PromptSession("reattach> ", history=history, completer=completer, complete_while_typing=False)
        buffer: List[str] = []
        while True:
            try:
                with patch_stdout():
                    line = session.prompt()
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            if self._handle_multiline(buffer, line):
                continue
            payload = " ".join(buffer) if buffer else line
            buffer.clear()
            self._dispatch(payload)

    def _fallback_loop(self) -> int:
        buffer: List[str] = []
        while True:
            try:
                line = input()
            except (EOFError, KeyboardInterrupt):
                return 0
            if self._handle_multiline(buffer, line):
                continue
            payload = " ".join(buffer) if buffer else line
            buffer.clear()
            self._dispatch(payload)

    def _dispatch(self, line: str) -> None:
        dispatch_line(self.ctx, self.registry, line)

    def _handle_multiline(self, buffer: List[str], line: str) -> bool:
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            buffer.append(stripped[:-1])
            return True
        if buffer:
            buffer.append(stripped)
        return False
