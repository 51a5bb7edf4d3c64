"""prompt_toolkit completer for reattach."""

from __future__ import annotations

import shlex
from typing import Iterable, List, Optional, Tuple

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import ReAttachContext

HISTORY_SUBCMDS = ("list", "load", "save", "clear")
INDEX_COMMANDS = {"reattach"}


def _normalise_tokens(text: str) -> List[str]:
    if not text:
        return []
    try:
        tokens = shlex.split(text, posix=True)
        trailing = text[-1].isspace()
    except ValueError:
        tokens = text.strip().split()
        trailing = text.endswith((" ", "\t"))
    if trailing:
        tokens.append("")
    return tokens


class ReAttachCompleter(Completer):
    """Completes command names, history subcommands and reattach indices."""

    def __init__(self, ctx: ReAttachContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        tokens = _normalise_tokens(document.text_before_cursor)
        if len(tokens) <= 1:
            prefix = tokens[0] if tokens else ""
            for name in self._matching(self._command_names(), prefix):
                yield Completion(name, start_position=-len(prefix))
            return
        if len(tokens) != 2:
            return
        prefix = tokens[1]
        command = self.registry.get(tokens[0])
        if command is None:
            return
        if command.name in INDEX_COMMANDS:
            for text, meta in self._index_candidates(prefix):
                yield Completion(text, start_position=-len(prefix), display_meta=meta)
        elif command.name == "history":
            for name in self._matching(HISTORY_SUBCMDS, prefix):
                yield Completion(name, start_position=-len(prefix))
        elif command.name == "help":
            for name in self._matching(self._command_names(), prefix):
                yield Completion(name, start_position=-len(prefix))

    def _command_names(self) -> List[str]:
        names: List[str] = []
        for command in self.registry.list_commands():
            names.append(command.name)
            names.extend(command.aliases)
        return sorted(set(names))

    def _index_candidates(self, prefix: str) -> List[Tuple[str, Optional[str]]]:
        history = self.ctx.ensure_history()
        results = []
        for index, target in enumerate(history.items, start=1):
            text = str(index)
            if text.startswith(prefix):
                results.append((text, str(target)))
        return results

    @staticmethod
    def _matching(candidates: Iterable[str], prefix: str) -> List[str]:
        needle = prefix.lower()
        return sorted(c for c in dict.fromkeys(candidates) if c.lower().startswith(needle))


__all__ = ["ReAttachCompleter"]
