"""Exit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ReAttachContext


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Detach everything, save history and exit", aliases=("quit", "q"))

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        ctx.shutdown()
        raise SystemExit(0)
