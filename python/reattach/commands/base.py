"""Command base classes for reattach."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..context import ReAttachContext


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        text = f"{self.name:<12} {self.description}"
        if self.aliases:
            text += f" (aliases: {', '.join(self.aliases)})"
        return text
