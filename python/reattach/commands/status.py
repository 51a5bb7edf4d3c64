"""Status command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_result


class StatusCommand(Command):
    def __init__(self) -> None:
        super().__init__("status", "Show store and attach status")

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        history = ctx.ensure_history()
        session = ctx.session
        attached = sorted(session.attached) if session else []
        data = {
            "store": ctx.store_label,
            "entries": len(history.items),
            "capacity": history.capacity,
            "attached": attached,
        }
        emit_result(
            ctx,
            message=f"Store: {ctx.store_label} entries={len(history.items)}/{history.capacity}",
            data=data,
        )
        if not ctx.json_output and attached:
            print(f"  attached: {', '.join(str(pid) for pid in attached)}")
        return 0
