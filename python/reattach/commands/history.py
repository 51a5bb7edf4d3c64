"""History management command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_error, emit_result, render_history_table, targets_payload


class HistoryCommand(Command):
    def __init__(self) -> None:
        super().__init__("history", "List, reload, save or clear remembered targets", aliases=("hist",))
        parser = argparse.ArgumentParser(prog="history", add_help=False)
        subparsers = parser.add_subparsers(dest="subcmd")
        subparsers.required = False
        subparsers.add_parser("list")
        subparsers.add_parser("load")
        subparsers.add_parser("save")
        subparsers.add_parser("clear")
        self._parser = parser

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        history = ctx.ensure_history()
        subcmd = args.subcmd or "list"
        if subcmd == "load":
            found = history.load()
            message = f"Loaded {len(history.items)} target(s) from {ctx.store_label}"
            if not found:
                message = f"No stored history in {ctx.store_label}"
            emit_result(ctx, message=message, data={"loaded": found, "count": len(history.items)})
            return 0
        if subcmd in {"save", "clear"}:
            if subcmd == "clear":
                history.clear()
            if not history.save():
                emit_error(ctx, message=f"failed to save history to {ctx.store_label}")
                return 2
            verb = "Cleared" if subcmd == "clear" else "Saved"
            emit_result(ctx, message=f"{verb} history ({len(history.items)} target(s))", data={"count": len(history.items)})
            return 0
        targets = history.items.snapshot()
        if ctx.json_output:
            emit_result(ctx, message="history", data={"targets": targets_payload(targets)})
            return 0
        render_history_table(targets)
        return 0
