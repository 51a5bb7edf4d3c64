"""ps command (attachable process listing)."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_error, emit_result, render_process_table, targets_payload


class PsCommand(Command):
    def __init__(self) -> None:
        super().__init__("ps", "List attachable processes")
        self._parser = argparse.ArgumentParser(prog="ps", add_help=False)
        self._parser.add_argument("filter", nargs="?", help="Case-insensitive name or path filter")

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        session = ctx.ensure_session()
        try:
            targets = session.processes.list_targets()
        except Exception as exc:
            emit_error(ctx, message=f"ps failed: {exc}")
            return 2
        if args.filter:
            needle = args.filter.lower()
            targets = [t for t in targets if needle in t.process_path.lower()]
        if ctx.json_output:
            emit_result(ctx, message="ps", data={"processes": targets_payload(targets)})
            return 0
        render_process_table(targets, known=session.history.items.snapshot())
        return 0
