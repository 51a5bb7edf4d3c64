"""Reattach command: attach again to a remembered target."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_error, emit_result
from ..session import ReAttachError


class ReAttachCommand(Command):
    def __init__(self) -> None:
        super().__init__("reattach", "Attach to history entry N (default 1)", aliases=("ra",))
        parser = argparse.ArgumentParser(prog="reattach", add_help=False)
        parser.add_argument("index", nargs="?", type=int, default=1, help="1-based history index")
        parser.add_argument("--wait", type=float, default=0.0, help="Seconds to wait for the process to start")
        self._parser = parser

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        if args.index < 1:
            emit_error(ctx, message="history index starts at 1")
            return 1
        session = ctx.ensure_session()
        if args.wait > 0 and not ctx.json_output:
            print(f"Waiting up to {args.wait:g}s for history entry #{args.index} to start...")
        try:
            target = session.reattach(args.index - 1, wait=args.wait)
        except ReAttachError as exc:
            emit_error(ctx, message=str(exc), data={"index": args.index})
            return 1
        emit_result(
            ctx,
            message=f"Reattached to {target} pid={target.process_id}",
            data={"result": "attached", "index": args.index, "target": target.as_dict()},
        )
        return 0
