"""Attach command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_error, emit_result
from ..session import ReAttachError


class AttachCommand(Command):
    def __init__(self) -> None:
        super().__init__("attach", "Attach to a running process and remember it")
        self._parser = argparse.ArgumentParser(prog="attach", add_help=False)
        self._parser.add_argument("pid", type=int, help="Process id to attach to")

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        session = ctx.ensure_session()
        try:
            target = session.attach(args.pid)
        except ReAttachError as exc:
            emit_error(ctx, message=str(exc), data={"pid": args.pid})
            return 1
        emit_result(
            ctx,
            message=f"Attached to {target} pid={target.process_id}",
            data={"result": "attached", "target": target.as_dict()},
        )
        return 0
