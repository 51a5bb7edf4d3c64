"""Detach command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import ReAttachContext
from ..output import emit_error, emit_result, targets_payload
from ..session import ReAttachError


class DetachCommand(Command):
    def __init__(self) -> None:
        super().__init__("detach", "Detach from a process (all when no PID is given)")
        self._parser = argparse.ArgumentParser(prog="detach", add_help=False)
        self._parser.add_argument("pid", nargs="?", type=int, help="Optional process id")

    def run(self, ctx: ReAttachContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        session = ctx.ensure_session()
        try:
            detached = session.detach(args.pid)
        except ReAttachError as exc:
            emit_error(ctx, message=str(exc), data={"pid": args.pid})
            return 1
        if not detached:
            message = "Nothing attached"
        else:
            message = "Detached from " + ", ".join(f"{t} pid={t.process_id}" for t in detached)
        emit_result(ctx, message=message, data={"result": "detached", "targets": targets_payload(detached)})
        return 0
