"""reattach CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .commands import CommandRegistry, build_registry
from .constants import DEFAULT_COMMAND_HISTORY_PATH, DEFAULT_STORE_PATH, LOG_LEVEL_ENV, STORE_ENV
from .context import ReAttachContext
from .repl import ReAttachREPL, dispatch_line

LOG = logging.getLogger("reattach.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Remember attached processes and attach to them again")
    parser.add_argument(
        "--store",
        type=Path,
        default=Path(os.environ.get(STORE_ENV) or DEFAULT_STORE_PATH),
        help="JSON file holding the attach history",
    )
    parser.add_argument("--no-store", action="store_true", help="Keep the history in memory only")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument("--log-level", default=os.environ.get(LOG_LEVEL_ENV, "INFO"), help="Logging level (default INFO)")
    parser.add_argument(
        "-c",
        "--command",
        help="Execute a single command non-interactively (quote the command string)",
    )
    parser.add_argument("--script", type=Path, help="Execute commands from a file, one per line")
    parser.add_argument(
        "--history",
        type=Path,
        default=DEFAULT_COMMAND_HISTORY_PATH,
        help="Path to the REPL command history file",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    ctx = ReAttachContext(
        store_path=None if args.no_store else args.store,
        json_output=args.json,
    )
    registry = build_registry()
    if args.command:
        return _run_single_command(ctx, registry, args.command)
    if args.script:
        return _run_script(ctx, registry, str(args.script))
    repl = ReAttachREPL(ctx, registry, history_path=str(args.history))
    try:
        return repl.run()
    except KeyboardInterrupt:
        print()
        return 0


def _run_single_command(ctx: ReAttachContext, registry: CommandRegistry, command_line: str) -> int:
    try:
        return dispatch_line(ctx, registry, command_line)
    except SystemExit as exc:
        return int(exc.code or 0)
    finally:
        ctx.shutdown()


def _run_script(ctx: ReAttachContext, registry: CommandRegistry, path: str) -> int:
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        print(f"Cannot read script {path}: {exc}")
        return 1
    try:
        for number, line in enumerate(lines, start=1):
            rc = dispatch_line(ctx, registry, line)
            if rc != 0:
                LOG.debug("script %s stopped at line %d (rc=%d)", path, number, rc)
                return rc
        return 0
    except SystemExit as exc:
        return int(exc.code or 0)
    finally:
        ctx.shutdown()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
