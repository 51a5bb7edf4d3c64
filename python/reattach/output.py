"""Output helpers for the reattach CLI."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .context import ReAttachContext
from .target import Target


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: ReAttachContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = data
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: ReAttachContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_dump(payload))
    else:
        print(f"error: {message}")


def targets_payload(targets: Sequence[Target]) -> List[Dict[str, Any]]:
    return [target.as_dict() for target in targets]


def render_history_table(targets: Sequence[Target]) -> None:
    """Print history entries with their 1-based reattach index."""
    if not targets:
        print("  history: (empty)")
        return
    header = "     #  PID     Attached  Target"
    print("  history:")
    print(header)
    print("     " + "-" * (len(header) - 5))
    for index, target in enumerate(targets, start=1):
        marker = "*" if target.is_attached else " "
        print(f"   {marker}{index:>2}  {target.process_id!s:<6}  {'yes' if target.is_attached else 'no':<8}  {target}")
        print(f"        {target.process_path}")


def render_process_table(targets: Sequence[Target], *, known: Sequence[Target] = ()) -> None:
    """Print live processes; entries already in the history are marked with ``+``."""
    if not targets:
        print("  processes: (none)")
        return
    header = "      PID     User              Name"
    print("  processes:")
    print(header)
    print("      " + "-" * (len(header) - 6))
    for target in targets:
        marker = "+" if target in known else " "
        print(f"    {marker} {target.process_id!s:<6}  {target.process_user:<16}  {target.process_name}")


__all__ = [
    "emit_result",
    "emit_error",
    "targets_payload",
    "render_history_table",
    "render_process_table",
]
