"""Command line splitting for the reattach REPL and scripts."""

from __future__ import annotations

import shlex
from typing import List

PARSE_ERROR_MARKER = "#parse-error"


def split_command(line: str) -> List[str]:
    """Split *line* into argv tokens; blank and ``#`` comment lines yield []."""
    stripped = (line or "").strip()
    if not stripped or stripped.startswith("#"):
        return []
    try:
        return shlex.split(stripped, comments=True, posix=True)
    except ValueError as exc:
        return [PARSE_ERROR_MARKER, str(exc)]


def is_parse_error(argv: List[str]) -> bool:
    return bool(argv) and argv[0] == PARSE_ERROR_MARKER


__all__ = ["PARSE_ERROR_MARKER", "split_command", "is_parse_error"]
