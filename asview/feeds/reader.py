"""
Shared line iteration for the pipe- and comma-delimited input files.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from asview.errors import FeedFormatError


def iter_lines(path: Path | str, comment: str | None = None) -> Iterator[tuple[int, str]]:
    """
    Yield ``(line_number, line)`` for every non-blank line of a text file.

    Line numbers start at 1. Trailing newlines are stripped. Lines starting
    with ``comment`` are skipped when a comment marker is given.

    Raises:
        FileNotFoundError: if the file does not exist
        FeedFormatError: if a line is not valid UTF-8
    """
    with Path(path).open("rb") as fh:
        for line_number, raw in enumerate(fh, start=1):
            try:
                line = raw.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError as exc:
                text = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                raise FeedFormatError(path, line_number, text, f"Invalid UTF-8: {exc.reason}") from exc
            if not line.strip():
                continue
            if comment and line.startswith(comment):
                continue
            yield line_number, line
