"""
Exceptions raised while loading inputs or configuration.

Both derive from ValueError so callers that only care about "bad input"
can catch one type.
"""

from __future__ import annotations

from pathlib import Path


class FeedFormatError(ValueError):
    """A line of an input file could not be parsed."""

    def __init__(self, path: Path | str, line_number: int, line: str, reason: str) -> None:
        self.path = Path(path)
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason} (line: {line!r})")


class ConfigError(ValueError):
    """The run configuration is incomplete or malformed."""
