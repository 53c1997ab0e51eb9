"""
Reader for CAIDA-style AS relationship files.

Each record is ``as_a|as_b|code``. Lines starting with ``#`` are comments.
Any fields after the code (such as the inference source column of the
serial-2 format) are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from asview.errors import FeedFormatError
from asview.feeds.reader import iter_lines
from asview.routing.paths import parse_asn

logger = logging.getLogger(__name__)


def parse_relationship_line(line: str) -> tuple[int, int, int]:
    """
    Parse one relationship record into ``(as_a, as_b, code)``.

    Raises:
        ValueError: if the record has fewer than three fields or a field is
            not an integer
    """
    fields = line.strip().split("|")
    if len(fields) < 3:
        raise ValueError(f"Expected at least 3 fields, got {len(fields)}")
    as_a = parse_asn(fields[0].strip())
    as_b = parse_asn(fields[1].strip())
    try:
        code = int(fields[2].strip())
    except ValueError:
        raise ValueError(f"Invalid relationship code: {fields[2]!r}") from None
    return as_a, as_b, code


def read_relationships(path: Path | str) -> Iterator[tuple[int, int, int]]:
    """
    Yield every relationship record of ``path``.

    Raises:
        FileNotFoundError: if the file does not exist
        FeedFormatError: on the first unparsable line
    """
    count = 0
    for line_number, line in iter_lines(path, comment="#"):
        try:
            record = parse_relationship_line(line)
        except ValueError as exc:
            raise FeedFormatError(path, line_number, line, str(exc)) from exc
        count += 1
        yield record
    logger.info("Read %d relationship records from %s", count, path)
