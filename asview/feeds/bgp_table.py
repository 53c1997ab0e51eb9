"""
Reader for pipe-delimited routing table dumps.

Only route records (type ``R`` in the second field) are used. The
announced prefix sits in field 8 and the AS path in field 10, both
counted from 1. Path tokens may be AS-SETs, which expand into several
concrete paths.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple

from asview.errors import FeedFormatError
from asview.feeds.reader import iter_lines
from asview.routing.paths import ASPath, parse_as_path
from asview.routing.prefix_index import PrefixKey

logger = logging.getLogger(__name__)

ROUTE_RECORD = "R"
RECORD_TYPE_FIELD = 1
PREFIX_FIELD = 7
AS_PATH_FIELD = 9


class Announcement(NamedTuple):
    """One route record: a prefix and every concrete path its AS path field denotes."""

    prefix: PrefixKey
    paths: frozenset[ASPath]


def parse_bgp_line(line: str) -> Announcement | None:
    """
    Parse one routing table record.

    Returns:
        The announcement for route records, None for any other record type

    Raises:
        ValueError: if a route record is truncated or its prefix or path is
            malformed
    """
    fields = line.split("|")
    if len(fields) <= RECORD_TYPE_FIELD:
        raise ValueError("Missing record type field")
    if fields[RECORD_TYPE_FIELD] != ROUTE_RECORD:
        return None
    if len(fields) <= AS_PATH_FIELD:
        raise ValueError(f"Route record has {len(fields)} fields, expected at least {AS_PATH_FIELD + 1}")
    prefix = PrefixKey.from_text(fields[PREFIX_FIELD])
    paths = parse_as_path(fields[AS_PATH_FIELD])
    return Announcement(prefix, frozenset(paths))


def read_announcements(path: Path | str) -> Iterator[Announcement]:
    """
    Yield every route announcement of a routing table dump.

    Raises:
        FileNotFoundError: if the file does not exist
        FeedFormatError: on the first unparsable route record
    """
    seen = 0
    skipped = 0
    for line_number, line in iter_lines(path):
        try:
            announcement = parse_bgp_line(line)
        except ValueError as exc:
            raise FeedFormatError(path, line_number, line, str(exc)) from exc
        if announcement is None:
            skipped += 1
            continue
        seen += 1
        yield announcement
    logger.info("Read %d route records from %s (%d other records skipped)", seen, path, skipped)
