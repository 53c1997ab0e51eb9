"""
Readers for the address lists: destinations and named vantages.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from asview.errors import FeedFormatError
from asview.feeds.reader import iter_lines
from asview.routing.prefix_index import IPAddress, parse_address

logger = logging.getLogger(__name__)


def read_destinations(path: Path | str) -> Iterator[IPAddress]:
    """
    Yield one address per line of a destinations file.

    Raises:
        FileNotFoundError: if the file does not exist
        FeedFormatError: if a line is not an IP address literal
    """
    for line_number, line in iter_lines(path):
        try:
            yield parse_address(line)
        except ValueError as exc:
            raise FeedFormatError(path, line_number, line, str(exc)) from exc


def parse_vantage_line(line: str) -> tuple[str, IPAddress]:
    name, sep, address = line.partition(",")
    if not sep:
        raise ValueError("Expected 'name,address'")
    name = name.strip()
    if not name:
        raise ValueError("Empty vantage name")
    return name, parse_address(address)


def read_vantages(path: Path | str) -> list[tuple[str, IPAddress]]:
    """
    Read ``name,address`` records, one named vantage per line.

    Raises:
        FileNotFoundError: if the file does not exist
        FeedFormatError: on a malformed line or a repeated name
    """
    vantages: list[tuple[str, IPAddress]] = []
    names: set[str] = set()
    for line_number, line in iter_lines(path, comment="#"):
        try:
            name, address = parse_vantage_line(line)
        except ValueError as exc:
            raise FeedFormatError(path, line_number, line, str(exc)) from exc
        if name in names:
            raise FeedFormatError(path, line_number, line, f"Duplicate vantage name {name!r}")
        names.add(name)
        vantages.append((name, address))
    logger.info("Read %d vantages from %s", len(vantages), path)
    return vantages
