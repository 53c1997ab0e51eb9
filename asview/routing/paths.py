"""
AS paths: parsing, splicing and policy classification.

Paths are plain tuples of ASNs, ordered from the observing AS towards the
origin exactly as they appear in a routing table dump. Tuples give value
equality and hashing for free, which is what deduplication inside a
prefix's path set relies on.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterable, Sequence

from asview.routing.relationships import ASN, ASRelation, RelationshipGraph

ASPath = tuple[ASN, ...]

_ASN_PATTERN = re.compile(r"^\d+$")
_AS_SET_BRACKETS = {"{": "}", "(": ")", "[": "]"}


def parse_asn(token: str) -> ASN:
    """
    Parse a single literal ASN.

    Raises:
        ValueError: if the token is not a non-negative decimal integer
    """
    if not _ASN_PATTERN.match(token):
        raise ValueError(f"Invalid ASN: {token!r}")
    return int(token)


def parse_path_token(token: str) -> list[ASN]:
    """
    Parse one AS path element into the ASNs it may stand for.

    A literal yields one ASN. A bracketed AS-SET such as ``{1,2}``,
    ``(1,2)`` or ``[1,2]`` yields each of its members in order.
    """
    opener = token[:1]
    if opener in _AS_SET_BRACKETS:
        if len(token) < 2 or token[-1] != _AS_SET_BRACKETS[opener]:
            raise ValueError(f"Unbalanced AS-SET: {token!r}")
        members = token[1:-1].split(",")
        return [parse_asn(member.strip()) for member in members]
    return [parse_asn(token)]


def parse_as_path(text: str) -> set[ASPath]:
    """
    Expand a space-separated AS path into every concrete path it denotes.

    Each AS-SET position multiplies the number of results, so ``{1,2} 3``
    becomes ``(1, 3)`` and ``(2, 3)``.

    Raises:
        ValueError: if the path is empty or any token is malformed
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Empty AS path")
    choices = [parse_path_token(token) for token in tokens]
    return set(itertools.product(*choices))


def find_branching_point(source: Sequence[ASN], dest: Sequence[ASN]) -> tuple[int, int] | None:
    """
    Locate the shared hop that keeps the most of both paths.

    Among all positions ``(i, j)`` with ``source[i] == dest[j]`` the pair with
    the largest ``i + j`` wins; on equal sums the later ``i`` is kept.
    Returns None when the paths share no AS.
    """
    last_in_dest: dict[ASN, int] = {}
    for j, asn in enumerate(dest):
        last_in_dest[asn] = j

    best: tuple[int, int] | None = None
    for i, asn in enumerate(source):
        j = last_in_dest.get(asn)
        if j is None:
            continue
        if best is None or i + j >= best[0] + best[1]:
            best = (i, j)
    return best


def splice_paths(source: Sequence[ASN], dest: Sequence[ASN]) -> ASPath | None:
    """
    Join the path seen for a vantage with the path seen for a destination.

    The result walks ``source`` backwards from its end to the shared hop,
    then continues along ``dest`` after that hop. The shared hop appears
    once.
    """
    branch = find_branching_point(source, dest)
    if branch is None:
        return None
    i, j = branch
    return tuple(reversed(source[i:])) + tuple(dest[j + 1:])


def is_valley_free(path: Sequence[ASN], relationships: RelationshipGraph) -> bool:
    """
    Check that the relation between consecutive hops never decreases.

    Once a path goes down to a customer it must keep going down. A hop pair
    with no known relation disqualifies the path.
    """
    state = ASRelation.UNKNOWN
    for current, following in zip(path, path[1:]):
        step = relationships.relation(current, following)
        if step is ASRelation.UNKNOWN or step < state:
            return False
        state = step
    return True


def path_length_key(path: ASPath) -> tuple[int, ASPath]:
    """
    Sort key for picking the shortest path.

    Hop count decides; the hops themselves only break ties so that the pick
    does not depend on set iteration order.
    """
    return len(path), path


def shortest_path(paths: Iterable[ASPath]) -> ASPath | None:
    return min(paths, key=path_length_key, default=None)
