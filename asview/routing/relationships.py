"""
AS business relationships.

A relationship graph records, for an ordered pair of ASes, what the first
AS is to the second: a customer (it consumes transit), a peer, or a
provider. The graph is only consulted when deciding whether an inferred
path respects the valley-free routing policy.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import IntEnum

ASN = int

# Codes used by CAIDA-style relationship files
PROVIDER_TO_CUSTOMER = -1
PEER_TO_PEER = 0


class ASRelation(IntEnum):
    """
    Relation of one AS towards the next hop on a path.

    The numeric order matters: a valley-free path never steps down this
    ordering.
    """

    UNKNOWN = 0
    CONSUMES = 1
    PEERS = 2
    PROVIDES = 3


class RelationshipGraph(Mapping):
    """
    Read-only mapping of ``(as_a, as_b)`` to the relation of ``as_a`` towards ``as_b``.
    """

    def __init__(self, relations: Mapping[tuple[ASN, ASN], ASRelation] | None = None) -> None:
        self._relations: dict[tuple[ASN, ASN], ASRelation] = dict(relations or {})

    @classmethod
    def from_records(cls, records: Iterable[tuple[ASN, ASN, int]]) -> "RelationshipGraph":
        """
        Build a graph from ``(as_a, as_b, code)`` records.

        ``-1`` means ``as_a`` provides transit to ``as_b``, ``0`` means the two
        ASes peer. Any other code is ignored and the pair stays unknown.
        """
        relations: dict[tuple[ASN, ASN], ASRelation] = {}
        for as_a, as_b, code in records:
            if code == PROVIDER_TO_CUSTOMER:
                relations[(as_a, as_b)] = ASRelation.PROVIDES
                relations[(as_b, as_a)] = ASRelation.CONSUMES
            elif code == PEER_TO_PEER:
                relations[(as_a, as_b)] = ASRelation.PEERS
                relations[(as_b, as_a)] = ASRelation.PEERS
        return cls(relations)

    def relation(self, as_a: ASN, as_b: ASN) -> ASRelation:
        """Relation of ``as_a`` towards ``as_b``, UNKNOWN if never recorded."""
        return self._relations.get((as_a, as_b), ASRelation.UNKNOWN)

    def __getitem__(self, key: tuple[ASN, ASN]) -> ASRelation:
        return self._relations[key]

    def __iter__(self) -> Iterator[tuple[ASN, ASN]]:
        return iter(self._relations)

    def __len__(self) -> int:
        return len(self._relations)

    def __repr__(self) -> str:
        return f"RelationshipGraph({len(self._relations)} relations)"
