"""
Views: what a set of vantages sees of the paths to every destination.

A view accumulates, per destination prefix, two AS sets across all of
its vantages:

- hard core: ASes on the inferred path from every vantage (intersection)
- all seen: ASes on the inferred path from any vantage (union)

Two views built over the same knowledge base can be compared with a
traffic-weighted dissimilarity over either set.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping

from asview.engine.reconstruction import infer_paths
from asview.routing.knowledge_base import KnowledgeBase
from asview.routing.paths import ASPath
from asview.routing.prefix_index import IPAddress, PrefixKey, parse_address
from asview.routing.relationships import ASN

logger = logging.getLogger(__name__)

SetTerm = Callable[[frozenset[ASN], frozenset[ASN]], float | None]


class View:
    """
    One analytical viewpoint over a fixed knowledge base.

    Created empty and only ever grown by adding vantages.
    """

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        self.knowledge_base = knowledge_base
        self._vantages: list[IPAddress] = []
        self._hard_core: dict[PrefixKey, set[ASN]] = {}
        self._all_seen: dict[PrefixKey, set[ASN]] = {}

    @property
    def vantages(self) -> tuple[IPAddress, ...]:
        return tuple(self._vantages)

    @property
    def hard_core(self) -> dict[PrefixKey, frozenset[ASN]]:
        return {prefix: frozenset(asns) for prefix, asns in self._hard_core.items()}

    @property
    def all_seen(self) -> dict[PrefixKey, frozenset[ASN]]:
        return {prefix: frozenset(asns) for prefix, asns in self._all_seen.items()}

    def add_vantage(self, vantage: IPAddress | str) -> None:
        """Infer paths from ``vantage`` and fold them into the accumulators."""
        address = parse_address(vantage)
        self.absorb(address, infer_paths(self.knowledge_base, address))

    def add_vantages(self, vantages: Iterable[IPAddress | str]) -> None:
        for vantage in vantages:
            self.add_vantage(vantage)

    def absorb(self, vantage: IPAddress | str, inferred: Mapping[PrefixKey, ASPath]) -> None:
        """
        Fold an already computed ``infer_paths`` result into the view.

        The first path recorded for a prefix initialises both sets; later
        paths union into all-seen and intersect into hard-core, in place.
        """
        self._vantages.append(parse_address(vantage))
        for prefix, path in inferred.items():
            hops = set(path)
            if prefix in self._all_seen:
                self._all_seen[prefix] |= hops
                self._hard_core[prefix] &= hops
            else:
                self._all_seen[prefix] = set(hops)
                self._hard_core[prefix] = set(hops)

    def hard_core_mean(self) -> float:
        """Mean hard-core set size over recorded prefixes, NaN when none are."""
        return _mean_size(self._hard_core)

    def all_seen_mean(self) -> float:
        """Mean all-seen set size over recorded prefixes, NaN when none are."""
        return _mean_size(self._all_seen)

    def comparable_with(self, other: "View") -> bool:
        return self.knowledge_base is other.knowledge_base

    def core_dissimilarity(self, other: "View") -> float | None:
        """
        Weighted share of hard-core ASes not common to both views.

        Per prefix the term is the symmetric difference size over the sum of
        both set sizes. Returns None when the views use different knowledge
        bases.
        """
        if not self.comparable_with(other):
            return None
        return self._weighted_average(self._hard_core, other._hard_core, _core_term)

    def jaccard_dissimilarity(self, other: "View") -> float | None:
        """
        Weighted Jaccard distance between the all-seen sets of two views.

        Returns None when the views use different knowledge bases.
        """
        if not self.comparable_with(other):
            return None
        return self._weighted_average(self._all_seen, other._all_seen, _jaccard_term)

    def _weighted_average(
        self,
        ours: Mapping[PrefixKey, set[ASN]],
        theirs: Mapping[PrefixKey, set[ASN]],
        term: SetTerm,
    ) -> float:
        total = 0.0
        total_weight = 0
        empty: frozenset[ASN] = frozenset()
        for prefix, weight in self.knowledge_base.weights.items():
            value = term(frozenset(ours.get(prefix, empty)), frozenset(theirs.get(prefix, empty)))
            if value is None:
                continue
            total += weight * value
            total_weight += weight
        if total_weight == 0:
            return math.nan
        return total / total_weight

    def __repr__(self) -> str:
        return f"View(vantages={len(self._vantages)}, prefixes={len(self._all_seen)})"


def _mean_size(sets: Mapping[PrefixKey, set[ASN]]) -> float:
    if not sets:
        return math.nan
    return sum(len(asns) for asns in sets.values()) / len(sets)


def _core_term(a: frozenset[ASN], b: frozenset[ASN]) -> float | None:
    size = len(a) + len(b)
    if size == 0:
        return None
    return len(a ^ b) / size


def _jaccard_term(a: frozenset[ASN], b: frozenset[ASN]) -> float | None:
    union = a | b
    if not union:
        return None
    return 1 - len(a & b) / len(union)


def core_dissimilarity(a: View, b: View) -> float | None:
    return a.core_dissimilarity(b)


def jaccard_dissimilarity(a: View, b: View) -> float | None:
    return a.jaccard_dissimilarity(b)
