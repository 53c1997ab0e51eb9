"""
The routing knowledge base.

Everything the path reconstruction needs is gathered here once, from three
inputs, and never changed afterwards:

- the AS relationship graph
- per-prefix sets of observed AS paths (one radix tree per address family)
- traffic weights: how many destinations fall into each prefix
- every ASN seen in the routing table

Views hold a reference to a single knowledge base and only read from it,
which is what makes two views comparable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from asview.feeds.addresses import read_destinations
from asview.feeds.bgp_table import Announcement, read_announcements
from asview.feeds.relationships import read_relationships
from asview.routing.paths import ASPath
from asview.routing.prefix_index import IPAddress, PrefixIndex, PrefixKey, PrefixMatch
from asview.routing.relationships import ASN, RelationshipGraph

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """
    Immutable routing knowledge shared by every view.

    Use :meth:`build` to load from files or :meth:`from_records` for data
    that is already parsed.
    """

    def __init__(
        self,
        relationships: RelationshipGraph,
        paths: Mapping[PrefixKey, Iterable[ASPath]],
        weights: Mapping[PrefixKey, int],
        known_asns: Iterable[ASN],
    ) -> None:
        self._relationships = relationships
        self._index = PrefixIndex()
        for prefix, path_set in paths.items():
            self._index.insert(prefix, frozenset(path_set))
        self._known_asns: frozenset[ASN] = frozenset(known_asns)
        self._assign_weights(weights)

    def _assign_weights(self, weights: Mapping[PrefixKey, int]) -> None:
        # Only called while the instance is still being constructed
        self._weights: dict[PrefixKey, int] = {k: v for k, v in weights.items() if v > 0}
        self._weighted_prefixes: tuple[PrefixKey, ...] = tuple(
            sorted(self._weights, key=lambda key: key.sort_key)
        )

    @classmethod
    def build(
        cls,
        relationships_file: Path | str,
        bgp_file: Path | str,
        destinations_file: Path | str,
    ) -> "KnowledgeBase":
        """
        Load a knowledge base from the three input files.

        Raises:
            FileNotFoundError: if any input file is missing
            FeedFormatError: if any line of any file cannot be parsed
        """
        logger.info("Building knowledge base")
        return cls.from_records(
            read_relationships(relationships_file),
            read_announcements(bgp_file),
            read_destinations(destinations_file),
        )

    @classmethod
    def from_records(
        cls,
        relationships: Iterable[tuple[ASN, ASN, int]],
        announcements: Iterable[Announcement | tuple[PrefixKey, Iterable[ASPath]]],
        destinations: Iterable[IPAddress | str],
    ) -> "KnowledgeBase":
        """
        Build from parsed records, in the fixed order relationships, routes,
        destinations.

        Destinations are weighted against the prefixes announced in the same
        call; addresses no prefix covers are dropped.
        """
        graph = RelationshipGraph.from_records(relationships)
        logger.debug("Loaded %d directed relations", len(graph))

        paths: dict[PrefixKey, set[ASPath]] = {}
        known_asns: set[ASN] = set()
        for prefix, path_set in announcements:
            stored = paths.setdefault(prefix, set())
            for path in path_set:
                stored.add(tuple(path))
                known_asns.update(path)
        logger.debug("Loaded %d prefixes covering %d ASNs", len(paths), len(known_asns))

        knowledge_base = cls(graph, paths, {}, known_asns)

        weights: dict[PrefixKey, int] = {}
        matched = 0
        dropped = 0
        for address in destinations:
            match = knowledge_base.longest_match(address)
            if match is None:
                dropped += 1
                continue
            matched += 1
            weights[match.prefix] = weights.get(match.prefix, 0) + 1
        logger.info(
            "Weighted %d destinations into %d prefixes (%d unrouted dropped)",
            matched,
            len(weights),
            dropped,
        )
        knowledge_base._assign_weights(weights)
        return knowledge_base

    @property
    def relationships(self) -> RelationshipGraph:
        return self._relationships

    @property
    def weights(self) -> Mapping[PrefixKey, int]:
        """Traffic weight per destination prefix, positive entries only."""
        return MappingProxyType(self._weights)

    @property
    def known_asns(self) -> frozenset[ASN]:
        return self._known_asns

    def weighted_prefixes(self) -> tuple[PrefixKey, ...]:
        """Destination prefixes with positive weight, in a stable order."""
        return self._weighted_prefixes

    def longest_match(self, address: IPAddress | str) -> PrefixMatch | None:
        return self._index.longest_match(address)

    def exact_match(self, prefix: PrefixKey) -> frozenset[ASPath] | None:
        return self._index.exact_match(prefix)

    def prefix_count(self) -> int:
        return len(self._index)

    def __reduce__(self):
        # Radix trees do not pickle; ship the plain mappings and rebuild
        paths = {prefix: path_set for prefix, path_set in self._index.items()}
        return (
            self.__class__,
            (
                self._relationships,
                paths,
                dict(self._weights),
                self._known_asns,
            ),
        )

    def __repr__(self) -> str:
        return (
            f"KnowledgeBase(prefixes={len(self._index)}, "
            f"destinations={len(self._weights)}, asns={len(self._known_asns)})"
        )
