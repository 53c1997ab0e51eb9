"""
Path reconstruction for a single vantage.

For a vantage address the knowledge base gives the AS paths observed
towards the vantage's own prefix; for each weighted destination it gives
the paths observed towards that destination. Splicing one of each at a
shared AS produces a candidate path from the vantage to the destination.
The best candidate is the shortest valley-free one, or the shortest of
all when none is valley-free.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from asview.routing.knowledge_base import KnowledgeBase
from asview.routing.paths import ASPath, is_valley_free, shortest_path, splice_paths
from asview.routing.prefix_index import IPAddress, PrefixKey
from asview.routing.relationships import RelationshipGraph

logger = logging.getLogger(__name__)


def candidate_paths(
    source_paths: Iterable[ASPath],
    dest_paths: Iterable[ASPath],
) -> set[ASPath]:
    """Every successful splice of a source path with a destination path."""
    dest_paths = list(dest_paths)
    candidates: set[ASPath] = set()
    for source in source_paths:
        for dest in dest_paths:
            merged = splice_paths(source, dest)
            if merged is not None:
                candidates.add(merged)
    return candidates


def best_path(
    source_paths: Iterable[ASPath],
    dest_paths: Iterable[ASPath],
    relationships: RelationshipGraph,
) -> ASPath | None:
    """
    Pick the inferred path between two path sets.

    Valley-free candidates win over the rest; within the winning group the
    shortest path is taken, ties broken on the hops themselves.
    """
    candidates = candidate_paths(source_paths, dest_paths)
    if not candidates:
        return None
    valley_free = [path for path in candidates if is_valley_free(path, relationships)]
    return shortest_path(valley_free or candidates)


def infer_paths(knowledge_base: KnowledgeBase, vantage: IPAddress | str) -> dict[PrefixKey, ASPath]:
    """
    Infer one path from ``vantage`` to every weighted destination prefix.

    Destinations for which no path can be spliced are left out. A vantage
    that no announced prefix covers yields an empty result.
    """
    anchor = knowledge_base.longest_match(vantage)
    if anchor is None:
        logger.info("Vantage %s is not covered by any announced prefix", vantage)
        return {}

    inferred: dict[PrefixKey, ASPath] = {}
    for prefix in knowledge_base.weighted_prefixes():
        dest_paths = knowledge_base.exact_match(prefix)
        if dest_paths is None:
            continue
        path = best_path(anchor.paths, dest_paths, knowledge_base.relationships)
        if path is not None:
            inferred[prefix] = path

    logger.debug(
        "Vantage %s (via %s): inferred paths to %d of %d destinations",
        vantage,
        anchor.prefix,
        len(inferred),
        len(knowledge_base.weighted_prefixes()),
    )
    return inferred
