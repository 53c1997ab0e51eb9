"""
Building many views at once.

Each named vantage becomes its own view. Views never touch each other, so
the per-vantage path inference can run in worker processes; every worker
gets its own copy of the knowledge base and hands back plain dictionaries.
The resulting views all reference the caller's knowledge base, which
keeps them comparable with one another.
"""

from __future__ import annotations

import logging
import multiprocessing
from collections.abc import Sequence

from asview.engine.reconstruction import infer_paths
from asview.engine.view import View
from asview.routing.knowledge_base import KnowledgeBase
from asview.routing.paths import ASPath
from asview.routing.prefix_index import IPAddress, PrefixKey

logger = logging.getLogger(__name__)

_worker_knowledge_base: KnowledgeBase | None = None


def _init_worker(knowledge_base: KnowledgeBase) -> None:
    global _worker_knowledge_base
    _worker_knowledge_base = knowledge_base


def _infer_in_worker(vantage: IPAddress) -> dict[PrefixKey, ASPath]:
    if _worker_knowledge_base is None:
        raise RuntimeError("Worker process was not initialised with a knowledge base")
    return infer_paths(_worker_knowledge_base, vantage)


def build_views(
    knowledge_base: KnowledgeBase,
    named_vantages: Sequence[tuple[str, IPAddress]],
    workers: int = 1,
) -> dict[str, View]:
    """
    Build one single-vantage view per ``(name, address)`` pair.

    Args:
        knowledge_base: Shared knowledge base every view will reference
        named_vantages: Names and vantage addresses, names unique
        workers: Number of worker processes; 1 runs everything in-process

    Returns:
        Mapping of name to view, in input order
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    addresses = [address for _, address in named_vantages]
    if workers == 1 or len(addresses) < 2:
        results = [infer_paths(knowledge_base, address) for address in addresses]
    else:
        processes = min(workers, len(addresses))
        logger.info("Inferring paths for %d vantages on %d workers", len(addresses), processes)
        with multiprocessing.Pool(
            processes, initializer=_init_worker, initargs=(knowledge_base,)
        ) as pool:
            results = pool.map(_infer_in_worker, addresses)

    views: dict[str, View] = {}
    for (name, address), inferred in zip(named_vantages, results):
        view = View(knowledge_base)
        view.absorb(address, inferred)
        views[name] = view
    return views
