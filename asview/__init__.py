"""
asview: AS-level path inference and vantage dissimilarity.

This package infers plausible AS paths from observation points to a set
of weighted destination prefixes, using public routing table snapshots
and AS relationship data, and measures how differently two sets of
vantages see the core of the network.

The package provides:
- KnowledgeBase: immutable relationship graph, prefix tries and weights
- View: per-destination hard-core and all-seen AS sets for some vantages
- build_views: one view per named vantage, optionally on worker processes
"""

from asview.engine.pool import build_views
from asview.engine.reconstruction import best_path, infer_paths
from asview.engine.view import View, core_dissimilarity, jaccard_dissimilarity
from asview.errors import ConfigError, FeedFormatError
from asview.routing.knowledge_base import KnowledgeBase
from asview.routing.prefix_index import PrefixKey
from asview.routing.relationships import ASRelation, RelationshipGraph

__all__ = [
    "ASRelation",
    "ConfigError",
    "FeedFormatError",
    "KnowledgeBase",
    "PrefixKey",
    "RelationshipGraph",
    "View",
    "best_path",
    "build_views",
    "core_dissimilarity",
    "infer_paths",
    "jaccard_dissimilarity",
]
