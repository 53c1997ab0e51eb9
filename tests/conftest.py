"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from asview.routing.knowledge_base import KnowledgeBase  # noqa: E402

# A small world:
#   AS1 provides to AS2 and AS3, AS2 provides to AS4, AS3 provides to AS5,
#   AS2 and AS3 peer.
RELATIONSHIPS = """\
# source: hand written
1|2|-1
1|3|-1
2|4|-1
3|5|-1
2|3|0
"""

BGP_TABLE = """\
R|R|1700000000|routeviews|route-views2|1|198.51.100.1|10.4.0.0/16|198.51.100.1|1 2 4
R|R|1700000000|routeviews|route-views2|3|198.51.100.3|10.4.0.0/16|198.51.100.3|3 2 4
R|R|1700000000|routeviews|route-views2|1|198.51.100.1|10.5.0.0/16|198.51.100.1|1 3 5
R|R|1700000000|routeviews|route-views2|2|198.51.100.2|10.5.0.0/16|198.51.100.2|2 3 5
R|R|1700000000|routeviews|route-views2|2|198.51.100.2|10.0.0.0/8|198.51.100.2|2 1
R|S|1700000000|routeviews|route-views2
"""

DESTINATIONS = """\
10.4.1.1
10.4.2.2
10.5.0.1
192.0.2.1
"""

VANTAGES = """\
as4,10.4.0.9
as5,10.5.0.9
as1,10.9.9.9
"""


@pytest.fixture
def world_files(tmp_path: Path) -> dict[str, Path]:
    """Write the small world's input files and return their paths."""
    files = {
        "relationships": tmp_path / "as_relationships.txt",
        "bgp": tmp_path / "bgp.txt",
        "destinations": tmp_path / "sites.txt",
        "vantages": tmp_path / "servers.txt",
    }
    files["relationships"].write_text(RELATIONSHIPS)
    files["bgp"].write_text(BGP_TABLE)
    files["destinations"].write_text(DESTINATIONS)
    files["vantages"].write_text(VANTAGES)
    return files


@pytest.fixture
def small_kb(world_files: dict[str, Path]) -> KnowledgeBase:
    return KnowledgeBase.build(
        world_files["relationships"], world_files["bgp"], world_files["destinations"]
    )
