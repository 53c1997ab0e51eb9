"""
Prefix-indexed storage of AS path sets.

IPv4 and IPv6 prefixes live in separate radix trees so the two address
families never shadow each other, but lookups return the same result
shape regardless of family.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterator
from typing import NamedTuple, Union

import radix

from asview.routing.paths import ASPath

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class PrefixKey(NamedTuple):
    """A CIDR block: network address plus prefix length."""

    network: IPAddress
    length: int

    @classmethod
    def from_text(cls, text: str) -> "PrefixKey":
        """
        Parse ``address/length``. Host bits are masked off.

        Raises:
            ValueError: if the text is not a valid prefix
        """
        if "/" not in text:
            raise ValueError(f"Prefix without length: {text!r}")
        network = ipaddress.ip_network(text.strip(), strict=False)
        return cls(network.network_address, network.prefixlen)

    @property
    def version(self) -> int:
        return self.network.version

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Total order across both families (IPv4 first)."""
        return self.network.version, int(self.network), self.length

    def __str__(self) -> str:
        return f"{self.network}/{self.length}"


class PrefixMatch(NamedTuple):
    prefix: PrefixKey
    paths: frozenset[ASPath]


def parse_address(address: str | IPAddress) -> IPAddress:
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address
    return ipaddress.ip_address(address.strip())


class PrefixIndex:
    """
    Two radix trees, one per address family, mapping prefixes to path sets.

    The index is filled once while a knowledge base is being built and only
    read afterwards.
    """

    def __init__(self) -> None:
        self._trees: dict[int, radix.Radix] = {4: radix.Radix(), 6: radix.Radix()}
        self._size = 0

    def insert(self, prefix: PrefixKey, paths: frozenset[ASPath]) -> None:
        """Store the path set for a prefix, replacing any previous one."""
        tree = self._trees[prefix.version]
        node = tree.search_exact(str(prefix.network), prefix.length)
        if node is None:
            node = tree.add(str(prefix.network), prefix.length)
            self._size += 1
        node.data["prefix"] = prefix
        node.data["paths"] = frozenset(paths)

    def longest_match(self, address: str | IPAddress) -> PrefixMatch | None:
        """
        Most specific stored prefix covering ``address``.

        Raises:
            ValueError: if ``address`` is not a valid IP address literal
        """
        addr = parse_address(address)
        node = self._trees[addr.version].search_best(str(addr))
        if node is None:
            return None
        return PrefixMatch(node.data["prefix"], node.data["paths"])

    def exact_match(self, prefix: PrefixKey) -> frozenset[ASPath] | None:
        """Path set stored for exactly ``prefix``, if any."""
        node = self._trees[prefix.version].search_exact(str(prefix.network), prefix.length)
        if node is None:
            return None
        return node.data["paths"]

    def items(self) -> Iterator[tuple[PrefixKey, frozenset[ASPath]]]:
        for version in (4, 6):
            for node in self._trees[version].nodes():
                yield node.data["prefix"], node.data["paths"]

    def prefixes(self) -> Iterator[PrefixKey]:
        for prefix, _ in self.items():
            yield prefix

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, PrefixKey) and self.exact_match(prefix) is not None

    def __len__(self) -> int:
        return self._size
