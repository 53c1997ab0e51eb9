"""Unit tests for asview/feeds/addresses.py"""

import ipaddress

import pytest

from asview.errors import FeedFormatError
from asview.feeds.addresses import parse_vantage_line, read_destinations, read_vantages


@pytest.mark.unit
class TestDestinations:
    def test_read_destinations(self, tmp_path):
        path = tmp_path / "sites.txt"
        path.write_text("10.0.0.1\n\n  2001:db8::1  \n")

        assert list(read_destinations(path)) == [
            ipaddress.ip_address("10.0.0.1"),
            ipaddress.ip_address("2001:db8::1"),
        ]

    def test_bad_address(self, tmp_path):
        path = tmp_path / "sites.txt"
        path.write_text("10.0.0.1\n10.0.0.0/8\n")

        with pytest.raises(FeedFormatError) as excinfo:
            list(read_destinations(path))

        assert excinfo.value.line_number == 2


@pytest.mark.unit
class TestVantages:
    def test_parse_vantage_line(self):
        assert parse_vantage_line("ams, 192.0.2.10") == ("ams", ipaddress.ip_address("192.0.2.10"))

    @pytest.mark.parametrize("line", ["ams", ",192.0.2.1", "ams,192.0.2.300"])
    def test_bad_vantage_lines(self, line):
        with pytest.raises(ValueError):
            parse_vantage_line(line)

    def test_read_vantages_keeps_order(self, tmp_path):
        path = tmp_path / "servers.txt"
        path.write_text("# name,address\nlon,192.0.2.1\nams,2001:db8::5\n")

        vantages = read_vantages(path)

        assert [name for name, _ in vantages] == ["lon", "ams"]
        assert vantages[1][1].version == 6

    def test_duplicate_names(self, tmp_path):
        path = tmp_path / "servers.txt"
        path.write_text("lon,192.0.2.1\nlon,192.0.2.2\n")

        with pytest.raises(FeedFormatError, match="Duplicate vantage name"):
            read_vantages(path)
