import socket
from types import SimpleNamespace
from unittest import mock

import pytest

from trafficmeter.adapters import (
    NO_ADDRESS,
    NO_CONNECTION,
    IfEntry,
    NetworkConnection,
    all_if_table_info,
    fill_if_table_info,
    find_connection,
    find_connection_fuzzy,
    get_adapter_info,
    refresh_ip_address,
)


def _addrs(address, netmask):
    return [SimpleNamespace(family=socket.AF_INET, address=address, netmask=netmask)]


TABLE = [
    IfEntry("Loopback Pseudo-Interface", 1, 2),
    IfEntry("Example Ethernet Adapter", 100, 200),
    IfEntry("Example Wireless Adapter", 300, 400),
]


def test_find_connection_exact():
    assert find_connection("Example Wireless Adapter", TABLE) == 2


def test_find_connection_missing():
    assert find_connection("Example", TABLE) is None


def test_fuzzy_shorter_inside_entry():
    assert find_connection_fuzzy("Ethernet", TABLE) == 1


def test_fuzzy_entry_inside_longer_description():
    assert find_connection_fuzzy("Example Wireless Adapter #2 extended", TABLE) == 2


def test_fuzzy_falls_back_to_similarity():
    assert find_connection_fuzzy("Exampel Wirelss Adaptr", TABLE) == 2


def test_fuzzy_empty_table():
    with pytest.raises(ValueError):
        find_connection_fuzzy("x", [])


def test_fill_if_table_info_sets_counters():
    adapters = [NetworkConnection(description="Example Ethernet Adapter"),
                NetworkConnection(description="Wireless")]
    fill_if_table_info(adapters, TABLE)
    assert (adapters[0].index, adapters[0].in_bytes, adapters[0].out_bytes) == (1, 100, 200)
    assert adapters[1].index == 2
    assert adapters[1].description_2 == "Example Wireless Adapter"


def test_fill_if_table_info_skips_empty_description():
    adapters = [NetworkConnection()]
    fill_if_table_info(adapters, TABLE)
    assert adapters[0] == NetworkConnection()


def test_get_adapter_info_reads_addresses():
    with mock.patch("psutil.net_if_addrs",
                    return_value={"eth-test": _addrs("192.0.2.10", "255.255.255.0")}):
        adapters = get_adapter_info()
    assert [a.description for a in adapters] == ["eth-test"]
    assert adapters[0].ip_address == "192.0.2.10"
    assert adapters[0].subnet_mask == "255.255.255.0"


def test_get_adapter_info_without_ipv4_keeps_placeholder():
    entry = SimpleNamespace(family=socket.AF_INET6, address="::1", netmask=None)
    with mock.patch("psutil.net_if_addrs", return_value={"v6only-test": [entry]}):
        adapters = get_adapter_info()
    assert adapters[0].ip_address == NO_ADDRESS


def test_get_adapter_info_empty_gives_placeholder():
    with mock.patch("psutil.net_if_addrs", return_value={}):
        adapters = get_adapter_info()
    assert len(adapters) == 1
    assert adapters[0].description == NO_CONNECTION


def test_refresh_ip_address_updates_matching():
    adapters = [NetworkConnection(description="eth-test", in_bytes=5),
                NetworkConnection(description="other-test")]
    with mock.patch("psutil.net_if_addrs",
                    return_value={"eth-test": _addrs("192.0.2.20", "255.255.0.0")}):
        refresh_ip_address(adapters)
    assert adapters[0].ip_address == "192.0.2.20"
    assert adapters[0].in_bytes == 5
    assert adapters[1].ip_address == NO_ADDRESS


def test_all_if_table_info_covers_every_entry():
    table = [IfEntry("eth-test - Packet Filter", 10, 20), IfEntry("unknown-test", 1, 1)]
    with mock.patch("psutil.net_if_addrs",
                    return_value={"eth-test": _addrs("192.0.2.30", "255.255.255.0")}):
        result = all_if_table_info(table)
    assert [c.index for c in result] == [0, 1]
    assert result[0].description == result[0].description_2 == "eth-test - Packet Filter"
    assert result[0].ip_address == "192.0.2.30"
    assert (result[0].in_bytes, result[0].out_bytes) == (10, 20)
    assert result[1].ip_address == NO_ADDRESS