"""Network connections and matching them against interface counter tables."""

from __future__ import annotations

import os
import socket
import struct
from dataclasses import dataclass

import psutil

from .common import string_similarity

__all__ = [
    "NO_ADDRESS",
    "NO_CONNECTION",
    "NetworkConnection",
    "IfEntry",
    "get_adapter_info",
    "refresh_ip_address",
    "find_connection",
    "find_connection_fuzzy",
    "fill_if_table_info",
    "all_if_table_info",
]

NO_ADDRESS = "-.-.-.-"
NO_CONNECTION = "<No connection>"
_ROUTE_TABLE = "/proc/net/route"


@dataclass
class NetworkConnection:
    """One network connection and its counters at start-up."""

    index: int = 0
    description: str = ""
    description_2: str = ""
    in_bytes: int = 0
    out_bytes: int = 0
    ip_address: str = NO_ADDRESS
    subnet_mask: str = NO_ADDRESS
    default_gateway: str = NO_ADDRESS


@dataclass
class IfEntry:
    """One row of an interface counter table."""

    description: str
    in_octets: int = 0
    out_octets: int = 0


def _default_gateways():
    gateways = {}
    if not os.path.exists(_ROUTE_TABLE):
        return gateways
    try:
        with open(_ROUTE_TABLE, encoding="ascii", errors="replace") as table:
            next(table, None)
            for line in table:
                fields = line.split()
                if len(fields) < 3 or fields[1] != "00000000":
                    continue
                try:
                    packed = struct.pack("<L", int(fields[2], 16))
                except (ValueError, struct.error):
                    continue
                gateways.setdefault(fields[0], socket.inet_ntoa(packed))
    except OSError:
        pass
    return gateways


def get_adapter_info():
    """List the connections with their IPv4 address, mask and gateway."""
    gateways = _default_gateways()
    adapters = []
    for name, addresses in psutil.net_if_addrs().items():
        connection = NetworkConnection(description=name)
        ipv4 = next((a for a in addresses if a.family == socket.AF_INET), None)
        if ipv4 is not None:
            connection.ip_address = ipv4.address or NO_ADDRESS
            connection.subnet_mask = ipv4.netmask or NO_ADDRESS
        if name in gateways:
            connection.default_gateway = gateways[name]
        adapters.append(connection)
    if not adapters:
        adapters.append(NetworkConnection(description=NO_CONNECTION))
    return adapters


def refresh_ip_address(adapters):
    """Update address, mask and gateway of adapters with the current values."""
    for fresh in get_adapter_info():
        for adapter in adapters:
            if adapter.description == fresh.description:
                adapter.ip_address = fresh.ip_address
                adapter.subnet_mask = fresh.subnet_mask
                adapter.default_gateway = fresh.default_gateway


def find_connection(description, if_table):
    """Index of the entry whose description equals description, or None."""
    return next(
        (i for i, entry in enumerate(if_table) if entry.description == description),
        None,
    )


def find_connection_fuzzy(description, if_table):
    """Index of the entry best matching description.

    An entry that contains description, or is contained in it, wins first;
    otherwise the most similar entry is taken. Raises ValueError on an
    empty table.
    """
    if not if_table:
        raise ValueError("interface table is empty")
    for i, entry in enumerate(if_table):
        descr = entry.description
        if len(descr) >= len(description):
            found = description in descr
        else:
            found = descr in description
        if found:
            return i
    best_index = 0
    max_degree = 0.0
    for i, entry in enumerate(if_table):
        degree = string_similarity(entry.description, description)
        if degree > max_degree:
            max_degree = degree
            best_index = i
    return best_index


def fill_if_table_info(adapters, if_table):
    """Set index, initial counters and table description for each adapter."""
    for adapter in adapters:
        if not adapter.description:
            continue
        index = find_connection(adapter.description, if_table)
        if index is None:
            index = find_connection_fuzzy(adapter.description, if_table)
        entry = if_table[index]
        adapter.index = index
        adapter.in_bytes = entry.in_octets
        adapter.out_bytes = entry.out_octets
        adapter.description_2 = entry.description


def all_if_table_info(if_table):
    """A connection for every entry of the table, with addresses where known."""
    known = get_adapter_info()
    result = []
    for i, entry in enumerate(if_table):
        connection = NetworkConnection(
            index=i,
            description=entry.description,
            description_2=entry.description,
            in_bytes=entry.in_octets,
            out_bytes=entry.out_octets,
        )
        match = next((a for a in known if a.description in connection.description), None)
        if match is not None:
            connection.ip_address = match.ip_address
            connection.subnet_mask = match.subnet_mask
            connection.default_gateway = match.default_gateway
        result.append(connection)
    return result