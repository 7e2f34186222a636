"""Turning user input (hosts, host:port pairs, CIDRs, files) into dial targets."""

from __future__ import annotations

import ipaddress
import os
import re
from collections.abc import Iterable, Iterator

_DOMAIN_RE = re.compile(
    r"(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}"
)


def is_valid_domain(domain: str) -> bool:
    """True if the string is a plain dotted domain name with an alphabetic TLD."""
    return _DOMAIN_RE.fullmatch(domain) is not None


def is_wildcard(domain: str) -> bool:
    """True if the string holds a '*' and is a valid domain once '*.' labels are removed."""
    return "*" in domain and is_valid_domain(domain.replace("*.", ""))


def is_cidr(value: str) -> bool:
    """True if the value looks like a network in CIDR notation."""
    return "/" in value


def is_host_port(value: str) -> bool:
    """True if the value already carries a port."""
    return ":" in value


def _parse_cidr(cidr: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    address, sep, prefix = cidr.partition("/")
    if not sep or not prefix.isdigit() or not address:
        raise ValueError(f"invalid CIDR address: {cidr}")
    try:
        return ipaddress.ip_network(f"{address}/{int(prefix)}", strict=False)
    except ValueError as exc:
        raise ValueError(f"invalid CIDR address: {cidr}") from exc


def ips_from_cidr(cidr: str, ports: Iterable[str]) -> Iterator[str]:
    """Yield 'ip:port' for every address of the network and every port.

    The CIDR is validated before anything is yielded; a bad one raises ValueError.
    """
    network = _parse_cidr(cidr)
    port_list = list(ports)

    def generate() -> Iterator[str]:
        for address in network:
            for port in port_list:
                yield f"{address}:{port}"

    return generate()


def process_input(item: str, ports: Iterable[str]) -> Iterator[str]:
    """Expand one input entry into dial targets."""
    item = item.strip()
    port_list = list(ports)
    if is_host_port(item):
        return iter([item])
    if is_cidr(item):
        try:
            return ips_from_cidr(item, port_list)
        except ValueError as exc:
            raise ValueError("unable to parse CIDR" + item) from exc
    return (f"{item}:{port}" for port in port_list)


def intake(ports: Iterable[str], source: str) -> Iterator[str]:
    """Yield targets from a file of entries (one per line) or a comma-separated list."""
    port_list = list(ports)
    if source and os.path.exists(source):
        with open(source, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                line = line.rstrip("\n")
                if line.endswith("\r"):
                    line = line[:-1]
                yield from process_input(line, port_list)
    else:
        for entry in source.split(","):
            yield from process_input(entry, port_list)