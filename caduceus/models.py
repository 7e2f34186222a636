"""Data types shared by the scanner: run options, certificate details and probe results."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class ScrapeArgs:
    """Options controlling a scan run."""

    concurrency: int = 100
    ports: list[str] = field(default_factory=lambda: ["443"])
    timeout: int = 4
    port_list: str = "443"
    help: bool = False
    input: str = "NONE"
    debug: bool = False
    json_output: bool = False
    print_wildcards: bool = False
    print_stats: bool = False


@dataclass
class CertificateInfo:
    """The interesting parts of a peer certificate, tagged with the address it came from."""

    origin_ip: str
    organization: list[str] = field(default_factory=list)
    organization_unit: list[str] = field(default_factory=list)
    common_name: str = ""
    san: list[str] = field(default_factory=list)
    domains: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    ip_addrs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping; absent lists become None."""
        return {
            "originip": self.origin_ip,
            "org": list(self.organization) or None,
            "orgunit": list(self.organization_unit) or None,
            "commonName": self.common_name,
            "san": list(self.san) or None,
            "domains": list(self.domains) or None,
            "emails": list(self.emails) or None,
            "ips": list(self.ip_addrs) or None,
        }

    def to_json(self) -> str:
        """Serialise compactly, escaping HTML-sensitive characters."""
        text = json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return text


@dataclass
class Result:
    """Outcome of probing one address."""

    ip: str
    hit: bool = False
    timeout: bool = False
    error: BaseException | None = None
    certificate: CertificateInfo | None = None