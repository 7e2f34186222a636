"""Fetching a server's TLS certificate and extracting its names."""

from __future__ import annotations

import ipaddress
import socket
import ssl

from cryptography import x509
from cryptography.x509.oid import NameOID

from caduceus.models import CertificateInfo


def split_address(address: str) -> tuple[str, str]:
    """Split 'host:port' or '[v6]:port' into host and port strings."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"address {address}: missing ']' in address")
        rest = address[end + 1:]
        if not rest:
            raise ValueError(f"address {address}: missing port in address")
        if not rest.startswith(":") or ":" in rest[1:]:
            raise ValueError(f"address {address}: too many colons in address")
        host = address[1:end]
        port = rest[1:]
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            raise ValueError(f"address {address}: missing port in address")
        if ":" in host:
            raise ValueError(f"address {address}: too many colons in address")
    if "[" in host or "]" in host or "[" in port or "]" in port:
        raise ValueError(f"address {address}: unexpected bracket in address")
    return host, port


def _is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host.split("%", 1)[0])
    except ValueError:
        return False
    return True


def _client_context() -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def get_ssl_cert(address: str, timeout: float) -> bytes:
    """Connect to address, complete a TLS handshake without verification and return the leaf certificate as DER.

    Raises OSError (including TimeoutError and ssl.SSLError) on failure.
    """
    host, port_text = split_address(address)
    port: int | str = int(port_text) if port_text.isdigit() else port_text
    server_name = None if not host or _is_ip(host) else host
    context = _client_context()
    with socket.create_connection((host, port), timeout=timeout) as raw:
        with context.wrap_socket(raw, server_hostname=server_name) as tls:
            der = tls.getpeercert(binary_form=True)
    if not der:
        raise ConnectionError(f"no peer certificate from {address}")
    return der


def certificate_info(origin: str, der: bytes) -> CertificateInfo:
    """Parse a DER certificate into a CertificateInfo tagged with origin."""
    cert = x509.load_der_x509_certificate(der)
    subject = cert.subject

    def values(oid: x509.ObjectIdentifier) -> list[str]:
        return [str(attr.value) for attr in subject.get_attributes_for_oid(oid)]

    common_names = values(NameOID.COMMON_NAME)
    common_name = common_names[-1] if common_names else ""

    dns_names: list[str] = []
    emails: list[str] = []
    ips: list[str] = []
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        san = None
    if san is not None:
        dns_names = list(san.get_values_for_type(x509.DNSName))
        emails = list(san.get_values_for_type(x509.RFC822Name))
        ips = [str(ip) for ip in san.get_values_for_type(x509.IPAddress)]

    return CertificateInfo(
        origin_ip=origin,
        organization=values(NameOID.ORGANIZATION_NAME),
        organization_unit=values(NameOID.ORGANIZATIONAL_UNIT_NAME),
        common_name=common_name,
        san=dns_names,
        domains=[common_name, *dns_names],
        emails=emails,
        ip_addrs=ips,
    )