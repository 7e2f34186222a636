import datetime
import ipaddress
import socket
import ssl
import threading

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from caduceus.certs import certificate_info, get_ssl_cert, split_address


def _make_cert(with_san=True):
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name(
        [
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example Org"),
            x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "Ops"),
            x509.NameAttribute(NameOID.COMMON_NAME, "example.com"),
        ]
    )
    now = datetime.datetime.now(datetime.timezone.utc)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
    )
    if with_san:
        builder = builder.add_extension(
            x509.SubjectAlternativeName(
                [
                    x509.DNSName("www.example.com"),
                    x509.DNSName("*.example.com"),
                    x509.RFC822Name("admin@example.com"),
                    x509.IPAddress(ipaddress.ip_address("192.0.2.1")),
                ]
            ),
            critical=False,
        )
    return builder.sign(key, hashes.SHA256()), key


@pytest.mark.parametrize(
    "address, expected",
    [
        ("1.2.3.4:443", ("1.2.3.4", "443")),
        ("example.com:8443", ("example.com", "8443")),
        ("[::1]:443", ("::1", "443")),
    ],
)
def test_split_address(address, expected):
    assert split_address(address) == expected


@pytest.mark.parametrize("bad", ["1.2.3.4", "::1:443", "[::1]", "[::1]x443", "[::1:443"])
def test_split_address_rejects(bad):
    with pytest.raises(ValueError):
        split_address(bad)


def test_certificate_info_extracts_fields():
    cert, _ = _make_cert()
    der = cert.public_bytes(serialization.Encoding.DER)
    info = certificate_info("192.0.2.1:443", der)
    assert info.origin_ip == "192.0.2.1:443"
    assert info.organization == ["Example Org"]
    assert info.organization_unit == ["Ops"]
    assert info.common_name == "example.com"
    assert info.san == ["www.example.com", "*.example.com"]
    assert info.domains == ["example.com", "www.example.com", "*.example.com"]
    assert info.emails == ["admin@example.com"]
    assert info.ip_addrs == ["192.0.2.1"]


def test_certificate_info_without_san():
    cert, _ = _make_cert(with_san=False)
    info = certificate_info("h:1", cert.public_bytes(serialization.Encoding.DER))
    assert info.san == []
    assert info.domains == ["example.com"]
    assert info.to_dict()["san"] is None


def test_certificate_info_rejects_garbage():
    with pytest.raises(ValueError):
        certificate_info("h:1", b"not a certificate")


def _serve_once(tmp_path):
    cert, key = _make_cert()
    certfile = tmp_path / "cert.pem"
    keyfile = tmp_path / "key.pem"
    certfile.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    keyfile.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(str(certfile), str(keyfile))
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(10)
    port = listener.getsockname()[1]

    def serve():
        try:
            conn, _ = listener.accept()
            conn.settimeout(10)
            with context.wrap_socket(conn, server_side=True):
                pass
        except OSError:
            pass
        finally:
            listener.close()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    return port, thread, cert


def test_get_ssl_cert_fetches_leaf(tmp_path):
    port, thread, cert = _serve_once(tmp_path)
    der = get_ssl_cert(f"127.0.0.1:{port}", 5)
    thread.join(timeout=10)
    assert der == cert.public_bytes(serialization.Encoding.DER)
    assert certificate_info(f"127.0.0.1:{port}", der).common_name == "example.com"


def test_get_ssl_cert_connection_refused():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        get_ssl_cert(f"127.0.0.1:{port}", 2)


def test_get_ssl_cert_bad_address():
    with pytest.raises(ValueError):
        get_ssl_cert("127.0.0.1", 1)