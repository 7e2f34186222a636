"""Scan hosts for TLS certificates and report the domain names they contain."""

__version__ = "0.1.0"
__all__ = ["__version__"]