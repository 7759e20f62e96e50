"""Store address parsing helpers.

This module centralizes ``host:port`` parsing for the store client.
It keeps address validation behavior consistent across CLI and SDK.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import DEFAULT_STORE_PORT
from core.errors import GeoConfigError


@dataclass(frozen=True)
class StoreLocation:
    """Parsed store location model."""

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def parse_store_address(address: str) -> StoreLocation:
    """Parse and validate a store address.

    Args:
        address: ``host:port``, ``[ipv6]:port``, or a bare host.

    Returns:
        Parsed host and port pair.

    Raises:
        GeoConfigError: If the host is empty or the port is invalid.
    """
    stripped_address = address.strip()
    if stripped_address.startswith("["):
        host, separator, remainder = stripped_address[1:].partition("]")
        if not separator:
            _raise_address_error(address, "missing closing bracket")
        port_text = remainder.removeprefix(":") if remainder else ""
        if remainder and not remainder.startswith(":"):
            _raise_address_error(address, "unexpected text after bracketed host")
    elif stripped_address.count(":") == 1:
        host, _, port_text = stripped_address.partition(":")
    else:
        host, port_text = stripped_address, ""
    if not host:
        _raise_address_error(address, "host is empty")
    return StoreLocation(host=host, port=_parse_port(address, port_text))


def _parse_port(address: str, port_text: str) -> int:
    if not port_text:
        return DEFAULT_STORE_PORT
    if not port_text.isdigit():
        _raise_address_error(address, f"port '{port_text}' is not a number")
    port = int(port_text)
    if not 0 < port < 65536:
        _raise_address_error(address, f"port {port} is out of range")
    return port


def _raise_address_error(address: str, detail: str) -> None:
    """Raise an invalid address error.

    Args:
        address: Invalid address value.
        detail: What is wrong with it.

    Raises:
        GeoConfigError: Always.
    """
    raise GeoConfigError(
        f"Invalid store address '{address}': {detail}. "
        "Provide host:port, e.g. localhost:9851."
    )
