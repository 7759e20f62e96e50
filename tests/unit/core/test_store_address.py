"""Unit tests for store address parsing."""

from __future__ import annotations

import pytest

from core.errors import GeoConfigError
from core.store_address import StoreLocation, parse_store_address


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("localhost:9851", StoreLocation(host="localhost", port=9851)),
        ("tile38", StoreLocation(host="tile38", port=9851)),
        ("[::1]:9852", StoreLocation(host="::1", port=9852)),
        ("::1", StoreLocation(host="::1", port=9851)),
    ],
)
def test_parse_store_address_accepts_supported_forms(
    address: str,
    expected: StoreLocation,
) -> None:
    """Host:port, bare hosts, and IPv6 forms should parse."""
    assert parse_store_address(address) == expected


@pytest.mark.parametrize("address", ["localhost:port", "localhost:70000", ":9851", "[::1"])
def test_parse_store_address_rejects_invalid_values(address: str) -> None:
    """Bad ports, empty hosts, and unbalanced brackets are config errors."""
    with pytest.raises(GeoConfigError):
        parse_store_address(address)


def test_store_location_renders_ipv6_with_brackets() -> None:
    """IPv6 hosts should render in bracketed host:port form."""
    assert str(StoreLocation(host="::1", port=9851)) == "[::1]:9851"
