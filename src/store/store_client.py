"""Tile38 store client.

This module wraps a redis-py connection pool to issue Tile38 commands
and polls the server until it answers during load start-up. The client
is shared by every file worker; redis-py's pool makes concurrent
command issuance safe.
"""

from __future__ import annotations

import time
from typing import Protocol

import redis
from redis.exceptions import RedisError

from core.constants import (
    PING_COMMAND,
    READY_POLL_INTERVAL_SECONDS,
    STORE_CONNECT_TIMEOUT_SECONDS,
)
from core.errors import GeoConnectivityError, GeoStoreError
from core.logging_config import get_logger
from core.store_address import StoreLocation

_LOGGER = get_logger(__name__)


class StoreClient(Protocol):
    """Command interface the loader needs from a store connection."""

    def execute(self, command: str, *args: object) -> object:
        """Run one named command with positional arguments."""

    def ping(self) -> None:
        """Raise GeoStoreError unless the store answers."""

    def close(self) -> None:
        """Release the underlying connections."""


class Tile38Client:
    """Tile38 client speaking RESP through redis-py."""

    def __init__(self, client: redis.Redis, location: StoreLocation) -> None:
        """Wrap an existing redis client.

        Args:
            client: redis-py client pointed at the Tile38 server.
            location: Parsed server address, used in messages.
        """
        self._client = client
        self._location = location

    @classmethod
    def connect(cls, location: StoreLocation) -> "Tile38Client":
        """Create a pooled client for a Tile38 server.

        No socket is opened until the first command.

        Args:
            location: Parsed server address.

        Returns:
            Client bound to the address.
        """
        client = redis.Redis(
            host=location.host,
            port=location.port,
            socket_connect_timeout=STORE_CONNECT_TIMEOUT_SECONDS,
            decode_responses=True,
        )
        return cls(client, location)

    def execute(self, command: str, *args: object) -> object:
        """Run one Tile38 command.

        Args:
            command: Command name, e.g. ``SET`` or ``FSET``.
            *args: Positional command arguments.

        Returns:
            Raw server reply.

        Raises:
            GeoStoreError: If the command fails or the connection drops.
        """
        try:
            return self._client.execute_command(command, *args)
        except RedisError as error:
            raise GeoStoreError(f"{command} failed on {self._location}: {error}") from error

    def ping(self) -> None:
        """Check that the server answers PING.

        Raises:
            GeoStoreError: If the server is unreachable.
        """
        self.execute(PING_COMMAND)

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()


def wait_for_store(
    client: StoreClient,
    address: str,
    timeout_seconds: float,
    poll_interval_seconds: float = READY_POLL_INTERVAL_SECONDS,
) -> None:
    """Poll the store until it answers or the timeout passes.

    Args:
        client: Store client to probe.
        address: Address shown in messages.
        timeout_seconds: Upper bound on the total wait.
        poll_interval_seconds: Pause between attempts.

    Raises:
        GeoConnectivityError: If the store never answers in time.
    """
    deadline = time.monotonic() + timeout_seconds
    while True:
        try:
            client.ping()
        except GeoStoreError as error:
            if time.monotonic() + poll_interval_seconds >= deadline:
                raise GeoConnectivityError(
                    f"could not connect to {address} within {timeout_seconds:g}s: {error}"
                ) from error
            _LOGGER.debug("store_not_ready", address=address, error=str(error))
            time.sleep(poll_interval_seconds)
            continue
        _LOGGER.info("store_ready", address=address)
        return
