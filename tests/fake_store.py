"""In-memory store client used in place of a Tile38 server."""

from __future__ import annotations

import threading

from core.errors import GeoStoreError
from core.store_address import StoreLocation


class FakeStoreClient:
    """Record commands and fail on request.

    Args:
        fail_on: ``(command, dataset, index)`` triples that raise GeoStoreError.
        reachable: When False, every PING fails.
    """

    def __init__(
        self,
        fail_on: set[tuple[str, str, int]] | None = None,
        reachable: bool = True,
    ) -> None:
        self.commands: list[tuple[object, ...]] = []
        self.closed = False
        self.ping_count = 0
        self.location: StoreLocation | None = None
        self._fail_on = fail_on or set()
        self._reachable = reachable
        self._lock = threading.Lock()

    def execute(self, command: str, *args: object) -> object:
        key = (command, str(args[0]), int(args[1])) if len(args) >= 2 else None
        if key in self._fail_on:
            raise GeoStoreError(f"{command} rejected by fake store")
        with self._lock:
            self.commands.append((command, *args))
        return "OK"

    def ping(self) -> None:
        self.ping_count += 1
        if not self._reachable:
            raise GeoStoreError("connection refused")

    def close(self) -> None:
        self.closed = True

    def factory(self, location: StoreLocation) -> "FakeStoreClient":
        """Store factory that always returns this client."""
        self.location = location
        return self

    def commands_for(self, dataset_name: str) -> list[tuple[object, ...]]:
        """Commands addressed to one dataset, in issue order."""
        return [command for command in self.commands if command[1] == dataset_name]
