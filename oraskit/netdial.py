"""Dialing with predefined host-to-address resolutions."""

from __future__ import annotations

import socket
from typing import Any, Callable

DialFunc = Callable[[str, str], Any]


def _default_dial(network: str, addr: str) -> socket.socket:
    host, _, port = addr.rpartition(":")
    host = host.strip("[]")
    return socket.create_connection((host, int(port)))


class Dialer:
    """Opens connections, first replacing addresses that have a custom resolution."""

    def __init__(self, base_dial: DialFunc | None = None) -> None:
        self.base_dial: DialFunc = base_dial or _default_dial
        self._resolve: dict[str, str] = {}

    @property
    def resolve_map(self) -> dict[str, str]:
        """A copy of the ``host:port`` to ``address:port`` rules."""
        return dict(self._resolve)

    def add(self, host: str, port: int, to_ip: Any, to_port: int) -> None:
        """Resolve ``host:port`` to ``to_ip:to_port`` when dialing."""
        self._resolve[f"{host}:{port}"] = f"{to_ip}:{to_port}"

    def dial(self, network: str, addr: str) -> Any:
        """Connect to ``addr`` on ``network``, honouring the resolution rules."""
        return self.base_dial(network, self._resolve.get(addr, addr))