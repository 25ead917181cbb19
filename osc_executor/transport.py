"""
UDP transport for outbound OSC messages.

Messages are encoded with python-osc's OscMessageBuilder, which keeps the
OSC type of each argument (str -> s, int -> i, float -> f, bool -> T/F).
"""

import logging
import socket
from typing import Any, Callable, Sequence

from pythonosc.osc_message_builder import OscMessageBuilder

logger = logging.getLogger("sidekick.osc.transport")

ABLETON_OSC_HOST = "127.0.0.1"
ABLETON_OSC_PORT = 11000


def build_osc_message(address: str, args: Sequence[Any] = ()) -> bytes:
    """Encode an address plus ordered args as an OSC datagram."""
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build().dgram


class OscUdpClient:
    """Short-lived, send-only UDP client for one batch.

    Resolves the destination once at construction so an unusable endpoint
    fails before any command is attempted.
    """

    def __init__(self, host: str = ABLETON_OSC_HOST, port: int = ABLETON_OSC_PORT):
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        family, socktype, proto, _canon, sockaddr = infos[0]
        self._remote = sockaddr
        self._sock = socket.socket(family, socktype, proto)
        self.host = host
        self.port = port

    def send(self, address: str, args: Sequence[Any] = ()):
        """Send one OSC message. Raises on encode or socket errors."""
        self._sock.sendto(build_osc_message(address, args), self._remote)

    def close(self):
        self._sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"OscUdpClient({self.host!r}, {self.port})"


ClientFactory = Callable[[str, int], OscUdpClient]
