"""
Request/response queries against AbletonOSC.

AbletonOSC answers "get" style messages by sending a reply with the same
address back to the sender. This client sends from the socket it listens
on, so the reply lands on our response port.

Example:
    with AbletonQueryClient() as live:
        tempo, = live.query("/live/song/get/tempo")
        info = live.get_project_info()
"""

import logging
import socket
import time
from typing import Any, Optional, Sequence, Tuple

from pydantic import BaseModel
from pythonosc.osc_message import OscMessage, ParseError

from osc_executor.transport import ABLETON_OSC_HOST, ABLETON_OSC_PORT, build_osc_message

logger = logging.getLogger("sidekick.ableton.query")

ABLETON_RESPONSE_PORT = 11001
DEFAULT_TIMEOUT_S = 0.5


class QueryTimeout(TimeoutError):
    """No reply from Ableton for a query address."""
    pass


class ProjectInfo(BaseModel):
    """Snapshot of the current Live set."""
    tempo: float
    is_playing: bool
    current_song_time: float
    signature_numerator: int
    signature_denominator: int
    num_scenes: int
    num_tracks: int

    @property
    def time_signature(self) -> str:
        return f"{self.signature_numerator}/{self.signature_denominator}"


class AbletonQueryClient:
    """Single-socket OSC query client for AbletonOSC."""

    def __init__(
        self,
        host: str = ABLETON_OSC_HOST,
        port: int = ABLETON_OSC_PORT,
        response_port: int = ABLETON_RESPONSE_PORT,
        timeout: float = DEFAULT_TIMEOUT_S,
        sock: Optional[socket.socket] = None,
    ):
        """
        Args:
            host: AbletonOSC host
            port: AbletonOSC listening port
            response_port: Local port AbletonOSC replies to
            timeout: Seconds to wait for each reply
            sock: Pre-built socket (tests); bound to response_port if None
        """
        self._remote = (host, port)
        self.timeout = timeout
        if sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("0.0.0.0", response_port))
        self._sock = sock

    def send(self, address: str, args: Sequence[Any] = ()):
        """Fire-and-forget send on the query socket."""
        self._sock.sendto(build_osc_message(address, args), self._remote)

    def query(self, address: str, args: Sequence[Any] = (), timeout: Optional[float] = None) -> Tuple[Any, ...]:
        """Send an OSC message and wait for the reply with the same address.

        Replies for other addresses (late answers to earlier queries) are
        discarded.

        Raises:
            QueryTimeout: if no matching reply arrives in time
        """
        timeout = self.timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout
        self.send(address, args)

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            self._sock.settimeout(remaining)
            try:
                data, _addr = self._sock.recvfrom(65536)
            except socket.timeout:
                break
            try:
                msg = OscMessage(data)
            except ParseError as e:
                logger.debug("Ignoring unparseable datagram: %s", e)
                continue
            if msg.address == address:
                return tuple(msg.params)
            logger.debug("Ignoring reply for %s while waiting for %s", msg.address, address)

        raise QueryTimeout(f"No response from Ableton for: {address}")

    def test_connection(self) -> bool:
        """True if AbletonOSC answers /live/test (or, failing that, a tempo query)."""
        for address in ("/live/test", "/live/song/get/tempo"):
            try:
                self.query(address)
                return True
            except QueryTimeout:
                logger.debug("No reply to %s", address)
            except OSError as e:
                logger.warning("Connection test failed on %s: %s", address, e)
                return False
        return False

    def get_project_info(self) -> ProjectInfo:
        """Query tempo, transport and set dimensions.

        Raises:
            QueryTimeout: if any of the properties does not answer
        """
        values = {}
        for prop in (
            "tempo",
            "is_playing",
            "current_song_time",
            "signature_numerator",
            "signature_denominator",
            "num_scenes",
            "num_tracks",
        ):
            reply = self.query(f"/live/song/get/{prop}")
            values[prop] = reply[0] if reply else None
        return ProjectInfo(**values)

    def close(self):
        self._sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
