"""TCP links of the launch controller: radar client, control server, test radar."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
import time
from typing import Optional, Union

__all__ = ["RECEIVE_SIZE", "LcClient", "LcServer", "dummy_radar_server_main"]

RECEIVE_SIZE = 1024

log = logging.getLogger(__name__)


def _as_bytes(message: Union[str, bytes]) -> bytes:
    return message.encode("utf-8") if isinstance(message, str) else bytes(message)


class LcClient:
    """A TCP client connection to a server at an IPv4 address."""

    def __init__(self, ip: str, port: int) -> None:
        self.ip = ip
        self.port = port
        self._sock: Optional[socket.socket] = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Connect to the server; raises ValueError for a bad address, OSError on failure."""
        try:
            socket.inet_pton(socket.AF_INET, self.ip)
        except OSError:
            raise ValueError(f"invalid IPv4 address: {self.ip}") from None
        self.disconnect()
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((self.ip, self.port))
        except OSError:
            sock.close()
            raise
        self._sock = sock

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("client is not connected")
        return self._sock

    def send_message(self, message: Union[str, bytes]) -> int:
        """Send a message and return the number of bytes sent."""
        return self._require().send(_as_bytes(message))

    def receive_message(self) -> bytes:
        """Receive up to 1024 bytes; empty once the peer has closed."""
        return self._require().recv(RECEIVE_SIZE)

    def disconnect(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "LcClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.disconnect()


class LcServer:
    """A TCP server that accepts a single client.

    :attr:`listening` is set once the socket is bound and listening, so that
    another thread can learn the bound :attr:`port` while :meth:`start` waits.
    """

    def __init__(self, port: int, host: str = "0.0.0.0") -> None:
        self.host = host
        self._port = port
        self._server: Optional[socket.socket] = None
        self._client: Optional[socket.socket] = None
        self.listening = threading.Event()

    @property
    def port(self) -> int:
        if self._server is not None:
            return self._server.getsockname()[1]
        return self._port

    def start(self) -> None:
        """Bind, listen and block until one client connects."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self._port))
            sock.listen(1)
        except OSError:
            sock.close()
            raise
        self._server = sock
        self.listening.set()
        log.info("[Server] waiting for a client...")
        client, _ = sock.accept()
        self._client = client
        log.info("[Server] client connected")

    def receive_message(self) -> bytes:
        """Receive up to 1024 bytes from the client; empty once it has closed."""
        if self._client is None:
            raise ConnectionError("no client is connected")
        return self._client.recv(RECEIVE_SIZE)

    def stop(self) -> None:
        """Close the client and the listening socket."""
        if self._client is not None:
            self._client.close()
            self._client = None
        if self._server is not None:
            self._server.close()
            self._server = None
        self.listening.clear()

    def __enter__(self) -> "LcServer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


def dummy_radar_server_main(argv=None) -> int:
    """Stand-in radar: accept one client and keep the connection open."""
    parser = argparse.ArgumentParser(description="Accept one radar client and hold the link.")
    parser.add_argument("--port", type=int, default=5001, help="TCP port to listen on")
    parser.add_argument(
        "--hold", type=float, default=None,
        help="seconds to keep the link open (default: until interrupted)",
    )
    args = parser.parse_args(argv)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        try:
            server.bind(("", args.port))
            server.listen(1)
        except OSError as exc:
            print(f"[RadarServer] bind failed: {exc}", file=sys.stderr)
            return 1
        print(f"[RadarServer] waiting for a connection on port {args.port}...")
        try:
            client, _ = server.accept()
        except OSError as exc:
            print(f"[RadarServer] accept failed: {exc}", file=sys.stderr)
            return 1
        with client:
            print("[RadarServer] client connected!")
            try:
                if args.hold is None:
                    while True:
                        time.sleep(1)
                else:
                    time.sleep(args.hold)
            except KeyboardInterrupt:
                pass
    return 0