"""A datagram server that hands each received packet to a handler."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable, Optional

__all__ = ["MessageHandler", "UDPServer", "BUFFER_SIZE"]

MessageHandler = Callable[[bytes], None]
BUFFER_SIZE = 1024

log = logging.getLogger(__name__)


class UDPServer:
    """Receives UDP datagrams of up to 1024 bytes on a bound port.

    The socket is bound when the server is created; a bind failure raises
    :class:`OSError`. Receives wait at most ``timeout`` seconds so that
    :meth:`start` notices :meth:`stop`.
    """

    def __init__(self, port: int, host: str = "0.0.0.0", timeout: float = 0.5) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind((host, port))
        except OSError:
            self._sock.close()
            raise
        self._sock.settimeout(timeout)
        self._handler: Optional[MessageHandler] = None
        self._stopped = threading.Event()

    @property
    def address(self) -> tuple[str, int]:
        """The address the socket is bound to."""
        return self._sock.getsockname()

    @property
    def port(self) -> int:
        return self.address[1]

    def set_message_handler(self, handler: Optional[MessageHandler]) -> None:
        """Set the function called with every non-empty datagram."""
        self._handler = handler

    def _dispatch(self, data: bytes) -> None:
        if self._handler is not None:
            self._handler(data)
        else:
            print("Received data: " + " ".join(str(byte) for byte in data))

    def serve_once(self) -> Optional[bytes]:
        """Receive one datagram and dispatch it; None if none came before the timeout."""
        try:
            data, _ = self._sock.recvfrom(BUFFER_SIZE)
        except socket.timeout:
            return None
        if data:
            self._dispatch(data)
        return data

    def start(self) -> None:
        """Serve datagrams until :meth:`stop` or :meth:`close` is called."""
        log.info("UDP Server started on port %d", self.port)
        while not self._stopped.is_set():
            try:
                self.serve_once()
            except OSError:
                if self._stopped.is_set():
                    break
                raise

    def stop(self) -> None:
        """Make :meth:`start` return after its current receive."""
        self._stopped.set()

    def close(self) -> None:
        """Stop serving and release the socket."""
        self._stopped.set()
        self._sock.close()

    def __enter__(self) -> "UDPServer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()