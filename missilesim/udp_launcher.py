"""Sends missile launch records from the launcher to the simulator."""

from __future__ import annotations

import logging
import socket

from .datatypes import MissileInfo

__all__ = ["UDP_SERVER_IP", "UDP_SERVER_PORT", "send_missile"]

UDP_SERVER_IP = "127.0.0.1"
UDP_SERVER_PORT = 9000

log = logging.getLogger(__name__)


def send_missile(missile: MissileInfo, host: str = UDP_SERVER_IP, port: int = UDP_SERVER_PORT) -> int:
    """Send one launch record as a UDP datagram; returns the bytes sent.

    Raises OSError when the datagram cannot be sent.
    """
    payload = missile.to_bytes()
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sent = sock.sendto(payload, (host, port))
    log.info("[Missile Fire Command is sent]")
    return sent