"""Radar server: receives track reports over UDP and prints them."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Optional

from .mfr_packet import Message

__all__ = ["PORT", "BUF_SIZE", "format_message", "handle_datagram", "main"]

PORT = 8888
BUF_SIZE = 1024

log = logging.getLogger(__name__)


def format_message(message: Message, address) -> str:
    """Render one report received from ``address`` (host, port)."""
    host, port = address[0], address[1]
    t, m = message.target, message.missile
    return "\n".join(
        [
            f"[recv] client {host}:{port}",
            f"Target ID: {t.target_id} | position: ({t.latitude:g}, {t.longitude:g}), "
            f"altitude: {t.altitude:g}",
            f"Missile ID: {m.missile_id} | position: ({m.latitude:g}, {m.longitude:g}), "
            f"altitude: {m.altitude:g}",
            f"    speed: {m.speed:g} m/s, heading: {m.heading:g}°, "
            f"distance: {m.distance_to_target:g} m",
            "================",
        ]
    )


def handle_datagram(data: bytes, address) -> Optional[str]:
    """Decode and render a datagram; None if it is not exactly one report."""
    if len(data) != Message.SIZE:
        log.warning("unexpected datagram size: %d", len(data))
        return None
    return format_message(Message.unpack(data), address)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print radar track reports received over UDP.")
    parser.add_argument("--port", type=int, default=PORT, help="UDP port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.bind(("", args.port))
        except OSError as exc:
            print(f"bind failed: {exc}", file=sys.stderr)
            return 1
        print("MFR Server Running ... ")
        try:
            while True:
                try:
                    data, address = sock.recvfrom(BUF_SIZE)
                except OSError as exc:
                    print(f"receive failed: {exc}", file=sys.stderr)
                    continue
                text = handle_datagram(data, address)
                if text is not None:
                    print(text)
        except KeyboardInterrupt:
            pass
    return 0