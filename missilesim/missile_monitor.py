"""Console monitor that prints missile launch records received over UDP."""

from __future__ import annotations

import argparse
import socket
import sys

from .datatypes import MissileInfo
from .udp_server import BUFFER_SIZE

__all__ = ["DEFAULT_PORT", "format_missile", "main"]

DEFAULT_PORT = 9000


def format_missile(missile: MissileInfo, received_length: int) -> str:
    """Render one received launch record for the console."""
    return "\n".join(
        [
            f"recv_len size: {received_length}",
            f"Missile data size: {MissileInfo.SIZE - 1}",
            "Missile Fire:",
            f"  ID: {missile.missile_id}",
            f"  POS: ({missile.ls_pos_x:.6f}, {missile.ls_pos_y:.6f})",
            f"  SPD: {missile.speed}",
            f"  ANG: {missile.degree:.6f}",
        ]
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print missile launch records received over UDP.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port to listen on")
    parser.add_argument(
        "--count", type=int, default=None,
        help="stop after this many datagrams (default: run until interrupted)",
    )
    args = parser.parse_args(argv)

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.bind(("", args.port))
        except OSError as exc:
            print(f"bind error: {exc}", file=sys.stderr)
            return 1
        print(f"[UDP server start] PORT: {args.port}")
        received = 0
        try:
            while args.count is None or received < args.count:
                data, _ = sock.recvfrom(BUFFER_SIZE)
                if not data:
                    continue
                received += 1
                try:
                    missile = MissileInfo.from_bytes(data)
                except ValueError as exc:
                    print(f"[Warning] {exc}", file=sys.stderr)
                    continue
                print("\n" + format_missile(missile, len(data)))
        except KeyboardInterrupt:
            pass
    return 0