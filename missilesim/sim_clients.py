"""Command-line clients that send launch and target commands to the simulator."""

from __future__ import annotations

import argparse
import math
import socket
import sys
from typing import Optional

from .datatypes import MissileInfo, TargetInfo

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "build_missile_command",
    "build_target_command",
    "build_simulation_commands",
    "send_datagram",
    "missile_command_main",
    "target_command_main",
    "simulation_main",
]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9000


def build_missile_command() -> MissileInfo:
    """A missile aimed at where the demo target will be ten seconds from now."""
    target_x = 100.0 + 50 * 10 * math.cos(math.radians(90.0))
    target_y = 200.0 + 50 * 10 * math.sin(math.radians(90.0))
    missile = MissileInfo(missile_id=1, ls_pos_x=50.0, ls_pos_y=100.0, speed=300)
    missile.degree = math.degrees(
        math.atan2(target_y - missile.ls_pos_y, target_x - missile.ls_pos_x)
    )
    return missile


def build_target_command(name: str) -> TargetInfo:
    """The demo target: named ``name`` (cut to fit the wire field), moving north."""
    limit = TargetInfo.NAME_SIZE - 1
    fitted = name.encode("utf-8")[:limit].decode("utf-8", errors="ignore")
    return TargetInfo(name=fitted, pos_x=100.0, pos_y=200.0, speed=50, degree=90.0)


def build_simulation_commands() -> tuple[TargetInfo, MissileInfo]:
    """A stationary target and a missile fired straight at it."""
    target = TargetInfo(name="alpha", pos_x=1500.0, pos_y=1500.0, speed=0, degree=0.0)
    missile = MissileInfo(missile_id=1, ls_pos_x=1000.0, ls_pos_y=1000.0, speed=300)
    missile.degree = math.degrees(
        math.atan2(target.pos_y - missile.ls_pos_y, target.pos_x - missile.ls_pos_x)
    )
    return target, missile


def send_datagram(payload: bytes, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> int:
    """Send one UDP datagram and return the number of bytes sent."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        return sock.sendto(payload, (host, port))


def _parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=DEFAULT_HOST, help="simulator address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="simulator UDP port")
    return parser


def _describe_missile(missile: MissileInfo) -> str:
    return (
        f"Missile launch command sent: ID={missile.missile_id}, "
        f"LS_pos=({missile.ls_pos_x:g}, {missile.ls_pos_y:g}), "
        f"Speed={missile.speed}, Degree={missile.degree:g}"
    )


def _describe_target(target: TargetInfo) -> str:
    return (
        f"Target command sent: Name={target.name}, "
        f"Pos=({target.pos_x:g}, {target.pos_y:g}), "
        f"Speed={target.speed}, Degree={target.degree:g}"
    )


def _send(payload: bytes, host: str, port: int) -> bool:
    try:
        send_datagram(payload, host, port)
    except OSError as exc:
        print(f"sendto failed: {exc}", file=sys.stderr)
        return False
    return True


def missile_command_main(argv=None) -> int:
    """Send the demo missile launch command."""
    args = _parser("Send a missile launch command to the simulator.").parse_args(argv)
    missile = build_missile_command()
    if not _send(missile.serialize(), args.host, args.port):
        return 1
    print(_describe_missile(missile))
    return 0


def target_command_main(argv=None) -> int:
    """Send a target command; the name is asked for unless given."""
    parser = _parser("Send a target command to the simulator.")
    parser.add_argument("--name", default=None, help="target name")
    args = parser.parse_args(argv)
    name: Optional[str] = args.name
    if name is None:
        try:
            name = input("Enter target name: ")
        except EOFError:
            name = ""
    target = build_target_command(name)
    if not _send(target.serialize(), args.host, args.port):
        return 1
    print(_describe_target(target))
    return 0


def simulation_main(argv=None) -> int:
    """Send a stationary target, then a missile aimed at it."""
    args = _parser("Send a target and a missile aimed at it.").parse_args(argv)
    target, missile = build_simulation_commands()
    if not _send(target.serialize(), args.host, args.port):
        return 1
    print(_describe_target(target))
    if not _send(missile.serialize(), args.host, args.port):
        return 1
    print(_describe_missile(missile))
    return 0