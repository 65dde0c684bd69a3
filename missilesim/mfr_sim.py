"""Radar track simulator: jitters a target, steers a missile at it, reports over UDP."""

from __future__ import annotations

import argparse
import math
import random
import socket
import sys
import time
from dataclasses import replace

from .mfr_algorithm import METRES_PER_DEGREE, calculate_distance, calculate_heading
from .mfr_loader import load_message_from_ini
from .mfr_packet import Message

__all__ = ["SERVER_IP", "SERVER_PORT", "BUF_SIZE", "step", "main"]

SERVER_IP = "127.0.0.1"
SERVER_PORT = 8888
BUF_SIZE = 1024

_POSITION_JITTER = 0.00001
_ALTITUDE_JITTER = 0.5
_MIN_SEPARATION = 0.00001
_CLIMB_RATE = 0.05


def step(message: Message, rng) -> Message:
    """Return the report one tick later; ``message`` is left unchanged.

    ``rng`` must offer ``randrange``. The target drifts randomly, the
    missile's heading and distance are measured from its current position,
    then the missile moves towards the target.
    """
    t = message.target
    t_lat = t.latitude + (rng.randrange(100) - 50) * _POSITION_JITTER
    t_lon = t.longitude + (rng.randrange(100) - 50) * _POSITION_JITTER
    t_alt = t.altitude + (rng.randrange(20) - 10) * _ALTITUDE_JITTER
    target = replace(t, latitude=t_lat, longitude=t_lon, altitude=t_alt)

    m = message.missile
    heading = calculate_heading(m.latitude, m.longitude, t_lat, t_lon)
    distance = calculate_distance(m.latitude, m.longitude, t_lat, t_lon)

    move_step = m.speed / 1000.0 / METRES_PER_DEGREE
    dx = t_lat - m.latitude
    dy = t_lon - m.longitude
    separation = math.hypot(dx, dy)
    lat, lon, alt = m.latitude, m.longitude, m.altitude
    if separation > _MIN_SEPARATION:
        lat += dx / separation * move_step
        lon += dy / separation * move_step
        alt += (t_alt - alt) * _CLIMB_RATE

    missile = replace(
        m, heading=heading, distance_to_target=distance,
        latitude=lat, longitude=lon, altitude=alt,
    )
    return Message(target=target, missile=missile)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Simulate radar tracks and send them over UDP.")
    parser.add_argument("--config", default="config.ini", help="INI file with the initial tracks")
    parser.add_argument("--host", default=SERVER_IP, help="radar server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="radar server UDP port")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between reports")
    parser.add_argument("--count", type=int, default=None, help="stop after this many reports")
    parser.add_argument("--seed", type=int, default=None, help="random seed for target drift")
    args = parser.parse_args(argv)

    try:
        message = load_message_from_ini(args.config)
    except (OSError, ValueError) as exc:
        print(f"[Error] cannot load INI file {args.config}: {exc}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed)
    sent_count = 0
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            while args.count is None or sent_count < args.count:
                message = step(message, rng)
                try:
                    sent = sock.sendto(message.pack(), (args.host, args.port))
                except (OSError, ValueError) as exc:
                    print(f"sendto failed: {exc}", file=sys.stderr)
                else:
                    if sent > 0:
                        t, m = message.target, message.missile
                        print(
                            f"[send] target({t.latitude:g}, {t.longitude:g}), "
                            f"missile({m.latitude:g}, {m.longitude:g}), "
                            f"distance: {m.distance_to_target:g} m"
                        )
                sent_count += 1
                if args.count is None or sent_count < args.count:
                    time.sleep(args.interval)
        except KeyboardInterrupt:
            pass
    return 0