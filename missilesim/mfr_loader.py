"""Loads the initial radar report from an INI file."""

from __future__ import annotations

import re
from typing import Dict, Iterable

from .mfr_packet import Message, MissileTrack, TargetTrack

__all__ = ["load_message_from_ini"]

_LINE_BLANKS = " \t\r\n"
_BLANKS = " \t"
_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _read_pairs(lines: Iterable[str]) -> Dict[str, str]:
    """Collect ``section.key`` -> value; lines without ``=`` are ignored."""
    pairs: Dict[str, str] = {}
    section = ""
    for raw in lines:
        line = raw.strip(_LINE_BLANKS)
        if not line or line[0] in ";#":
            continue
        if line[0] == "[" and line[-1] == "]":
            section = line[1:-1]
            continue
        key, sep, value = line.partition("=")
        if sep:
            pairs[section + "." + key.strip(_BLANKS)] = value.strip(_BLANKS)
    return pairs


def _number(pairs: Dict[str, str], key: str, pattern: "re.Pattern[str]", convert):
    text = pairs.get(key, "")
    match = pattern.match(text)
    if match is None:
        raise ValueError(f"missing or invalid value for {key}: {text!r}")
    return convert(match.group(1))


def load_message_from_ini(filename) -> Message:
    """Read the ``[Target]`` and ``[Missile]`` sections into a report.

    Raises OSError if the file cannot be read and ValueError if a key is
    missing or does not start with a number.
    """
    with open(filename, encoding="utf-8") as handle:
        pairs = _read_pairs(handle.read().splitlines())

    def whole(key: str) -> int:
        return _number(pairs, key, _INT, int) & 0xFFFFFFFF

    def real(key: str) -> float:
        return _number(pairs, key, _FLOAT, float)

    target = TargetTrack(
        target_id=whole("Target.targetId"),
        latitude=real("Target.latitude"),
        longitude=real("Target.longitude"),
        altitude=real("Target.altitude"),
    )
    missile = MissileTrack(
        missile_id=whole("Missile.missileId"),
        speed=real("Missile.speed"),
        heading=real("Missile.heading"),
        distance_to_target=real("Missile.distanceToTarget"),
        latitude=real("Missile.latitude"),
        longitude=real("Missile.longitude"),
        altitude=real("Missile.altitude"),
    )
    return Message(target=target, missile=missile)