"""The radar track message: one target and one missile, byte-packed little-endian."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

__all__ = ["TargetTrack", "MissileTrack", "Message"]

_TARGET = struct.Struct("<I3f")
_MISSILE = struct.Struct("<I6f")


@dataclass
class TargetTrack:
    """A tracked target: identifier, position in degrees and altitude."""

    target_id: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0


@dataclass
class MissileTrack:
    """A tracked missile with its heading and distance to the target."""

    missile_id: int = 0
    speed: float = 0.0
    heading: float = 0.0
    distance_to_target: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0


@dataclass
class Message:
    """One radar report. Floats travel as 32-bit values, identifiers as unsigned 32-bit."""

    target: TargetTrack = field(default_factory=TargetTrack)
    missile: MissileTrack = field(default_factory=MissileTrack)

    SIZE: ClassVar[int] = _TARGET.size + _MISSILE.size

    def pack(self) -> bytes:
        """Encode the report to its fixed-size wire form."""
        t, m = self.target, self.missile
        try:
            return _TARGET.pack(t.target_id, t.latitude, t.longitude, t.altitude) + _MISSILE.pack(
                m.missile_id, m.speed, m.heading, m.distance_to_target,
                m.latitude, m.longitude, m.altitude,
            )
        except struct.error as exc:
            raise ValueError(f"cannot encode message: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Message":
        """Decode a report from exactly :attr:`SIZE` bytes."""
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"message needs {cls.SIZE} bytes, got {len(data)}")
        target = TargetTrack(*_TARGET.unpack_from(data, 0))
        missile = MissileTrack(*_MISSILE.unpack_from(data, _TARGET.size))
        return cls(target=target, missile=missile)