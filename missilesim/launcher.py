"""Launcher configuration and the serial-link messages of the launcher.

All messages are byte-packed and little-endian: a command is one type byte
followed by a 16-byte payload, and a status report carries up to ten missile
identifiers.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional

__all__ = [
    "OperationMode",
    "LauncherConfig",
    "CommandType",
    "LaunchCommand",
    "LauncherMessage",
    "LauncherStatusMessage",
]


class OperationMode(IntEnum):
    """Operating mode of a launcher."""

    ENGAGEMENT = 0
    MOVEMENT = 1
    STOP = 2


@dataclass
class LauncherConfig:
    """A launcher's state: position in 1e-8 degree units, missiles and mode."""

    id: int = 0
    x: int = 0
    y: int = 0
    missile_count: int = 0
    missile_ids: list[int] = field(default_factory=list)
    mode: OperationMode = OperationMode.STOP

    @staticmethod
    def string_to_mode(mode_str: str) -> OperationMode:
        """Return the mode named ``mode_str``."""
        try:
            return OperationMode[mode_str]
        except KeyError:
            raise ValueError(f"Unknown OperationMode: {mode_str}") from None

    @staticmethod
    def mode_to_string(mode) -> str:
        """Return the name of ``mode``, or ``"UNKNOWN"``."""
        try:
            return OperationMode(mode).name
        except ValueError:
            return "UNKNOWN"


class CommandType(IntEnum):
    """Kind of command sent to a launcher."""

    LAUNCH = 1
    MOVE = 2
    MODE_CHANGE = 3
    STATUS_REQUEST = 4


@dataclass
class LaunchCommand:
    """Fire one missile from one launcher at an angle in degrees."""

    launcher_id: int = 0
    missile_id: int = 0
    launch_angle: float = 0.0


_LAUNCH = struct.Struct("<iid")
_MOVE = struct.Struct("<qq")
_INT = struct.Struct("<i")
_PAYLOAD_SIZE = max(_LAUNCH.size, _MOVE.size, _INT.size)


@dataclass
class LauncherMessage:
    """A command to a launcher.

    Only the fields that belong to ``type`` are sent: ``launch`` for LAUNCH,
    ``new_x``/``new_y`` for MOVE and ``new_mode`` for MODE_CHANGE.
    """

    type: CommandType
    launch: Optional[LaunchCommand] = None
    new_x: int = 0
    new_y: int = 0
    new_mode: OperationMode = OperationMode.STOP

    SIZE: ClassVar[int] = 1 + _PAYLOAD_SIZE

    def pack(self) -> bytes:
        """Encode the message to its fixed-size wire form."""
        kind = CommandType(self.type)
        try:
            if kind is CommandType.LAUNCH:
                if self.launch is None:
                    raise ValueError("a LAUNCH message needs a LaunchCommand")
                payload = _LAUNCH.pack(
                    self.launch.launcher_id, self.launch.missile_id, self.launch.launch_angle
                )
            elif kind is CommandType.MOVE:
                payload = _MOVE.pack(self.new_x, self.new_y)
            elif kind is CommandType.MODE_CHANGE:
                payload = _INT.pack(int(self.new_mode))
            else:
                payload = _INT.pack(0)
        except struct.error as exc:
            raise ValueError(f"cannot encode {kind.name} message: {exc}") from exc
        return bytes([kind]) + payload.ljust(_PAYLOAD_SIZE, b"\0")

    @classmethod
    def unpack(cls, data: bytes) -> "LauncherMessage":
        """Decode a message from exactly :attr:`SIZE` bytes."""
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"launcher message needs {cls.SIZE} bytes, got {len(data)}")
        try:
            kind = CommandType(data[0])
        except ValueError:
            raise ValueError(f"Unknown command type: {data[0]}") from None
        body = data[1:]
        if kind is CommandType.LAUNCH:
            return cls(kind, launch=LaunchCommand(*_LAUNCH.unpack_from(body)))
        if kind is CommandType.MOVE:
            new_x, new_y = _MOVE.unpack_from(body)
            return cls(kind, new_x=new_x, new_y=new_y)
        if kind is CommandType.MODE_CHANGE:
            (mode,) = _INT.unpack_from(body)
            return cls(kind, new_mode=OperationMode(mode))
        return cls(kind)


_STATUS = struct.Struct("<iqqi10ii")
_MAX_MISSILES = 10


def _kept(missile_ids, missile_count: int) -> list[int]:
    return list(missile_ids[: max(0, min(missile_count, _MAX_MISSILES))])


@dataclass
class LauncherStatusMessage:
    """A launcher's status report; carries at most ten missile identifiers."""

    id: int = 0
    x: int = 0
    y: int = 0
    missile_count: int = 0
    missile_ids: list[int] = field(default_factory=list)
    mode: OperationMode = OperationMode.STOP

    SIZE: ClassVar[int] = _STATUS.size
    MAX_MISSILES: ClassVar[int] = _MAX_MISSILES

    def pack(self) -> bytes:
        """Encode the report; unused identifier slots are zero."""
        ids = list(self.missile_ids)
        if len(ids) > _MAX_MISSILES:
            raise ValueError(f"at most {_MAX_MISSILES} missile ids fit in a status message")
        ids.extend([0] * (_MAX_MISSILES - len(ids)))
        try:
            return _STATUS.pack(
                self.id, self.x, self.y, self.missile_count, *ids, int(self.mode)
            )
        except struct.error as exc:
            raise ValueError(f"cannot encode status message: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "LauncherStatusMessage":
        """Decode a report; only the first ``missile_count`` ids (max ten) are kept."""
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"status message needs {cls.SIZE} bytes, got {len(data)}")
        values = _STATUS.unpack(data)
        launcher_id, x, y, count = values[:4]
        ids = values[4 : 4 + _MAX_MISSILES]
        return cls(
            id=launcher_id,
            x=x,
            y=y,
            missile_count=count,
            missile_ids=_kept(ids, count),
            mode=OperationMode(values[-1]),
        )

    @classmethod
    def from_config(cls, config: LauncherConfig) -> "LauncherStatusMessage":
        """Build the report describing ``config``."""
        return cls(
            id=config.id,
            x=config.x,
            y=config.y,
            missile_count=config.missile_count,
            missile_ids=_kept(config.missile_ids, config.missile_count),
            mode=OperationMode(config.mode),
        )