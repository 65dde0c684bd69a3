"""Wire records exchanged between launchers, the simulator and test clients.

Every packet starts with one type byte (see :class:`DataType`) followed by the
record body. The body keeps the x86-64 memory layout of the original records,
including an 8-byte object header that is always sent as zeros, so packet sizes
and field offsets match what other peers on the network expect.
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, ClassVar, Dict, Optional, Union

__all__ = [
    "DataType",
    "Serializable",
    "MissileInfo",
    "TargetInfo",
    "Serializer",
    "SerializerRegistry",
    "decode_message",
]


class DataType(IntEnum):
    """Type identifier carried in the first byte of every packet."""

    MISSILE = 0x01
    TARGET = 0x02


class Serializable(ABC):
    """Base for records that turn themselves into packets and back."""

    @abstractmethod
    def serialize(self) -> bytes:
        """Return the packet for this record, type byte included."""

    @classmethod
    @abstractmethod
    def deserialize(cls, buffer: bytes) -> "Serializable":
        """Build a record from a packet, skipping its type byte."""

    def to_bytes(self) -> bytes:
        """Return the packet for this record."""
        return self.serialize()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Serializable":
        """Build a record from a packet."""
        return cls.deserialize(data)


# 8 zero header bytes, int id, 4 pad, two doubles, int speed, 4 pad, double.
_MISSILE_LAYOUT = struct.Struct("<8xi4xddi4xd")
# 8 zero header bytes, then a byte-packed body: char[20], two doubles, int, double.
_TARGET_LAYOUT = struct.Struct("<8x20sddid")
_NAME_SIZE = 20


def _body(record: str, buffer: Union[bytes, bytearray, memoryview], layout: struct.Struct) -> tuple:
    data = bytes(buffer)
    needed = 1 + layout.size
    if len(data) < needed:
        raise ValueError(f"{record} packet needs {needed} bytes, got {len(data)}")
    return layout.unpack_from(data, 1)


@dataclass
class MissileInfo(Serializable):
    """A missile launch: launcher position, speed and firing angle."""

    missile_id: int = 0
    ls_pos_x: float = 0.0
    ls_pos_y: float = 0.0
    speed: int = 0
    degree: float = 0.0

    SIZE: ClassVar[int] = 1 + _MISSILE_LAYOUT.size

    def serialize(self) -> bytes:
        try:
            body = _MISSILE_LAYOUT.pack(
                self.missile_id, self.ls_pos_x, self.ls_pos_y, self.speed, self.degree
            )
        except struct.error as exc:
            raise ValueError(f"cannot encode missile: {exc}") from exc
        return bytes([DataType.MISSILE]) + body

    @classmethod
    def deserialize(cls, buffer: bytes) -> "MissileInfo":
        missile_id, x, y, speed, degree = _body("missile", buffer, _MISSILE_LAYOUT)
        return cls(missile_id=missile_id, ls_pos_x=x, ls_pos_y=y, speed=speed, degree=degree)


@dataclass
class TargetInfo(Serializable):
    """A target: name (at most 19 bytes of UTF-8), position, speed and heading."""

    name: str = ""
    pos_x: float = 0.0
    pos_y: float = 0.0
    speed: int = 0
    degree: float = 0.0

    SIZE: ClassVar[int] = 1 + _TARGET_LAYOUT.size
    NAME_SIZE: ClassVar[int] = _NAME_SIZE

    def serialize(self) -> bytes:
        encoded = self.name.encode("utf-8")
        if len(encoded) >= _NAME_SIZE:
            raise ValueError(
                f"target name must be shorter than {_NAME_SIZE} bytes, got {len(encoded)}"
            )
        try:
            body = _TARGET_LAYOUT.pack(encoded, self.pos_x, self.pos_y, self.speed, self.degree)
        except struct.error as exc:
            raise ValueError(f"cannot encode target: {exc}") from exc
        return bytes([DataType.TARGET]) + body

    @classmethod
    def deserialize(cls, buffer: bytes) -> "TargetInfo":
        raw_name, x, y, speed, degree = _body("target", buffer, _TARGET_LAYOUT)
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(name=name, pos_x=x, pos_y=y, speed=speed, degree=degree)


class Serializer(ABC):
    """Interface for objects that encode and decode values of some type."""

    @abstractmethod
    def serialize(self, obj: Any) -> bytes:
        """Encode ``obj``."""

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Decode ``data`` into a value."""


class SerializerRegistry:
    """Maps type names to factories that build objects from raw bytes."""

    def __init__(self) -> None:
        self._registry: Dict[str, Callable[[bytes], Any]] = {}

    def register_type(self, name: str, func: Callable[[bytes], Any]) -> None:
        """Register (or replace) the factory for ``name``."""
        self._registry[name] = func

    def create(self, name: str, data: bytes) -> Optional[Any]:
        """Build an object with the factory for ``name``; None if there is none."""
        factory = self._registry.get(name)
        if factory is None:
            return None
        return factory(data)


_DECODERS = {DataType.MISSILE: MissileInfo, DataType.TARGET: TargetInfo}


def decode_message(data: bytes) -> Union[MissileInfo, TargetInfo]:
    """Decode a packet into the record its type byte names."""
    if not data:
        raise ValueError("empty message")
    try:
        kind = DataType(data[0])
    except ValueError:
        raise ValueError(f"Unknown data type received: {data[0]}") from None
    return _DECODERS[kind].deserialize(data)