"""Raw 8N1 serial link to a launcher."""

from __future__ import annotations

import os
import termios
from typing import Optional, Union

__all__ = ["RECEIVE_SIZE", "LcSerial"]

RECEIVE_SIZE = 1024


def _speed(baudrate: int) -> int:
    speed = getattr(termios, f"B{baudrate}", None)
    if speed is None:
        raise ValueError(f"unsupported baud rate: {baudrate}")
    return speed


class LcSerial:
    """A serial device opened raw: 8 data bits, no parity, one stop bit, no flow control."""

    def __init__(self, device: str, baudrate: int = 9600) -> None:
        self.device = device
        self.baudrate = baudrate
        self._fd: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    def open(self) -> None:
        """Open and configure the device; raises OSError on failure."""
        speed = _speed(self.baudrate)
        self.close()
        fd = os.open(self.device, os.O_RDWR | os.O_NOCTTY | getattr(os, "O_SYNC", 0))
        try:
            iflag, oflag, cflag, lflag, _, _, cc = termios.tcgetattr(fd)
            cflag = (cflag & ~termios.CSIZE) | termios.CS8
            iflag &= ~termios.IGNBRK
            lflag = 0
            oflag = 0
            cc[termios.VMIN] = 1
            cc[termios.VTIME] = 1
            iflag &= ~(termios.IXON | termios.IXOFF | termios.IXANY)
            cflag |= termios.CLOCAL | termios.CREAD
            cflag &= ~(termios.PARENB | termios.PARODD)
            cflag &= ~termios.CSTOPB
            cflag &= ~getattr(termios, "CRTSCTS", 0)
            termios.tcsetattr(
                fd, termios.TCSANOW, [iflag, oflag, cflag, lflag, speed, speed, cc]
            )
        except termios.error as exc:
            os.close(fd)
            raise OSError(f"cannot configure serial port {self.device}: {exc}") from exc
        self._fd = fd

    def _require(self) -> int:
        if self._fd is None:
            raise RuntimeError("serial port is not open")
        return self._fd

    def send_message(self, message: Union[str, bytes]) -> int:
        """Write a message and return the number of bytes written."""
        data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
        return os.write(self._require(), data)

    def receive_message(self) -> bytes:
        """Read up to 1024 bytes, waiting for at least one."""
        return os.read(self._require(), RECEIVE_SIZE)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> "LcSerial":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()