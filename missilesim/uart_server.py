"""The launcher's serial command server.

Commands arrive as fixed-size :class:`LauncherMessage` records on a serial
port; every status change is written back to the same port as a
:class:`LauncherStatusMessage`. Launch commands are forwarded to the
simulator over UDP, and move commands drive the launcher towards a target
position in a background thread.
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import sys
import termios
import threading
import time
from typing import Callable, Optional

from .datatypes import MissileInfo
from .ini_parser import IniError
from .launcher import (
    CommandType,
    LauncherConfig,
    LauncherMessage,
    LauncherStatusMessage,
    OperationMode,
)
from .launcher_state import LauncherState, load_launcher_config
from .udp_launcher import send_missile

__all__ = [
    "SERIAL_PORT",
    "DEFAULT_MISSILE_SPEED",
    "ARRIVAL_TOLERANCE",
    "setup_serial_port",
    "next_position",
    "UartServer",
    "main",
]

SERIAL_PORT = "/dev/pts/8"
DEFAULT_CONFIG = "../common/launcher_config.ini"
DEFAULT_MISSILE_SPEED = 1000
SPEED_KMPH = 50.0
UPDATE_INTERVAL = 0.1
ARRIVAL_TOLERANCE = 100
_SCALE = 1e8
_POLL_INTERVAL = 0.1

log = logging.getLogger(__name__)


def setup_serial_port(fd: int) -> None:
    """Set 115200 baud, 8N1, local, non-canonical, no echo or signals.

    Raises OSError if ``fd`` is not a terminal or cannot be configured.
    """
    try:
        iflag, oflag, cflag, lflag, _, _, cc = termios.tcgetattr(fd)
        cflag &= ~termios.PARENB
        cflag &= ~termios.CSTOPB
        cflag &= ~termios.CSIZE
        cflag |= termios.CS8
        cflag |= termios.CLOCAL | termios.CREAD
        lflag &= ~(termios.ICANON | termios.ECHO | termios.ECHOE | termios.ISIG)
        speed = termios.B115200
        termios.tcsetattr(fd, termios.TCSANOW, [iflag, oflag, cflag, lflag, speed, speed, cc])
    except termios.error as exc:
        raise OSError(f"cannot configure serial port: {exc}") from exc


def _open_port(path: str) -> int:
    fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    try:
        setup_serial_port(fd)
    except OSError:
        os.close(fd)
        raise
    return fd


def next_position(x: int, y: int, target_x: int, target_y: int) -> Optional[tuple[int, int]]:
    """One movement tick towards the target, or None once within 100 units on both axes.

    Positions are in 1e-8 degree units; the launcher moves at 50 km/h in
    0.1 s ticks, never overshoots the target on an axis, and always moves by
    at least one unit per axis.
    """
    dx = target_x - x
    dy = target_y - y
    if abs(dx) < ARRIVAL_TOLERANCE and abs(dy) < ARRIVAL_TOLERANCE:
        return None

    distance = math.sqrt(float(dx) * dx + float(dy) * dy)
    step = (SPEED_KMPH * 1000.0 / 3600.0) * UPDATE_INTERVAL
    delta_x = int(dx / distance * step * _SCALE)
    delta_y = int(dy / distance * step * _SCALE)
    if delta_x == 0:
        delta_x = 1 if dx > 0 else -1
    if delta_y == 0:
        delta_y = 1 if dy > 0 else -1

    new_x = x + delta_x
    new_y = y + delta_y
    if (dx > 0 and new_x > target_x) or (dx < 0 and new_x < target_x):
        new_x = target_x
    if (dy > 0 and new_y > target_y) or (dy < 0 and new_y < target_y):
        new_y = target_y
    return new_x, new_y


class UartServer:
    """Serves launcher commands read from a serial port."""

    def __init__(
        self,
        state: LauncherState,
        port: str = SERIAL_PORT,
        missile_sender: Callable[[MissileInfo], object] = send_missile,
        tick: float = UPDATE_INTERVAL,
    ) -> None:
        self.state = state
        self.port = port
        self.tick = tick
        self._send_missile = missile_sender
        self._interrupt = threading.Event()
        self._movement: Optional[threading.Thread] = None

    def send_status(self, config: LauncherConfig) -> bool:
        """Write a status report for ``config`` to the serial port; False on failure."""
        try:
            fd = _open_port(self.port)
        except OSError as exc:
            log.error("Failed to open serial port for status: %s", exc)
            return False
        try:
            os.write(fd, LauncherStatusMessage.from_config(config).pack())
        except (OSError, ValueError) as exc:
            log.error("Failed to send status: %s", exc)
            return False
        finally:
            os.close(fd)
        return True

    def handle_message(self, message: LauncherMessage) -> bool:
        """Carry out one command; False if it was refused."""
        config = self.state.config
        kind = message.type
        if kind in (CommandType.LAUNCH, CommandType.MODE_CHANGE):
            if config.mode == OperationMode.MOVEMENT:
                log.error("[Error] launch or mode change is not allowed while moving.")
                return False
            if kind is CommandType.LAUNCH:
                launch = message.launch
                log.info("[Launch command received]")
                log.info("  Missile ID: %s / angle: %s", launch.missile_id, launch.launch_angle)
                missile = MissileInfo(
                    missile_id=launch.missile_id,
                    ls_pos_x=float(config.x),
                    ls_pos_y=float(config.y),
                    speed=DEFAULT_MISSILE_SPEED,
                    degree=launch.launch_angle,
                )
                try:
                    self._send_missile(missile)
                except OSError as exc:
                    log.error("sendto failed: %s", exc)
            else:
                log.info("[Mode change received]")
                config.mode = OperationMode(message.new_mode)
                self.state.notify_status_changed()
            return True
        if kind is CommandType.MOVE:
            log.info("[Move command received]")
            self._start_movement(message.new_x, message.new_y)
            return True
        if kind is CommandType.STATUS_REQUEST:
            log.info("[Status request received] sending current status...")
            self.state.notify_status_changed()
            return True
        log.error("[Error] unknown command type.")
        return False

    def _start_movement(self, target_x: int, target_y: int) -> None:
        self._interrupt.set()
        if self._movement is not None and self._movement.is_alive():
            self._movement.join()
        self._interrupt.clear()
        self._movement = threading.Thread(
            target=self.move_launcher_to_target, args=(target_x, target_y), daemon=True
        )
        self._movement.start()

    def move_launcher_to_target(self, target_x: int, target_y: int) -> None:
        """Move the launcher tick by tick until it arrives or is interrupted.

        The mode is MOVEMENT while moving and STOP on arrival; an interrupted
        move leaves the mode to the command that interrupted it.
        """
        config = self.state.config
        config.mode = OperationMode.MOVEMENT
        self.state.notify_status_changed()

        while not self._interrupt.is_set():
            position = next_position(config.x, config.y, target_x, target_y)
            if position is None:
                log.info("[Move complete] target position reached.")
                break
            config.x, config.y = position
            log.info(
                "[Moving] current position -> lat(y): %.8f, lon(x): %.8f",
                config.y / _SCALE, config.x / _SCALE,
            )
            self.state.notify_status_changed()
            self._interrupt.wait(self.tick)

        if not self._interrupt.is_set():
            config.mode = OperationMode.STOP
            self.state.notify_status_changed()
        self._interrupt.clear()

    def run(self) -> None:
        """Serve commands until the serial port fails; raises OSError if it cannot be opened."""
        self.state.set_status_handler(self.send_status)
        fd = _open_port(self.port)
        log.info("[UART Server Start] Listening on %s", self.port)
        try:
            while True:
                try:
                    data = os.read(fd, LauncherMessage.SIZE)
                except OSError as exc:
                    log.error("UART read error: %s", exc)
                    break
                if len(data) == LauncherMessage.SIZE:
                    try:
                        message = LauncherMessage.unpack(data)
                    except ValueError as exc:
                        log.error("[Error] %s", exc)
                    else:
                        self.handle_message(message)
                elif data:
                    log.warning("[Warning] partial message received (%d bytes)", len(data))
                time.sleep(_POLL_INTERVAL)
        finally:
            os.close(fd)
            if self._movement is not None:
                self._movement.join()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the launcher's serial command server.")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="launcher INI file")
    parser.add_argument("--port", default=SERIAL_PORT, help="serial device to serve")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        config = load_launcher_config(args.config)
    except (IniError, ValueError) as exc:
        print(f"Failed to load launcher config: {exc}", file=sys.stderr)
        return 1

    server = UartServer(LauncherState(config), args.port)
    try:
        server.run()
    except OSError as exc:
        print(f"Failed to open or setup serial port: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0