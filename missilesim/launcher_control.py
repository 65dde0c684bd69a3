"""A console launch controller that talks to the launcher over a serial port."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time
from typing import Callable, Optional, TypeVar

from .launcher import (
    CommandType,
    LaunchCommand,
    LauncherConfig,
    LauncherMessage,
    LauncherStatusMessage,
    OperationMode,
)
from .uart_server import setup_serial_port

__all__ = [
    "SERIAL_PORT",
    "build_launch",
    "build_move",
    "build_mode_change",
    "build_status_request",
    "format_status",
    "main",
]

SERIAL_PORT = "/dev/pts/7"
_SCALE = 1e8
_POLL_INTERVAL = 0.1
_SELECTABLE_MODES = (OperationMode.ENGAGEMENT, OperationMode.MOVEMENT)

T = TypeVar("T")


def build_launch(launcher_id: int, missile_id: int, angle: float) -> LauncherMessage:
    """A command to fire ``missile_id`` from ``launcher_id`` at ``angle`` degrees."""
    return LauncherMessage(CommandType.LAUNCH, launch=LaunchCommand(launcher_id, missile_id, angle))


def build_move(x: float, y: float) -> LauncherMessage:
    """A command to move to longitude ``x`` and latitude ``y`` in degrees."""
    return LauncherMessage(CommandType.MOVE, new_x=int(x * _SCALE), new_y=int(y * _SCALE))


def build_mode_change(mode) -> LauncherMessage:
    """A command to switch to ENGAGEMENT (0) or MOVEMENT (1)."""
    try:
        selected = OperationMode(mode)
    except ValueError:
        selected = None
    if selected not in _SELECTABLE_MODES:
        raise ValueError(f"mode must be 0 (ENGAGEMENT) or 1 (MOVEMENT), got {mode!r}")
    return LauncherMessage(CommandType.MODE_CHANGE, new_mode=selected)


def build_status_request() -> LauncherMessage:
    """A request for the launcher's current status."""
    return LauncherMessage(CommandType.STATUS_REQUEST)


def format_status(message: LauncherStatusMessage) -> str:
    """Render a status report for the console."""
    ids = "".join(f"{missile_id} " for missile_id in message.missile_ids)
    return "\n".join(
        [
            "[Launcher status received]",
            f"  ID           : {message.id}",
            f"  Position     : ({message.x / _SCALE:.8f}, {message.y / _SCALE:.8f})",
            f"  Missiles     : {message.missile_count}",
            f"  Missile IDs  : {ids}",
            f"  Mode         : {LauncherConfig.mode_to_string(message.mode)}",
        ]
    )


def _receive_status(fd: int) -> None:
    try:
        while True:
            try:
                data = os.read(fd, LauncherStatusMessage.SIZE)
            except OSError as exc:
                print(f"UART status receive failed: {exc}", file=sys.stderr)
                break
            if len(data) == LauncherStatusMessage.SIZE:
                try:
                    print("\n" + format_status(LauncherStatusMessage.unpack(data)))
                except ValueError as exc:
                    print(f"[Warning] bad status message: {exc}", file=sys.stderr)
            elif data:
                print(f"[Warning] partial status message received ({len(data)} bytes)", file=sys.stderr)
            time.sleep(_POLL_INTERVAL)
    finally:
        os.close(fd)


def _ask(prompt: str, convert: Callable[[str], T], error: str,
         accept: Optional[Callable[[T], bool]] = None) -> T:
    """Prompt until the answer converts and is accepted; EOFError ends input."""
    while True:
        text = input(prompt)
        try:
            value = convert(text.strip())
        except ValueError:
            print(error, file=sys.stderr)
            continue
        if accept is not None and not accept(value):
            print(error, file=sys.stderr)
            continue
        return value


def _prompt_message() -> Optional[LauncherMessage]:
    number_error = "[Error] enter a number."
    command = _ask(
        "\n[Select command] 1: launch, 2: move, 3: mode change, 4: status request, 0: quit -> ",
        int, "[Error] enter a number from 0 to 4.", lambda v: 0 <= v <= 4,
    )
    if command == 0:
        return None
    if command == 1:
        launcher_id = _ask("  Launcher ID: ", int, number_error)
        missile_id = _ask("  Missile ID: ", int, number_error)
        angle = _ask("  Launch angle (deg): ", float, number_error)
        return build_launch(launcher_id, missile_id, angle)
    if command == 2:
        x = _ask("  Move x (longitude): ", float, number_error)
        y = _ask("  Move y (latitude): ", float, number_error)
        return build_move(x, y)
    if command == 3:
        mode = _ask(
            "  Mode (0: ENGAGEMENT, 1: MOVEMENT): ", int,
            "[Error] enter only 0 or 1.", lambda v: v in (0, 1),
        )
        return build_mode_change(mode)
    return build_status_request()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Send launcher commands over a serial port.")
    parser.add_argument("--port", default=SERIAL_PORT, help="serial device of the launcher")
    args = parser.parse_args(argv)

    try:
        fd = os.open(args.port, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        print(f"Failed to open serial port: {exc}", file=sys.stderr)
        return 1
    try:
        setup_serial_port(fd)
    except OSError as exc:
        os.close(fd)
        print(f"Failed to set up serial port: {exc}", file=sys.stderr)
        return 1

    print("[Temporary launch controller - UART link started]")
    threading.Thread(target=_receive_status, args=(os.dup(fd),), daemon=True).start()

    try:
        while True:
            try:
                message = _prompt_message()
            except EOFError:
                break
            if message is None:
                break
            try:
                os.write(fd, message.pack())
            except OSError as exc:
                print(f"UART send failed: {exc}", file=sys.stderr)
            else:
                print("[Command sent over UART]")
    except KeyboardInterrupt:
        pass
    finally:
        os.close(fd)
    return 0