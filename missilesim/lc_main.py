"""The launch controller program: radar link, launcher serial link, console commands."""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from .lc_logger import LcLogger
from .lc_net import LcClient, LcServer
from .lc_serial import LcSerial

__all__ = ["DEFAULT_DEGREE", "TURN_STEP", "handle_console_command", "main"]

DEFAULT_DEGREE = 90.0
TURN_STEP = 10.0


def handle_console_command(command: str, logger: LcLogger) -> Optional[float]:
    """Apply a console command to the demo radar heading and log it.

    Returns the new heading for TURN_LEFT and TURN_RIGHT, None for an empty
    or unknown command.
    """
    if not command:
        return None
    logger.log_message(f"Command received from console: {command}")
    degree = DEFAULT_DEGREE
    if command == "TURN_LEFT":
        degree -= TURN_STEP
        logger.log_message(f"Radar turned left: {degree:.6f}")
        return degree
    if command == "TURN_RIGHT":
        degree += TURN_STEP
        logger.log_message(f"Radar turned right: {degree:.6f}")
        return degree
    logger.log_message(f"[WARNING] Unknown command: {command}")
    return None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the launch controller.")
    parser.add_argument("--log-file", default="lc_log.txt", help="log file to append to")
    parser.add_argument("--radar-host", default="127.0.0.1", help="radar server address")
    parser.add_argument("--radar-port", type=int, default=5001, help="radar server port")
    parser.add_argument("--serial-device", default="/dev/ttyUSB0", help="launcher serial device")
    parser.add_argument("--baudrate", type=int, default=9600, help="launcher serial speed")
    parser.add_argument("--ecc-port", type=int, default=5000, help="port to accept the ECC on")
    args = parser.parse_args(argv)

    logger = LcLogger()
    try:
        logger.start_logging(args.log_file)
    except OSError as exc:
        print(f"[ERROR] cannot open log file: {exc}", file=sys.stderr)
        return 1

    radar = LcClient(args.radar_host, args.radar_port)
    serial = LcSerial(args.serial_device, args.baudrate)
    server = LcServer(args.ecc_port)
    try:
        logger.log_message("LC program started")
        logger.log_message("Settings loaded")

        try:
            radar.connect()
        except (OSError, ValueError) as exc:
            logger.log_message(f"[ERROR] radar server connection failed: {exc}")
            return 1
        logger.log_message("Radar server connected")

        try:
            serial.open()
        except (OSError, ValueError) as exc:
            logger.log_message(f"[WARNING] launcher serial connection failed, continuing: {exc}")
        else:
            logger.log_message("Launcher serial connected")

        try:
            server.start()
        except OSError as exc:
            logger.log_message(f"[ERROR] ECC server start failed: {exc}")
            return 1
        logger.log_message("ECC server started")

        logger.log_message("Entering main loop")
        while True:
            try:
                command = input("Command (TURN_LEFT / TURN_RIGHT) > ")
            except EOFError:
                break
            handle_console_command(command, logger)
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()
        serial.close()
        radar.disconnect()
        logger.stop_logging()
    return 0