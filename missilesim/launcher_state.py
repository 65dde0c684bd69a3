"""The launcher's shared state and the loader for its INI configuration."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from .ini_parser import IniParser
from .launcher import LauncherConfig

__all__ = ["StatusHandler", "LauncherState", "load_launcher_config"]

StatusHandler = Callable[[LauncherConfig], None]

_SECTION = "LAUNCHER"
_BLANKS = " \t"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

log = logging.getLogger(__name__)


class LauncherState:
    """A launcher's configuration plus the handler told about every change."""

    def __init__(self, config: Optional[LauncherConfig] = None) -> None:
        self.config = config if config is not None else LauncherConfig()
        self._handler: Optional[StatusHandler] = None

    def set_status_handler(self, handler: Optional[StatusHandler]) -> None:
        """Set (or clear, with None) the function called on status changes."""
        self._handler = handler

    def notify_status_changed(self) -> None:
        """Pass the whole current configuration to the handler, if one is set."""
        if self._handler is not None:
            self._handler(self.config)


def _leading_int(text: str, key: str) -> int:
    """Read the integer at the start of ``text``; trailing characters are ignored."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer for {key}: {text!r}")
    return int(match.group(1))


def _missile_ids(raw: str) -> list[int]:
    tokens = raw.split(",")
    if tokens and tokens[-1] == "":
        tokens.pop()
    return [_leading_int(token.strip(_BLANKS), "MISSILE_IDS") for token in tokens]


def load_launcher_config(ini_path) -> LauncherConfig:
    """Read the ``[LAUNCHER]`` section of an INI file into a configuration.

    ``ID``, ``X``, ``Y``, ``MISSILE_COUNT`` and ``MISSILE_IDS`` are required;
    ``MODE`` is optional and defaults to STOP. Raises :class:`IniError` when
    the file or section is missing and ValueError for a bad value.
    """
    parser = IniParser()
    parser.parse(ini_path)
    section = parser.get_section(_SECTION)

    config = LauncherConfig(
        id=_leading_int(section.get("ID", ""), "ID"),
        x=_leading_int(section.get("X", ""), "X"),
        y=_leading_int(section.get("Y", ""), "Y"),
        missile_count=_leading_int(section.get("MISSILE_COUNT", ""), "MISSILE_COUNT"),
        missile_ids=_missile_ids(section.get("MISSILE_IDS", "")),
    )
    if "MODE" in section:
        config.mode = LauncherConfig.string_to_mode(section["MODE"])

    log.info("[LauncherConfig Loaded]")
    log.info("  ID       : %d", config.id)
    log.info("  X (lon)  : %.8f", config.x / 1e8)
    log.info("  Y (lat)  : %.8f", config.y / 1e8)
    log.info("  MISSILES : %d", config.missile_count)
    log.info("  MODE     : %s", LauncherConfig.mode_to_string(config.mode))
    return config