"""A small INI reader: sections of string keys and values."""

from __future__ import annotations

from typing import Dict

__all__ = ["IniError", "IniParser"]

Section = Dict[str, str]
IniData = Dict[str, Section]

_BLANKS = " \t"


class IniError(RuntimeError):
    """Raised when an INI file cannot be read or a section is missing."""


class IniParser:
    """Parses INI files and keeps the last parse for section lookups.

    Lines are trimmed of spaces and tabs; lines starting with ``;`` or ``#``
    are comments. Keys that appear before any section header belong to the
    section named ``""``. Repeating a section header starts it afresh.
    """

    def __init__(self) -> None:
        self._data: IniData = {}

    def parse(self, file_path) -> IniData:
        """Parse ``file_path`` and return a copy of all sections."""
        self._data = {}
        try:
            with open(file_path, encoding="utf-8") as handle:
                lines = handle.read().splitlines()
        except OSError:
            raise IniError(f"Failed to open INI file: {file_path}") from None

        current = ""
        for raw in lines:
            line = raw.strip(_BLANKS)
            if not line or line[0] in ";#":
                continue
            if line[0] == "[" and line[-1] == "]":
                current = line[1:-1]
                self._data[current] = {}
                continue
            key, sep, value = line.partition("=")
            if not sep:
                raise IniError(f"Invalid INI format: {line}")
            self._data.setdefault(current, {})[key.strip(_BLANKS)] = value.strip(_BLANKS)

        return {name: dict(section) for name, section in self._data.items()}

    def get_section(self, section_name: str) -> Section:
        """Return a copy of one section of the last parse."""
        try:
            return dict(self._data[section_name])
        except KeyError:
            raise IniError(f"Section not found: {section_name}") from None