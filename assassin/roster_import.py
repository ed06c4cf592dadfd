from __future__ import annotations

import re
from pathlib import Path

from assassin.errors import RosterParseError

_SEPARATORS = re.compile(r"[,\r\n]")


def import_roster(source: str) -> list[str]:
    """Split a delimited roster into names.

    Entries are separated by commas (line breaks count too, so a one-name-per-line
    file works). Whitespace is trimmed and blank entries are dropped; names are
    not otherwise validated or deduplicated.
    """

    return [name.strip() for name in _SEPARATORS.split(source) if name.strip()]


def read_roster_file(path: Path) -> list[str]:
    try:
        data = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RosterParseError(f"Error reading the file: {path} ({e})") from e
    return import_roster(data)
