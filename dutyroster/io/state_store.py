"""INI persistence for the roster state.

Layout::

    [duty]
    index1 = 0
    index2 = 1
    [date]
    lastUpdate = 20240103
    [origin]
    index1 = 0
    index2 = 1
"""

from __future__ import annotations

import configparser
from pathlib import Path

from dutyroster.domain.models import DEFAULT_INDEX1, DEFAULT_INDEX2, RosterState


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # keep "lastUpdate" as written
    return parser


def _get_int(parser: configparser.ConfigParser, section: str, key: str, default: int) -> int:
    raw = parser.get(section, key, fallback=None)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        print(f"[WARN] Invalid value {section}/{key}={raw!r}, using {default}")
        return default


class IniStateStore:
    """Loads and saves RosterState as an INI file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> RosterState:
        """
        Read the state, defaulting each missing or unparsable key.

        A missing file is created with the default state.
        """
        if not self.path.exists():
            state = RosterState()
            self.save(state)
            print(f"[INFO] Created default roster state: {self.path}")
            return state

        parser = _new_parser()
        try:
            parser.read(self.path, encoding="utf-8")
        except configparser.Error as e:
            print(f"[WARN] Unreadable state file {self.path}: {e}; using defaults")
            return RosterState()

        return RosterState(
            index1=_get_int(parser, "duty", "index1", DEFAULT_INDEX1),
            index2=_get_int(parser, "duty", "index2", DEFAULT_INDEX2),
            last_update=parser.get("date", "lastUpdate", fallback="").strip(),
            origin_index1=_get_int(parser, "origin", "index1", DEFAULT_INDEX1),
            origin_index2=_get_int(parser, "origin", "index2", DEFAULT_INDEX2),
        )

    def save(self, state: RosterState) -> None:
        parser = _new_parser()
        parser["duty"] = {"index1": str(state.index1), "index2": str(state.index2)}
        parser["date"] = {"lastUpdate": state.last_update}
        parser["origin"] = {"index1": str(state.origin_index1), "index2": str(state.origin_index2)}

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            parser.write(f)
