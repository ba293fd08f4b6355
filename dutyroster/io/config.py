"""Configuration loading (YAML, or JSON by file suffix)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dutyroster.domain.db import DEFAULT_DB_URL
from dutyroster.engine.rotation import ROTATION_STEP, SLOT_COUNT
from dutyroster.services.clock import DEFAULT_NTP_SERVERS


DEFAULT_STATE_PATH = "duty_config.ini"


@dataclass
class RosterConfig:
    slot_count: int = SLOT_COUNT
    step: int = ROTATION_STEP
    state_path: str = DEFAULT_STATE_PATH
    db_url: str = DEFAULT_DB_URL
    record_history: bool = False
    check_interval_minutes: float = 30.0
    presence_interval_seconds: float = 1.5
    use_ntp: bool = False
    ntp_servers: List[str] = field(default_factory=lambda: list(DEFAULT_NTP_SERVERS))
    ntp_timeout: float = 2.0

    def validate(self) -> None:
        if self.slot_count < 2:
            raise ValueError(f"slot_count must be at least 2, got {self.slot_count}")
        if self.step < 1:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.check_interval_minutes <= 0:
            raise ValueError("check_interval_minutes must be positive")
        if self.presence_interval_seconds <= 0:
            raise ValueError("presence_interval_seconds must be positive")
        if self.ntp_timeout <= 0:
            raise ValueError("ntp_timeout must be positive")


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return data


_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Convert a raw config value to the type of the field's default."""
    try:
        if isinstance(default, bool):
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in _TRUE:
                return True
            if text in _FALSE:
                return False
            raise ValueError(value)
        if isinstance(default, int):
            if isinstance(value, bool):
                raise ValueError(value)
            return int(str(value).strip())
        if isinstance(default, float):
            if isinstance(value, bool):
                raise ValueError(value)
            return float(value)
        if isinstance(default, list):
            if isinstance(value, str):
                return [value]
            return [str(item) for item in value]
        return str(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for {name}: {value!r}")


def load_config(path: str | Path | None = None) -> RosterConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Config file path, or None for built-in defaults

    Returns:
        Validated RosterConfig

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If a value has the wrong type or is out of range
    """
    if path is None:
        cfg = RosterConfig()
        cfg.validate()
        return cfg

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_raw(path)
    known = {f.name for f in fields(RosterConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        print(f"[WARN] Ignoring unknown config keys: {unknown}")

    defaults = RosterConfig()
    values = {k: _coerce(k, v, getattr(defaults, k)) for k, v in data.items() if k in known}
    cfg = RosterConfig(**values)
    cfg.validate()
    return cfg
