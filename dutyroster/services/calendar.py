"""Calendar helpers for the daily rotation rule."""

from __future__ import annotations

from datetime import date

import pandas as pd


DAY_KEY_FORMAT = "%Y%m%d"
WEEKEND_DAYS = ["Saturday", "Sunday"]


def is_weekday(day: date) -> bool:
    """True for Monday through Friday."""
    return pd.Timestamp(day).day_name() not in WEEKEND_DAYS


def day_key(day: date) -> str:
    """Stable daily identity string, e.g. 20240103."""
    return day.strftime(DAY_KEY_FORMAT)


def describe_day(day: date) -> str:
    """Human-readable date with weekday name, e.g. 2024-01-03 Wednesday."""
    return f"{day.isoformat()} {pd.Timestamp(day).day_name()}"
