"""Services for calendar rules and date providers."""

from .calendar import day_key, describe_day, is_weekday
from .clock import FixedClock, NtpClock, SystemClock

__all__ = [
    "day_key",
    "describe_day",
    "is_weekday",
    "FixedClock",
    "NtpClock",
    "SystemClock",
]
