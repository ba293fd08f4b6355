"""Projection of upcoming automatic rotations."""

from __future__ import annotations

from datetime import date

import pandas as pd

from dutyroster.domain.models import RosterState
from dutyroster.services.calendar import day_key, is_weekday

from .rotation import ROTATION_STEP, SLOT_COUNT, step_forward


def forecast_rotations(
    state: RosterState,
    start: date,
    days: int,
    slot_count: int = SLOT_COUNT,
    step: int = ROTATION_STEP,
) -> pd.DataFrame:
    """
    Simulate the daily check for each calendar day starting at ``start``.

    The given state is not modified. Manual drift is ignored the same way the
    real engine ignores it: rotation continues from the current pair.

    Args:
        state: Current roster state
        start: First day to simulate
        days: Number of calendar days
        slot_count: Number of roster slots
        step: Slots advanced per rotation

    Returns:
        DataFrame with columns date, weekday, rotated, duty1, duty2 (1-based slots)
    """
    pair = state.pair
    last_update = state.last_update
    rows = []
    for ts in pd.date_range(start, periods=days, freq="D"):
        day = ts.date()
        key = day_key(day)
        rotated = is_weekday(day) and key != last_update
        if rotated:
            pair = step_forward(pair, slot_count, step)
            last_update = key
        rows.append(
            {
                "date": day,
                "weekday": ts.day_name(),
                "rotated": rotated,
                "duty1": pair[0] + 1,
                "duty2": pair[1] + 1,
            }
        )
    return pd.DataFrame(rows, columns=["date", "weekday", "rotated", "duty1", "duty2"])
