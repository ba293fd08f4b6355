"""CSV export utilities for rotation history and forecasts."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from dutyroster.domain.repositories import RotationEventRepository


HISTORY_COLUMNS = ["id", "occurred_at", "action", "day_key", "duty1", "duty2"]


def history_frame(session: Session, action: str | None = None) -> pd.DataFrame:
    """
    Rotation history as a DataFrame with 1-based duty slots.

    Args:
        session: Database session
        action: Optional action filter (auto, next, previous, restore)
    """
    if action:
        events = RotationEventRepository.get_by_action(session, action)
    else:
        events = RotationEventRepository.get_all(session)

    data = [
        {
            "id": e.id,
            "occurred_at": e.occurred_at.isoformat() if e.occurred_at else None,
            "action": e.action,
            "day_key": e.day_key,
            "duty1": e.index1 + 1,
            "duty2": e.index2 + 1,
        }
        for e in events
    ]
    return pd.DataFrame(data, columns=HISTORY_COLUMNS)


def export_history_csv(session: Session, csv_path: str | Path, action: str | None = None) -> int:
    """
    Export rotation history to CSV.

    Returns:
        Number of events exported
    """
    df = history_frame(session, action=action)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} rotation events to {csv_path}")
    return len(df)


def export_forecast_csv(forecast_df: pd.DataFrame, csv_path: str | Path) -> int:
    """
    Write a forecast produced by ``forecast_rotations`` to CSV.

    Returns:
        Number of days written
    """
    df = forecast_df.copy()
    df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)}-day forecast to {csv_path}")
    return len(df)
