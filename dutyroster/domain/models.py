"""Roster state and SQLAlchemy models for the duty rotation history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase


DEFAULT_INDEX1 = 0
DEFAULT_INDEX2 = 1


@dataclass
class RosterState:
    """Persistent rotation state: the two on-duty slots and the last automatic rotation."""

    index1: int = DEFAULT_INDEX1
    index2: int = DEFAULT_INDEX2
    last_update: str = ""  # yyyyMMdd, empty before the first rotation
    origin_index1: int = DEFAULT_INDEX1
    origin_index2: int = DEFAULT_INDEX2

    @property
    def pair(self) -> Tuple[int, int]:
        return self.index1, self.index2

    @property
    def origin(self) -> Tuple[int, int]:
        return self.origin_index1, self.origin_index2

    def copy(self) -> "RosterState":
        return RosterState(
            index1=self.index1,
            index2=self.index2,
            last_update=self.last_update,
            origin_index1=self.origin_index1,
            origin_index2=self.origin_index2,
        )


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class RotationEvent(Base):
    """One mutation of the roster state, recorded after it was applied."""

    __tablename__ = "rotation_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    occurred_at = Column(DateTime, nullable=False, default=datetime.now)
    action = Column(String(20), nullable=False)  # auto, next, previous, restore
    day_key = Column(String(8), nullable=False, default="")  # last_update at the time of the event
    index1 = Column(Integer, nullable=False)
    index2 = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<RotationEvent(id={self.id}, action='{self.action}', pair=({self.index1}, {self.index2}))>"
